"""
The RENDER layer paints finished drawings.
It has NO knowledge of the layout rules, it only walks the primitive list
of a `Drawing` in order.
"""
