"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the renderers (SVG, matplotlib).
It deals with Geometry, Layout rules and I/O.
"""
