"""
Tests for the matplotlib (PNG / PDF) renderer.
"""
import pytest
from matplotlib.patches import FancyArrowPatch, Rectangle

from fencelayout.config import RenderSettings
from fencelayout.model.geometry_primitives import Rect
from fencelayout.model.layout import render_layout
from fencelayout.render.mpl import render_figure, save_figure


class TestFigure:

    def test_patches_and_texts(self, full_spec):
        drawing = render_layout(full_spec)
        fig = render_figure(drawing)
        (ax,) = fig.axes
        rectangles = [p for p in ax.patches if isinstance(p, Rectangle)]
        arrows = [p for p in ax.patches if isinstance(p, FancyArrowPatch)]
        assert len(rectangles) == sum(isinstance(p, Rect) for p in drawing.primitives)
        assert len(arrows) == 2
        assert "Sliding gate" in [t.get_text() for t in ax.texts]

    def test_y_axis_points_down(self, balanced_spec):
        fig = render_figure(render_layout(balanced_spec), margin=0)
        bottom, top = fig.axes[0].get_ylim()
        assert bottom > top

    def test_figure_size_follows_bounds(self, balanced_spec):
        drawing = render_layout(balanced_spec)
        settings = RenderSettings(px_per_inch=100)
        fig = render_figure(drawing, margin=0, settings=settings)
        width_in, height_in = fig.get_size_inches()
        assert width_in == pytest.approx(drawing.bounds().width / 100)
        assert height_in == pytest.approx(drawing.bounds().height / 100)


class TestSave:

    def test_png(self, balanced_spec, tmp_path):
        path = save_figure(render_layout(balanced_spec.with_scale(0.2)), tmp_path / "span.png", dpi=50)
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_pdf(self, balanced_spec, tmp_path):
        path = save_figure(render_layout(balanced_spec.with_scale(0.2)), tmp_path / "span.PDF", dpi=50)
        assert path.read_bytes()[:4] == b"%PDF"

    def test_unsupported_suffix(self, balanced_spec, tmp_path):
        with pytest.raises(ValueError, match="Unsupported output format"):
            save_figure(render_layout(balanced_spec), tmp_path / "span.gif")
