"""
Tests for the frame & stack layout engine.
"""
from dataclasses import replace

import pytest

from fencelayout.model.frame import clamp_bar_x, layout_frame_and_stack
from fencelayout.model.gaps import validate_spec
from fencelayout.model.geometry_primitives import Role
from fencelayout.model.spec import BottomProfile, LayoutSpec


def _heights(prims, role):
    return [p.height for p in prims if p.role == role]


# =============================================================================
# 1200 x 1800 SCENARIO
# =============================================================================

class TestScenario:

    def test_frame_edges(self, scenario_spec, constants):
        layout = layout_frame_and_stack(scenario_spec, constants)
        edges = [(r.x, r.y, r.width, r.height) for r in layout.frame_edges]
        assert edges == [
            (0, 0, 1200, 40),
            (0, 1760, 1200, 40),
            (0, 0, 40, 1800),
            (1160, 0, 40, 1800),
        ]
        assert all(r.role is Role.FRAME for r in layout.frame_edges)

    def test_three_labelled_panels(self, scenario_spec, constants):
        layout = layout_frame_and_stack(scenario_spec, constants)
        panels = [p for p in layout.inner if p.role == Role.PANEL]
        assert [p.height for p in panels] == [400, 400, 400]
        assert [p.label for p in panels] == ["400.00 mm"] * 3
        assert [p.y for p in panels] == [90, 520, 950]
        assert all(p.x == 40 and p.width == 1120 for p in panels)

    def test_all_gaps_rendered_in_order(self, scenario_spec, constants):
        layout = layout_frame_and_stack(scenario_spec, constants)
        gaps = [p for p in layout.inner if p.role == Role.GAP]
        assert [g.height for g in gaps] == [50, 30, 30, 50]
        assert [g.y for g in gaps] == [40, 490, 920, 1350]
        assert all(g.style.dash for g in gaps)

    def test_labels_in_column(self, scenario_spec, constants):
        layout = layout_frame_and_stack(scenario_spec, constants)
        assert [t.text for t in layout.labels] == [
            "50.00 mm", "400.00 mm", "30.00 mm", "400.00 mm", "30.00 mm", "400.00 mm", "50.00 mm",
        ]
        assert {t.x for t in layout.labels} == {1210}
        assert layout.labels[1].y == 290

    def test_scenario_does_not_conserve(self, scenario_spec, constants):
        # 3 * 400 + 160 = 1360, the inner height is 1720
        layout = layout_frame_and_stack(scenario_spec, constants)
        assert scenario_spec.inner_height == 1720
        assert layout.content_bottom_y == 1400
        assert layout.content_bottom_y != scenario_spec.frame_t + scenario_spec.inner_height
        assert any("sum to" in issue for issue in validate_spec(scenario_spec))


# =============================================================================
# CONSERVATION & TOLERANCE
# =============================================================================

class TestStackWalk:

    def test_balanced_cursor_ends_at_inner_bottom(self, balanced_spec, constants):
        layout = layout_frame_and_stack(balanced_spec, constants)
        assert sum(balanced_spec.panels) + sum(balanced_spec.gaps) == balanced_spec.inner_height
        assert layout.content_bottom_y == pytest.approx(balanced_spec.frame_t + balanced_spec.inner_height)
        assert validate_spec(balanced_spec) == []

    def test_without_frame(self, constants):
        spec = LayoutSpec(outer_w=1000, outer_h=1000, with_frame=False, frame_thickness=40,
                          panels=(300, 300, 300), gaps=(50, 50))
        layout = layout_frame_and_stack(spec, constants)
        assert layout.frame_edges == []
        assert [p.y for p in layout.inner if p.role == Role.PANEL] == [0, 350, 700]
        assert layout.content_bottom_y == 1000
        assert all(p.x == 0 and p.width == 1000 for p in layout.inner)

    def test_short_gap_list_defaults_to_zero(self, constants):
        spec = LayoutSpec(outer_w=500, outer_h=500, frame_thickness=40,
                          panels=(100, 100), gaps=(20,))
        layout = layout_frame_and_stack(spec, constants)
        # gaps[0] is both the top and the bottom gap, the mid gap is missing
        assert _heights(layout.inner, Role.GAP) == [20, 20]
        assert [p.y for p in layout.inner if p.role == Role.PANEL] == [60, 160]
        assert layout.content_bottom_y == 280

    def test_zero_gaps_not_drawn(self, constants):
        spec = LayoutSpec(outer_w=500, outer_h=500, frame_thickness=10,
                          panels=(100, 100), gaps=(0, 0, 0))
        layout = layout_frame_and_stack(spec, constants)
        assert _heights(layout.inner, Role.GAP) == []
        assert len(layout.labels) == 2

    def test_inner_size_clamped(self):
        spec = LayoutSpec(outer_w=1000, outer_h=500, frame_thickness=600)
        assert spec.inner_width == 0
        assert spec.inner_height == 0

    def test_bottom_gap_label_shift(self, balanced_spec, constants):
        plain = layout_frame_and_stack(balanced_spec, constants)
        assert plain.labels[-1].dy == 0

        with_profile = replace(balanced_spec, bottom_profile=BottomProfile(height=30))
        shifted = layout_frame_and_stack(with_profile, constants)
        assert shifted.labels[-1].dy == -constants.bottom_gap_label_shift_px
        assert all(t.dy == 0 for t in shifted.labels[:-1])


# =============================================================================
# VERTICAL BARS
# =============================================================================

class TestVerticalBars:

    @pytest.fixture
    def spec(self):
        return LayoutSpec(outer_w=1000, outer_h=800, frame_thickness=40,
                          panels=(720,), gaps=(0, 0), vertical_bars=(-50, 2000, 500))

    def test_clamping(self, spec):
        assert clamp_bar_x(spec, -50) == 40
        assert clamp_bar_x(spec, 2000) == 920
        assert clamp_bar_x(spec, 500) == 500

    def test_bars_emitted(self, spec, constants):
        bars = [p for p in layout_frame_and_stack(spec, constants).inner if p.role == Role.BAR]
        assert [b.x for b in bars] == [40, 920, 500]
        assert all(b.width == 40 and b.height == 720 and b.y == 40 for b in bars)

    def test_no_bars_without_frame(self, spec, constants):
        layout = layout_frame_and_stack(replace(spec, with_frame=False, gaps=()), constants)
        assert not [p for p in layout.inner if p.role == Role.BAR]
