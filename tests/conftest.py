"""
Shared fixtures for the fencelayout tests.
"""
import pytest

from fencelayout.config import DEFAULT_CONSTANTS
from fencelayout.model.spec import (
    BottomOmega,
    BottomProfile,
    BottomSupports,
    LayoutSpec,
    TailLabels,
    TailMode,
    TailSide,
    TailSpec,
)


@pytest.fixture
def constants():
    return DEFAULT_CONSTANTS


@pytest.fixture
def scenario_spec():
    """1200 x 1800 framed module; its stack does NOT fill the inner height."""
    return LayoutSpec(
        outer_w=1200,
        outer_h=1800,
        with_frame=True,
        frame_thickness=40,
        panels=(400, 400, 400),
        gaps=(50, 30, 30, 50),
    )


@pytest.fixture
def balanced_spec():
    """Same module with gaps that fill the inner height exactly."""
    return LayoutSpec(
        outer_w=1200,
        outer_h=1800,
        with_frame=True,
        frame_thickness=40,
        panels=(400, 400, 400),
        gaps=(130, 130, 130, 130),
        title="Span",
    )


@pytest.fixture
def omega_spec(scenario_spec):
    return LayoutSpec(
        outer_w=scenario_spec.outer_w,
        outer_h=scenario_spec.outer_h,
        with_frame=True,
        frame_thickness=40,
        panels=scenario_spec.panels,
        gaps=scenario_spec.gaps,
        bottom_omega=BottomOmega(height=60, extend_left=100, extend_right=150),
    )


@pytest.fixture
def make_tail_spec():
    """Factory for a module with an omega beam and an enabled tail."""
    def _make(
        side=TailSide.RIGHT,
        mode=TailMode.AUTO,
        extend_left=100.0,
        extend_right=150.0,
        supports=None,
        profile=None,
        labels=None,
        scale=1.0,
    ):
        return LayoutSpec(
            outer_w=1200,
            outer_h=1800,
            with_frame=True,
            frame_thickness=40,
            panels=(400, 400, 400),
            gaps=(130, 130, 130, 130),
            bottom_supports=supports,
            bottom_profile=profile,
            bottom_omega=BottomOmega(height=60, extend_left=extend_left, extend_right=extend_right),
            tail=TailSpec(enabled=True, side=side, mode=mode, labels=labels or TailLabels()),
            scale=scale,
        )
    return _make


@pytest.fixture
def full_spec():
    """Every feature switched on."""
    return LayoutSpec(
        outer_w=4000,
        outer_h=1400,
        with_frame=True,
        frame_thickness=60,
        panels=(100,) * 6,
        gaps=(95, 95, 95, 95, 95, 95, 110),
        vertical_bars=(1000, 2000, 3000),
        bottom_supports=BottomSupports(height=40, xs=(0, 1000, 2000, 3000, 3940)),
        bottom_profile=BottomProfile(height=30),
        bottom_omega=BottomOmega(height=60, extend_left=100, extend_right=400),
        tail=TailSpec(
            enabled=True,
            side=TailSide.RIGHT,
            labels=TailLabels(base="base & omega", diagonal="diagonal"),
        ),
        scale=0.2,
        title="Sliding gate",
    )
