"""
Tests for maths effects - the moving plane and the rotating split plane.

Run with: pytest tests/test_effects_maths.py -v
"""

import math
import random

import pytest

from wonderlights import vectors
from wonderlights.effects.maths import (
    FRAME_SECONDS,
    MovingPlane,
    MovingPlaneConfig,
    SplitPlaneConfig,
    SplitPlaneEffect,
    split_plane_normal,
)
from wonderlights.frame import Frame3D, Plane, SplitPlane


def _run(effect, config, coords, rng, limit=5000):
    state = effect.from_config(config, coords, rng)
    steps = []
    for _ in range(limit):
        step = effect.advance(state, config)
        if step is None:
            return state, steps
        steps.append(step)
    raise AssertionError("effect did not finish")


# ---------------------------------------------------------------------------
# Moving plane
# ---------------------------------------------------------------------------

class TestMovingPlane:
    FAST = MovingPlaneConfig(units_per_second=5.0)

    def test_finishes(self, cone_coords, rng):
        _, steps = _run(MovingPlane(), self.FAST, cone_coords, rng)
        assert len(steps) > 10

    def test_frame_shape(self, cone_coords, rng):
        _, steps = _run(MovingPlane(), self.FAST, cone_coords, rng)
        for step in steps:
            assert step.duration == FRAME_SECONDS
            assert isinstance(step.frame, Frame3D)
            assert step.frame.blend is False
            (obj,) = step.frame.objects
            assert isinstance(obj.shape, Plane)
            assert obj.shape.threshold == self.FAST.thickness
            assert obj.fadeoff == self.FAST.fadeoff

    def test_colour_and_normal_fixed_for_a_run(self, cone_coords, rng):
        _, steps = _run(MovingPlane(), self.FAST, cone_coords, rng)
        colours = {s.frame.objects[0].colour for s in steps}
        normals = {s.frame.objects[0].shape.normal for s in steps}
        assert len(colours) == 1
        assert len(normals) == 1
        assert vectors.length(normals.pop()) == pytest.approx(1.0)

    def test_plane_moves_along_normal(self, cone_coords, rng):
        _, steps = _run(MovingPlane(), self.FAST, cone_coords, rng)
        ks = [s.frame.objects[0].shape.k for s in steps]
        step_size = self.FAST.units_per_second * FRAME_SECONDS
        for a, b in zip(ks, ks[1:]):
            assert b - a == pytest.approx(step_size)

    def test_ends_clear_of_the_tree(self, cone_coords, rng):
        config = self.FAST
        state, _ = _run(MovingPlane(), config, cone_coords, rng)
        clearance = 1.3 * (config.thickness + config.fadeoff)
        assert cone_coords.distance_to_bounds(state.point) >= clearance

    def test_passes_through_the_middle(self, cone_coords, rng):
        _, steps = _run(MovingPlane(), self.FAST, cone_coords, rng)
        lit = [
            any(c != (0, 0, 0) for c in step.frame.compute_raw_data(cone_coords))
            for step in steps
        ]
        assert any(lit)

    def test_seeded_runs_repeat(self, cone_coords):
        _, a = _run(MovingPlane(), self.FAST, cone_coords, random.Random(7))
        _, b = _run(MovingPlane(), self.FAST, cone_coords, random.Random(7))
        assert [s.frame for s in a] == [s.frame for s in b]

    def test_invalid_speed(self):
        valid, error = MovingPlaneConfig(units_per_second=0.0).validate()
        assert valid is False
        assert "units_per_second" in error


# ---------------------------------------------------------------------------
# Split plane
# ---------------------------------------------------------------------------

class TestSplitPlaneNormal:
    @pytest.mark.parametrize("degrees", [0.0, 30.0, 90.0, 200.0])
    @pytest.mark.parametrize("angle", [0.0, 0.5, math.pi / 2, 3.0])
    def test_unit_length(self, degrees, angle):
        assert vectors.length(split_plane_normal(degrees, angle)) == pytest.approx(1.0)

    def test_starts_perpendicular_to_x_axis(self):
        assert split_plane_normal(0.0, 0.0) == pytest.approx((0.0, 1.0, 0.0))

    def test_axis_rotated_about_z(self):
        assert split_plane_normal(90.0, 0.0) == pytest.approx((-1.0, 0.0, 0.0))

    def test_quarter_turn_faces_up(self):
        assert split_plane_normal(45.0, math.pi / 2) == pytest.approx((0.0, 0.0, 1.0))


class TestSplitPlaneEffect:
    def _steps(self, config, coords, rng, count=10):
        effect = SplitPlaneEffect()
        state = effect.from_config(config, coords, rng)
        return [effect.advance(state, config) for _ in range(count)]

    def test_is_continuous(self, grid_coords, rng):
        assert SplitPlaneEffect.continuous is True
        steps = self._steps(SplitPlaneConfig(), grid_coords, rng, count=500)
        assert all(step is not None for step in steps)

    def test_frame_shape(self, grid_coords, rng):
        config = SplitPlaneConfig()
        for step in self._steps(config, grid_coords, rng):
            assert step.duration == FRAME_SECONDS
            (obj,) = step.frame.objects
            assert isinstance(obj.shape, SplitPlane)
            assert obj.shape.positive_colour == config.side_a_colour
            assert obj.shape.negative_colour == config.side_b_colour
            assert obj.shape.blend == config.blend

    def test_rotates_at_rotation_speed(self, grid_coords, rng):
        config = SplitPlaneConfig(rotation_speed=2.0)
        first, second = self._steps(config, grid_coords, rng, count=2)
        assert first.frame.objects[0].shape.normal == pytest.approx((0.0, 1.0, 0.0))
        turned = 2.0 * FRAME_SECONDS
        assert second.frame.objects[0].shape.normal == pytest.approx(
            (0.0, math.cos(turned), math.sin(turned))
        )

    def test_pivot_through_centre(self, grid_coords, rng):
        (step,) = self._steps(SplitPlaneConfig(), grid_coords, rng, count=1)
        assert step.frame.objects[0].shape.k == pytest.approx(0.0)

    def test_height_offset_moves_pivot(self, grid_coords, rng):
        effect = SplitPlaneEffect()
        config = SplitPlaneConfig(rotation_axis_z_height_offset=0.5)
        state = effect.from_config(config, grid_coords, rng)
        state.angle = math.pi / 2
        step = effect.advance(state, config)
        # Normal is straight up, so k is the pivot's height
        assert step.frame.objects[0].shape.k == pytest.approx(grid_coords.center()[2] + 0.5)

    def test_colours_both_sides(self, grid_coords, rng):
        config = SplitPlaneConfig(blend=0.0)
        (step,) = self._steps(config, grid_coords, rng, count=1)
        colours = set(step.frame.compute_raw_data(grid_coords))
        assert config.side_a_colour in colours
        assert config.side_b_colour in colours

    def test_negative_blend_invalid(self):
        valid, error = SplitPlaneConfig(blend=-1.0).validate()
        assert valid is False
