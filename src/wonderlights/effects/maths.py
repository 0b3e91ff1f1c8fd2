"""
Maths effects - planes moving and spinning through the tree.
"""

import math
import random
from dataclasses import dataclass
from typing import Optional

from .. import vectors
from ..frame import Colour, Frame3D, FrameObject, Plane, SplitPlane, random_colour
from ..gift_coords import CoordinateSpace
from ..vectors import Vec3
from .base import EffectConfig, EffectState, Step

FRAME_SECONDS = 0.02  # 50 fps


# ---------------------------------------------------------------------------
# Moving plane
# ---------------------------------------------------------------------------

@dataclass
class MovingPlaneConfig(EffectConfig):
    """Speed and look of a plane sweeping through the tree."""
    units_per_second: float = 0.1  # GIFT units travelled per second
    thickness: float = 0.1
    fadeoff: float = 0.08

    def validate(self):
        if self.units_per_second <= 0:
            return False, "units_per_second must be positive"
        if self.thickness < 0 or self.fadeoff < 0:
            return False, "thickness and fadeoff must not be negative"
        return True, None


@dataclass
class MovingPlaneState(EffectState):
    coords: Optional[CoordinateSpace] = None
    colour: Colour = (0, 0, 0)
    normal: Vec3 = (0.0, 0.0, 1.0)
    point: Vec3 = (0.0, 0.0, 0.0)


class MovingPlane:
    """Move a plane through the tree at a random angle with a random colour."""

    name = "moving_plane"
    description = "A randomly coloured plane sweeps through the tree at a random angle"
    config_class = MovingPlaneConfig
    continuous = False

    @staticmethod
    def _clearance(config: MovingPlaneConfig) -> float:
        # How far outside the bounds the plane must be before it's invisible
        return 1.3 * (config.thickness + config.fadeoff)

    def from_config(
        self,
        config: MovingPlaneConfig,
        coords: CoordinateSpace,
        rng: Optional[random.Random] = None,
    ) -> MovingPlaneState:
        rng = rng or random.Random()
        colour = random_colour(rng)
        normal = vectors.random_vector(rng)
        clearance = self._clearance(config)

        # Start in the middle and back out along the normal until clear of the tree
        point = coords.center()
        while coords.distance_to_bounds(point) < clearance:
            point = vectors.sub(point, vectors.scale(normal, 0.1))
        point = vectors.add(point, vectors.scale(normal, 0.1))

        return MovingPlaneState(rng=rng, coords=coords, colour=colour, normal=normal, point=point)

    def advance(self, state: MovingPlaneState, config: MovingPlaneConfig) -> Optional[Step]:
        if state.coords.distance_to_bounds(state.point) >= self._clearance(config):
            return None

        frame = Frame3D(
            (
                FrameObject(
                    Plane(state.normal, vectors.dot(state.normal, state.point), config.thickness),
                    state.colour,
                    config.fadeoff,
                ),
            ),
            blend=False,
        )
        state.point = vectors.add(
            state.point, vectors.scale(state.normal, config.units_per_second * FRAME_SECONDS)
        )
        return Step(frame, FRAME_SECONDS)


# ---------------------------------------------------------------------------
# Split plane
# ---------------------------------------------------------------------------

@dataclass
class SplitPlaneConfig(EffectConfig):
    """A two-coloured plane spinning about a horizontal axis."""
    side_a_colour: Colour = (244, 29, 9)
    side_b_colour: Colour = (26, 234, 23)
    rotation_speed: float = 1.0                     # rad/s, anticlockwise
    rotation_axis_z_rotation_degrees: float = 0.0   # 0 = x axis
    rotation_axis_z_height_offset: float = 0.0      # From the middle of the tree
    blend: float = 0.2                              # Width of the colour mix either side

    def validate(self):
        if self.blend < 0:
            return False, "blend must not be negative"
        return True, None


@dataclass
class SplitPlaneState(EffectState):
    coords: Optional[CoordinateSpace] = None
    angle: float = 0.0


def split_plane_normal(axis_degrees: float, angle: float) -> Vec3:
    """Normal of a plane containing the horizontal rotation axis, turned by angle."""
    theta = math.radians(axis_degrees)
    c, s = math.cos(theta), math.sin(theta)
    # Starts vertical-facing-sideways (perpendicular to the axis in the floor plane)
    # and rotates up towards +z
    return (-s * math.cos(angle), c * math.cos(angle), math.sin(angle))


class SplitPlaneEffect:
    """Spin a split plane around a point in the middle of the tree.

    Continuous: never finishes by itself.
    """

    name = "split_plane"
    description = "Two colours divided by a plane spinning through the tree"
    config_class = SplitPlaneConfig
    continuous = True

    def from_config(
        self,
        config: SplitPlaneConfig,
        coords: CoordinateSpace,
        rng: Optional[random.Random] = None,
    ) -> SplitPlaneState:
        return SplitPlaneState(rng=rng or random.Random(), coords=coords)

    def advance(self, state: SplitPlaneState, config: SplitPlaneConfig) -> Optional[Step]:
        normal = split_plane_normal(config.rotation_axis_z_rotation_degrees, state.angle)
        pivot = vectors.add(state.coords.center(), (0.0, 0.0, config.rotation_axis_z_height_offset))

        frame = Frame3D(
            (
                FrameObject(
                    SplitPlane(
                        normal,
                        vectors.dot(normal, pivot),
                        config.blend,
                        config.side_a_colour,
                        config.side_b_colour,
                    ),
                ),
            ),
            blend=False,
        )
        state.angle = (state.angle + config.rotation_speed * FRAME_SECONDS) % (2 * math.pi)
        return Step(frame, FRAME_SECONDS)
