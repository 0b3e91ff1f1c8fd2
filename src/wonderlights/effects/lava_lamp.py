"""
Lava lamp - soft blobs of colour drifting around inside the tree.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional

from .. import vectors
from ..frame import Colour, Frame3D, FrameObject, Sphere
from ..frame.colours import offset_colour
from ..gift_coords import CoordinateSpace
from ..vectors import Vec3
from .base import EffectConfig, EffectState, Step

SPHERE_COUNT = 5
STEP_DISTANCE = 0.05    # How far each blob drifts per frame
WANDER = 0.01           # How much each blob's heading wobbles per frame
MAX_REAIM_ATTEMPTS = 100
FRAME_SECONDS = 0.1


@dataclass
class LavaLampConfig(EffectConfig):
    """Colour and softness of the blobs."""
    base_colour: Colour = (243, 83, 255)
    variation: int = 20     # Max per-channel offset from base_colour
    fadeoff: float = 0.3

    def validate(self):
        if not 0 <= self.variation <= 255:
            return False, "variation must be 0-255"
        if self.fadeoff < 0:
            return False, "fadeoff must not be negative"
        return True, None


@dataclass
class Blob:
    """One drifting sphere. Its colour is an offset so base_colour can change live."""
    centre: Vec3
    radius: float
    colour_offset: Colour
    direction: Vec3

    def colour(self, base_colour: Colour) -> Colour:
        return offset_colour(base_colour, self.colour_offset)


@dataclass
class LavaLampState(EffectState):
    coords: Optional[CoordinateSpace] = None
    blobs: List[Blob] = field(default_factory=list)


def _random_offset(rng: random.Random, variation: int) -> int:
    # Half-open range; no variation means no offset
    if variation <= 0:
        return 0
    return rng.randint(-variation, variation - 1)


class LavaLamp:
    """Blend a handful of spheres that wander slowly, never leaving the tree for long.

    Continuous: never finishes by itself.
    """

    name = "lava_lamp"
    description = "Blended spheres of similar colours drifting around like a lava lamp"
    config_class = LavaLampConfig
    continuous = True

    def from_config(
        self,
        config: LavaLampConfig,
        coords: CoordinateSpace,
        rng: Optional[random.Random] = None,
    ) -> LavaLampState:
        rng = rng or random.Random()
        blobs = []
        for _ in range(SPHERE_COUNT):
            blobs.append(
                Blob(
                    centre=(
                        rng.uniform(-1.0, 1.0),
                        rng.uniform(-1.0, 1.0),
                        rng.uniform(0.0, coords.max_z),
                    ),
                    radius=rng.uniform(0.25, 2.0),
                    colour_offset=(
                        _random_offset(rng, config.variation),
                        _random_offset(rng, config.variation),
                        _random_offset(rng, config.variation),
                    ),
                    direction=vectors.random_vector(rng),
                )
            )
            self._aim(blobs[-1], coords, rng)
        return LavaLampState(rng=rng, coords=coords, blobs=blobs)

    def advance(self, state: LavaLampState, config: LavaLampConfig) -> Optional[Step]:
        frame = Frame3D(
            tuple(
                FrameObject(Sphere(blob.centre, blob.radius), blob.colour(config.base_colour), config.fadeoff)
                for blob in state.blobs
            ),
            blend=True,
        )

        for blob in state.blobs:
            self._drift(blob, state.coords, state.rng)

        return Step(frame, FRAME_SECONDS)

    @staticmethod
    def _drift(blob: Blob, coords: CoordinateSpace, rng: random.Random) -> None:
        blob.centre = vectors.add(blob.centre, vectors.scale(blob.direction, STEP_DISTANCE))
        blob.direction = vectors.normalize(
            vectors.add(blob.direction, vectors.scale(vectors.random_vector(rng), WANDER))
        )
        LavaLamp._aim(blob, coords, rng)

    @staticmethod
    def _aim(blob: Blob, coords: CoordinateSpace, rng: random.Random) -> None:
        """Re-aim until a full step ahead is inside the tree."""
        attempts = 0
        while not coords.is_within_bounds(vectors.add(blob.centre, blob.direction)):
            attempts += 1
            if attempts > MAX_REAIM_ATTEMPTS:
                home = vectors.sub(coords.center(), blob.centre)
                if vectors.length(home) > 1e-9:
                    blob.direction = vectors.normalize(home)
                break
            turned = vectors.add(blob.direction, vectors.random_vector(rng))
            if vectors.length(turned) > 1e-9:
                blob.direction = vectors.normalize(turned)
