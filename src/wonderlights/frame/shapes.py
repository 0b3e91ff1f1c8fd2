"""
Basic shapes - planes, split planes and spheres.

Every shape answers one question for one light: what colour does this shape
give the light at `point`, or None if the light is out of reach.

Plane and Sphere take their colour from the enclosing FrameObject.
SplitPlane carries its own two colours and ignores the object's colour.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .. import vectors
from ..vectors import Vec3
from .colours import Colour, as_colour, scale_colour


def fade_factor(distance_into_fade: float, fadeoff: float) -> float:
    """How much colour survives at this depth into the fade band, in [0, 1]."""
    assert distance_into_fade >= 0.0, "Distance into the fade band should never be negative"
    if fadeoff <= 0.0:
        return 0.0
    return max(0.0, min(1.0, 1.0 - distance_into_fade / fadeoff))


def shade(colour: Colour, distance: float, threshold: float, fadeoff: float) -> Optional[Colour]:
    """Threshold/fadeoff rule shared by every shape with a hard edge.

    Full colour up to threshold, linear fade to black over the next
    `fadeoff` units, untouched beyond that.
    """
    assert distance >= 0.0, "Distance should never be negative"
    if distance <= threshold:
        return colour
    if distance <= threshold + fadeoff:
        return scale_colour(colour, fade_factor(distance - threshold, fadeoff))
    return None


def _as_vec(value) -> Vec3:
    x, y, z = value
    return (float(x), float(y), float(z))


@dataclass(frozen=True)
class Plane:
    """The set of points where normal . point = k, thickened by threshold."""
    normal: Vec3
    k: float
    threshold: float

    def __post_init__(self):
        object.__setattr__(self, "normal", _as_vec(self.normal))
        if vectors.length(self.normal) == 0.0:
            raise ValueError("Plane normal must not be the zero vector")
        if self.threshold < 0:
            raise ValueError("Plane threshold must not be negative")

    def distance(self, point: Vec3) -> float:
        return abs(vectors.dot(self.normal, point) - self.k) / vectors.length(self.normal)

    def colour_at(self, point: Vec3, colour: Colour, fadeoff: float) -> Optional[Colour]:
        return shade(colour, self.distance(point), self.threshold, fadeoff)


@dataclass(frozen=True)
class SplitPlane:
    """A plane colouring everything on its positive side one colour and
    everything on its negative side another.

    Within `blend` of the plane the two colours are mixed linearly.
    """
    normal: Vec3
    k: float
    blend: float
    positive_colour: Colour
    negative_colour: Colour

    def __post_init__(self):
        object.__setattr__(self, "normal", _as_vec(self.normal))
        object.__setattr__(self, "positive_colour", as_colour(self.positive_colour))
        object.__setattr__(self, "negative_colour", as_colour(self.negative_colour))
        if vectors.length(self.normal) == 0.0:
            raise ValueError("SplitPlane normal must not be the zero vector")
        if self.blend < 0:
            raise ValueError("SplitPlane blend must not be negative")

    def signed_distance(self, point: Vec3) -> float:
        return (vectors.dot(self.normal, point) - self.k) / vectors.length(self.normal)

    def colour_at(self, point: Vec3, colour: Colour, fadeoff: float) -> Optional[Colour]:
        # The object's colour and fadeoff don't apply here
        s = self.signed_distance(point)
        if s >= self.blend:
            return self.positive_colour
        if s <= -self.blend:
            return self.negative_colour

        # Weight of the negative colour, in [0, 1]
        t = (self.blend - s) / (2.0 * self.blend)
        pos, neg = self.positive_colour, self.negative_colour
        return (
            int(pos[0] * (1.0 - t) + neg[0] * t),
            int(pos[1] * (1.0 - t) + neg[1] * t),
            int(pos[2] * (1.0 - t) + neg[2] * t),
        )


@dataclass(frozen=True)
class Sphere:
    center: Vec3
    radius: float

    def __post_init__(self):
        object.__setattr__(self, "center", _as_vec(self.center))
        if self.radius < 0:
            raise ValueError("Sphere radius must not be negative")

    def distance(self, point: Vec3) -> float:
        dx = point[0] - self.center[0]
        dy = point[1] - self.center[1]
        dz = point[2] - self.center[2]
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def colour_at(self, point: Vec3, colour: Colour, fadeoff: float) -> Optional[Colour]:
        return shade(colour, self.distance(point), self.radius, fadeoff)
