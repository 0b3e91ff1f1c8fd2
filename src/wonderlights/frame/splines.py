"""
Centripetal Catmull-Rom splines with a colour gradient along their length.

The curve passes through every control point. Two virtual end controls are
extrapolated from the first and last pairs so the curve reaches both ends.
Each span is sampled SPLINE_STEPS times; a light takes the gradient colour
of its nearest sample and is then shaded like any other hard-edged shape.
"""

import math
from dataclasses import dataclass
from functools import cached_property
from typing import Optional, Tuple

import numpy as np

from ..vectors import Vec3, as_array
from .colours import Colour, as_colour, interpolate_colour
from .shapes import Sphere, shade

SPLINE_STEPS = 20

# Floor for knot intervals so repeated control points don't divide by zero
_MIN_KNOT_INTERVAL = 1e-9


def interpolate_segment(
    p0: np.ndarray,
    p1: np.ndarray,
    p2: np.ndarray,
    p3: np.ndarray,
    ts: np.ndarray,
) -> np.ndarray:
    """Points on the centripetal Catmull-Rom segment between p1 and p2.

    Args:
        p0, p1, p2, p3: control points, shape (3,)
        ts: parameters in [0, 1], shape (n,)

    Returns:
        Array of shape (n, 3); ts=0 gives p1, ts=1 gives p2
    """
    def knot(ti: float, a: np.ndarray, b: np.ndarray) -> float:
        return ti + max(math.sqrt(float(np.linalg.norm(b - a))), _MIN_KNOT_INTERVAL)

    t0 = 0.0
    t1 = knot(t0, p0, p1)
    t2 = knot(t1, p1, p2)
    t3 = knot(t2, p2, p3)

    t = (t1 + (t2 - t1) * np.asarray(ts, dtype=float))[:, np.newaxis]

    a1 = p0 * ((t1 - t) / (t1 - t0)) + p1 * ((t - t0) / (t1 - t0))
    a2 = p1 * ((t2 - t) / (t2 - t1)) + p2 * ((t - t1) / (t2 - t1))
    a3 = p2 * ((t3 - t) / (t3 - t2)) + p3 * ((t - t2) / (t3 - t2))

    b1 = a1 * ((t2 - t) / (t2 - t0)) + a2 * ((t - t0) / (t2 - t0))
    b2 = a2 * ((t3 - t) / (t3 - t1)) + a3 * ((t - t1) / (t3 - t1))

    return b1 * ((t2 - t) / (t2 - t1)) + b2 * ((t - t1) / (t2 - t1))


def sample_spline(points: Tuple[Vec3, ...], steps: int = SPLINE_STEPS) -> np.ndarray:
    """Sample the curve through `points` (at least 2) at `steps` per span."""
    pts = as_array(points)
    if len(pts) < 2:
        raise ValueError("A spline needs at least 2 points to sample")

    first, second = pts[0], pts[1]
    last, penultimate = pts[-1], pts[-2]
    controls = np.vstack([first + (first - second), pts, last + (last - penultimate)])

    ts = np.arange(steps, dtype=float) / steps
    segments = [
        interpolate_segment(controls[i], controls[i + 1], controls[i + 2], controls[i + 3], ts)
        for i in range(len(controls) - 3)
    ]
    return np.vstack(segments)


@dataclass(frozen=True)
class CatmullRomSpline:
    """A tube around a spline, coloured from start_colour to end_colour.

    The enclosing FrameObject's colour is ignored.
    """
    points: Tuple[Vec3, ...]
    threshold: float
    start_colour: Colour
    end_colour: Colour

    def __post_init__(self):
        object.__setattr__(
            self, "points", tuple((float(x), float(y), float(z)) for x, y, z in self.points)
        )
        object.__setattr__(self, "start_colour", as_colour(self.start_colour))
        object.__setattr__(self, "end_colour", as_colour(self.end_colour))
        if self.threshold < 0:
            raise ValueError("Spline threshold must not be negative")

    @cached_property
    def samples(self) -> np.ndarray:
        """Sampled curve points, computed once per spline."""
        if len(self.points) < 2:
            return np.empty((0, 3))
        return sample_spline(self.points)

    def nearest_sample(self, point: Vec3) -> Tuple[int, float]:
        """Index of and distance to the closest sample (first one wins ties)."""
        dists = np.linalg.norm(self.samples - np.asarray(point, dtype=float), axis=1)
        idx = int(np.argmin(dists))
        return idx, float(dists[idx])

    def colour_at(self, point: Vec3, colour: Colour, fadeoff: float) -> Optional[Colour]:
        if not self.points:
            return None
        if len(self.points) == 1:
            return Sphere(self.points[0], self.threshold).colour_at(point, self.start_colour, fadeoff)

        idx, dist = self.nearest_sample(point)
        if dist > self.threshold + fadeoff:
            return None

        proportion = idx / len(self.samples)
        gradient = interpolate_colour(self.start_colour, self.end_colour, proportion)
        return shade(gradient, dist, self.threshold, fadeoff)
