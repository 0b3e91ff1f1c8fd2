"""3D vector helpers on plain (x, y, z) tuples.

Single points stay as tuples so shapes remain hashable and comparable.
Bulk work (spline samples, lattice queries) goes through numpy via as_array.
"""

import math
import random
from typing import Iterable, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]

ZERO: Vec3 = (0.0, 0.0, 0.0)


def vec3(x: float, y: float, z: float) -> Vec3:
    return (float(x), float(y), float(z))


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(a: Vec3, factor: float) -> Vec3:
    return (a[0] * factor, a[1] * factor, a[2] * factor)


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(a: Vec3) -> float:
    return math.sqrt(dot(a, a))


def distance(a: Vec3, b: Vec3) -> float:
    return length(sub(a, b))


def normalize(a: Vec3) -> Vec3:
    """Unit vector in the direction of a. The zero vector has no direction."""
    ln = length(a)
    if ln == 0.0:
        raise ValueError("Cannot normalize the zero vector")
    return (a[0] / ln, a[1] / ln, a[2] / ln)


def lerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    return (
        a[0] + (b[0] - a[0]) * t,
        a[1] + (b[1] - a[1]) * t,
        a[2] + (b[2] - a[2]) * t,
    )


def random_vector(rng: random.Random) -> Vec3:
    """Random unit vector; components drawn from [-0.5, 0.5) then normalized."""
    while True:
        v = (rng.random() - 0.5, rng.random() - 0.5, rng.random() - 0.5)
        if length(v) > 1e-9:
            return normalize(v)


def as_array(points: Iterable[Vec3]) -> np.ndarray:
    """Stack points into an (n, 3) float array."""
    arr = np.asarray(list(points), dtype=float)
    return arr.reshape(-1, 3)
