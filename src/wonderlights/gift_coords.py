"""
GIFT coordinates - where every light on the tree is.

GIFT (Geographic Information For Trees) positions are normalized so that:
- x and y lie in [-1, 1], centred on the middle of the base
- z starts at 0 and is scaled by the same factor as x and y,
  so max_z depends on how tall the tree is relative to its width

The space is built once at start-up and handed to whatever needs it.
It is never mutated afterwards.
"""

import json
import logging
import math
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple, Union

import numpy as np
import yaml

from .errors import EmptyInputError
from .vectors import Vec3

logger = logging.getLogger(__name__)

RawPoint = Tuple[Union[int, float], Union[int, float], Union[int, float]]


class CoordinateSpace:
    """Immutable, normalized positions of every light, indexed by light number."""

    __slots__ = ("_positions", "_array", "_max_z")

    def __init__(self, positions: Sequence[Vec3], max_z: float):
        self._positions: Tuple[Vec3, ...] = tuple(
            (float(x), float(y), float(z)) for x, y, z in positions
        )
        arr = np.array(self._positions, dtype=float).reshape(-1, 3)
        arr.setflags(write=False)
        self._array = arr
        self._max_z = float(max_z)

    @classmethod
    def from_raw(cls, points: Sequence[RawPoint]) -> "CoordinateSpace":
        """Normalize raw coordinates of any scale into GIFT coordinates.

        Args:
            points: (x, y, z) triples, in light order

        Raises:
            EmptyInputError: if there are no points
        """
        if len(points) == 0:
            raise EmptyInputError("Cannot build a coordinate space from no points")

        raw = np.asarray(points, dtype=float).reshape(-1, 3)
        xs, ys, zs = raw[:, 0], raw[:, 1], raw[:, 2]

        mid_x = (xs.min() + xs.max()) / 2.0
        mid_y = (ys.min() + ys.max()) / 2.0
        centred_x = xs - mid_x
        centred_y = ys - mid_y

        divisor = max(np.abs(centred_x).max(), np.abs(centred_y).max())
        if divisor == 0.0:
            # Every light on one vertical line
            divisor = 1.0

        new_x = centred_x / divisor
        new_y = centred_y / divisor
        new_z = (zs - zs.min()) / divisor

        positions = list(zip(new_x.tolist(), new_y.tolist(), new_z.tolist()))
        return cls(positions, float(new_z.max()))

    @classmethod
    def from_normalized(cls, points: Sequence[Vec3]) -> "CoordinateSpace":
        """Wrap coordinates that are already in GIFT form."""
        if len(points) == 0:
            raise EmptyInputError("Cannot build a coordinate space from no points")
        max_z = max(0.0, max(float(z) for _, _, z in points))
        return cls(points, max_z)

    @property
    def positions(self) -> Tuple[Vec3, ...]:
        return self._positions

    @property
    def array(self) -> np.ndarray:
        """Read-only (count, 3) array of the positions."""
        return self._array

    @property
    def max_z(self) -> float:
        return self._max_z

    @property
    def count(self) -> int:
        return len(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[Vec3]:
        return iter(self._positions)

    def __getitem__(self, index: int) -> Vec3:
        return self._positions[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoordinateSpace):
            return NotImplemented
        return self._positions == other._positions and self._max_z == other._max_z

    def __hash__(self) -> int:
        return hash((self._positions, self._max_z))

    def __repr__(self) -> str:
        return f"CoordinateSpace(count={self.count}, max_z={self._max_z:.4f})"

    def is_within_bounds(self, point: Vec3) -> bool:
        """Is the point inside the box [-1, 1] x [-1, 1] x [0, max_z]?"""
        x, y, z = point
        return -1.0 <= x <= 1.0 and -1.0 <= y <= 1.0 and 0.0 <= z <= self._max_z

    def distance_to_bounds(self, point: Vec3) -> float:
        """Euclidean distance to the nearest point of the bounding box. 0 inside."""
        if self.is_within_bounds(point):
            return 0.0
        x, y, z = point
        dx = max(-1.0 - x, 0.0, x - 1.0)
        dy = max(-1.0 - y, 0.0, y - 1.0)
        dz = max(-z, 0.0, z - self._max_z)
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def center(self) -> Vec3:
        """Centre of the bounding box."""
        return (0.0, 0.0, self._max_z / 2.0)


def load_raw_coords(path: Union[str, Path]) -> List[RawPoint]:
    """Read a list of raw (x, y, z) triples from a YAML or JSON file."""
    path = Path(path)
    with open(path, "r") as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of coordinates")

    points: List[RawPoint] = []
    for item in data:
        if not isinstance(item, (list, tuple)) or len(item) != 3:
            raise ValueError(f"{path}: expected an (x, y, z) triple, got {item!r}")
        points.append((item[0], item[1], item[2]))

    logger.info("Loaded %d raw coordinates from %s", len(points), path)
    return points
