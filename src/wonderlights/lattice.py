"""
Lattice - a coarse integer grid fitted to where the lights actually are.

Cells are `2 / D` GIFT units wide, where D is the number of points across
the tree's diameter. A cell survives only if some light sits within half a
cell of it, so the grid follows the shape of the tree and paths through it
always pass near real lights.
"""

import heapq
import itertools
import logging
import math
import random
from collections import deque
from typing import Collection, Deque, Dict, Iterator, List, Optional, Tuple

import numpy as np

from .gift_coords import CoordinateSpace
from .vectors import Vec3

logger = logging.getLogger(__name__)

Coord = Tuple[int, int, int]

_ALL_STEPS: Tuple[Coord, ...] = tuple(
    step for step in itertools.product((-1, 0, 1), repeat=3) if step != (0, 0, 0)
)
ORTHOGONAL_STEPS: Tuple[Coord, ...] = tuple(
    step for step in _ALL_STEPS if sum(abs(c) for c in step) == 1
)
DIAGONAL_STEPS: Tuple[Coord, ...] = tuple(
    step for step in _ALL_STEPS if sum(abs(c) for c in step) > 1
)


def is_orthogonal_step(a: Coord, b: Coord) -> bool:
    """True if b is exactly one unit away from a along a single axis."""
    return sum(abs(a[i] - b[i]) for i in range(3)) == 1


def step_length(a: Coord, b: Coord) -> float:
    return math.sqrt(sum((a[i] - b[i]) ** 2 for i in range(3)))


class Lattice:
    """Immutable set of grid cells near the lights."""

    def __init__(self, points: Collection[Coord], cell_width: float):
        self._points: Tuple[Coord, ...] = tuple(sorted(set(points)))
        self._index = frozenset(self._points)
        self._cell_width = float(cell_width)

    @classmethod
    def build(cls, coords: CoordinateSpace, points_across_diameter: int) -> "Lattice":
        """Fit a lattice with `points_across_diameter` cells across the tree.

        Raises:
            ValueError: if points_across_diameter is less than 2
        """
        if points_across_diameter < 2:
            raise ValueError("points_across_diameter must be at least 2")

        cell_width = 2.0 / points_across_diameter
        bound = points_across_diameter // 2
        max_vertical = int(math.floor(coords.max_z / cell_width))
        reach = cell_width / 2.0 + 1e-9

        span = np.arange(-bound, bound + 1)
        xs, ys = np.meshgrid(span, span, indexing="ij")
        square = np.column_stack([xs.ravel(), ys.ravel()])
        lights = coords.array

        points: List[Coord] = []
        # One layer at a time keeps the distance matrix small
        for z in range(max_vertical + 1):
            layer = np.column_stack([square, np.full(len(square), z)])
            positions = layer * cell_width
            dists = np.linalg.norm(positions[:, np.newaxis, :] - lights[np.newaxis, :, :], axis=2)
            near = dists.min(axis=1) <= reach
            points.extend((int(x), int(y), int(zz)) for x, y, zz in layer[near])

        lattice = cls(points, cell_width)
        logger.info(
            "Built lattice with %d points (D=%d, cell width %.3f)",
            len(lattice), points_across_diameter, cell_width,
        )
        return lattice

    @property
    def points(self) -> Tuple[Coord, ...]:
        return self._points

    @property
    def cell_width(self) -> float:
        return self._cell_width

    def __contains__(self, coord: object) -> bool:
        return coord in self._index

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self._points)

    def __repr__(self) -> str:
        return f"Lattice(points={len(self)}, cell_width={self._cell_width:.3f})"

    def to_gift(self, coord: Coord) -> Vec3:
        """Centre of a cell in GIFT coordinates."""
        return (coord[0] * self._cell_width, coord[1] * self._cell_width, coord[2] * self._cell_width)

    def neighbours(self, coord: Coord, diagonal: bool = False) -> List[Coord]:
        """Adjacent cells that are part of the lattice."""
        steps = _ALL_STEPS if diagonal else ORTHOGONAL_STEPS
        result = []
        for dx, dy, dz in steps:
            candidate = (coord[0] + dx, coord[1] + dy, coord[2] + dz)
            if candidate in self._index:
                result.append(candidate)
        return result

    def random_point(self, rng: random.Random, exclude: Collection[Coord] = ()) -> Optional[Coord]:
        """A uniformly random cell not in `exclude`, or None if there isn't one."""
        if not exclude:
            return rng.choice(self._points) if self._points else None
        excluded = set(exclude)
        candidates = [p for p in self._points if p not in excluded]
        if not candidates:
            return None
        return rng.choice(candidates)

    def shortest_path(
        self,
        start: Coord,
        goal: Coord,
        blocked: Collection[Coord] = (),
        diagonal: bool = False,
    ) -> Optional[Deque[Coord]]:
        """Dijkstra from start to goal, never stepping onto a blocked cell.

        Returns:
            The cells to visit in order, excluding start and ending with goal,
            or None if goal can't be reached.
        """
        blocked = set(blocked)
        if start not in self._index or goal not in self._index or goal in blocked:
            return None
        if start == goal:
            return deque()

        dist: Dict[Coord, float] = {start: 0.0}
        previous: Dict[Coord, Coord] = {}
        visited = set()
        # Counter breaks ties so coords never need comparing
        counter = itertools.count()
        heap = [(0.0, next(counter), start)]

        while heap:
            d, _, current = heapq.heappop(heap)
            if current in visited:
                continue
            visited.add(current)
            if current == goal:
                break

            for neighbour in self.neighbours(current, diagonal):
                if neighbour in blocked or neighbour in visited:
                    continue
                candidate = d + step_length(current, neighbour)
                if candidate < dist.get(neighbour, math.inf):
                    dist[neighbour] = candidate
                    previous[neighbour] = current
                    heapq.heappush(heap, (candidate, next(counter), neighbour))

        if goal not in visited:
            return None

        path: Deque[Coord] = deque()
        node = goal
        while node != start:
            path.appendleft(node)
            node = previous[node]
        return path
