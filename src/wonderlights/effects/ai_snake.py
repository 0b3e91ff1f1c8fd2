"""
AI snake - a snake that finds its own way to apples through the tree.

The snake lives on a Lattice fitted to the lights. Each step it follows a
shortest path (Dijkstra) to the current apple, growing by one cell when it
eats. When it gets stuck it resets itself rather than stopping.
"""

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional

from ..errors import NoRoomError, PathNotFoundError
from ..frame import CatmullRomSpline, Colour, Frame3D, FrameObject, Sphere
from ..gift_coords import CoordinateSpace
from ..lattice import Coord, Lattice
from .base import EffectConfig, EffectState, Step, ms

logger = logging.getLogger(__name__)

MAX_PATH_FAILURES = 10
MAX_OCCUPANCY = 0.75    # Share of the lattice the snake may fill before an apple won't fit
SHAPE_SIZE = 0.4        # Times the cell width
FADEOFF = 0.05


@dataclass
class AiSnakeConfig(EffectConfig):
    """Pace, lattice resolution and colours of the snake."""
    milliseconds_per_step: int = 1500
    lattice_points_across_diameter: int = 6
    allow_diagonal_movement: bool = False
    head_colour: Colour = (14, 252, 10)
    tail_colour: Colour = (2, 140, 0)
    apple_colour: Colour = (252, 20, 20)
    reset_pause_ms: int = 2000

    def validate(self):
        if self.milliseconds_per_step < 0 or self.reset_pause_ms < 0:
            return False, "milliseconds_per_step and reset_pause_ms must not be negative"
        if self.lattice_points_across_diameter < 2:
            return False, "lattice_points_across_diameter must be at least 2"
        return True, None


@dataclass
class AiSnakeState(EffectState):
    coords: Optional[CoordinateSpace] = None
    lattice: Optional[Lattice] = None
    points_across_diameter: int = 0
    head: Optional[Coord] = None
    tail: Deque[Coord] = field(default_factory=deque)   # Front is the cell the head just left
    apple: Optional[Coord] = None
    path: Deque[Coord] = field(default_factory=deque)   # Route to the apple, head excluded
    failures: int = 0

    def move_head(self, new_head: Coord, grow: bool) -> None:
        """Step the head to an adjacent cell. The tail follows unless growing."""
        self.tail.appendleft(self.head)
        if not grow:
            self.tail.pop()
        self.head = new_head


class AiSnake:
    """Chase apples along shortest paths through a lattice of the tree.

    Continuous: never finishes by itself, unless the tree is too sparse
    for a lattice of at least two cells.
    """

    name = "ai_snake"
    description = "A snake that pathfinds its way to apples through the tree"
    config_class = AiSnakeConfig
    continuous = True

    def from_config(
        self,
        config: AiSnakeConfig,
        coords: CoordinateSpace,
        rng: Optional[random.Random] = None,
    ) -> AiSnakeState:
        state = AiSnakeState(rng=rng or random.Random(), coords=coords)
        self._fit_lattice(state, config)
        return state

    def _fit_lattice(self, state: AiSnakeState, config: AiSnakeConfig) -> None:
        state.lattice = Lattice.build(state.coords, config.lattice_points_across_diameter)
        state.points_across_diameter = config.lattice_points_across_diameter
        if len(state.lattice) >= 2:
            self._reset(state)

    @staticmethod
    def _reset(state: AiSnakeState) -> None:
        state.tail.clear()
        state.path.clear()
        state.failures = 0
        state.head = state.lattice.random_point(state.rng)
        state.apple = state.lattice.random_point(state.rng, exclude=(state.head,))

    @staticmethod
    def _place_apple(state: AiSnakeState) -> Coord:
        occupied = 1 + len(state.tail)
        if occupied > MAX_OCCUPANCY * len(state.lattice):
            raise NoRoomError(
                f"Snake of length {occupied} fills too much of a {len(state.lattice)} point lattice"
            )
        apple = state.lattice.random_point(state.rng, exclude=set(state.tail) | {state.head})
        if apple is None:
            raise NoRoomError("No free lattice point for an apple")
        return apple

    def _plan(self, state: AiSnakeState, config: AiSnakeConfig) -> None:
        state.apple = self._place_apple(state)
        path = state.lattice.shortest_path(
            state.head,
            state.apple,
            blocked=state.tail,
            diagonal=config.allow_diagonal_movement,
        )
        if path is None:
            raise PathNotFoundError(f"No path from {state.head} to apple at {state.apple}")
        state.path = path

    def advance(self, state: AiSnakeState, config: AiSnakeConfig) -> Optional[Step]:
        if state.points_across_diameter != config.lattice_points_across_diameter:
            logger.info(
                "Lattice resolution changed to %d, refitting", config.lattice_points_across_diameter
            )
            self._fit_lattice(state, config)

        if len(state.lattice) < 2:
            logger.warning("Lattice has %d points, too few for a snake", len(state.lattice))
            return None

        if not state.path:
            try:
                self._plan(state, config)
            except NoRoomError as e:
                logger.info("Resetting snake: %s", e)
                self._reset(state)
                return Step(self._render(state, config), ms(config.reset_pause_ms))
            except PathNotFoundError as e:
                state.failures += 1
                logger.debug("Path failure %d/%d: %s", state.failures, MAX_PATH_FAILURES, e)
                if state.failures >= MAX_PATH_FAILURES:
                    logger.info("Resetting snake after %d failed paths", state.failures)
                    self._reset(state)
                    return Step(self._render(state, config), ms(config.reset_pause_ms))
                return Step(self._render(state, config), ms(config.milliseconds_per_step))
            state.failures = 0

        next_cell = state.path.popleft()
        eaten = next_cell == state.apple
        state.move_head(next_cell, grow=eaten)
        if eaten:
            state.apple = None
        return Step(self._render(state, config), ms(config.milliseconds_per_step))

    @staticmethod
    def _render(state: AiSnakeState, config: AiSnakeConfig) -> Frame3D:
        lattice = state.lattice
        size = SHAPE_SIZE * lattice.cell_width
        body = [lattice.to_gift(state.head)] + [lattice.to_gift(c) for c in state.tail]

        objects = [
            FrameObject(
                CatmullRomSpline(tuple(body), size, config.head_colour, config.tail_colour),
                fadeoff=FADEOFF,
            ),
        ]
        if state.apple is not None:
            # Apple last so the body never paints over it
            objects.append(
                FrameObject(Sphere(lattice.to_gift(state.apple), size), config.apple_colour, FADEOFF)
            )
        return Frame3D(tuple(objects), blend=False)
