"""
Debug effects - for checking wiring and light order on a real tree.

Both are finite: they walk a fixed sequence and then finish.
"""

import random
from dataclasses import dataclass
from typing import Optional

from ..frame import BLACK, OFF, WHITE, Colour, RawData
from ..gift_coords import CoordinateSpace
from .base import EffectConfig, EffectState, Step, ms


# ---------------------------------------------------------------------------
# One by one
# ---------------------------------------------------------------------------

@dataclass
class DebugOneByOneConfig(EffectConfig):
    """Timing and colour for lighting each light in turn."""
    light_time_ms: int = 1000   # How long each light stays on
    dark_time_ms: int = 100     # Pause with everything off between lights
    color: Colour = WHITE

    def validate(self):
        if self.light_time_ms < 0 or self.dark_time_ms < 0:
            return False, "light_time_ms and dark_time_ms must not be negative"
        return True, None


@dataclass
class DebugOneByOneState(EffectState):
    lights_count: int = 0
    position: int = 0


class DebugOneByOne:
    """Light up each light individually, one by one."""

    name = "debug_one_by_one"
    description = "Light each light in index order, with a dark gap between"
    config_class = DebugOneByOneConfig
    continuous = False

    def from_config(
        self,
        config: DebugOneByOneConfig,
        coords: CoordinateSpace,
        rng: Optional[random.Random] = None,
    ) -> DebugOneByOneState:
        return DebugOneByOneState(rng=rng or random.Random(), lights_count=coords.count)

    def advance(self, state: DebugOneByOneState, config: DebugOneByOneConfig) -> Optional[Step]:
        # Off, then (light i, Off) for every light
        position = state.position
        if position > 2 * state.lights_count:
            return None
        state.position += 1

        if position == 0:
            return Step(OFF, 0.0)
        if position % 2 == 1:
            lit = (position - 1) // 2
            colours = [BLACK] * state.lights_count
            colours[lit] = config.color
            return Step(RawData(tuple(colours)), ms(config.light_time_ms))
        return Step(OFF, ms(config.dark_time_ms))


# ---------------------------------------------------------------------------
# Binary index
# ---------------------------------------------------------------------------

@dataclass
class DebugBinaryIndexConfig(EffectConfig):
    """Timing and colours for flashing each light's index in binary."""
    light_time_ms: int = 1500
    dark_time_ms: int = 500
    zero_color: Colour = (255, 0, 0)
    one_color: Colour = (0, 0, 255)

    def validate(self):
        if self.light_time_ms < 0 or self.dark_time_ms < 0:
            return False, "light_time_ms and dark_time_ms must not be negative"
        return True, None


@dataclass
class DebugBinaryIndexState(EffectState):
    lights_count: int = 0
    width: int = 0       # Bits needed for the largest index
    position: int = 0


def binary_width(lights_count: int) -> int:
    """Number of bits needed to write every index 0..lights_count-1."""
    if lights_count <= 0:
        return 0
    return max(1, (lights_count - 1).bit_length())


class DebugBinaryIndex:
    """Make each light flash its own index in binary, most significant bit first."""

    name = "debug_binary_index"
    description = "Each light shows its index in binary, one bit per frame"
    config_class = DebugBinaryIndexConfig
    continuous = False

    def from_config(
        self,
        config: DebugBinaryIndexConfig,
        coords: CoordinateSpace,
        rng: Optional[random.Random] = None,
    ) -> DebugBinaryIndexState:
        return DebugBinaryIndexState(
            rng=rng or random.Random(),
            lights_count=coords.count,
            width=binary_width(coords.count),
        )

    def advance(self, state: DebugBinaryIndexState, config: DebugBinaryIndexConfig) -> Optional[Step]:
        position = state.position
        if position > 2 * state.width:
            return None
        state.position += 1

        if position == 0:
            return Step(OFF, 0.0)
        if position % 2 == 1:
            shift = state.width - 1 - (position - 1) // 2
            colours = tuple(
                config.one_color if (i >> shift) & 1 else config.zero_color
                for i in range(state.lights_count)
            )
            return Step(RawData(colours), ms(config.light_time_ms))
        return Step(OFF, ms(config.dark_time_ms))
