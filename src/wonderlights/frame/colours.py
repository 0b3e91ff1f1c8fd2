"""RGB colour helpers. Channels are ints in 0-255; fractional results truncate."""

import random
from typing import Sequence, Tuple

Colour = Tuple[int, int, int]

BLACK: Colour = (0, 0, 0)
WHITE: Colour = (255, 255, 255)


def as_colour(value: Sequence[int]) -> Colour:
    """Validate and convert a 3-channel sequence (e.g. a YAML list) into a Colour."""
    if isinstance(value, (str, bytes)) or len(value) != 3:
        raise ValueError(f"Colour must have exactly 3 channels, got {value!r}")
    channels = []
    for c in value:
        if isinstance(c, bool) or not isinstance(c, int):
            raise ValueError(f"Colour channels must be ints, got {value!r}")
        if not 0 <= c <= 255:
            raise ValueError(f"Colour channels must be 0-255, got {value!r}")
        channels.append(c)
    return (channels[0], channels[1], channels[2])


def scale_colour(colour: Colour, factor: float) -> Colour:
    """Multiply each channel by factor (0-1), truncating toward zero."""
    return (int(colour[0] * factor), int(colour[1] * factor), int(colour[2] * factor))


def interpolate_colour(start: Colour, end: Colour, t: float) -> Colour:
    """Linear interpolation. t=0 -> start, t=1 -> end."""
    return tuple(
        int(max(0.0, min(255.0, start[i] * (1.0 - t) + end[i] * t)))
        for i in range(3)
    )


def offset_colour(base: Colour, offset: Tuple[int, int, int]) -> Colour:
    """Add a signed offset to each channel, clamped to 0-255."""
    return tuple(max(0, min(255, base[i] + offset[i])) for i in range(3))


def random_colour(rng: random.Random) -> Colour:
    return (rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255))
