"""
Frames - one unit of display output.

A frame is one of:
- Off: every light black
- RawData: one colour per light, in light order
- Frame3D: geometric objects composited onto the tree on demand

Compositing is the only place objects interact. Without blend, later objects
overwrite earlier ones light by light. With blend, every object renders onto
its own black buffer and the buffers are averaged, so a light an object
doesn't reach counts as black for that object's share.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ..gift_coords import CoordinateSpace
from ..vectors import Vec3
from .colours import BLACK, Colour, as_colour
from .shapes import Plane, Sphere, SplitPlane
from .splines import CatmullRomSpline

Shape = Union[Plane, SplitPlane, Sphere, CatmullRomSpline]


@dataclass(frozen=True)
class FrameObject:
    """A shape with a colour and the distance over which that colour fades out.

    `colour` is ignored by shapes that carry their own colours
    (SplitPlane, CatmullRomSpline).
    """
    shape: Shape
    colour: Colour = BLACK
    fadeoff: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "colour", as_colour(self.colour))
        if self.fadeoff < 0:
            raise ValueError("fadeoff must not be negative")

    def colour_at(self, point: Vec3) -> Optional[Colour]:
        return self.shape.colour_at(point, self.colour, self.fadeoff)


def _render_into(buffer: List[Colour], obj: FrameObject, coords: CoordinateSpace) -> None:
    for i, point in enumerate(coords):
        colour = obj.colour_at(point)
        if colour is not None:
            buffer[i] = colour


def render(objects: Sequence[FrameObject], blend: bool, coords: CoordinateSpace) -> List[Colour]:
    """Composite objects into one colour per light."""
    count = coords.count

    if not blend:
        buffer = [BLACK] * count
        for obj in objects:
            _render_into(buffer, obj, coords)
        return buffer

    if not objects:
        return [BLACK] * count

    # Integer sums so the mean truncates exactly (N copies of v average to v)
    totals = np.zeros((count, 3), dtype=np.int64)
    for obj in objects:
        own = [BLACK] * count
        _render_into(own, obj, coords)
        totals += np.asarray(own, dtype=np.int64).reshape(count, 3)

    mean = totals // len(objects)
    return [(int(r), int(g), int(b)) for r, g, b in mean]


@dataclass(frozen=True)
class Off:
    """All lights off."""


@dataclass(frozen=True)
class RawData:
    """An explicit colour for each light.

    Ideally one entry per light; drivers pad short data with black and drop extra entries.
    """
    colours: Tuple[Colour, ...]

    def __post_init__(self):
        object.__setattr__(self, "colours", tuple(as_colour(c) for c in self.colours))


@dataclass(frozen=True)
class Frame3D:
    """Objects composited into raw data the first time it's needed."""
    objects: Tuple[FrameObject, ...]
    blend: bool = False
    _raw_data: Optional[Tuple[Colour, ...]] = field(
        default=None, init=False, compare=False, repr=False
    )
    _raw_coords: Optional[CoordinateSpace] = field(
        default=None, init=False, compare=False, repr=False
    )

    def __post_init__(self):
        object.__setattr__(self, "objects", tuple(self.objects))

    @property
    def raw_data(self) -> Optional[Tuple[Colour, ...]]:
        """The computed buffer, or None if it hasn't been computed yet."""
        return self._raw_data

    def compute_raw_data(self, coords: CoordinateSpace) -> Tuple[Colour, ...]:
        """Render this frame once per coordinate space; repeat calls return the same buffer."""
        if self._raw_data is None or self._raw_coords != coords:
            object.__setattr__(self, "_raw_data", tuple(render(self.objects, self.blend, coords)))
            object.__setattr__(self, "_raw_coords", coords)
        return self._raw_data


Frame = Union[Off, RawData, Frame3D]

OFF = Off()


def frame_to_colours(frame: Frame, coords: CoordinateSpace) -> List[Colour]:
    """One colour per light for any kind of frame."""
    count = coords.count
    if isinstance(frame, Off):
        return [BLACK] * count
    if isinstance(frame, RawData):
        colours = list(frame.colours[:count])
        return colours + [BLACK] * (count - len(colours))
    if isinstance(frame, Frame3D):
        return list(frame.compute_raw_data(coords))
    raise TypeError(f"Not a frame: {frame!r}")


def apply_brightness(colours: Sequence[Colour], max_brightness: int) -> List[Colour]:
    """Scale a buffer so full channel value maps to max_brightness (0-255)."""
    if not 0 <= max_brightness <= 255:
        raise ValueError("max_brightness must be 0-255")
    if max_brightness == 255:
        return list(colours)
    return [
        (c[0] * max_brightness // 255, c[1] * max_brightness // 255, c[2] * max_brightness // 255)
        for c in colours
    ]
