"""
Drivers - where frames go once an effect has made them.

The engine never talks to hardware itself. Anything that can show a frame
implements Driver; the runner hands each frame over with the brightness cap.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Tuple

from .frame import OFF, Frame, Frame3D, Off, RawData, apply_brightness, frame_to_colours
from .gift_coords import CoordinateSpace

logger = logging.getLogger(__name__)


class Driver(ABC):
    """Abstract display sink for frames."""

    @abstractmethod
    def display_frame(self, frame: Frame, max_brightness: int = 255) -> None:
        """Show a frame, scaled so no channel exceeds max_brightness."""
        pass

    @abstractmethod
    def get_lights_count(self) -> int:
        """Number of lights on the chain."""
        pass

    def clear(self) -> None:
        """Turn every light off."""
        self.display_frame(OFF)


class RecordingDriver(Driver):
    """Keeps every frame it's given, for tests and benchmarks."""

    def __init__(self, lights_count: int):
        self.lights_count = lights_count
        self.frames: List[Tuple[Frame, int]] = []

    def display_frame(self, frame: Frame, max_brightness: int = 255) -> None:
        self.frames.append((frame, max_brightness))

    def get_lights_count(self) -> int:
        return self.lights_count

    @property
    def displayed(self) -> List[Frame]:
        """Just the frames, in the order they were shown."""
        return [frame for frame, _ in self.frames]


class LoggingDriver(Driver):
    """Renders frames and logs a one-line summary of each at DEBUG level."""

    def __init__(self, coords: CoordinateSpace):
        self.coords = coords
        self.frames_shown = 0

    def display_frame(self, frame: Frame, max_brightness: int = 255) -> None:
        colours = apply_brightness(frame_to_colours(frame, self.coords), max_brightness)
        self.frames_shown += 1

        if isinstance(frame, Off):
            kind = "off"
        elif isinstance(frame, RawData):
            kind = "raw"
        elif isinstance(frame, Frame3D):
            kind = f"3d({len(frame.objects)} objects, blend={frame.blend})"
        else:
            kind = type(frame).__name__

        lit = sum(1 for c in colours if c != (0, 0, 0))
        logger.debug(
            "Frame %d: %s, %d/%d lights lit, max_brightness=%d",
            self.frames_shown, kind, lit, len(colours), max_brightness,
        )

    def get_lights_count(self) -> int:
        return self.coords.count
