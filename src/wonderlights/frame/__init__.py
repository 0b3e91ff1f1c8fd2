"""
Frames and the shapes they're made of.

Submodules:
- colours: Colour, as_colour, scale_colour, interpolate_colour
- shapes: Plane, SplitPlane, Sphere, fade_factor, shade
- splines: CatmullRomSpline
- frame: FrameObject, Off, RawData, Frame3D, render
"""

from .colours import BLACK, WHITE, Colour, as_colour, interpolate_colour, random_colour, scale_colour
from .shapes import Plane, Sphere, SplitPlane, fade_factor, shade
from .splines import SPLINE_STEPS, CatmullRomSpline
from .frame import (
    OFF,
    Frame,
    Frame3D,
    FrameObject,
    Off,
    RawData,
    Shape,
    apply_brightness,
    frame_to_colours,
    render,
)

__all__ = [
    "BLACK",
    "WHITE",
    "Colour",
    "as_colour",
    "interpolate_colour",
    "random_colour",
    "scale_colour",
    "Plane",
    "SplitPlane",
    "Sphere",
    "CatmullRomSpline",
    "SPLINE_STEPS",
    "fade_factor",
    "shade",
    "FrameObject",
    "Frame",
    "Frame3D",
    "Off",
    "OFF",
    "RawData",
    "Shape",
    "render",
    "frame_to_colours",
    "apply_brightness",
]
