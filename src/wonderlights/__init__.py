"""
Wonderlights - 3D lighting effects for a Christmas tree.

Every light's position is known, so effects are drawn as shapes in space
(planes, spheres, splines) and composited onto the lights, rather than as
patterns along a string.
"""

__version__ = "0.1.0"

# Core exports
from .gift_coords import CoordinateSpace, load_raw_coords
from .frame import (
    OFF,
    CatmullRomSpline,
    Frame,
    Frame3D,
    FrameObject,
    Off,
    Plane,
    RawData,
    Sphere,
    SplitPlane,
    frame_to_colours,
    render,
)
from .effects import (
    Effect,
    EffectConfig,
    EffectState,
    Step,
    default_config,
    get_effect,
    list_effects,
    register_effect,
)
from .lattice import Lattice
from .config import EffectConfigStore, EngineSettings, SettingsManager
from .driver import Driver, LoggingDriver, RecordingDriver
from .runner import EffectRunner
from .errors import (
    ConfigError,
    EmptyInputError,
    NoRoomError,
    PathNotFoundError,
    UnknownEffectError,
    WonderlightsError,
)

__all__ = [
    "CoordinateSpace",
    "load_raw_coords",
    "OFF",
    "CatmullRomSpline",
    "Frame",
    "Frame3D",
    "FrameObject",
    "Off",
    "Plane",
    "RawData",
    "Sphere",
    "SplitPlane",
    "frame_to_colours",
    "render",
    "Effect",
    "EffectConfig",
    "EffectState",
    "Step",
    "default_config",
    "get_effect",
    "list_effects",
    "register_effect",
    "Lattice",
    "EffectConfigStore",
    "EngineSettings",
    "SettingsManager",
    "Driver",
    "LoggingDriver",
    "RecordingDriver",
    "EffectRunner",
    "ConfigError",
    "EmptyInputError",
    "NoRoomError",
    "PathNotFoundError",
    "UnknownEffectError",
    "WonderlightsError",
]
