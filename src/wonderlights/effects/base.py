"""
Effect Protocol - the minimal interface for pluggable light effects.

An effect is a pull-based state machine:
- from_config(config, coords, rng) builds fresh runtime state
- advance(state, config) produces the next frame and how long to show it,
  or None once a finite effect has run its course

Configs hold only tunables and may be swapped between calls; states hold
only runtime data and are mutated only by advance. Effects never sleep and
never talk to a driver - the caller does both.
"""

import dataclasses
import random
from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional, Protocol, Tuple, Type, TypeVar

from ..errors import ConfigError
from ..frame import Colour, Frame, as_colour
from ..gift_coords import CoordinateSpace

C = TypeVar("C", bound="EffectConfig")


class Step(NamedTuple):
    """One frame and how long (seconds) to hold it before the next advance."""
    frame: Frame
    duration: float


def _check_field(f: dataclasses.Field, value: Any) -> Any:
    if f.type == Colour:
        return as_colour(value)
    if f.type is bool:
        if not isinstance(value, bool):
            raise ValueError(f"{f.name} must be a bool, got {value!r}")
        return value
    if f.type is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{f.name} must be an int, got {value!r}")
        return value
    if f.type is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{f.name} must be a number, got {value!r}")
        return float(value)
    return value


@dataclass
class EffectConfig:
    """Base for effect configs: plain data, YAML-friendly, with defaults for every field.

    Subclasses declare fields with types int, float, bool or Colour; values are
    checked and normalized on construction (lists from YAML become colour tuples).
    """

    def __post_init__(self):
        for f in dataclasses.fields(self):
            setattr(self, f.name, _check_field(f, getattr(self, f.name)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization (colours as lists)."""
        data = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            data[f.name] = list(value) if isinstance(value, tuple) else value
        return data

    @classmethod
    def from_dict(cls: Type[C], data: Dict[str, Any]) -> C:
        """Create from dictionary. Missing keys take their defaults.

        Raises:
            ConfigError: if the data isn't a mapping, has unknown keys or bad values
        """
        if not isinstance(data, dict):
            raise ConfigError(f"{cls.__name__} expects a mapping, got {type(data).__name__}")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"{cls.__name__} has no fields {sorted(unknown)}")
        try:
            return cls(**data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid {cls.__name__}: {e}") from e

    def validate(self) -> Tuple[bool, Optional[str]]:
        """Check values are sensible. Subclasses add their own rules."""
        return True, None


@dataclass
class EffectState:
    """Per-run state. Subclassed by each effect for its own fields.

    Holds the injected RNG so a seeded run is reproducible.
    """
    rng: random.Random = field(default_factory=random.Random, repr=False)


class Effect(Protocol):
    """Protocol for effects. Duck-typed - no inheritance required.

    `continuous` effects never finish on their own; anything that needs them
    to stop (tests, benchmarks) must cap the number of advances itself.
    """

    name: str
    description: str
    config_class: Type[EffectConfig]
    continuous: bool

    def from_config(
        self,
        config: EffectConfig,
        coords: CoordinateSpace,
        rng: Optional[random.Random] = None,
    ) -> EffectState:
        """Create fresh state for a new run. May do expensive one-off setup."""
        ...

    def advance(self, state: EffectState, config: EffectConfig) -> Optional[Step]:
        """Produce the next frame, or None when the run is finished."""
        ...


def ms(milliseconds: float) -> float:
    """Milliseconds to seconds, for Step durations."""
    return milliseconds / 1000.0
