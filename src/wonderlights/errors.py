"""
Error types - what can go wrong while building a tree or running an effect.

Provides:
- Construction errors (no coordinates -> no display surface)
- Config errors (persisted effect config unreadable -> fall back to defaults)
- Recoverable pathfinding errors (the snake resets itself after these)
"""

from enum import Enum


class ErrorType(Enum):
    """Classification of error types."""
    FATAL = "fatal"              # Can't continue, propagate to caller
    CONFIG = "config"            # Bad persisted config, use defaults
    RECOVERABLE = "recoverable"  # Handled inside the effect


class WonderlightsError(Exception):
    """Base class for all wonderlights errors."""
    error_type: ErrorType = ErrorType.FATAL


class EmptyInputError(WonderlightsError, ValueError):
    """No coordinates were given, so there are no bounds to normalize against."""
    pass


class ConfigError(WonderlightsError):
    """A persisted config record could not be turned into a config."""
    error_type = ErrorType.CONFIG


class UnknownEffectError(WonderlightsError, KeyError):
    """No effect is registered under the requested name."""
    pass


class PathNotFoundError(WonderlightsError):
    """No route exists between two lattice points."""
    error_type = ErrorType.RECOVERABLE


class NoRoomError(WonderlightsError):
    """The snake fills too much of the lattice to place a new apple safely."""
    error_type = ErrorType.RECOVERABLE


def is_recoverable(error: Exception) -> bool:
    """True if the error is one an effect is expected to absorb."""
    return getattr(error, "error_type", ErrorType.FATAL) == ErrorType.RECOVERABLE
