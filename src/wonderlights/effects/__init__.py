"""
Effect Registry - every effect the engine can run, by stable name.

Effects are pluggable objects following the Effect protocol in base.py.
Adding an effect means writing its module and registering it at the
bottom of this file; nothing else needs to change.
"""

from typing import Dict, List

from ..errors import UnknownEffectError
from .base import Effect, EffectConfig, EffectState, Step, ms

# Registry of all available effects
_EFFECTS: Dict[str, Effect] = {}


def register_effect(effect: Effect) -> None:
    """Register an effect under its name. Re-registering a name replaces it."""
    _EFFECTS[effect.name] = effect


def get_effect(name: str) -> Effect:
    """Get effect by name.

    Raises:
        UnknownEffectError: if nothing is registered under that name
    """
    try:
        return _EFFECTS[name]
    except KeyError:
        raise UnknownEffectError(name) from None


def get_effect_info(name: str) -> dict:
    """Effect metadata: name, description, whether it ever finishes by itself."""
    effect = _EFFECTS.get(name)
    if not effect:
        return {}
    return {
        "name": effect.name,
        "description": effect.description,
        "continuous": effect.continuous,
    }


def list_effects() -> List[str]:
    """List all registered effect names."""
    return list(_EFFECTS.keys())


def default_config(name: str) -> EffectConfig:
    """A fresh default config for the named effect."""
    return get_effect(name).config_class()


# --- Register effects at import time ---
from .debug import DebugBinaryIndex, DebugOneByOne  # noqa: E402
from .maths import MovingPlane, SplitPlaneEffect  # noqa: E402
from .lava_lamp import LavaLamp  # noqa: E402
from .ai_snake import AiSnake  # noqa: E402

register_effect(DebugOneByOne())
register_effect(DebugBinaryIndex())
register_effect(MovingPlane())
register_effect(SplitPlaneEffect())
register_effect(LavaLamp())
register_effect(AiSnake())

__all__ = [
    "Effect",
    "EffectConfig",
    "EffectState",
    "Step",
    "ms",
    "register_effect",
    "get_effect",
    "get_effect_info",
    "list_effects",
    "default_config",
]
