"""
Configuration - engine settings and per-effect tunables on disk.

Two kinds of file:
- one engine settings file (which effect, brightness, where things live)
- one YAML document per effect under config_dir, named after the effect

Both are human-editable. Anything missing, malformed or invalid falls back
to the compiled-in defaults so a bad edit never stops the tree.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .effects import EffectConfig, default_config, get_effect
from .errors import ConfigError

logger = logging.getLogger(__name__)


def _read_document(path: Path) -> Any:
    with open(path, "r") as f:
        if path.suffix == ".yaml" or path.suffix == ".yml":
            return yaml.safe_load(f)
        return json.load(f)


def _write_document(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        if path.suffix == ".yaml" or path.suffix == ".yml":
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


@dataclass
class EngineSettings:
    """What the runner should do, and where to find its files."""
    effect: Optional[str] = None        # None = everything off
    max_brightness: int = 255           # 0-255, applied by the driver
    loop_pause_ms: int = 500            # Dark gap before a finished effect restarts
    config_dir: str = "config"          # Per-effect YAML files live here
    coords_file: str = "coords.yaml"    # Raw light positions

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineSettings":
        """Create from dictionary. Unknown keys are ignored."""
        if not isinstance(data, dict):
            raise ConfigError(f"Settings must be a mapping, got {type(data).__name__}")
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    def validate(self) -> Tuple[bool, Optional[str]]:
        """Validate settings."""
        if isinstance(self.max_brightness, bool) or not isinstance(self.max_brightness, int):
            return False, "max_brightness must be an int"
        if not (0 <= self.max_brightness <= 255):
            return False, "max_brightness must be 0-255"
        if isinstance(self.loop_pause_ms, bool) or not isinstance(self.loop_pause_ms, int):
            return False, "loop_pause_ms must be an int"
        if self.loop_pause_ms < 0:
            return False, "loop_pause_ms must not be negative"
        if self.effect is not None:
            if not isinstance(self.effect, str):
                return False, "effect must be a name"
            try:
                get_effect(self.effect)
            except KeyError:
                return False, f"Unknown effect: {self.effect}"
        return True, None


class SettingsManager:
    """Loads and saves EngineSettings."""

    def __init__(self, settings_path: Optional[Union[str, Path]] = None):
        """
        Initialize settings manager.

        Args:
            settings_path: Path to settings file (default: wonderlights.yaml in current dir)
        """
        if settings_path is None:
            settings_path = Path("wonderlights.yaml")
        self.settings_path = Path(settings_path)
        self._settings: Optional[EngineSettings] = None

    def load(self, force_reload: bool = False) -> EngineSettings:
        """Load settings from file or return defaults."""
        if self._settings is not None and not force_reload:
            return self._settings

        if self.settings_path.exists():
            try:
                self._settings = EngineSettings.from_dict(_read_document(self.settings_path))

                valid, error = self._settings.validate()
                if not valid:
                    logger.warning("Invalid settings in %s, using defaults: %s", self.settings_path, error)
                    self._settings = EngineSettings()
            except (OSError, ValueError, TypeError, yaml.YAMLError, ConfigError) as e:
                logger.warning("Error loading settings from %s, using defaults: %s", self.settings_path, e)
                self._settings = EngineSettings()
        else:
            # No settings file - use defaults
            self._settings = EngineSettings()

        return self._settings

    def save(self, settings: Optional[EngineSettings] = None) -> bool:
        """
        Save settings to file.

        Returns:
            True if saved successfully
        """
        if settings is None:
            settings = self._settings or self.load()

        valid, error = settings.validate()
        if not valid:
            logger.error("Cannot save invalid settings: %s", error)
            return False

        try:
            _write_document(self.settings_path, settings.to_dict())
        except OSError as e:
            logger.error("Error saving settings to %s: %s", self.settings_path, e)
            return False

        self._settings = settings
        return True

    def reload(self) -> EngineSettings:
        """Force reload settings from file."""
        self._settings = None
        return self.load()


class EffectConfigStore:
    """One YAML document per effect: `<config_dir>/<effect name>.yaml`."""

    def __init__(self, config_dir: Union[str, Path]):
        self.config_dir = Path(config_dir)

    def path_for(self, name: str) -> Path:
        return self.config_dir / f"{name}.yaml"

    def load(self, name: str) -> EffectConfig:
        """Load the named effect's config.

        Missing, malformed or invalid records give the default config,
        which is written back so there's a file to edit next time.

        Raises:
            UnknownEffectError: if no effect has this name
        """
        effect = get_effect(name)
        path = self.path_for(name)

        if path.exists():
            try:
                data = _read_document(path)
                if data is None:
                    data = {}
                config = effect.config_class.from_dict(data)
                valid, error = config.validate()
                if valid:
                    return config
                logger.warning("Invalid config for %s, using defaults: %s", name, error)
            except (OSError, ValueError, yaml.YAMLError, ConfigError) as e:
                logger.warning("Error loading config for %s, using defaults: %s", name, e)
        else:
            logger.info("No config for %s at %s, writing defaults", name, path)

        config = default_config(name)
        self.save(name, config)
        return config

    def save(self, name: str, config: EffectConfig) -> bool:
        """Validate and write the named effect's config.

        Returns:
            True if saved successfully
        """
        valid, error = config.validate()
        if not valid:
            logger.error("Cannot save invalid config for %s: %s", name, error)
            return False

        path = self.path_for(name)
        try:
            _write_document(path, config.to_dict())
        except OSError as e:
            logger.error("Error saving config for %s to %s: %s", name, path, e)
            return False
        return True
