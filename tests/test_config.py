"""
Tests for config module - engine settings, settings files and the per-effect config store.

Run with: pytest tests/test_config.py -v
"""

import json

import pytest
import yaml

from wonderlights.config import EffectConfigStore, EngineSettings, SettingsManager
from wonderlights.effects.ai_snake import AiSnakeConfig
from wonderlights.effects.debug import DebugOneByOneConfig
from wonderlights.effects.lava_lamp import LavaLampConfig
from wonderlights.errors import UnknownEffectError


# ---------------------------------------------------------------------------
# EngineSettings validation
# ---------------------------------------------------------------------------

class TestEngineSettingsValidation:
    def test_defaults_are_valid(self):
        valid, error = EngineSettings().validate()
        assert valid is True, f"Default settings should be valid: {error}"

    def test_brightness_out_of_range(self):
        valid, error = EngineSettings(max_brightness=300).validate()
        assert valid is False
        assert "max_brightness" in error

    def test_negative_loop_pause(self):
        valid, error = EngineSettings(loop_pause_ms=-1).validate()
        assert valid is False
        assert "loop_pause_ms" in error

    def test_unknown_effect(self):
        valid, error = EngineSettings(effect="nonexistent").validate()
        assert valid is False
        assert "nonexistent" in error

    def test_known_effect(self):
        assert EngineSettings(effect="lava_lamp").validate() == (True, None)


class TestEngineSettingsRoundTrip:
    def test_to_from_dict(self):
        settings = EngineSettings(effect="ai_snake", max_brightness=100)
        assert EngineSettings.from_dict(settings.to_dict()) == settings

    def test_unknown_keys_ignored(self):
        assert EngineSettings.from_dict({"colour_scheme": "festive"}) == EngineSettings()


# ---------------------------------------------------------------------------
# SettingsManager
# ---------------------------------------------------------------------------

class TestSettingsManager:
    def test_missing_file_gives_defaults(self, tmp_path):
        manager = SettingsManager(tmp_path / "settings.yaml")
        assert manager.load() == EngineSettings()

    def test_save_and_reload_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        manager = SettingsManager(path)
        settings = EngineSettings(effect="split_plane", max_brightness=64)
        assert manager.save(settings) is True
        assert yaml.safe_load(path.read_text())["effect"] == "split_plane"
        assert SettingsManager(path).load() == settings

    def test_save_and_reload_json(self, tmp_path):
        path = tmp_path / "settings.json"
        manager = SettingsManager(path)
        assert manager.save(EngineSettings(loop_pause_ms=10)) is True
        assert json.loads(path.read_text())["loop_pause_ms"] == 10
        assert SettingsManager(path).load().loop_pause_ms == 10

    def test_malformed_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("effect: [unclosed\n")
        assert SettingsManager(path).load() == EngineSettings()

    def test_invalid_values_give_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.dump({"max_brightness": 999}))
        assert SettingsManager(path).load() == EngineSettings()

    def test_not_a_mapping_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.dump([1, 2, 3]))
        assert SettingsManager(path).load() == EngineSettings()

    def test_invalid_settings_not_saved(self, tmp_path):
        path = tmp_path / "settings.yaml"
        assert SettingsManager(path).save(EngineSettings(max_brightness=-5)) is False
        assert not path.exists()

    def test_load_is_cached_until_reload(self, tmp_path):
        path = tmp_path / "settings.yaml"
        manager = SettingsManager(path)
        first = manager.load()
        path.write_text(yaml.dump({"max_brightness": 10}))
        assert manager.load() is first
        assert manager.reload().max_brightness == 10


# ---------------------------------------------------------------------------
# EffectConfigStore
# ---------------------------------------------------------------------------

class TestEffectConfigStore:
    def test_missing_gives_and_persists_default(self, store):
        config = store.load("lava_lamp")
        assert config == LavaLampConfig()
        assert store.path_for("lava_lamp").exists()
        on_disk = yaml.safe_load(store.path_for("lava_lamp").read_text())
        assert on_disk["base_colour"] == [243, 83, 255]

    def test_file_named_after_effect(self, tmp_path):
        store = EffectConfigStore(tmp_path)
        assert store.path_for("ai_snake") == tmp_path / "ai_snake.yaml"

    def test_saved_config_loads_back(self, store):
        config = AiSnakeConfig(milliseconds_per_step=300, allow_diagonal_movement=True)
        assert store.save("ai_snake", config) is True
        assert store.load("ai_snake") == config

    def test_partial_record_fills_defaults(self, store):
        path = store.path_for("lava_lamp")
        path.parent.mkdir(parents=True)
        path.write_text(yaml.dump({"variation": 5}))
        assert store.load("lava_lamp") == LavaLampConfig(variation=5)

    def test_empty_record_gives_defaults(self, store):
        path = store.path_for("lava_lamp")
        path.parent.mkdir(parents=True)
        path.write_text("")
        assert store.load("lava_lamp") == LavaLampConfig()

    @pytest.mark.parametrize(
        "text",
        [
            "base_colour: [1, 2\n",
            yaml.dump({"base_colour": [1, 2]}),
            yaml.dump({"flavour": "cherry"}),
            yaml.dump({"variation": 999}),
            yaml.dump(["not", "a", "mapping"]),
        ],
    )
    def test_bad_record_falls_back_and_is_replaced(self, store, text):
        path = store.path_for("lava_lamp")
        path.parent.mkdir(parents=True)
        path.write_text(text)
        assert store.load("lava_lamp") == LavaLampConfig()
        assert yaml.safe_load(path.read_text()) == LavaLampConfig().to_dict()

    def test_invalid_config_not_saved(self, store):
        assert store.save("lava_lamp", LavaLampConfig(variation=999)) is False
        assert not store.path_for("lava_lamp").exists()

    def test_unknown_effect(self, store):
        with pytest.raises(UnknownEffectError):
            store.load("nonexistent")

    def test_undecodable_record_falls_back(self, store):
        path = store.path_for("debug_one_by_one")
        path.parent.mkdir(parents=True)
        path.write_bytes(b"light_time_ms: \xff\xfe\n")
        assert store.load("debug_one_by_one") == DebugOneByOneConfig()
        assert yaml.safe_load(path.read_text()) == DebugOneByOneConfig().to_dict()
