"""Tests for calendartui/config/settings.py settings loading."""

import logging
from pathlib import Path

import pytest

from calendartui.config.settings import (
    CalendarSettings,
    KeyBindings,
    get_settings,
    reset_settings,
)
from calendartui.ui.events import Action
from calendartui.utils.exceptions import ConfigurationError


@pytest.fixture
def project_config(tmp_path):
    """Write ./config/config.yaml in the test working directory."""

    def _write(text: str) -> Path:
        path = tmp_path / "config" / "config.yaml"
        path.parent.mkdir(exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


def make_settings(tmp_path, **kwargs):
    return CalendarSettings(config_dir=tmp_path / "config_home", **kwargs)


class TestDefaults:
    """Test default values."""

    def test_layout_defaults(self, tmp_path):
        settings = make_settings(tmp_path)

        assert settings.left_padding == 2
        assert settings.right_padding == 1
        assert settings.preview_min_width == 40
        assert settings.preview_max_width == 80
        assert settings.clock_interval == 300
        assert settings.loaded_config_file is None

    def test_style_defaults(self, tmp_path):
        settings = make_settings(tmp_path)

        assert settings.today_style.color == "2"
        assert settings.inactive_style.color == "8"
        assert settings.noted_style.is_blank()

    def test_note_dir_default(self, tmp_path):
        assert make_settings(tmp_path).note_dir == "$HOME/.local/share/calendar"

    def test_editor_defaults_to_vi(self, tmp_path):
        assert make_settings(tmp_path).editor == "vi"

    def test_editor_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EDITOR", "nano")
        assert make_settings(tmp_path).editor == "nano"

        monkeypatch.setenv("VISUAL", "code -w")
        assert make_settings(tmp_path).editor == "code -w"

    def test_log_dir(self, tmp_path):
        settings = make_settings(tmp_path, data_dir=tmp_path / "data")
        assert settings.log_dir == tmp_path / "data" / "logs"

        settings.logging.file_directory = str(tmp_path / "elsewhere")
        assert settings.log_dir == tmp_path / "elsewhere"

    def test_invalid_clock_interval(self, tmp_path):
        with pytest.raises(ValueError):
            make_settings(tmp_path, clock_interval=0)


class TestKeyBindings:
    """Test resolving keys to actions."""

    def test_default_keymap(self):
        keymap = KeyBindings().keymap()

        assert keymap["q"] is Action.QUIT
        assert keymap["ctrl+c"] is Action.QUIT
        assert keymap["H"] is Action.JUMP_LAST_SUNDAY
        assert keymap["h"] is Action.MOVE_LEFT
        assert keymap["tab"] is Action.TOGGLE_FOCUS
        assert keymap["ctrl+d"] is Action.MONTH_DOWN

    def test_earlier_binding_wins_on_conflict(self):
        keymap = KeyBindings(quit=["x"], help=["x", "?"]).keymap()

        assert keymap["x"] is Action.QUIT
        assert keymap["?"] is Action.TOGGLE_HELP

    def test_unbound_key(self):
        assert "F" not in KeyBindings().keymap()

    def test_keys_for(self):
        assert KeyBindings().keys_for(Action.QUIT) == ["ctrl+c", "q"]
        assert KeyBindings().keys_for(Action.SCROLL_UP) == []


class TestYamlConfig:
    """Test loading the YAML file and its precedence."""

    def test_project_config_is_loaded(self, tmp_path, project_config):
        path = project_config("left_padding: 4\nholiday_lists:\n  - ~/holidays.txt\n")

        settings = make_settings(tmp_path)

        assert settings.left_padding == 4
        assert settings.holiday_lists == ["~/holidays.txt"]
        assert settings.loaded_config_file == path

    def test_user_config_is_loaded(self, tmp_path):
        user_config = tmp_path / "config_home" / "config.yaml"
        user_config.parent.mkdir()
        user_config.write_text("mouse: false\n")

        assert make_settings(tmp_path).mouse is False

    def test_explicit_config_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("colors: false\n")

        settings = make_settings(tmp_path, config_path=path)

        assert settings.colors is False
        assert settings.loaded_config_file == path

    def test_missing_explicit_config_path(self, tmp_path):
        with pytest.raises(ConfigurationError):
            make_settings(tmp_path, config_path=tmp_path / "missing.yaml")

    def test_nested_models_are_merged(self, tmp_path, project_config):
        project_config(
            "today_style:\n  bold: true\n"
            "logging:\n  console_level: DEBUG\n"
            "key_bindings:\n  quit: [Q]\n"
        )

        settings = make_settings(tmp_path)

        assert settings.today_style.color == "2"
        assert settings.today_style.bold is True
        assert settings.logging.console_level == "DEBUG"
        assert settings.logging.file_level == "DEBUG"
        assert settings.key_bindings.quit == ["Q"]
        assert settings.key_bindings.help == ["?"]

    def test_keywords_from_yaml(self, tmp_path, project_config):
        project_config("keywords:\n  - keyword: '#work'\n    color: '4'\n")

        settings = make_settings(tmp_path)

        assert settings.keywords[0].keyword == "#work"
        assert settings.keywords[0].color == "4"

    def test_constructor_arguments_beat_yaml(self, tmp_path, project_config):
        project_config("left_padding: 4\n")

        assert make_settings(tmp_path, left_padding=7).left_padding == 7

    def test_environment_beats_yaml(self, tmp_path, project_config, monkeypatch):
        project_config("left_padding: 4\nright_padding: 3\n")
        monkeypatch.setenv("CALENDARTUI_LEFT_PADDING", "5")

        settings = make_settings(tmp_path)

        assert settings.left_padding == 5
        assert settings.right_padding == 3

    def test_empty_file(self, tmp_path, project_config):
        project_config("")
        assert make_settings(tmp_path).left_padding == 2

    def test_invalid_yaml(self, tmp_path, project_config):
        project_config("left_padding: [\n")

        with pytest.raises(ConfigurationError):
            make_settings(tmp_path)

    def test_non_mapping_yaml(self, tmp_path, project_config):
        project_config("- left_padding\n")

        with pytest.raises(ConfigurationError):
            make_settings(tmp_path)

    def test_invalid_value(self, tmp_path, project_config):
        project_config("clock_interval: 0\n")

        with pytest.raises(ConfigurationError):
            make_settings(tmp_path)

    def test_unknown_keys_are_ignored(self, tmp_path, project_config, caplog):
        project_config("ics_url: http://example.com\nleft_padding: 3\n")

        with caplog.at_level(logging.WARNING, logger="calendartui.config.settings"):
            settings = make_settings(tmp_path)

        assert settings.left_padding == 3
        assert "ics_url" in caplog.text


class TestGlobalSettings:
    """Test the shared settings instance."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reset_settings(self):
        first = get_settings()
        reset_settings()
        assert get_settings() is not first
