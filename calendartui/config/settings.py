"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, PrivateAttr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..ui.events import Action
from ..utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "CALENDARTUI_"


def _default_editor() -> str:
    """Pick the editor: ``$VISUAL``, then ``$EDITOR``, then ``vi``."""
    editor = "vi"
    if os.environ.get("EDITOR"):
        editor = os.environ["EDITOR"]
    if os.environ.get("VISUAL"):
        editor = os.environ["VISUAL"]
    return editor


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    console_enabled: bool = Field(default=True, description="Enable console logging")
    console_level: str = Field(
        default="INFO",
        description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )

    file_enabled: bool = Field(default=True, description="Enable file logging")
    file_level: str = Field(
        default="DEBUG",
        description="File log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    file_directory: Optional[str] = Field(
        default=None, description="Custom log directory (defaults to data_dir/logs)"
    )
    file_prefix: str = Field(default="calendartui", description="Log file prefix")
    max_log_files: int = Field(default=5, description="Maximum number of log files to keep")
    include_function_names: bool = Field(
        default=True, description="Include function names and line numbers in file logs"
    )

    interactive_split_display: bool = Field(
        default=False, description="Show recent log lines below the calendar"
    )
    interactive_log_lines: int = Field(
        default=3, description="Number of log lines to show in interactive mode"
    )

    third_party_level: str = Field(
        default="WARNING", description="Log level for third-party libraries"
    )


class StyleSettings(BaseModel):
    """Text style for a class of days."""

    color: str = Field(default="", description="ANSI palette number or #rrggbb")
    bold: bool = False
    italic: bool = False

    def is_blank(self) -> bool:
        return not (self.color or self.bold or self.italic)


class KeywordSettings(BaseModel):
    """A note keyword and the color of days whose note contains it."""

    keyword: str
    color: str


_BINDING_ACTIONS = {
    "quit": Action.QUIT,
    "help": Action.TOGGLE_HELP,
    "left": Action.MOVE_LEFT,
    "down": Action.MOVE_DOWN,
    "up": Action.MOVE_UP,
    "right": Action.MOVE_RIGHT,
    "focus_preview": Action.TOGGLE_FOCUS,
    "toggle_preview": Action.TOGGLE_PREVIEW,
    "edit": Action.EDIT_NOTE,
    "yank": Action.YANK_DATE,
    "last_sunday": Action.JUMP_LAST_SUNDAY,
    "next_sunday": Action.JUMP_NEXT_SUNDAY,
    "next_saturday": Action.JUMP_NEXT_SATURDAY,
    "month_up": Action.MONTH_UP,
    "month_down": Action.MONTH_DOWN,
}


class KeyBindings(BaseModel):
    """Key names bound to each action.

    Key names are the ones produced by the keyboard decoder: single printable
    characters (``"q"``, ``"?"``), ``"left"``/``"right"``/``"up"``/``"down"``,
    ``"tab"``, ``"enter"`` and ``"ctrl+<letter>"``.
    """

    quit: List[str] = Field(default_factory=lambda: ["ctrl+c", "q"])
    help: List[str] = Field(default_factory=lambda: ["?"])
    left: List[str] = Field(default_factory=lambda: ["left", "h"])
    down: List[str] = Field(default_factory=lambda: ["down", "j"])
    up: List[str] = Field(default_factory=lambda: ["up", "k"])
    right: List[str] = Field(default_factory=lambda: ["right", "l"])
    focus_preview: List[str] = Field(default_factory=lambda: ["tab"])
    toggle_preview: List[str] = Field(default_factory=lambda: ["p"])
    edit: List[str] = Field(default_factory=lambda: ["enter"])
    yank: List[str] = Field(default_factory=lambda: ["y"])
    last_sunday: List[str] = Field(default_factory=lambda: ["b", "H"])
    next_sunday: List[str] = Field(default_factory=lambda: ["w"])
    next_saturday: List[str] = Field(default_factory=lambda: ["e", "L"])
    month_up: List[str] = Field(default_factory=lambda: ["ctrl+u"])
    month_down: List[str] = Field(default_factory=lambda: ["ctrl+d"])

    def keymap(self) -> Dict[str, Action]:
        """Build the key name to action lookup; earlier bindings win."""
        keymap: Dict[str, Action] = {}
        for name, action in _BINDING_ACTIONS.items():
            for key in getattr(self, name):
                keymap.setdefault(key, action)
        return keymap

    def keys_for(self, action: Action) -> List[str]:
        """List the keys bound to ``action``."""
        for name, bound in _BINDING_ACTIONS.items():
            if bound is action:
                return list(getattr(self, name))
        return []


class CalendarSettings(BaseSettings):
    """Application settings with environment variable and YAML support."""

    _explicit_args: set = PrivateAttr(default_factory=set)
    _env_vars_set: set = PrivateAttr(default_factory=set)
    _loaded_config_file: Optional[Path] = PrivateAttr(default=None)

    # File Paths
    config_path: Optional[Path] = Field(
        default=None, description="Explicit YAML config file (skips the lookup)"
    )
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config" / "calendartui")
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".local" / "share" / "calendartui"
    )
    note_dir: str = Field(
        default="$HOME/.local/share/calendar",
        description="Directory of YYYY-MM-DD.md notes; environment variables are expanded",
    )
    editor: str = Field(default_factory=_default_editor, description="Command used to edit notes")

    # Holidays and keywords
    holiday_lists: List[str] = Field(default_factory=list, description="Holiday list files")
    keywords: List[KeywordSettings] = Field(default_factory=list)

    # Layout
    left_padding: int = Field(default=2, ge=0)
    right_padding: int = Field(default=1, ge=0)
    preview_left_margin: int = Field(default=3, ge=0)
    preview_padding: int = Field(default=1, ge=0)
    preview_min_width: int = Field(default=40, ge=0)
    preview_max_width: int = Field(default=80, ge=0)

    # Styles
    today_style: StyleSettings = Field(default_factory=lambda: StyleSettings(color="2"))
    inactive_style: StyleSettings = Field(default_factory=lambda: StyleSettings(color="8"))
    noted_style: StyleSettings = Field(default_factory=StyleSettings)
    colors: bool = Field(default=True, description="Render day styles with ANSI colors")
    mouse: bool = Field(default=True, description="Enable mouse clicks and wheel scrolling")

    # Behaviour
    clock_interval: int = Field(
        default=300, gt=0, description="Seconds between checks for a new day"
    )
    key_bindings: KeyBindings = Field(default_factory=KeyBindings)

    # Logging Configuration
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
    )

    def __init__(self, **kwargs: Any) -> None:
        env_vars_set = {
            key[len(ENV_PREFIX) :].lower().split("__")[0]
            for key in os.environ
            if key.upper().startswith(ENV_PREFIX)
        }

        super().__init__(**kwargs)

        self._explicit_args = set(kwargs.keys())
        self._env_vars_set = env_vars_set
        self._load_yaml_config()

    def _find_config_file(self) -> Optional[Path]:
        """Find the config file, checking the working directory first, then the user's."""
        if self.config_path is not None:
            path = Path(os.path.expanduser(str(self.config_path)))
            if not path.is_file():
                raise ConfigurationError(f"Config file not found: {path}")
            return path

        project_config = Path.cwd() / "config" / "config.yaml"
        if project_config.exists():
            return project_config

        user_config = self.config_dir / "config.yaml"
        if user_config.exists():
            return user_config

        return None

    def _apply_setting(self, name: str, value: Any) -> None:
        """Assign a YAML value, merging mappings into nested models."""
        current = getattr(self, name)
        if isinstance(current, BaseModel) and isinstance(value, dict):
            value = type(current).model_validate({**current.model_dump(), **value})
        setattr(self, name, value)

    def _load_yaml_config(self) -> None:
        """Load configuration from a YAML file if one exists.

        Constructor arguments and environment variables take precedence over
        the file.

        Raises:
            ConfigurationError: If the file cannot be read or holds invalid values
        """
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with config_file.open(encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not load config from {config_file}: {e}") from e

        if not config_data:
            return
        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {config_file} must contain a mapping")

        for name, value in config_data.items():
            if name not in type(self).model_fields:
                logger.warning(f"Ignoring unknown setting {name!r} in {config_file}")
                continue
            if name in self._explicit_args or name in self._env_vars_set:
                continue
            try:
                self._apply_setting(name, value)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid value for {name!r} in {config_file}: {e}") from e

        self._loaded_config_file = config_file
        logger.debug(f"Loaded configuration from {config_file}")

    @property
    def loaded_config_file(self) -> Optional[Path]:
        """The YAML file the settings were read from, if any."""
        return self._loaded_config_file

    @property
    def log_dir(self) -> Path:
        """Directory for log files."""
        if self.logging.file_directory:
            return Path(os.path.expanduser(self.logging.file_directory))
        return self.data_dir / "logs"


# Global settings management
_settings_instance: Optional[CalendarSettings] = None


def get_settings(**kwargs: Any) -> CalendarSettings:
    """Get the global settings instance, creating it lazily if needed.

    Keyword arguments are only used when the instance is first created.
    """
    if globals()["_settings_instance"] is None:
        globals()["_settings_instance"] = CalendarSettings(**kwargs)
    return globals()["_settings_instance"]


def reset_settings() -> None:
    """Reset the global settings instance (primarily for testing)."""
    globals()["_settings_instance"] = None
