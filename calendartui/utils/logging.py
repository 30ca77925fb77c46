"""Logging configuration and setup utilities."""

import logging
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Deque, Optional, Union

if TYPE_CHECKING:
    from ..config.settings import CalendarSettings
    from ..display.console_renderer import ConsoleRenderer

# Custom log level between INFO(20) and DEBUG(10)
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")


def get_log_level(level_name: str) -> int:
    """Get numeric log level from string name, including the VERBOSE level.

    Args:
        level_name: Log level name (DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Numeric log level

    Raises:
        AttributeError: If the level name is not recognized
    """
    level_name = level_name.upper()
    if level_name == "VERBOSE":
        return VERBOSE
    level: int = getattr(logging, level_name)
    return level


class TimestampedFileHandler(logging.FileHandler):
    """Handler that writes one timestamped log file per run."""

    def __init__(
        self, log_dir: Union[str, Path], prefix: str = "calendartui", max_files: int = 5
    ) -> None:
        self.log_dir = Path(log_dir)
        self.prefix = prefix
        self.max_files = max_files

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = self.log_dir / f"{prefix}_{timestamp}.log"
        self.log_dir.mkdir(parents=True, exist_ok=True)

        super().__init__(str(log_path), encoding="utf-8")
        self.cleanup_old_files()

    def cleanup_old_files(self) -> None:
        """Remove log files beyond ``max_files``, keeping the most recent."""
        log_files = list(self.log_dir.glob(f"{self.prefix}_*.log"))
        if len(log_files) <= self.max_files:
            return

        log_files.sort(key=lambda f: f.stat().st_mtime, reverse=True)
        for old_file in log_files[self.max_files :]:
            try:
                old_file.unlink()
            except OSError:
                # Another run may have removed it already
                continue


class SplitDisplayHandler(logging.Handler):
    """Handler that feeds the last few records into the frame's log area."""

    def __init__(self, renderer: "ConsoleRenderer", max_log_lines: int = 3) -> None:
        super().__init__()
        self.renderer = renderer
        self.max_log_lines = max_log_lines
        self.log_buffer: Deque[str] = deque(maxlen=max_log_lines)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.log_buffer.append(self.format(record))
            self.renderer.update_log_area(list(self.log_buffer))
        except Exception:
            self.handleError(record)


def setup_logging(
    settings: "CalendarSettings",
    renderer: Optional["ConsoleRenderer"] = None,
) -> logging.Logger:
    """Configure the ``calendartui`` logger hierarchy.

    The calendar owns the terminal, so nothing is written to it directly:
    console records go to the in-frame log area (when a renderer is given and
    split display is enabled) and everything else goes to the log file.

    Args:
        settings: Application settings
        renderer: Renderer whose log area receives console records

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("calendartui")
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    log_settings = settings.logging

    if (
        log_settings.console_enabled
        and log_settings.interactive_split_display
        and renderer is not None
    ):
        console_handler = SplitDisplayHandler(
            renderer, max_log_lines=log_settings.interactive_log_lines
        )
        console_handler.setLevel(get_log_level(log_settings.console_level))
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
        )
        logger.addHandler(console_handler)

    if log_settings.file_enabled:
        file_handler = TimestampedFileHandler(
            log_dir=settings.log_dir,
            prefix=log_settings.file_prefix,
            max_files=log_settings.max_log_files,
        )
        file_handler.setLevel(get_log_level(log_settings.file_level))

        if log_settings.include_function_names:
            file_format = (
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        else:
            file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_handler.setFormatter(logging.Formatter(file_format, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {file_handler.baseFilename}")

    third_party_level = get_log_level(log_settings.third_party_level)
    for lib in ["asyncio", "pyperclip"]:
        logging.getLogger(lib).setLevel(third_party_level)

    return logger


def apply_command_line_overrides(
    settings: "CalendarSettings", args: Any
) -> "CalendarSettings":
    """Apply command-line logging options to the settings in place.

    Priority: command line > environment > YAML > defaults.

    Args:
        settings: Current settings object to modify
        args: Parsed command-line arguments

    Returns:
        The same settings object
    """
    if getattr(args, "log_level", None):
        settings.logging.console_level = args.log_level
        settings.logging.file_level = args.log_level

    if getattr(args, "verbose", False):
        settings.logging.console_level = "VERBOSE"
        settings.logging.file_level = "VERBOSE"

    if getattr(args, "quiet", False):
        settings.logging.console_level = "ERROR"

    if getattr(args, "log_dir", None):
        settings.logging.file_directory = str(args.log_dir)

    return settings
