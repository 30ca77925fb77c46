"""CLI module for calendartui.

This module provides the command-line interface: argument parsing, settings
and logging setup, and running the interactive calendar.
"""

import argparse
import sys
from datetime import date
from typing import Optional, Sequence

from pydantic import ValidationError

from .. import __version__
from ..config.settings import get_settings
from ..display.console_renderer import ConsoleRenderer
from ..ui.interactive import InteractiveController
from ..utils.exceptions import ConfigurationError
from ..utils.logging import apply_command_line_overrides, setup_logging
from .parser import create_parser, parse_date_args


async def main_entry(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point with argument parsing.

    Args:
        argv: Command-line arguments, ``sys.argv[1:]`` by default

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        selected = parse_date_args(args.date, date.today())
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        settings = get_settings(config_path=args.config) if args.config else get_settings()
    except (ConfigurationError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    settings = apply_command_line_overrides(settings, args)

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        print("calendartui must be run in an interactive terminal", file=sys.stderr)
        return 1

    renderer = ConsoleRenderer(settings.left_padding, settings.right_padding)
    if settings.logging.interactive_split_display:
        renderer.enable_split_display(settings.logging.interactive_log_lines)

    logger = setup_logging(settings, renderer=renderer)
    if settings.loaded_config_file:
        logger.info(f"Using configuration from {settings.loaded_config_file}")

    controller = InteractiveController(settings, selected, renderer=renderer, version=__version__)
    await controller.start()
    return 0


__all__ = [
    "create_parser",
    "main_entry",
    "parse_date_args",
]
