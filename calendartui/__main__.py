"""Entry point for `python -m calendartui` command."""

import asyncio
import sys

from calendartui.cli import main_entry


def main() -> None:
    """Entry point for python -m calendartui and the console script."""
    try:
        exit_code = asyncio.run(main_entry())
        sys.exit(exit_code)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
