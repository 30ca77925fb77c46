"""Per-day markdown notes on disk."""

import logging
import os
import stat
from datetime import date
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"


class NoteStore:
    """Reads notes stored as ``<note_dir>/YYYY-MM-DD.md``.

    Environment variables such as ``$HOME`` in the directory are expanded
    on every access.
    """

    def __init__(self, note_dir: Union[str, Path]) -> None:
        self.note_dir = str(note_dir)

    def path(self, d: date) -> Path:
        """Get the file path of the note for a day."""
        directory = Path(os.path.expanduser(os.path.expandvars(self.note_dir)))
        return directory / f"{d.isoformat()}{NOTE_SUFFIX}"

    def exists(self, d: date) -> bool:
        """Check whether a non-empty note file exists for a day.

        Directories and empty files count as missing. Errors other than a
        missing file are logged and treated as missing.
        """
        try:
            info = self.path(d).stat()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not stat note for {d}: {e}")
            return False

        if stat.S_ISDIR(info.st_mode):
            return False
        return info.st_size > 0

    def load(self, d: date) -> str:
        """Read the note for a day.

        A missing file reads as an empty note. Any other read error is
        returned as the note text so it can be shown to the user.
        """
        path = self.path(d)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read note {path}: {e}")
            return str(e)
