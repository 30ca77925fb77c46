"""Launching the external editor for a day's note."""

import asyncio
import logging
import shlex
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class EditorLauncher:
    """Runs the configured editor on a note file and waits for it to exit."""

    def __init__(self, editor: str) -> None:
        self.editor = editor

    def command(self, path: Path) -> List[str]:
        """Build the argument vector for editing ``path``.

        The editor setting may carry its own arguments, e.g. ``"code -w"``.
        """
        args = shlex.split(self.editor) or ["vi"]
        return [*args, str(path)]

    async def edit(self, path: Path) -> Optional[str]:
        """Open ``path`` in the editor.

        The terminal is handed to the editor for the whole run; callers must
        stop reading input and leave the alternate screen first.

        Returns:
            None on success, otherwise a description of the failure
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create note directory {path.parent}: {e}")
            return str(e)

        args = self.command(path)
        logger.debug(f"Starting editor: {args}")
        try:
            process = await asyncio.create_subprocess_exec(*args)
        except OSError as e:
            logger.error(f"Could not start editor {args[0]}: {e}")
            return str(e)

        returncode = await process.wait()
        if returncode != 0:
            message = f"{args[0]} exited with status {returncode}"
            logger.warning(message)
            return message

        logger.debug(f"Editor closed for {path}")
        return None
