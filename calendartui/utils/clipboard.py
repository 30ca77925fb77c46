"""System clipboard access."""

import logging
from datetime import date

import pyperclip

logger = logging.getLogger(__name__)


def copy_date(d: date) -> bool:
    """Copy a date to the clipboard as ``YYYY-MM-DD``.

    Returns:
        True if the clipboard accepted the text
    """
    text = d.isoformat()
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning(f"Could not copy {text} to clipboard: {e}")
        return False

    logger.info(f"Copied {text} to clipboard")
    return True
