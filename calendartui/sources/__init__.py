"""Day notes, holiday lists, keyword lists and the note editor."""

from .editor import EditorLauncher
from .holidays import Holiday, HolidayList
from .keywords import Keyword, KeywordList
from .notes import NoteStore

__all__ = [
    "EditorLauncher",
    "Holiday",
    "HolidayList",
    "Keyword",
    "KeywordList",
    "NoteStore",
]
