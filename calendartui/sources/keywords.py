"""Keyword highlighting: color days whose note mentions a keyword."""

from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class Keyword:
    keyword: str
    color: str


class KeywordList:
    """Ordered keywords; the first keyword found wins."""

    def __init__(self, keywords: Optional[Iterable[Keyword]] = None) -> None:
        self.keywords: List[Keyword] = list(keywords or [])

    @classmethod
    def from_settings(cls, entries: Iterable) -> "KeywordList":
        return cls(Keyword(keyword=entry.keyword, color=entry.color) for entry in entries)

    def match(self, text: str) -> Optional[Keyword]:
        """Find the first keyword contained in a single line of ``text``.

        Keywords never match across a line break.
        """
        for line in text.splitlines():
            for keyword in self.keywords:
                if keyword.keyword and keyword.keyword in line:
                    return keyword
        return None

    def __bool__(self) -> bool:
        return bool(self.keywords)
