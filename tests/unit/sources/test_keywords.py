"""Tests for calendartui/sources/keywords.py keyword matching."""

from calendartui.config.settings import KeywordSettings
from calendartui.sources.keywords import Keyword, KeywordList


class TestKeywordList:
    """Test keyword lookup in note text."""

    def test_match_on_single_line(self):
        keywords = KeywordList([Keyword("#work", "4")])
        assert keywords.match("notes\nfinish #work item") == Keyword("#work", "4")

    def test_first_line_then_first_keyword_wins(self):
        keywords = KeywordList([Keyword("#a", "1"), Keyword("#b", "2")])

        assert keywords.match("#b and #a").color == "1"
        assert keywords.match("#b\n#a").color == "2"

    def test_no_match_across_line_break(self):
        keywords = KeywordList([Keyword("two words", "1")])
        assert keywords.match("two\nwords") is None

    def test_empty_keyword_never_matches(self):
        assert KeywordList([Keyword("", "1")]).match("anything") is None

    def test_truthiness(self):
        assert not KeywordList()
        assert KeywordList([Keyword("x", "1")])

    def test_from_settings(self):
        keywords = KeywordList.from_settings([KeywordSettings(keyword="#gym", color="6")])
        assert keywords.keywords == [Keyword("#gym", "6")]
