"""Tests for calendartui/sources/holidays.py holiday lists."""

import logging
from datetime import date

import pytest

from calendartui.sources.holidays import Holiday, HolidayList, parse, parse_date
from calendartui.utils.exceptions import HolidayParseError


class TestParseDate:
    """Test the three supported date forms."""

    def test_full_date(self):
        holiday = parse_date("2024-07-04")
        assert (holiday.year, holiday.month, holiday.day) == (2024, 7, 4)

    def test_yearly_date(self):
        holiday = parse_date("12-25")
        assert (holiday.year, holiday.month, holiday.day) == (None, 12, 25)

    def test_yearly_leap_day(self):
        assert parse_date("02-29").day == 29

    def test_monthly_day(self):
        holiday = parse_date("01")
        assert (holiday.year, holiday.month, holiday.day) == (None, None, 1)

    @pytest.mark.parametrize("text", ["13-01", "32", "0", "2023-02-30", "xmas", "123"])
    def test_invalid_dates(self, text):
        with pytest.raises(ValueError):
            parse_date(text)


class TestParse:
    """Test parsing holiday list lines."""

    def test_parse_lines(self):
        holidays = parse(["2024-07-04 1 Independence Day\n", "\n", "12-25 2 Christmas\n"])

        assert holidays == [
            Holiday(day=4, month=7, year=2024, color="1", message="Independence Day"),
            Holiday(day=25, month=12, color="2", message="Christmas"),
        ]

    def test_message_may_be_empty(self):
        assert parse(["15 3"]) == [Holiday(day=15, color="3", message="")]

    def test_missing_fields(self):
        with pytest.raises(HolidayParseError) as exc_info:
            parse(["12-25 2 Christmas", "2024-07-04"])

        assert exc_info.value.line == 2
        assert "not enough fields" in str(exc_info.value)

    def test_invalid_date_reports_line(self):
        with pytest.raises(HolidayParseError) as exc_info:
            parse(["soon 1 Party"])

        assert exc_info.value.line == 1
        assert "invalid date soon" in exc_info.value.reason


class TestHolidayMatching:
    """Test matching holidays against days."""

    def test_full_date_matches_once(self):
        holiday = Holiday(day=4, month=7, year=2024, color="1", message="")
        assert holiday.matches(date(2024, 7, 4))
        assert not holiday.matches(date(2025, 7, 4))

    def test_yearly_date_matches_every_year(self):
        holiday = Holiday(day=25, month=12, color="1", message="")
        assert holiday.matches(date(2023, 12, 25))
        assert holiday.matches(date(1999, 12, 25))
        assert not holiday.matches(date(2023, 11, 25))

    def test_monthly_day_matches_every_month(self):
        holiday = Holiday(day=1, color="1", message="")
        assert holiday.matches(date(2023, 1, 1))
        assert holiday.matches(date(2023, 6, 1))
        assert not holiday.matches(date(2023, 6, 2))

    def test_first_match_wins(self):
        holidays = HolidayList(
            [
                Holiday(day=25, month=12, color="1", message="Christmas"),
                Holiday(day=25, color="2", message="Payday"),
            ]
        )

        assert holidays.match(date(2023, 12, 25)).message == "Christmas"
        assert holidays.match(date(2023, 11, 25)).message == "Payday"
        assert holidays.match(date(2023, 11, 24)) is None

    def test_prefix_adds_message_to_note(self):
        holidays = HolidayList([Holiday(day=25, month=12, color="1", message="Christmas")])

        assert holidays.prefix(date(2023, 12, 25), "dinner") == "Christmas\n\ndinner"
        assert holidays.prefix(date(2023, 12, 24), "dinner") == "dinner"


class TestHolidayListLoad:
    """Test loading and merging holiday list files."""

    def test_load_merges_files(self, tmp_path):
        first = tmp_path / "first.txt"
        second = tmp_path / "second.txt"
        first.write_text("12-25 1 Christmas\n")
        second.write_text("01-01 2 New Year\n07 3 Rent\n")

        holidays = HolidayList.load([str(first), second])

        assert len(holidays) == 3

    def test_load_expands_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CALENDARTUI_TEST_HOLIDAYS", str(tmp_path))
        (tmp_path / "list.txt").write_text("12-25 1 Christmas\n")

        holidays = HolidayList.load(["$CALENDARTUI_TEST_HOLIDAYS/list.txt"])

        assert len(holidays) == 1

    def test_load_skips_missing_and_malformed_lists(self, tmp_path, caplog):
        good = tmp_path / "good.txt"
        bad = tmp_path / "bad.txt"
        good.write_text("12-25 1 Christmas\n")
        bad.write_text("12-25\n")

        with caplog.at_level(logging.WARNING, logger="calendartui.sources.holidays"):
            holidays = HolidayList.load([str(tmp_path / "missing.txt"), str(bad), "", str(good)])

        assert len(holidays) == 1
        assert "Could not read holiday list" in caplog.text
        assert "Failed parsing holiday list" in caplog.text
