"""Shared test configuration with lightweight fixtures for fast execution."""

import os
from datetime import date, datetime
from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from calendartui.config.settings import CalendarSettings, reset_settings
from calendartui.display.console_renderer import ConsoleRenderer
from calendartui.sources.notes import NoteStore


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep every test away from the user's config, notes and environment."""
    for key in list(os.environ):
        if key.upper().startswith("CALENDARTUI_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)
    monkeypatch.chdir(tmp_path)

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def note_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "notes"
    directory.mkdir()
    return directory


@pytest.fixture
def note_store(note_dir: Path) -> NoteStore:
    return NoteStore(note_dir)


@pytest.fixture
def write_note(note_dir: Path) -> Callable[[date, str], Path]:
    """Write a note file for a day and return its path."""

    def _write(day: date, text: str) -> Path:
        path = note_dir / f"{day.isoformat()}.md"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def test_settings(tmp_path: Path, note_dir: Path) -> CalendarSettings:
    """Create settings that never touch the user's files."""
    return CalendarSettings(
        config_dir=tmp_path / "config_home",
        data_dir=tmp_path / "data",
        note_dir=str(note_dir),
        editor="true",
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2023, 6, 15, 9, 30)


@pytest.fixture
def renderer() -> ConsoleRenderer:
    """Renderer composing real frames but writing to a mock stream."""
    return ConsoleRenderer(stream=MagicMock())


@pytest.fixture
def mock_keyboard() -> MagicMock:
    keyboard = MagicMock()
    keyboard.start_listening = AsyncMock()
    return keyboard
