"""Tests for calendartui/ui/help.py help screen."""

from calendartui.config.settings import KeyBindings
from calendartui.ui.help import HelpScreen


class TestHelpScreen:
    """Test the rendered binding list."""

    def test_title_line(self):
        lines = HelpScreen("1.0.0", KeyBindings()).render()
        assert lines[0].strip() == "Calendar 1.0.0"

    def test_lists_bound_keys(self):
        lines = [line.rstrip() for line in HelpScreen("1.0.0", KeyBindings()).render()]

        assert any(line.startswith("Quit") and line.endswith("= ctrl+c, q") for line in lines)
        assert any(line.endswith("= left, h, down, j, up, k, right, l or mouse") for line in lines)

    def test_custom_bindings_are_shown(self):
        lines = HelpScreen("1.0.0", KeyBindings(yank=["c"])).render()
        assert any(line.startswith("Copy date") and line.rstrip().endswith("= c") for line in lines)

    def test_lines_have_equal_width(self):
        lines = HelpScreen("1.0.0", KeyBindings()).render()
        assert len({len(line) for line in lines}) == 1

    def test_view_without_bindings(self):
        text = HelpScreen("2.0").view()

        assert text.startswith("Calendar 2.0")
        assert "Quit" in text
