"""Help screen listing the key bindings."""

from typing import TYPE_CHECKING, List, Optional, Tuple

from .events import Action

if TYPE_CHECKING:
    from ..config.settings import KeyBindings

HELP_ENTRIES: Tuple[Tuple[str, Tuple[Action, ...], str], ...] = (
    (
        "Select",
        (Action.MOVE_LEFT, Action.MOVE_DOWN, Action.MOVE_UP, Action.MOVE_RIGHT),
        "or mouse",
    ),
    ("Focus preview", (Action.TOGGLE_FOCUS,), ""),
    ("Toggle preview", (Action.TOGGLE_PREVIEW,), ""),
    ("Scroll preview", (Action.MOVE_DOWN, Action.MOVE_UP), "(if focused)"),
    ("Edit note", (Action.EDIT_NOTE,), ""),
    ("Copy date", (Action.YANK_DATE,), ""),
    ("Goto last Sunday", (Action.JUMP_LAST_SUNDAY,), ""),
    ("Goto next Sunday", (Action.JUMP_NEXT_SUNDAY,), ""),
    ("Goto next Saturday", (Action.JUMP_NEXT_SATURDAY,), ""),
    ("Go up one month", (Action.MONTH_UP,), ""),
    ("Go down one month", (Action.MONTH_DOWN,), ""),
    ("Help", (Action.TOGGLE_HELP,), ""),
    ("Quit", (Action.QUIT,), ""),
)


class HelpScreen:
    """Renders the bound keys for every action."""

    def __init__(self, version: str, bindings: Optional["KeyBindings"] = None) -> None:
        self.version = version
        self.bindings = bindings

    def _keys(self, actions: Tuple[Action, ...]) -> str:
        if self.bindings is None:
            return ""
        keys: List[str] = []
        for action in actions:
            for key in self.bindings.keys_for(action):
                if key not in keys:
                    keys.append(key)
        return ", ".join(keys)

    def render(self) -> List[str]:
        """Render the help text as lines of equal width."""
        label_width = max(len(label) for label, _, _ in HELP_ENTRIES)
        lines = [f"Calendar {self.version}", ""]
        for label, actions, suffix in HELP_ENTRIES:
            keys = " ".join(part for part in (self._keys(actions), suffix) if part)
            lines.append(f"{label.ljust(label_width)} = {keys}")

        width = max(len(line) for line in lines)
        return [line.ljust(width) for line in lines]

    def view(self) -> str:
        return "\n".join(self.render())
