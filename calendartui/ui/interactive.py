"""Interactive UI controller: the event loop tying the calendar together."""

import asyncio
import contextlib
import logging
import os
import signal
from collections import ChainMap
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Coroutine, Dict, Optional, Set, Tuple

from ..core import dates
from ..display.console_renderer import ConsoleRenderer, Frame
from ..display.styles import Style, Theme
from ..sources.editor import EditorLauncher
from ..sources.holidays import HolidayList
from ..sources.keywords import KeywordList
from ..sources.notes import NoteStore
from ..utils.clipboard import copy_date
from .decorations import load_decorations
from .events import (
    Action,
    ClockTick,
    DecorationsLoaded,
    EditorClosed,
    Event,
    PointerClick,
    Resize,
)
from .help import HelpScreen
from .keyboard import KeyboardHandler
from .layout import FocusTarget, LayoutEngine
from .preview import PreviewViewport

if TYPE_CHECKING:
    from ..config.settings import CalendarSettings

logger = logging.getLogger(__name__)

# Actions that always hand focus back to the months first.
_MONTH_FOCUS_ACTIONS = {
    Action.MOVE_LEFT,
    Action.MOVE_RIGHT,
    Action.JUMP_LAST_SUNDAY,
    Action.JUMP_NEXT_SUNDAY,
    Action.JUMP_NEXT_SATURDAY,
}

_PREVIEW_SCROLLS = {
    Action.MOVE_UP: -1,
    Action.MOVE_DOWN: 1,
    Action.SCROLL_UP: -1,
    Action.SCROLL_DOWN: 1,
}


class InteractiveController:
    """Owns the calendar state and dispatches events to it one at a time.

    Producers (keyboard, terminal resize signal, clock, editor and decoration
    loaders) only ever put events on the queue. ``dispatch`` is synchronous
    and is the only place state changes.
    """

    def __init__(
        self,
        settings: "CalendarSettings",
        selected: date,
        now: Optional[datetime] = None,
        notes: Optional[NoteStore] = None,
        holidays: Optional[HolidayList] = None,
        keywords: Optional[KeywordList] = None,
        editor: Optional[EditorLauncher] = None,
        renderer: Optional[ConsoleRenderer] = None,
        keyboard: Optional[KeyboardHandler] = None,
        version: str = "",
    ) -> None:
        """Initialize interactive controller.

        Args:
            settings: Application settings
            selected: Initially selected date
            now: Current time, ``datetime.now()`` by default
            notes: Note store, built from settings by default
            holidays: Holidays, loaded from settings by default
            keywords: Keywords, built from settings by default
            editor: Editor launcher, built from settings by default
            renderer: Frame renderer, writing to stdout by default
            keyboard: Input handler, reading stdin by default
            version: Version shown on the help screen
        """
        self.settings = settings
        today = (now or datetime.now()).date()

        self.notes = notes or NoteStore(settings.note_dir)
        self.holidays = holidays if holidays is not None else HolidayList.load(settings.holiday_lists)
        self.keywords = keywords if keywords is not None else KeywordList.from_settings(settings.keywords)
        self.editor = editor or EditorLauncher(settings.editor)
        self.renderer = renderer or ConsoleRenderer(settings.left_padding, settings.right_padding)
        self._keyboard = keyboard

        self.theme = Theme.from_settings(settings, colors=settings.colors)
        self.keymap = settings.key_bindings.keymap()
        self.help = HelpScreen(version, settings.key_bindings)

        self.engine = LayoutEngine(
            selected,
            today,
            left_padding=settings.left_padding,
            right_padding=settings.right_padding,
        )
        self.preview = PreviewViewport(
            left_padding=settings.left_padding,
            right_padding=settings.right_padding,
            left_margin=settings.preview_left_margin,
            padding=settings.preview_padding,
            min_width=settings.preview_min_width,
            max_width=settings.preview_max_width,
        )
        self._load_preview()

        # Day styles per displayed month, keyed by the month's first day
        self._decorations: Dict[date, Dict[date, Style]] = {}
        self._pending: Set[date] = set()
        self._stale: Set[date] = set()

        self._size: Tuple[int, int] = (0, 0)
        self._frame: Optional[Frame] = None
        self._help_visible = False
        self._suspended = False
        self._running = False
        self._queue: Optional["asyncio.Queue[Event]"] = None
        self._tasks: Set["asyncio.Task[Any]"] = set()

        logger.info("Interactive controller initialized")

    @property
    def keyboard(self) -> KeyboardHandler:
        if self._keyboard is None:
            self._keyboard = KeyboardHandler()
        return self._keyboard

    @property
    def is_running(self) -> bool:
        """Check if interactive controller is running."""
        return self._running

    @property
    def selected(self) -> date:
        return self.engine.selected

    @property
    def frame(self) -> Optional[Frame]:
        """The most recently composed frame."""
        return self._frame

    @property
    def help_visible(self) -> bool:
        return self._help_visible

    # Event producers

    def post(self, event: Event) -> None:
        """Queue an event for dispatch; ignored when not running."""
        if self._queue is None:
            logger.debug(f"Dropping {event!r}, controller is not running")
            return
        self._queue.put_nowait(event)

    def _on_key(self, key: str) -> None:
        action = self.keymap.get(key)
        if action is None:
            logger.debug(f"Unbound key: {key!r}")
            return
        self.post(action)

    def _on_mouse(self, event: Event) -> None:
        if self.settings.mouse:
            self.post(event)

    def _on_terminal_resize(self) -> None:
        try:
            size = os.get_terminal_size()
        except OSError:
            logger.debug("Terminal size unavailable, assuming 80x24")
            self.post(Resize(80, 24))
            return
        self.post(Resize(size.columns, size.lines))

    async def _clock_loop(self) -> None:
        """Post the current time every ``clock_interval`` seconds."""
        while self._running:
            await asyncio.sleep(self.settings.clock_interval)
            self.post(ClockTick(datetime.now()))

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_editor(self, day: date) -> None:
        """Hand the terminal to the editor, then report back with ``EditorClosed``."""
        self.keyboard.pause()
        self.renderer.exit()
        try:
            error = await self.editor.edit(self.notes.path(day))
        finally:
            self.renderer.enter(mouse=self.settings.mouse)
            self.keyboard.resume()
        self.post(EditorClosed(error))

    async def _load_month_decorations(self, month: date) -> None:
        styles = await asyncio.to_thread(
            load_decorations, month, self.notes, self.holidays, self.keywords, self.theme.noted
        )
        self.post(DecorationsLoaded(month, styles))

    # Dispatch

    def dispatch(self, event: Event) -> None:
        """Apply one event to the calendar and redraw.

        Args:
            event: Action or event dataclass from any producer
        """
        logger.debug(f"Dispatching {event!r}")

        if isinstance(event, Action):
            self._handle_action(event)
        elif isinstance(event, Resize):
            self._size = (event.width, event.height)
            self.engine.resize(event.width, event.height)
            self.preview.resize(event.width, event.height)
        elif isinstance(event, PointerClick):
            self._handle_click(event)
        elif isinstance(event, ClockTick):
            today = event.now.date()
            if today != self.engine.today:
                logger.info(f"Date changed to {today}")
                self.engine.set_today(today)
        elif isinstance(event, EditorClosed):
            self._handle_editor_closed(event)
        elif isinstance(event, DecorationsLoaded):
            self._handle_decorations(event)
        else:
            logger.warning(f"Ignoring unknown event {event!r}")

        self._sync_preview_focus()
        self._request_decorations()
        self._render()

    def _handle_action(self, action: Action) -> None:
        if action == Action.QUIT:
            logger.info("User requested exit")
            self.stop()
            return
        if action == Action.TOGGLE_HELP:
            self._help_visible = not self._help_visible
            return
        if self._help_visible:
            logger.debug(f"Ignoring {action.value} while help is shown")
            return

        if action == Action.EDIT_NOTE:
            self._start_editor()
        elif action == Action.YANK_DATE:
            copy_date(self.engine.selected)
        elif action == Action.TOGGLE_FOCUS:
            self.engine.toggle_focus()
        elif action == Action.TOGGLE_PREVIEW:
            self.engine.toggle_preview()
        else:
            self._navigate(action)

    def _navigate(self, action: Action) -> None:
        if action in _MONTH_FOCUS_ACTIONS and self.engine.preview_visible:
            self.engine.set_focus(FocusTarget.MONTHS_FOCUSED)

        previewing = self.engine.focus == FocusTarget.PREVIEW_FOCUSED
        if self.engine.propagate(action):
            self._load_preview()
        elif previewing and action in _PREVIEW_SCROLLS:
            step = _PREVIEW_SCROLLS[action]
            if step < 0:
                self.preview.line_up(-step)
            else:
                self.preview.line_down(step)

    def _handle_click(self, click: PointerClick) -> None:
        if self._help_visible:
            return
        origin_x, origin_y = self._frame.months_origin if self._frame else (0, 0)
        translated = PointerClick(click.x - origin_x, click.y - origin_y)
        if self.engine.propagate(translated):
            self._load_preview()

    def _handle_editor_closed(self, event: EditorClosed) -> None:
        self._suspended = False
        if event.error:
            logger.warning(f"Editor failed: {event.error}")
        self._invalidate(dates.first_day(self.engine.selected))
        self.engine.select(self.engine.selected)
        self._load_preview()

    def _handle_decorations(self, event: DecorationsLoaded) -> None:
        month = dates.first_day(event.month)
        self._pending.discard(month)
        if month in self._stale:
            self._stale.discard(month)
            return
        self._decorations[month] = dict(event.styles)

    def _start_editor(self) -> None:
        if not self._running:
            logger.debug("Editor requested while not running")
            return
        self._suspended = True
        self._spawn(self._run_editor(self.engine.selected))

    def _load_preview(self) -> None:
        day = self.engine.selected
        self.preview.set_content(self.holidays.prefix(day, self.notes.load(day)))

    def _sync_preview_focus(self) -> None:
        if self.engine.focus == FocusTarget.PREVIEW_FOCUSED:
            self.preview.focus()
        else:
            self.preview.unfocus()

    def _invalidate(self, month: date) -> None:
        self._decorations.pop(month, None)
        if month in self._pending:
            self._stale.add(month)

    def _request_decorations(self) -> None:
        """Drop decorations of months no longer shown and load missing ones."""
        shown = {panel.anchor for panel in self.engine.panels}
        for month in list(self._decorations):
            if month not in shown:
                del self._decorations[month]

        if not self._running:
            return
        for month in shown:
            if month in self._decorations or (month in self._pending and month not in self._stale):
                continue
            self._pending.add(month)
            self._stale.discard(month)
            self._spawn(self._load_month_decorations(month))

    def decorations(self) -> ChainMap:
        """Day styles of all displayed months."""
        return ChainMap(*self._decorations.values())

    def compose(self) -> Frame:
        """Compose the frame for the current state."""
        if self._help_visible:
            return self.renderer.compose_help(self.help.render())

        banner = ""
        holiday = self.holidays.match(self.engine.selected)
        if holiday is not None:
            banner = holiday.message
        return self.renderer.compose(
            self.engine, self.preview, self.theme, self.decorations(), banner
        )

    def _render(self) -> None:
        self._frame = self.compose()
        if self._running and not self._suspended:
            self.renderer.display(self._frame, self._size[1] or None)

    # Lifecycle

    async def start(self) -> None:
        """Run the calendar until the user quits."""
        if self._running:
            logger.warning("Interactive controller already running")
            return

        self._running = True
        self._queue = asyncio.Queue()
        loop = asyncio.get_running_loop()

        self.keyboard.register_key_handler(self._on_key)
        self.keyboard.register_mouse_handler(self._on_mouse)
        self.renderer.enter(mouse=self.settings.mouse)
        loop.add_signal_handler(signal.SIGWINCH, self._on_terminal_resize)
        self._on_terminal_resize()

        logger.info("Starting interactive calendar")
        keyboard_task = asyncio.create_task(self.keyboard.start_listening())
        clock_task = asyncio.create_task(self._clock_loop())

        try:
            await self._event_loop()
        finally:
            self._running = False
            loop.remove_signal_handler(signal.SIGWINCH)
            self.keyboard.stop_listening()
            for task in [keyboard_task, clock_task, *self._tasks]:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            self.renderer.exit()
            self._queue = None
            logger.info("Interactive mode stopped")

    async def _event_loop(self) -> None:
        assert self._queue is not None
        while self._running:
            event = await self._queue.get()
            try:
                self.dispatch(event)
            except Exception:
                logger.exception(f"Failed to dispatch {event!r}")

    def stop(self) -> None:
        """Stop interactive mode after the current event."""
        self._running = False
        if self._keyboard is not None:
            self._keyboard.stop_listening()
        logger.debug("Interactive controller stop requested")
