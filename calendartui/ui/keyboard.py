"""Keyboard and mouse input handling for the interactive calendar."""

import asyncio
import codecs
import inspect
import logging
import os
import re
import sys
import termios
from collections.abc import Awaitable
from typing import Any, Callable, List, Optional, Union

from .events import Action, Event, PointerClick

logger = logging.getLogger(__name__)

ESCAPE = "\x1b"
MAX_SEQUENCE_LENGTH = 32

# Seconds to wait for the rest of an escape sequence before treating ESC as a key
ESCAPE_TIMEOUT = 0.1
POLL_INTERVAL = 0.1

# SGR extended mouse report: ESC [ < button ; column ; row (M press | m release)
_SGR_MOUSE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")

MOUSE_LEFT = 0
MOUSE_WHEEL_UP = 64
MOUSE_WHEEL_DOWN = 65
_MOUSE_MODIFIERS = 4 | 8 | 16
_MOUSE_MOTION = 32

_ESCAPE_KEYS = {
    "[A": "up",
    "[B": "down",
    "[C": "right",
    "[D": "left",
    "OA": "up",
    "OB": "down",
    "OC": "right",
    "OD": "left",
    "[H": "home",
    "[F": "end",
    "[1~": "home",
    "[4~": "end",
    "[5~": "pgup",
    "[6~": "pgdown",
    "[Z": "shift+tab",
}

_SPECIAL_CHARS = {
    "\t": "tab",
    "\r": "enter",
    "\n": "enter",
    " ": "space",
    "\x7f": "backspace",
    ESCAPE: "esc",
}

KeyCallback = Union[Callable[[str], None], Callable[[str], Awaitable[None]]]
MouseCallback = Union[Callable[[Event], None], Callable[[Event], Awaitable[None]]]


def decode_key(key_data: str) -> Optional[str]:
    """Translate raw terminal input into a key name.

    Printable characters keep their case (``"H"`` differs from ``"h"``);
    control characters become ``"ctrl+<letter>"``.

    Args:
        key_data: One character or one complete escape sequence

    Returns:
        The key name, or None for sequences that are not keys
    """
    if not key_data:
        return None
    if key_data in _SPECIAL_CHARS:
        return _SPECIAL_CHARS[key_data]
    if key_data.startswith(ESCAPE):
        return _ESCAPE_KEYS.get(key_data[1:])
    if len(key_data) == 1:
        code = ord(key_data)
        if 1 <= code <= 26:
            return f"ctrl+{chr(code + 96)}"
        if code < 32:
            return None
        return key_data
    return None


def decode_mouse(key_data: str) -> Optional[Event]:
    """Translate an SGR mouse report into a calendar event.

    Left button presses become ``PointerClick`` with zero-based cell
    coordinates; the wheel scrolls. Releases, drags and other buttons are
    ignored.
    """
    match = _SGR_MOUSE.match(key_data)
    if not match:
        return None

    button, column, row, kind = match.groups()
    code = int(button) & ~_MOUSE_MODIFIERS
    if kind != "M" or code & _MOUSE_MOTION:
        return None

    if code == MOUSE_LEFT:
        return PointerClick(x=int(column) - 1, y=int(row) - 1)
    if code == MOUSE_WHEEL_UP:
        return Action.SCROLL_UP
    if code == MOUSE_WHEEL_DOWN:
        return Action.SCROLL_DOWN
    return None


def is_mouse_report(key_data: str) -> bool:
    return key_data.startswith(f"{ESCAPE}[<")


class KeyboardHandler:
    """Reads raw terminal input and hands decoded keys and clicks to callbacks."""

    def __init__(self, fd: Optional[int] = None) -> None:
        """Initialize keyboard handler.

        Args:
            fd: File descriptor to read from, stdin by default
        """
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._running = False
        self._paused = False
        self._old_settings: Optional[List[Any]] = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._key_callback: Optional[KeyCallback] = None
        self._mouse_callback: Optional[MouseCallback] = None

        logger.debug("Keyboard handler initialized")

    def register_key_handler(self, callback: KeyCallback) -> None:
        """Register the callback receiving decoded key names."""
        self._key_callback = callback
        logger.debug("Registered key handler")

    def register_mouse_handler(self, callback: MouseCallback) -> None:
        """Register the callback receiving clicks and wheel scrolls."""
        self._mouse_callback = callback
        logger.debug("Registered mouse handler")

    def _setup_terminal(self) -> None:
        """Put the terminal into raw input mode."""
        try:
            self._old_settings = termios.tcgetattr(self._fd)

            new_settings = termios.tcgetattr(self._fd)
            # No line buffering, no echo and no signals so ctrl+c arrives as a key
            new_settings[3] &= ~(termios.ICANON | termios.ECHO | termios.ISIG)
            new_settings[0] &= ~(termios.IXON | termios.ICRNL)
            new_settings[6][termios.VMIN] = 0
            new_settings[6][termios.VTIME] = 0

            termios.tcsetattr(self._fd, termios.TCSAFLUSH, new_settings)
            logger.debug("Terminal set to non-blocking raw input mode")
        except termios.error as e:
            logger.warning(f"Could not set terminal to raw mode: {e}")
            self._old_settings = None

    def _restore_terminal(self) -> None:
        """Restore the terminal settings saved by ``_setup_terminal``."""
        if not self._old_settings:
            return
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)
            logger.debug("Terminal settings restored")
        except termios.error as e:
            logger.warning(f"Could not restore terminal settings: {e}")
        finally:
            self._old_settings = None

    async def _wait_readable(self, timeout: float) -> bool:
        """Wait for pending input on the event loop instead of blocking it.

        Args:
            timeout: Seconds to wait

        Returns:
            True if input is ready to be read
        """
        loop = asyncio.get_running_loop()
        ready = loop.create_future()
        loop.add_reader(self._fd, lambda: ready.done() or ready.set_result(True))
        try:
            await asyncio.wait_for(ready, timeout)
            return True
        except asyncio.TimeoutError:
            return False
        finally:
            loop.remove_reader(self._fd)

    def _getch(self) -> str:
        """Read one character without waiting; empty when nothing is pending."""
        while True:
            data = os.read(self._fd, 1)
            if not data:
                return ""
            char = self._decoder.decode(data)
            if char:
                return char

    def pause(self) -> None:
        """Stop reading and hand the terminal back, e.g. to an editor."""
        self._paused = True
        self._restore_terminal()
        logger.debug("Keyboard handler paused")

    def resume(self) -> None:
        """Take the terminal back after ``pause``."""
        if not self._running:
            return
        self._setup_terminal()
        self._paused = False
        logger.debug("Keyboard handler resumed")

    async def start_listening(self) -> None:
        """Listen for input until ``stop_listening`` is called."""
        if self._running:
            logger.warning("Keyboard handler already running")
            return

        self._running = True
        self._setup_terminal()
        logger.info("Started keyboard input listening")

        try:
            await self._input_loop()
        finally:
            self._restore_terminal()
            self._running = False
            logger.info("Stopped keyboard input listening")

    def stop_listening(self) -> None:
        """Stop listening for keyboard input."""
        self._running = False
        logger.debug("Keyboard handler stop requested")

    async def _input_loop(self) -> None:
        """Main input loop for capturing keystrokes."""
        while self._running:
            try:
                if self._paused:
                    await asyncio.sleep(0.02)
                    continue
                if not await self._wait_readable(POLL_INTERVAL):
                    continue

                key_data = await self._read_key_sequence()
                if key_data:
                    await self._handle_key_input(key_data)
            except OSError:
                logger.exception("Error in keyboard input loop")
                await asyncio.sleep(0.1)

    async def _read_key_sequence(self) -> str:
        """Read a complete key sequence, handling escape sequences."""
        key_data = self._getch()
        if key_data != ESCAPE:
            return key_data

        sequence = key_data
        while len(sequence) < MAX_SEQUENCE_LENGTH:
            next_char = await self._next_char()
            if not next_char:
                # Nothing followed in time: a lone escape key
                break
            sequence += next_char

            if len(sequence) == 2 and next_char not in "[O":
                break
            if len(sequence) > 2 and (next_char.isalpha() or next_char == "~"):
                # "<" reports only end on M or m
                if not is_mouse_report(sequence) or next_char in "Mm":
                    break

        logger.debug(f"Read escape sequence: {sequence!r}")
        return sequence

    async def _next_char(self) -> str:
        """Read the next character of an escape sequence, or "" after ESCAPE_TIMEOUT."""
        if not await self._wait_readable(ESCAPE_TIMEOUT):
            return ""
        return self._getch()

    async def _handle_key_input(self, key_data: str) -> None:
        """Decode raw input and pass it to the registered callbacks."""
        if is_mouse_report(key_data):
            event = decode_mouse(key_data)
            if event is not None and self._mouse_callback is not None:
                await self._call(self._mouse_callback, event)
            return

        key = decode_key(key_data)
        logger.debug(f"Received key_data={key_data!r}, parsed as={key}")
        if key is None:
            logger.debug(f"Unknown key sequence: {key_data!r}")
            return
        if self._key_callback is not None:
            await self._call(self._key_callback, key)

    @staticmethod
    async def _call(callback: Callable[[Any], Any], value: Any) -> None:
        if inspect.iscoroutinefunction(callback):
            await callback(value)
        else:
            callback(value)

    @property
    def is_running(self) -> bool:
        """Check if keyboard handler is currently running."""
        return self._running

    @property
    def is_paused(self) -> bool:
        return self._paused
