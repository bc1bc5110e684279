"""Keyboard-driven menus and input forms drawn on a text terminal."""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TextIO

BACK = -1
"""Returned by :meth:`Menu.handle` when the user leaves the menu."""

SELECTED_COLOR = 172
NORMAL_COLOR = 15
DEFAULT_COLOR = 7


class Action(Enum):
    """A user key press, reduced to what menus and forms care about."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESC = auto()
    TAB = auto()
    BACKSPACE = auto()
    CHAR = auto()
    OTHER = auto()


@dataclass
class Menu:
    """A vertical list of options with one of them selected."""

    options: Sequence[str]
    selected: int = 0

    def __post_init__(self) -> None:
        if not self.options:
            raise ValueError("a menu needs at least one option")
        if not 0 <= self.selected < len(self.options):
            raise ValueError(f"selected index {self.selected} out of range")

    def move_up(self) -> None:
        """Select the previous option, wrapping to the last."""
        self.selected = (self.selected - 1) % len(self.options)

    def move_down(self) -> None:
        """Select the next option, wrapping to the first."""
        self.selected = (self.selected + 1) % len(self.options)

    def handle(self, action: Action) -> int | None:
        """Apply an action.

        Returns the chosen index on ENTER or RIGHT, ``BACK`` on LEFT or ESC,
        and None while the user is still choosing.
        """
        if action is Action.UP:
            self.move_up()
        elif action is Action.DOWN:
            self.move_down()
        elif action in (Action.ENTER, Action.RIGHT):
            return self.selected
        elif action in (Action.LEFT, Action.ESC):
            return BACK
        return None


def _is_printable(char: str) -> bool:
    return len(char) == 1 and " " <= char <= "~"


@dataclass
class TextForm:
    """A column of labelled text fields edited one at a time."""

    labels: Sequence[str]
    width: int = 60
    margin: int = 4
    selected: int = 0
    fields: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.labels:
            raise ValueError("a form needs at least one field")
        if not self.fields:
            self.fields = [""] * len(self.labels)
        elif len(self.fields) != len(self.labels):
            raise ValueError("fields and labels differ in number")

    def limit(self, index: int) -> int:
        """The most characters the field at ``index`` may hold."""
        return self.width - self.margin - len(self.labels[index])

    def handle(self, action: Action, char: str = "") -> bool | None:
        """Apply an action.

        Returns True when the form is submitted, False when it is cancelled,
        and None while editing goes on.
        """
        count = len(self.labels)
        if action is Action.UP:
            self.selected = (self.selected - 1) % count
        elif action in (Action.DOWN, Action.TAB):
            self.selected = (self.selected + 1) % count
        elif action is Action.BACKSPACE:
            self.fields[self.selected] = self.fields[self.selected][:-1]
        elif action is Action.ENTER:
            return True
        elif action is Action.ESC:
            return False
        elif action is Action.CHAR and _is_printable(char):
            current = self.fields[self.selected]
            if len(current) < self.limit(self.selected):
                self.fields[self.selected] = current + char
        return None

    def values(self) -> list[str]:
        """A copy of the entered texts, in field order."""
        return list(self.fields)


_NAMED_KEYS = {
    "KEY_UP": Action.UP,
    "KEY_DOWN": Action.DOWN,
    "KEY_LEFT": Action.LEFT,
    "KEY_RIGHT": Action.RIGHT,
    "KEY_ENTER": Action.ENTER,
    "KEY_ESCAPE": Action.ESC,
    "KEY_TAB": Action.TAB,
    "KEY_BACKSPACE": Action.BACKSPACE,
    "KEY_DELETE": Action.BACKSPACE,
}

_RAW_KEYS = {
    "\r": Action.ENTER,
    "\n": Action.ENTER,
    "\x1b": Action.ESC,
    "\t": Action.TAB,
    "\x08": Action.BACKSPACE,
    "\x7f": Action.BACKSPACE,
}


def _ansi_index(windows_color: int) -> int:
    """Convert a 4-bit console colour (blue=1, red=4) to an ANSI index (red=1, blue=4)."""
    low = windows_color & 0b111
    swapped = ((low & 1) << 2) | (low & 2) | ((low & 4) >> 2)
    return swapped | (windows_color & 8)


class Screen:
    """A terminal surface addressed by column and row."""

    def __init__(self, terminal=None, stream: TextIO | None = None) -> None:
        if terminal is None:
            import blessed

            terminal = blessed.Terminal()
        self.terminal = terminal
        self.stream = stream or getattr(terminal, "stream", None) or sys.stdout
        self._modes: contextlib.ExitStack | None = None

    def __enter__(self) -> Screen:
        stack = contextlib.ExitStack()
        stack.enter_context(self.terminal.fullscreen())
        stack.enter_context(self.terminal.cbreak())
        stack.enter_context(self.terminal.hidden_cursor())
        self._modes = stack
        return self

    def __exit__(self, *exc_info) -> None:
        if self._modes is not None:
            self._modes.close()
            self._modes = None

    def _emit(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def _style(self, color: int | None) -> str:
        if color is None:
            return ""
        style = self.terminal.color(_ansi_index(color & 0xF))
        background = (color >> 4) & 0xF
        if background:
            style += self.terminal.on_color(_ansi_index(background))
        return style

    def clear(self) -> None:
        """Blank the whole screen and home the cursor."""
        self._emit(self.terminal.home + self.terminal.clear)

    def write_at(self, x: int, y: int, text: str, color: int | None = None) -> None:
        """Write text at a column and row in an optional console colour."""
        styled = self._style(color)
        reset = self.terminal.normal if styled else ""
        self._emit(self.terminal.move_xy(x, y) + styled + text + reset)

    def draw_box(
        self, x: int, y: int, width: int, height: int, color: int = NORMAL_COLOR
    ) -> None:
        """Draw a double-line rectangle whose top-left corner is at (x, y)."""
        if width < 2 or height < 2:
            raise ValueError("a box is at least 2 by 2")
        inner = "\u2550" * (width - 2)
        self.write_at(x, y, "\u2554" + inner + "\u2557", color)
        for row in range(y + 1, y + height - 1):
            self.write_at(x, row, "\u2551", color)
            self.write_at(x + width - 1, row, "\u2551", color)
        self.write_at(x, y + height - 1, "\u255a" + inner + "\u255d", color)

    def draw_menu(self, menu: Menu, x: int, y: int) -> None:
        """Draw each option on its own row, marking the selected one."""
        for index, option in enumerate(menu.options):
            if index == menu.selected:
                self.write_at(x, y + index, "-> " + option, SELECTED_COLOR)
            else:
                self.write_at(x, y + index, "   " + option, NORMAL_COLOR)

    def read_action(self) -> tuple[Action, str]:
        """Wait for a key and return its action with the typed character, if any."""
        key = self.terminal.inkey()
        name = getattr(key, "name", None)
        if name in _NAMED_KEYS:
            return _NAMED_KEYS[name], ""
        text = str(key)
        if text in _RAW_KEYS:
            return _RAW_KEYS[text], ""
        if _is_printable(text):
            return Action.CHAR, text
        return Action.OTHER, ""