from __future__ import annotations

import curses
import logging
import sys
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)

ANSI_COLORS = {
    "red": 1,
    "green": 2,
}


class TerminalCapabilities(Protocol):
    def bold(self, text: str) -> str: ...

    def color(self, text: str, name: str) -> str: ...


class PlainTerminal:
    def bold(self, text: str) -> str:
        return text

    def color(self, text: str, name: str) -> str:
        return text


class CursesTerminal:
    """Escape sequences looked up in terminfo, the same database ``tput`` reads."""

    def __init__(self, bold: str, reset: str, setaf: bytes | None) -> None:
        self._bold = bold
        self._reset = reset
        self._setaf = setaf

    @classmethod
    def probe(cls, stream: TextIO) -> CursesTerminal | None:
        try:
            curses.setupterm(fd=stream.fileno())
        except (curses.error, OSError, ValueError) as error:
            logger.debug("terminfo unavailable: %s", error)
            return None
        reset = curses.tigetstr("sgr0")
        if not reset:
            return None
        bold = curses.tigetstr("bold") or b""
        return cls(bold=_decode(bold), reset=_decode(reset), setaf=curses.tigetstr("setaf"))

    def bold(self, text: str) -> str:
        if not self._bold:
            return text
        return f"{self._bold}{text}{self._reset}"

    def color(self, text: str, name: str) -> str:
        number = ANSI_COLORS.get(name)
        if number is None or not self._setaf:
            return text
        return f"{_decode(curses.tparm(self._setaf, number))}{text}{self._reset}"


def detect_terminal(enabled: bool, stream: TextIO | None = None) -> TerminalCapabilities:
    if not enabled:
        return PlainTerminal()
    stream = stream or sys.stdout
    if not stream.isatty():
        return PlainTerminal()
    return CursesTerminal.probe(stream) or PlainTerminal()


def _decode(value: bytes) -> str:
    return value.decode("ascii", errors="ignore")
