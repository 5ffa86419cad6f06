"""Where every user-facing line goes.

Services and workers only see :class:`ConsoleProtocol`. Production wires in
:class:`RichConsole`; tests use :class:`MockConsole` and assert on the
recorded lines. Up to ``max_parallel_jobs`` worker threads print at the same
time, so both implementations accept calls from any thread (Rich serializes
writes itself, MockConsole takes a lock).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()  # per-repository detail, git output
    HEADER = auto()  # page and summary separators

    def __str__(self) -> str:
        return self.name.lower()


# Leading word for the shorthand methods; the same text in both consoles.
_TAGS = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.INFO: "info:",
}

_RICH_STYLES = {
    Style.DEFAULT: "",
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.HEADER: "blue bold",
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None:
        """Print a separator line carrying ``message``."""
        ...

    def newline(self) -> None: ...


class RichConsole:
    """Console backed by ``rich.console.Console``.

    Messages are printed literally: repository names and git stderr can
    contain square brackets, which Rich would otherwise read as markup.
    """

    def __init__(self, *, stderr: bool = False) -> None:
        from rich.console import Console
        from rich.markup import escape

        self._console = Console(stderr=stderr, highlight=False)
        self._escape = escape

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=_RICH_STYLES[style] or None, markup=False)

    def _tagged(self, style: Style, message: str) -> None:
        self._console.print(f"[{_RICH_STYLES[style]}]{_TAGS[style]}[/] {self._escape(message)}")

    def success(self, message: str) -> None:
        self._tagged(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._tagged(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._tagged(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._tagged(Style.INFO, message)

    def header(self, message: str) -> None:
        self._console.rule(self._escape(message), style=_RICH_STYLES[Style.HEADER], align="left")

    def newline(self) -> None:
        self._console.print()


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Records output instead of printing it."""

    outputs: list[OutputRecord] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        with self._lock:
            self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.print(f"{_TAGS[Style.SUCCESS]} {message}", Style.SUCCESS)

    def error(self, message: str) -> None:
        self.print(f"{_TAGS[Style.ERROR]} {message}", Style.ERROR)

    def warning(self, message: str) -> None:
        self.print(f"{_TAGS[Style.WARNING]} {message}", Style.WARNING)

    def info(self, message: str) -> None:
        self.print(f"{_TAGS[Style.INFO]} {message}", Style.INFO)

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self.print("")

    # Assertion helpers

    def clear(self) -> None:
        with self._lock:
            self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [record.message for record in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return self.count(Style.ERROR) > 0

    def has_warning(self) -> bool:
        return self.count(Style.WARNING) > 0

    def find(self, substring: str) -> list[OutputRecord]:
        """Records whose message contains ``substring``."""
        return [record for record in self.outputs if substring in record.message]

    def count(self, style: Style) -> int:
        return sum(1 for record in self.outputs if record.style is style)
