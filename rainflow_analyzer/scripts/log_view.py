from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Literal, Optional, TextIO


Level = Literal["info", "warning", "error"]

_PREFIX = {"info": "", "warning": "WARNING: ", "error": "ERROR: "}


@dataclass
class _Entry:
    level: Level
    message: str
    count: int = 1


class TextLog:
    """
    Console log with severity levels.

    Features:
      - severity prefixes: "WARNING: " and "ERROR: "
      - coalescing of consecutive identical messages (shows xN)
      - bounded history (drops oldest entries beyond max_entries)
      - optional echo of every new entry to a stream
    """

    def __init__(self, *, stream: Optional[TextIO] = None, max_entries: int = 2000) -> None:
        self._entries: List[_Entry] = []
        self._stream = stream
        self._max_entries = int(max_entries)

    def info(self, message: str) -> None:
        self._add("info", message)

    def warning(self, message: str) -> None:
        self._add("warning", message)

    def error(self, message: str) -> None:
        self._add("error", message)

    def write(self, message: str) -> None:
        """Route each line of ``message`` through the severity classifier.

        Prefixes recognized by the classifier are stripped so they are not doubled
        when rendering.
        """
        txt = "" if message is None else str(message)
        for line in txt.splitlines() or [""]:
            level = self._classify(line)
            if level != "info":
                line = re.sub(r"^\s*(ERROR|Error|WARNING|Warning):\s*", "", line)
            self._add(level, line)

    def count(self, level: Level) -> int:
        return sum(e.count for e in self._entries if e.level == level)

    def render(self) -> str:
        return "\n".join(self._format(e) for e in self._entries)

    # -------------------------
    # Internals
    # -------------------------
    def _classify(self, line: str) -> Level:
        s = (line or "").lstrip()
        if s.startswith(("ERROR:", "Error:", "Exception:", "Traceback")):
            return "error"
        if s.startswith(("WARNING:", "Warning:", "WARN")):
            return "warning"
        return "info"

    def _format(self, e: _Entry) -> str:
        suffix = f" (x{e.count})" if e.count > 1 else ""
        return f"{_PREFIX[e.level]}{e.message}{suffix}"

    def _add(self, level: Level, message: str) -> None:
        msg = "" if message is None else str(message)

        # Coalesce consecutive duplicates
        if self._entries and self._entries[-1].level == level and self._entries[-1].message == msg:
            self._entries[-1].count += 1
            return

        entry = _Entry(level=level, message=msg, count=1)
        self._entries.append(entry)
        if len(self._entries) > self._max_entries:
            self._entries = self._entries[-self._max_entries :]
        if self._stream is not None:
            print(self._format(entry), file=self._stream)
