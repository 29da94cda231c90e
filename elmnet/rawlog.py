from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .utils import timestamp


class RawLogger:
    """Appends every TX/RX exchange to a text file."""

    def __init__(self, path: Optional[str] = None):
        default_path = Path("logs") / "elm_raw.log"
        self.path = Path(path) if path else default_path
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def __call__(self, direction: str, command: str, lines: List[str]):
        ts = timestamp()
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"[{ts}] {direction} {command}\n")
            for ln in lines:
                f.write(f"  {ln}\n")


class ConsoleRawLogger:
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def __call__(self, direction: str, command: str, lines: List[str]):
        out = self.stream or sys.stderr
        joined = " | ".join(lines)
        print(f"[{timestamp()}] {direction} {command}" + (f" -> {joined}" if joined else ""), file=out)


def chain_loggers(*loggers):
    active = [lg for lg in loggers if lg]
    if not active:
        return None
    if len(active) == 1:
        return active[0]

    def _log(direction: str, command: str, lines: List[str]) -> None:
        for lg in active:
            lg(direction, command, lines)

    return _log
