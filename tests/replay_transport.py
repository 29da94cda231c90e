from __future__ import annotations

import json
import time
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Deque, Dict, Iterable, List, Optional, Tuple

from elmnet.elm import ELM327
from elmnet.obd2 import OBDScanner

from tests.fakes import make_config


def _normalize_command(command: str) -> str:
    return "".join(command.strip().split()).upper()


class ReplayMismatchError(AssertionError):
    pass


class ReplayTransport:
    """
    Plays back a recorded session step by step.

    Each step: {"command": "01 0C", "lines": ["41 0C 1F 88"]}
    or an error step: {"command": "01 0D", "error": "timeout" | "disconnect" | "eof"}
    Replies are framed the way an ELM327 frames them: CR line ends, then the prompt.
    """

    def __init__(self, steps: Iterable[Dict[str, Any]]) -> None:
        self._steps: Deque[Dict[str, Any]] = deque(steps)
        self._buffer = bytearray()
        self.is_open = True
        self._pending_error: Optional[str] = None
        self._eof = False

    @property
    def remaining_steps(self) -> int:
        return len(self._steps)

    def reset_input_buffer(self) -> None:
        self._buffer.clear()

    def flush(self) -> None:
        return None

    def close(self) -> None:
        self.is_open = False

    def write(self, data: bytes) -> int:
        command = data.decode("ascii", errors="ignore").replace("\r", "").replace("\n", "")
        if not command:
            return len(data)
        if not self._steps:
            raise ReplayMismatchError(f"No replay steps left for command {command!r}")

        step = self._steps.popleft()
        expected = _normalize_command(str(step.get("command", "")))
        actual = _normalize_command(command)
        if expected != actual:
            raise ReplayMismatchError(f"Replay mismatch: expected {step.get('command')!r}, got {command!r}")

        error = str(step.get("error", "")).lower().strip()
        self._pending_error = error or None
        if error:
            return len(data)

        lines = step.get("lines") or []
        payload = "".join(f"{line}\r" for line in lines) + "\r>"
        self._buffer.extend(payload.encode("ascii", errors="ignore"))
        return len(data)

    def read_chunk(self, timeout: float) -> Optional[bytes]:
        if self._pending_error in {"disconnect", "disconnected"}:
            self._pending_error = None
            self.is_open = False
            raise OSError("Device disconnected (replay)")
        if self._pending_error == "eof":
            self._pending_error = None
            self._eof = True
        if self._eof:
            return b""
        if self._pending_error == "timeout" or not self._buffer:
            time.sleep(max(timeout, 0.0))
            return None
        chunk = bytes(self._buffer)
        self._buffer.clear()
        return chunk


@dataclass
class ReplayFixture:
    steps: List[Dict[str, Any]]
    meta: Dict[str, Any] = field(default_factory=dict)
    expected: Dict[str, Any] = field(default_factory=dict)


def load_fixture(path: Path) -> ReplayFixture:
    payload = json.loads(path.read_text(encoding="utf-8"))
    steps = payload.get("steps") or []
    meta = payload.get("meta") or {}
    expected = payload.get("expected") or {}
    return ReplayFixture(steps=steps, meta=meta, expected=expected)


def build_replay_scanner(fixture: ReplayFixture, **config_overrides) -> Tuple[OBDScanner, ELM327]:
    transport = ReplayTransport(fixture.steps)
    config = make_config(**config_overrides)
    elm = ELM327(config, transport_factory=lambda _cfg: transport)
    scanner = OBDScanner(config, elm=elm)
    return scanner, elm
