# elmnet/elm/response.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import CommunicationError

# Substring match on purpose: ELM replies mix these into longer lines
TERMINATORS = (">", "OK", "ERROR", "SEARCHING...", "STOPPED")


def is_terminator(line: str) -> bool:
    return any(marker in line for marker in TERMINATORS)


class ResponseStatus(Enum):
    TERMINATOR = "terminator"
    EOF = "eof"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass
class RawResponse:
    """Everything read for one command, plus how the read ended."""

    command: str
    lines: List[str] = field(default_factory=list)
    status: ResponseStatus = ResponseStatus.TERMINATOR
    error: Optional[CommunicationError] = None
    duration_s: float = 0.0

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_status(self) -> None:
        if self.error is not None:
            raise self.error
