# elmnet/obd2/models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PidResult:
    """One polled PID: a decoded value or the reason there is none."""

    pid: str
    description: str
    value: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def display(self) -> str:
        if self.ok:
            return self.value or ""
        return f"Error - {self.error}"
