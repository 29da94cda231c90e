# elmnet/elm/errors.py
from __future__ import annotations

from typing import Optional


class CommunicationError(Exception):
    """
    Base exception for the ELM link.
    Carries the command and whatever response text was read before the failure.
    """

    def __init__(self, message: str, *, command: Optional[str] = None, partial: str = ""):
        super().__init__(message)
        self.command = command
        self.partial = partial

    def __str__(self) -> str:
        base = super().__str__()
        extra = []
        if self.command:
            extra.append(f"cmd={self.command}")
        if self.partial:
            preview = self.partial.splitlines()[:3]
            extra.append(f"lines={preview}")
        if extra:
            base += " [" + " | ".join(extra) + "]"
        return base


class ConnectError(CommunicationError):
    pass


class WriteError(CommunicationError):
    pass


class ReadError(CommunicationError):
    pass


class ResponseTimeoutError(CommunicationError, TimeoutError):
    pass


class DeviceDisconnectedError(CommunicationError):
    pass
