# elmnet/pids/errors.py
from __future__ import annotations


class DecodeError(ValueError):
    """Base exception for PID argument and response decoding problems."""

    def __init__(self, message: str, *, pid: str = ""):
        super().__init__(message)
        self.pid = pid


class PidFormatError(DecodeError):
    """PID argument is not a two-character code."""


class PidNotFoundError(DecodeError):
    """No line in the response answers the PID."""


class DataFormatError(DecodeError):
    """Known PID, but the data bytes are missing or not hex."""
