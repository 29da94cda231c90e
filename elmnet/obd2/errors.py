# elmnet/obd2/errors.py
from __future__ import annotations


class ScannerError(Exception):
    pass


class NotConnectedError(ScannerError):
    pass


class InitializationError(ScannerError):
    def __init__(self, message: str, *, command: str = "", cause: Exception | None = None):
        super().__init__(message)
        self.command = command
        self.cause = cause
