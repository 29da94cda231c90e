# elmnet/obd2/base.py
from __future__ import annotations

from typing import Callable, List, Optional

from ..config import SessionConfig
from ..elm import ELM327, CommunicationError
from ..elm.init import initialize_elm
from ..elm.response import RawResponse
from .errors import InitializationError, NotConnectedError


class BaseScanner:
    """
    Base for OBDScanner:
    - connection lifecycle
    - AT initialization script (abort on first failure, no retry)
    """

    def __init__(
        self,
        config: SessionConfig,
        raw_logger: Optional[Callable[[str, str, List[str]], None]] = None,
        elm: Optional[ELM327] = None,
    ):
        self.config = config
        self.elm = elm or ELM327(config, raw_logger=raw_logger)
        self.init_responses: List[RawResponse] = []
        self._connected = False

    # -----------------------------
    # Connection
    # -----------------------------
    def connect(self) -> bool:
        """Dial and initialize. ConnectError and InitializationError are fatal."""
        self.elm.connect()
        try:
            self.initialize()
        except InitializationError:
            self.disconnect()
            raise
        return True

    def initialize(self) -> List[RawResponse]:
        self.init_responses = []
        try:
            self.init_responses = initialize_elm(self.elm)
        except CommunicationError as e:
            self._connected = False
            raise InitializationError(
                f"AT command failed ({e.command}): {e}",
                command=e.command or "",
                cause=e,
            ) from e
        self._connected = True
        return self.init_responses

    def disconnect(self) -> None:
        self._connected = False
        self.elm.close()

    @property
    def is_connected(self) -> bool:
        if not self._connected:
            return False
        if not self.elm.is_connected:
            self._connected = False
            return False
        return True

    def _check_connected(self) -> None:
        if not self.is_connected:
            raise NotConnectedError("Not connected to vehicle")

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
