# elmnet/elm/elm327.py
from __future__ import annotations

import threading
import time
from typing import Callable, List, Optional

from ..config import SessionConfig
from .errors import (
    DeviceDisconnectedError,
    ReadError,
    ResponseTimeoutError,
    WriteError,
)
from .framer import LineFramer, ReadOutcome
from .response import RawResponse, ResponseStatus, is_terminator
from .transport import open_transport

RawLoggerFn = Callable[[str, str, List[str]], None]


class ELM327:
    def __init__(
        self,
        config: SessionConfig,
        raw_logger: Optional[RawLoggerFn] = None,
        transport_factory: Callable[[SessionConfig], object] = open_transport,
    ):
        self.config = config
        self.timeout = config.timeout
        self.transport = None
        self.framer: Optional[LineFramer] = None
        self.elm_version: Optional[str] = None
        self._transport_factory = transport_factory
        self._is_connected = False
        self._lock = threading.Lock()

        # Optional logger: fn(direction, command, lines)
        self.raw_logger = raw_logger
        self.last_command: Optional[str] = None
        self.last_lines: List[str] = []
        self.last_error: Optional[str] = None
        self.last_duration_s: Optional[float] = None
        self.last_raw_text: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        if not self._is_connected or self.transport is None:
            return False
        return bool(self.transport.is_open)

    def connect(self) -> bool:
        """Open the transport. Raises ConnectError; never retries."""
        self.close()
        self.transport = self._transport_factory(self.config)
        self.framer = LineFramer(self.transport)
        self._is_connected = True
        return True

    def attach(self, transport) -> None:
        """Use an already-open transport (tests, replay, custom links)."""
        self.close()
        self.transport = transport
        self.framer = LineFramer(transport)
        self._is_connected = True

    def _check_connection(self, command: str) -> None:
        if not self.is_connected:
            self._is_connected = False
            raise DeviceDisconnectedError("Not connected to ELM327", command=command)

    def exchange(self, command: str, timeout: Optional[float] = None) -> RawResponse:
        """
        Write one command and collect its reply.

        Ends on a terminator line, end of stream, a read error or the timeout.
        Timeouts and read errors are reported on the returned response together
        with the lines read so far. Write failures raise WriteError.
        """
        if timeout is None:
            timeout = self.timeout

        with self._lock:
            self._check_connection(command)
            # close() from another thread must not pull these out from under the read
            transport, framer = self.transport, self.framer
            start = time.monotonic()
            self.last_command = command
            self.last_error = None
            self.last_duration_s = None
            self.last_raw_text = None

            # Stale bytes (e.g. the prompt after an OK) belong to the previous command
            framer.reset()
            try:
                transport.reset_input_buffer()
            except OSError:
                pass

            if self.raw_logger:
                self.raw_logger("TX", command, [])

            try:
                transport.write(f"{command}\r\n".encode("ascii", errors="ignore"))
                transport.flush()
            except OSError as e:
                self._is_connected = False
                self.last_error = str(e)
                self.last_duration_s = time.monotonic() - start
                raise WriteError(f"Write failed: {e}", command=command)

            response = self._collect(framer, command, timeout, start + timeout)
            response.duration_s = time.monotonic() - start

            self.last_lines = list(response.lines)
            self.last_raw_text = response.text
            self.last_duration_s = response.duration_s
            if response.error is not None:
                self.last_error = str(response.error)

            if self.raw_logger:
                self.raw_logger("RX", command, list(response.lines))

            return response

    def _collect(self, framer: LineFramer, command: str, timeout: float, deadline: float) -> RawResponse:
        response = RawResponse(command=command)
        while True:
            remaining = deadline - time.monotonic()
            result = framer.read_line(max(remaining, 0.0))

            if result.outcome is ReadOutcome.LINE:
                line = result.line.strip()
                if not line:
                    continue
                response.lines.append(line)
                if is_terminator(line):
                    response.status = ResponseStatus.TERMINATOR
                    return response
                continue

            if result.outcome is ReadOutcome.EOF:
                # Devices may hang up after the final answer; not a failure
                self._is_connected = False
                response.status = ResponseStatus.EOF
                return response

            if result.outcome is ReadOutcome.ERROR:
                self._is_connected = False
                response.status = ResponseStatus.ERROR
                response.error = ReadError(
                    f"Read failed: {result.error}",
                    command=command,
                    partial=response.text,
                )
                return response

            if time.monotonic() >= deadline:
                response.status = ResponseStatus.TIMEOUT
                response.error = ResponseTimeoutError(
                    f"No terminator within {timeout:g}s",
                    command=command,
                    partial=response.text,
                )
                return response

    def send(self, command: str, timeout: Optional[float] = None) -> str:
        """Send a command and return the raw reply text. Raises on timeout or read error."""
        response = self.exchange(command, timeout=timeout)
        response.raise_for_status()
        return response.text

    def send_raw_lines(self, command: str, timeout: Optional[float] = None) -> List[str]:
        response = self.exchange(command, timeout=timeout)
        response.raise_for_status()
        return list(response.lines)

    def close(self) -> None:
        self._is_connected = False
        transport, self.transport = self.transport, None
        self.framer = None
        if transport is None:
            return
        try:
            transport.close()
        except OSError:
            pass

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
