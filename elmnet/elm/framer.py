# elmnet/elm/framer.py
from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

PROMPT = ">"

_LINE_ENDS = (ord("\r"), ord("\n"))
_PROMPT_BYTE = ord(PROMPT)


class ReadOutcome(Enum):
    LINE = "line"
    EOF = "eof"
    ERROR = "error"
    PENDING = "pending"


@dataclass(frozen=True)
class ReadResult:
    outcome: ReadOutcome
    line: Optional[str] = None
    error: Optional[BaseException] = None


class LineFramer:
    """
    Turns the transport byte stream into text lines.

    - '\\r', '\\n' and '\\r\\n' all end a line
    - the '>' prompt is a line of its own (ELM never sends a newline after it)
    - bytes left over when the stream closes are dropped; EOF is still reported
    """

    def __init__(self, transport, *, encoding: str = "ascii"):
        self._transport = transport
        self._encoding = encoding
        self._buffer = bytearray()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def reset(self) -> None:
        self._buffer.clear()

    def read_line(self, timeout: float) -> ReadResult:
        deadline = time.monotonic() + timeout
        while True:
            line = self._pop_line()
            if line is not None:
                return ReadResult(ReadOutcome.LINE, line=line)

            if self._closed:
                self._buffer.clear()
                return ReadResult(ReadOutcome.EOF)

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return ReadResult(ReadOutcome.PENDING)

            try:
                chunk = self._transport.read_chunk(remaining)
            except OSError as e:
                return ReadResult(ReadOutcome.ERROR, error=e)

            if chunk is None:
                continue
            if not chunk:
                self._closed = True
                continue
            self._buffer.extend(chunk)

    def _pop_line(self) -> Optional[str]:
        buf = self._buffer
        for idx, byte in enumerate(buf):
            if byte == _PROMPT_BYTE:
                if idx == 0:
                    del buf[:1]
                    return PROMPT
                # Text before the prompt is a line; the prompt stays for the next call
                text = bytes(buf[:idx])
                del buf[:idx]
                return self._decode(text)
            if byte in _LINE_ENDS:
                text = bytes(buf[:idx])
                end = idx + 1
                if byte == _LINE_ENDS[0] and end < len(buf) and buf[end] == _LINE_ENDS[1]:
                    end += 1
                del buf[:end]
                return self._decode(text)
        return None

    def _decode(self, raw: bytes) -> str:
        return raw.decode(self._encoding, errors="replace")
