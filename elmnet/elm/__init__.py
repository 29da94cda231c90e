# elmnet/elm/__init__.py
from .elm327 import ELM327
from .errors import (
    CommunicationError,
    ConnectError,
    DeviceDisconnectedError,
    ReadError,
    ResponseTimeoutError,
    WriteError,
)
from .framer import LineFramer, ReadOutcome, ReadResult
from .init import extract_version, initialize_elm
from .response import TERMINATORS, RawResponse, ResponseStatus, is_terminator
from .transport import SerialTransport, TcpTransport, build_tls_context, open_transport

__all__ = [
    "ELM327",
    "CommunicationError",
    "ConnectError",
    "DeviceDisconnectedError",
    "ReadError",
    "ResponseTimeoutError",
    "WriteError",
    "LineFramer",
    "ReadOutcome",
    "ReadResult",
    "extract_version",
    "initialize_elm",
    "TERMINATORS",
    "RawResponse",
    "ResponseStatus",
    "is_terminator",
    "SerialTransport",
    "TcpTransport",
    "build_tls_context",
    "open_transport",
]
