# elmnet/__init__.py
from .config import INIT_COMMANDS, ConfigError, SessionConfig, TlsOptions
from .elm import (
    ELM327,
    CommunicationError,
    ConnectError,
    DeviceDisconnectedError,
    RawResponse,
    ReadError,
    ResponseStatus,
    ResponseTimeoutError,
    WriteError,
)
from .pids import (
    DEFAULT_POLL_PIDS,
    PIDS,
    DataFormatError,
    DecodeError,
    OBDPid,
    PidFormatError,
    PidNotFoundError,
    decode_obd_response,
    get_pid_info,
)
from .obd2 import InitializationError, NotConnectedError, OBDScanner, PidResult, ScannerError
from .utils import VERSION

__all__ = [
    "INIT_COMMANDS",
    "ConfigError",
    "SessionConfig",
    "TlsOptions",
    "ELM327",
    "CommunicationError",
    "ConnectError",
    "DeviceDisconnectedError",
    "RawResponse",
    "ReadError",
    "ResponseStatus",
    "ResponseTimeoutError",
    "WriteError",
    "DEFAULT_POLL_PIDS",
    "PIDS",
    "DataFormatError",
    "DecodeError",
    "OBDPid",
    "PidFormatError",
    "PidNotFoundError",
    "decode_obd_response",
    "get_pid_info",
    "InitializationError",
    "NotConnectedError",
    "OBDScanner",
    "PidResult",
    "ScannerError",
]
__version__ = VERSION
