# elmnet/pids/__init__.py
from .decode import convert_pid_value, decode_obd_response, find_answer_line
from .errors import DataFormatError, DecodeError, PidFormatError, PidNotFoundError
from .sets import DEFAULT_POLL_PIDS
from .standard_mode01 import PIDS, OBDPid, get_pid_info

__all__ = [
    "convert_pid_value",
    "decode_obd_response",
    "find_answer_line",
    "DataFormatError",
    "DecodeError",
    "PidFormatError",
    "PidNotFoundError",
    "DEFAULT_POLL_PIDS",
    "PIDS",
    "OBDPid",
    "get_pid_info",
]
