"""
Mode 01 response decoding.

The answer line for PID "0C" looks like ``41 0C 1F 88``: the positive-response
echo, the PID, then data bytes A, B, ...
"""

from __future__ import annotations

import re
from typing import Sequence, Tuple

from .errors import DataFormatError, PidNotFoundError
from .standard_mode01 import PIDS

_HEX_BYTE = re.compile(r"^[0-9A-Fa-f]{1,2}$")

# Lines shorter than this are never taken as a loose (non "41 XX") answer
LOOSE_MATCH_MIN_LEN = 10


def find_answer_line(pid: str, response: str) -> Tuple[str, bool]:
    """
    Returns (line, exact).

    exact=True  -> the line starts with "41 <pid>" and carries data tokens
    exact=False -> some other line mentions the PID (nonstandard spacing/headers)
    """
    lines = [ln.strip() for ln in response.split("\n")]
    prefix = "41 " + pid

    for line in lines:
        if line.startswith(prefix) and len(line.split()) >= 3:
            return line, True

    for line in lines:
        if pid in line and len(line) >= LOOSE_MATCH_MIN_LEN:
            return line, False

    raise PidNotFoundError(f"PID response not found: {pid}", pid=pid)


def _hex_byte(pid: str, token: str) -> int:
    if not _HEX_BYTE.match(token):
        raise DataFormatError(f"Bad data format for PID {pid}: {token!r} is not a hex byte", pid=pid)
    return int(token, 16)


def convert_pid_value(pid: str, values: Sequence[str]) -> str:
    """Unit conversion for known PIDs; raw hex passthrough for the rest."""
    pid_info = PIDS.get(pid)
    if pid_info is None:
        return " ".join(values)

    if len(values) < pid_info.bytes:
        raise DataFormatError(
            f"Bad data format for PID {pid}: need {pid_info.bytes} byte(s), got {len(values)}",
            pid=pid,
        )

    data = [_hex_byte(pid, tok) for tok in values[: pid_info.bytes]]
    return pid_info.format(pid_info.formula(*data))


def decode_obd_response(pid: str, response: str) -> str:
    pid = pid.upper()
    line, exact = find_answer_line(pid, response)
    if not exact:
        return line
    parts = line.split()
    return convert_pid_value(pid, parts[2:])

