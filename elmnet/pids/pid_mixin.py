# elmnet/pids/pid_mixin.py
from __future__ import annotations

import time
from typing import Iterable, List, Mapping, Optional, Union

from ..elm.errors import CommunicationError
from ..obd2.errors import ScannerError
from ..obd2.models import PidResult
from .decode import decode_obd_response
from .errors import DecodeError, PidFormatError
from .standard_mode01 import PIDS


class PidMixin:
    """
    Mode 01 PID reads over the engine.

    Expects parent class to provide:
      - self.elm: ELM327
      - _check_connected()
    """

    def read_obd_data(self, pid: str) -> str:
        """
        Query one PID and decode the reply.
        A malformed PID fails before anything is written to the device.
        """
        if pid is None or len(pid) != 2:
            raise PidFormatError(f"Invalid PID: {pid!r}", pid=pid or "")
        pid = pid.upper()

        self._check_connected()
        response = self.elm.send(f"01 {pid}")
        return decode_obd_response(pid, response)

    def read_pid(self, pid: str, description: Optional[str] = None) -> PidResult:
        """Like read_obd_data, but failures come back as a labelled result."""
        if description is None:
            info = PIDS.get((pid or "").upper())
            description = info.name if info else f"PID {pid}"

        try:
            value = self.read_obd_data(pid)
        except (CommunicationError, DecodeError, ScannerError) as e:
            return PidResult(pid=pid, description=description, error=str(e))
        return PidResult(pid=pid, description=description, value=value)

    def poll(
        self,
        pids: Union[Mapping[str, str], Iterable[str]],
        *,
        pid_delay_s: float = 0.0,
    ) -> List[PidResult]:
        """
        Read every PID once, in order.
        One PID failing never stops the rest.
        """
        if isinstance(pids, Mapping):
            items = list(pids.items())
        else:
            items = [(p, None) for p in pids]

        results: List[PidResult] = []
        for idx, (pid, description) in enumerate(items):
            if idx and pid_delay_s > 0:
                time.sleep(pid_delay_s)
            results.append(self.read_pid(pid, description))
        return results


__all__ = ["PidMixin"]
