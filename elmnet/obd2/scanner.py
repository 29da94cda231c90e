from __future__ import annotations

from typing import Optional

from ..pids.pid_mixin import PidMixin
from .base import BaseScanner


class OBDScanner(BaseScanner, PidMixin):
    """ELM session: AT init, then mode 01 PID reads."""

    @property
    def elm_version(self) -> Optional[str]:
        return self.elm.elm_version
