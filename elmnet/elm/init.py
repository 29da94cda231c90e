# elmnet/elm/init.py
from __future__ import annotations

import re
import time
from typing import TYPE_CHECKING, Iterable, List, Optional

from .response import RawResponse

if TYPE_CHECKING:
    from .elm327 import ELM327


def extract_version(response: str) -> Optional[str]:
    s = (response or "").strip()
    if not s:
        return None
    m = re.search(r"(ELM327\s*v?\s*[\w\.]+)", s, re.IGNORECASE)
    if m:
        return m.group(1).strip()
    return None


def initialize_elm(
    elm: "ELM327",
    commands: Optional[Iterable[str]] = None,
    delay_s: Optional[float] = None,
) -> List[RawResponse]:
    """
    Runs the AT init script in order.
    Raises the error of the first command that fails; nothing after it is sent.
    """
    script = list(elm.config.init_commands if commands is None else commands)
    pause = elm.config.init_delay_s if delay_s is None else delay_s

    responses: List[RawResponse] = []
    for idx, command in enumerate(script):
        if idx and pause > 0:
            # hardware settling time between AT commands
            time.sleep(pause)
        response = elm.exchange(command)
        response.raise_for_status()
        responses.append(response)

        if command.upper() == "ATZ":
            elm.elm_version = extract_version(response.text) or "unknown"

    return responses
