# elmnet/pids/sets.py
from __future__ import annotations

from typing import Dict

# Default polling set, PID -> description
DEFAULT_POLL_PIDS: Dict[str, str] = {
    "0D": "Vehicle Speed",
    "0C": "Engine RPM",
    "05": "Engine Coolant Temperature",
    "0A": "Fuel Pressure",
    "0B": "Intake Manifold Pressure",
}

