"""
OBD-II Mode 01 PID Definitions
==============================
Live data PIDs, their byte counts, formulas and display formats.
Based on SAE J1979. Add a PID by adding an entry; nothing else dispatches on codes.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass(frozen=True)
class OBDPid:
    """Represents an OBD-II Parameter ID."""
    pid: str
    name: str
    unit: str
    bytes: int
    formula: Callable
    fmt: str
    description: Optional[str] = None

    def format(self, value) -> str:
        return self.fmt.format(value)


PIDS: Dict[str, OBDPid] = {
    # Engine Load
    "04": OBDPid(
        pid="04",
        name="Calculated Engine Load",
        unit="%",
        bytes=1,
        formula=lambda a: (a * 100) / 255,
        fmt="{:.1f} %",
        description="Percentage of peak available torque",
    ),

    # Temperatures
    "05": OBDPid(
        pid="05",
        name="Engine Coolant Temperature",
        unit="°C",
        bytes=1,
        formula=lambda a: a - 40,
        fmt="{:d} °C",
    ),
    "0F": OBDPid(
        pid="0F",
        name="Intake Air Temperature",
        unit="°C",
        bytes=1,
        formula=lambda a: a - 40,
        fmt="{:d} °C",
    ),
    "5C": OBDPid(
        pid="5C",
        name="Engine Oil Temperature",
        unit="°C",
        bytes=1,
        formula=lambda a: a - 40,
        fmt="{:d} °C",
        description="Oil temperature (if supported)",
    ),

    # Pressures
    "0A": OBDPid(
        pid="0A",
        name="Fuel Pressure",
        unit="kPa",
        bytes=1,
        formula=lambda a: a * 3,
        fmt="{:d} kPa",
        description="Fuel rail pressure (gauge)",
    ),
    "0B": OBDPid(
        pid="0B",
        name="Intake Manifold Pressure",
        unit="kPa",
        bytes=1,
        formula=lambda a: a,
        fmt="{:d} kPa",
        description="MAP sensor reading",
    ),

    # Engine Speed and Vehicle Speed
    "0C": OBDPid(
        pid="0C",
        name="Engine RPM",
        unit="RPM",
        bytes=2,
        formula=lambda a, b: ((a * 256) + b) / 4,
        fmt="{:.0f} RPM",
    ),
    "0D": OBDPid(
        pid="0D",
        name="Vehicle Speed",
        unit="km/h",
        bytes=1,
        formula=lambda a: a,
        fmt="{:d} km/h",
    ),

    # Timing
    "0E": OBDPid(
        pid="0E",
        name="Timing Advance",
        unit="°",
        bytes=1,
        formula=lambda a: (a / 2) - 64,
        fmt="{:.1f} °",
        description="Ignition timing advance for #1 cylinder",
    ),

    # Air flow and throttle
    "10": OBDPid(
        pid="10",
        name="MAF Air Flow Rate",
        unit="g/s",
        bytes=2,
        formula=lambda a, b: ((a * 256) + b) / 100,
        fmt="{:.2f} g/s",
    ),
    "11": OBDPid(
        pid="11",
        name="Throttle Position",
        unit="%",
        bytes=1,
        formula=lambda a: (a * 100) / 255,
        fmt="{:.1f} %",
    ),

    # Run time, fuel, voltage
    "1F": OBDPid(
        pid="1F",
        name="Run Time Since Engine Start",
        unit="s",
        bytes=2,
        formula=lambda a, b: (a * 256) + b,
        fmt="{:d} s",
    ),
    "2F": OBDPid(
        pid="2F",
        name="Fuel Tank Level",
        unit="%",
        bytes=1,
        formula=lambda a: (a * 100) / 255,
        fmt="{:.1f} %",
    ),
    "42": OBDPid(
        pid="42",
        name="Control Module Voltage",
        unit="V",
        bytes=2,
        formula=lambda a, b: ((a * 256) + b) / 1000,
        fmt="{:.3f} V",
        description="ECU supply voltage",
    ),
}


def get_pid_info(pid: str) -> Optional[OBDPid]:
    """Get PID information by code."""
    return PIDS.get(pid.upper())
