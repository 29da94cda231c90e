"""
Shared helpers and version info.
"""

from datetime import datetime


def now() -> datetime:
    return datetime.now().astimezone()


def timestamp() -> str:
    """Get formatted timestamp string."""
    return now().strftime("%Y-%m-%d %H:%M:%S")


def time_only() -> str:
    """Get time only (HH:MM:SS)."""
    return now().strftime("%H:%M:%S")


# Version info
VERSION = "1.0.0"
APP_NAME = "elmnet OBD-II reader"
