from .errors import InitializationError, NotConnectedError, ScannerError
from .models import PidResult
from .scanner import OBDScanner

__all__ = [
    "InitializationError",
    "NotConnectedError",
    "ScannerError",
    "PidResult",
    "OBDScanner",
]
