# elmnet/config.py
from __future__ import annotations

import os
import ssl
from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_TIMEOUT_S = 5.0
DEFAULT_INIT_DELAY_S = 0.1
DEFAULT_BAUDRATE = 38400

# Reset, echo off, linefeeds off, headers on, auto protocol
INIT_COMMANDS: Tuple[str, ...] = ("ATZ", "ATE0", "ATL0", "ATH1", "ATSP0")

_TLS_VERSIONS = {
    "TLSv1.2": ssl.TLSVersion.TLSv1_2,
    "TLSv1.3": ssl.TLSVersion.TLSv1_3,
}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class TlsOptions:
    min_version: str = "TLSv1.2"
    verify: bool = True
    ca_file: Optional[str] = None

    def __post_init__(self) -> None:
        if self.min_version not in _TLS_VERSIONS:
            raise ConfigError(
                f"Unsupported TLS version {self.min_version!r} (use one of {', '.join(_TLS_VERSIONS)})"
            )

    @property
    def tls_version(self) -> ssl.TLSVersion:
        return _TLS_VERSIONS[self.min_version]

    @classmethod
    def from_env(cls) -> "TlsOptions":
        return cls(
            min_version=os.environ.get("ELM_TLS_MIN_VERSION", "TLSv1.2"),
            verify=_env_bool("ELM_TLS_VERIFY", True),
            ca_file=os.environ.get("ELM_TLS_CA_FILE") or None,
        )


@dataclass(frozen=True)
class SessionConfig:
    """Immutable settings for one device session."""

    host: str = ""
    port: int = 35000
    timeout: float = DEFAULT_TIMEOUT_S
    use_tls: bool = False
    tls: TlsOptions = field(default_factory=TlsOptions)
    init_commands: Tuple[str, ...] = INIT_COMMANDS
    init_delay_s: float = DEFAULT_INIT_DELAY_S
    serial_port: Optional[str] = None
    baudrate: int = DEFAULT_BAUDRATE

    def __post_init__(self) -> None:
        if not self.serial_port:
            if not self.host:
                raise ConfigError("Host is required")
            if not 1 <= int(self.port) <= 65535:
                raise ConfigError(f"Port out of range: {self.port}")
        if self.timeout <= 0:
            raise ConfigError(f"Timeout must be positive: {self.timeout}")
        if self.init_delay_s < 0:
            raise ConfigError(f"Init delay must not be negative: {self.init_delay_s}")
        # Accept lists from callers; keep the stored value immutable
        object.__setattr__(self, "init_commands", tuple(self.init_commands))

    @property
    def address(self) -> str:
        if self.serial_port:
            return self.serial_port
        return f"{self.host}:{self.port}"

    @classmethod
    def from_env(cls, **overrides) -> "SessionConfig":
        values = {
            "host": os.environ.get("ELM_HOST", ""),
            "port": _env_int("ELM_PORT", 35000),
            "timeout": _env_float("ELM_TIMEOUT", DEFAULT_TIMEOUT_S),
            "use_tls": _env_bool("ELM_TLS", False),
            "tls": TlsOptions.from_env(),
            "init_delay_s": _env_float("ELM_INIT_DELAY", DEFAULT_INIT_DELAY_S),
            "serial_port": os.environ.get("ELM_SERIAL_PORT") or None,
            "baudrate": _env_int("ELM_BAUDRATE", DEFAULT_BAUDRATE),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, str(default)))
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}
