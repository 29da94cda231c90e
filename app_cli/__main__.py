from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional

from elmnet.config import DEFAULT_TIMEOUT_S, ConfigError, SessionConfig, TlsOptions
from elmnet.elm import ConnectError
from elmnet.obd2 import InitializationError, OBDScanner
from elmnet.pids import DEFAULT_POLL_PIDS, get_pid_info
from elmnet.rawlog import ConsoleRawLogger, RawLogger, chain_loggers

from app_cli.env import load_dotenv
from app_cli.flow import run_poll_loop


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range (1-65535): {port}")
    return port


def _timeout(value: Optional[str]) -> Optional[float]:
    # Unparsable timeouts fall back to the default instead of aborting
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return DEFAULT_TIMEOUT_S
    return seconds if seconds > 0 else DEFAULT_TIMEOUT_S


def _pid_list(value: str) -> List[str]:
    return [p.strip().upper() for p in value.replace(" ", ",").split(",") if p.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elmnet",
        description="Read live OBD-II data from an ELM327 adapter over TCP/TLS or serial.",
        epilog="Example: elmnet 192.168.0.10 35000 5",
    )
    parser.add_argument("host", nargs="?", help="adapter host name or IP")
    parser.add_argument("port", nargs="?", type=_port, help="adapter TCP port (1-65535)")
    parser.add_argument("timeout_seconds", nargs="?", help=f"per-command timeout (default {DEFAULT_TIMEOUT_S:g})")

    conn = parser.add_argument_group("connection")
    conn.add_argument("--tls", action="store_true", help="wrap the TCP stream in TLS")
    conn.add_argument("--insecure", action="store_true", help="skip TLS certificate verification")
    conn.add_argument("--tls-min-version", choices=["TLSv1.2", "TLSv1.3"], help="minimum TLS version")
    conn.add_argument("--ca-file", help="CA bundle for TLS verification")
    conn.add_argument("--serial", metavar="PORT", help="serial device or pyserial URL instead of host/port")
    conn.add_argument("--baudrate", type=int, help="serial baudrate")
    conn.add_argument("--init-delay", type=float, help="pause between AT init commands (seconds)")

    poll = parser.add_argument_group("polling")
    poll.add_argument("--pids", type=_pid_list, help="comma separated PIDs (default: 0D,0C,05,0A,0B)")
    poll.add_argument("--cycles", type=int, default=10, help="poll cycles, 0 = until Ctrl+C (default 10)")
    poll.add_argument("--interval", type=float, default=2.0, help="pause between cycles (default 2.0)")
    poll.add_argument("--pid-delay", type=float, default=0.5, help="pause between PIDs (default 0.5)")

    logs = parser.add_argument_group("logging")
    logs.add_argument("--raw-log", metavar="FILE", help="append TX/RX traffic to FILE")
    logs.add_argument("--verbose", action="store_true", help="echo TX/RX traffic to stderr")
    logs.add_argument("--env-file", type=Path, help="dotenv file (default ./.env)")
    return parser


def build_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> SessionConfig:
    serial_port = args.serial or os.environ.get("ELM_SERIAL_PORT")
    if not serial_port:
        if not (args.host or os.environ.get("ELM_HOST")) or (args.port is None and not os.environ.get("ELM_PORT")):
            parser.error("host and port are required")

    tls_overrides = {
        "min_version": args.tls_min_version,
        "verify": False if args.insecure else None,
        "ca_file": args.ca_file,
    }
    try:
        tls = replace(TlsOptions.from_env(), **{k: v for k, v in tls_overrides.items() if v is not None})
        return SessionConfig.from_env(
            host=args.host,
            port=args.port,
            timeout=_timeout(args.timeout_seconds),
            use_tls=True if args.tls else None,
            tls=tls,
            init_delay_s=args.init_delay,
            serial_port=args.serial,
            baudrate=args.baudrate,
        )
    except ConfigError as e:
        parser.error(str(e))


def _pid_map(pids: Optional[List[str]]) -> Dict[str, str]:
    if not pids:
        return dict(DEFAULT_POLL_PIDS)
    mapping: Dict[str, str] = {}
    for pid in pids:
        info = get_pid_info(pid) if len(pid) == 2 else None
        mapping[pid] = DEFAULT_POLL_PIDS.get(pid) or (info.name if info else f"PID {pid}")
    return mapping


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    load_dotenv(args.env_file)
    config = build_config(parser, args)

    raw_logger = chain_loggers(
        RawLogger(args.raw_log) if args.raw_log else None,
        ConsoleRawLogger() if args.verbose else None,
    )
    scanner = OBDScanner(config, raw_logger=raw_logger)

    print(f"Connecting to {config.address} ...")
    try:
        scanner.connect()
    except ConnectError as e:
        print(f"Connection error: {e}", file=sys.stderr)
        return 1
    except InitializationError as e:
        print(f"Initialization error: {e}", file=sys.stderr)
        return 1

    try:
        print(f"Connected: {config.address} ({scanner.elm_version or 'unknown adapter'})")
        run_poll_loop(
            scanner,
            _pid_map(args.pids),
            cycles=args.cycles,
            interval_s=args.interval,
            pid_delay_s=args.pid_delay,
        )
    finally:
        scanner.disconnect()
    print("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
