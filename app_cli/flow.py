from __future__ import annotations

import time
from typing import Mapping, Optional, TextIO

from elmnet.obd2 import OBDScanner
from elmnet.utils import APP_NAME, VERSION, time_only

from app_cli.ui import print_header, print_result, print_subheader


def run_poll_loop(
    scanner: OBDScanner,
    pids: Mapping[str, str],
    *,
    cycles: int = 10,
    interval_s: float = 2.0,
    pid_delay_s: float = 0.5,
    out: Optional[TextIO] = None,
) -> int:
    """
    Poll the PID set `cycles` times (0 = until interrupted).
    Returns the number of PID reads that failed.
    """
    print_header(f"{APP_NAME} v{VERSION}: live data", out=out)
    print("Press Ctrl+C to stop", file=out)

    failures = 0
    cycle = 0
    try:
        while cycles <= 0 or cycle < cycles:
            cycle += 1
            print_subheader(f"Reading {cycle} @ {time_only()}", out=out)
            for result in scanner.poll(pids, pid_delay_s=pid_delay_s):
                print_result(result, out=out)
                if not result.ok:
                    failures += 1
            if cycles <= 0 or cycle < cycles:
                time.sleep(interval_s)
    except KeyboardInterrupt:
        print("\nStopped.", file=out)
    return failures
