from __future__ import annotations

from typing import Optional, TextIO

from elmnet.obd2.models import PidResult


def print_header(title: str, out: Optional[TextIO] = None) -> None:
    print("\n" + "=" * 60, file=out)
    print(f"  {title}", file=out)
    print("=" * 60, file=out)


def print_subheader(title: str, out: Optional[TextIO] = None) -> None:
    print(f"\n--- {title} ---", file=out)


def print_result(result: PidResult, out: Optional[TextIO] = None) -> None:
    print(f"{result.description:<30}: {result.display()}", file=out)
