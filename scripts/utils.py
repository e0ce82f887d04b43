from __future__ import annotations

import sys
from typing import Iterable


def progress(message: str, done: bool = False) -> None:
    """Print a progress message to stderr (doesn't interfere with stdout output)."""
    if done:
        print(f"  [done] {message}", file=sys.stderr)
    else:
        print(f"  [....] {message}", file=sys.stderr)


def emit_warnings(warnings: Iterable[str]) -> int:
    seen = set()
    count = 0
    for warning in warnings:
        if warning in seen:
            continue
        seen.add(warning)
        print(f"warning: {warning}", file=sys.stderr)
        count += 1
    return count
