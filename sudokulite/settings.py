from __future__ import annotations

import logging
import math
import os
from typing import List

SUPPORTED_SIZES = [4, 9, 16]
DEFAULT_SIZE = 9
DEFAULT_LOG_LEVEL = "WARNING"

# frames kept free below sys.getrecursionlimit() when solve() picks a strategy
RECURSION_HEADROOM = 50


def resolve_log_level() -> int:
    name = os.environ.get("SUDOKULITE_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.getLevelName(DEFAULT_LOG_LEVEL)
    return level


def resolve_sizes() -> List[int]:
    """
    Grid sizes offered by the UI. SUDOKULITE_SIZES="4,9,16,25" overrides
    the defaults; entries that are not perfect squares are dropped.
    """
    raw = os.environ.get("SUDOKULITE_SIZES", "")
    sizes: List[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part.isdigit():
            continue
        n = int(part)
        base = math.isqrt(n)
        if n > 0 and base * base == n and n not in sizes:
            sizes.append(n)
    return sizes or list(SUPPORTED_SIZES)


def configure_logging() -> None:
    logging.basicConfig(
        level=resolve_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
