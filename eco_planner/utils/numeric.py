"""
Numeric helpers shared by the scorer, selector and summaries.
"""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves towards positive infinity: ``floor(x + 0.5)`` at ``ndigits``.

    0.5 → 1 and 2.5 → 3; negative halves go up too, so -1.5 → -1 and
    -2.5 → -2 (the waste offsets hit this). Python's built-in ``round()`` uses
    banker's rounding, which would move scores like 72.5 down to 72.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """``round_half_up`` to the nearest integer, returned as ``int``."""
    return int(round_half_up(value))


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
