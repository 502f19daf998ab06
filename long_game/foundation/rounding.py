"""Rounding used by every displayed money or time figure.

Python's ``round`` rounds halves to even (``round(12.5) == 12``).  Game
figures round halves up, so 12.5 becomes 13 and -2.5 becomes -2.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
