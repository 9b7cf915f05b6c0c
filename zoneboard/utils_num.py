import math
from decimal import Decimal
from typing import Any

def parse_or_zero(value: Any) -> float:
    """
    Coerce a numeric-ish field (float, int, Decimal, numeric text) to float.
    Anything missing or unparseable counts as 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        if isinstance(value, (int, float, Decimal)):
            out = float(value)
        else:
            out = float(str(value).strip())
    except ValueError:
        return 0.0
    # NaN and inf never count
    if out != out or out in (float("inf"), float("-inf")):
        return 0.0
    return out

def round_half_up(x: float, ndigits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3, -2.5 -> -2), unlike ``round``."""
    scale = 10 ** ndigits
    return math.floor(x * scale + 0.5) / scale

def round1(x: float) -> float:
    return round_half_up(x, 1)
