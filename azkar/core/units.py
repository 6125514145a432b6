"""
Interval unit conversion
Pure helpers between whole seconds and a (value, unit) display pair
"""

import math
from typing import Optional, Union

from azkar.models.entities import UNIT_FACTORS, Unit

Number = Union[int, float]

DISPLAY_PRECISION = 4


def to_seconds(value: Number, unit: Unit) -> int:
    """Convert a displayed value to whole seconds (halves round away from zero).

    Values below one second are returned as-is; callers decide whether to send them.
    """
    scaled = value * UNIT_FACTORS[unit]
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def from_seconds(seconds: Number, unit: Unit) -> float:
    """Convert seconds to a display value in ``unit``, rounded to 4 decimal places"""
    return round(seconds / UNIT_FACTORS[unit], DISPLAY_PRECISION)


def choose_unit(seconds: int) -> Unit:
    """Largest unit that divides ``seconds`` exactly"""
    if seconds % UNIT_FACTORS[Unit.HOURS] == 0:
        return Unit.HOURS
    if seconds % UNIT_FACTORS[Unit.MINUTES] == 0:
        return Unit.MINUTES
    return Unit.SECONDS


def parse_number(raw: str) -> Optional[float]:
    """Parse typed input; None for empty, malformed or non-finite text

    Digit-group underscores ("1_0") are malformed here even though ``float`` takes them.
    """
    text = raw.strip()
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def format_number(value: Number) -> str:
    """Render a display value: "2" rather than "2.0", "1.5" as is"""
    value = round(float(value), DISPLAY_PRECISION)
    if value.is_integer():
        return str(int(value))
    return repr(value)
