from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

SIZE_UNITS = ('Bytes', 'KB', 'MB', 'GB')
UNKNOWN = 'Unknown'


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round with halves going up (``128.5`` -> ``129``), unlike ``round``"""
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_bytes(size: Optional[float]) -> str:
    """Render a byte count in binary units, e.g. ``1536`` -> ``"1.5 KB"``."""
    if size is None or size < 0:
        return UNKNOWN
    if size == 0:
        return '0 Bytes'

    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1

    # two decimals at most, trailing zeros dropped
    text = f"{round_half_up(value, 2):f}".rstrip('0').rstrip('.')
    return f"{text} {SIZE_UNITS[unit]}"


def format_duration(seconds: Optional[float]) -> str:
    """Render seconds as ``m:ss``"""
    if not seconds:
        return UNKNOWN
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"
