"""Minor-unit (cents) rounding utilities"""

from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP


def to_cents(amount: float) -> int:
    """Round an unrounded cents amount to whole cents, half away from zero"""
    return int(Decimal(repr(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def floor_cents(amount: float) -> int:
    """Round down to whole cents (for caps that must not be exceeded)"""
    return int(Decimal(repr(amount)).quantize(Decimal("1"), rounding=ROUND_FLOOR))


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(value, high))
