"""Display formatting helpers for API responses"""
import math
from decimal import Decimal
from typing import Any


def safe_num(value: Any) -> float:
    """
    Coerce a database value to a number.

    Args:
        value: int, float, Decimal or anything else

    Returns:
        The numeric value, or 0 for None, NaN and non-numeric input
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, Decimal):
        value = float(value)
    if isinstance(value, (int, float)) and not (isinstance(value, float) and math.isnan(value)):
        return value
    return 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity"""
    return int(math.floor(value + 0.5))


def _group_indian(digits: str) -> str:
    """Group digits the Indian way: last three, then pairs (12,34,567)"""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_inr(amount: Any) -> str:
    """
    Format an amount as Indian Rupees without decimals.

    Example: 1234567.4 -> "₹12,34,567"
    """
    value = round_half_up(safe_num(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}₹{_group_indian(str(abs(value)))}"
