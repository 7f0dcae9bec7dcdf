"""Display helpers for dates and rupee amounts."""
import math


def to_dmy(iso: str) -> str:
    """'2025-03-14' -> '14/03/2025'."""
    parts = (iso or "").split("-")
    if len(parts) != 3:
        return iso
    y, m, d = parts
    return f"{d}/{m}/{y}"


def group_indian(digits: str) -> str:
    """Indian digit grouping: last three digits, then pairs (12,34,567)."""
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


def money_inr(amount: float) -> str:
    """Format a rupee amount with no decimals, e.g. '₹1,23,457'."""
    rounded = int(math.floor(abs(amount) + 0.5))
    sign = "-" if amount < 0 and rounded else ""
    return f"{sign}₹{group_indian(str(rounded))}"
