"""
Order quantity policy.

Bulk orders are sold by weight with a minimum order quantity (MOQ) and a
fixed step above it. Valid quantities are MOQ, MOQ + step, MOQ + 2*step ...

Rounding is anchored at the MOQ: a quantity snaps to the nearest
``MOQ + n * QUANTITY_INCREMENT``, halves rounding up. Every value returned
by round_to_nearest_increment() therefore passes is_valid_quantity().

All functions are pure. Non-numeric, NaN and infinite inputs count as
"below MOQ".
"""

from __future__ import annotations

import math
from typing import Any, Optional

MINIMUM_ORDER_QUANTITY = 25  # kg
QUANTITY_INCREMENT = 5  # kg


def _as_finite_number(quantity: Any) -> Optional[float]:
    """Return quantity as a finite float, or None if it is not one."""
    if isinstance(quantity, bool):
        return None
    try:
        value = float(quantity)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def is_valid_quantity(quantity: Any) -> bool:
    """
    Check that a quantity meets the MOQ and sits on an increment step.

    Args:
        quantity: Quantity in kg

    Returns:
        True iff quantity >= MOQ and (quantity - MOQ) is a multiple of
        QUANTITY_INCREMENT
    """
    value = _as_finite_number(quantity)
    if value is None or value < MINIMUM_ORDER_QUANTITY:
        return False
    return (value - MINIMUM_ORDER_QUANTITY) % QUANTITY_INCREMENT == 0


def round_to_nearest_increment(quantity: Any) -> int:
    """
    Snap a quantity to the nearest valid quantity.

    Anything below the MOQ (including garbage input) becomes the MOQ.

    Examples:
        >>> round_to_nearest_increment(10)
        25
        >>> round_to_nearest_increment(27)
        25
        >>> round_to_nearest_increment(27.5)
        30
        >>> round_to_nearest_increment(35)
        35
    """
    value = _as_finite_number(quantity)
    if value is None or value < MINIMUM_ORDER_QUANTITY:
        return MINIMUM_ORDER_QUANTITY

    steps = math.floor((value - MINIMUM_ORDER_QUANTITY) / QUANTITY_INCREMENT + 0.5)
    return MINIMUM_ORDER_QUANTITY + steps * QUANTITY_INCREMENT


def get_next_valid_quantity(current: Any, direction: int) -> Any:
    """
    Step a quantity one increment up or down, never below the MOQ.

    Args:
        current: Current quantity
        direction: +1 to increase, -1 to decrease

    Returns:
        current + direction * QUANTITY_INCREMENT, clamped at the MOQ

    Raises:
        ValueError: If direction is not +1 or -1
    """
    if direction not in (1, -1):
        raise ValueError(f"direction must be 1 or -1, got {direction!r}")

    value = _as_finite_number(current)
    if value is None:
        return MINIMUM_ORDER_QUANTITY

    base = current if isinstance(current, int) else value
    return max(MINIMUM_ORDER_QUANTITY, base + direction * QUANTITY_INCREMENT)
