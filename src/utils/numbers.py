# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Numeric helpers for percentages shown to users.

Python's built-in round() uses banker's rounding (``round(2.5) == 2``).
Percentages reported by the API round halves up instead.
"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """Round a number to ``digits`` places, sending halves away from zero.

    The value is rounded from its shortest decimal form, so ``1.005`` keeps
    its written half rather than its binary approximation.

    Args:
        value: Number to round.
        digits: Decimal places to keep.

    Returns:
        Rounded value.

    Example:
        >>> round_half_up(62.5)
        63.0
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: float, whole: float) -> int:
    """Return ``part / whole`` as a whole percentage, rounded half up.

    Returns 0 when ``whole`` is not positive.
    """
    if whole <= 0:
        return 0
    return int(round_half_up(part / whole * 100))
