"""Money rounding and formatting utilities"""

import math


def round_to_nearest(amount: float, step: float) -> float:
    """Round an amount to the nearest multiple of step (halves round up)"""
    return math.floor(amount / step + 0.5) * step


def format_usd(amount: float) -> str:
    """Format a dollar amount without cents when it is whole ($1,250 / $12.50)"""
    if float(amount).is_integer():
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"
