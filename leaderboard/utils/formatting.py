# leaderboard/utils/formatting.py

import math


def _is_displayable(n) -> bool:
    if n is None or isinstance(n, bool):
        return False
    try:
        return math.isfinite(n)
    except TypeError:
        return False


def format_number(n, decimals: int = 2) -> str:
    """Fixed-point string, or "N/A" for missing and non-finite values."""
    if not _is_displayable(n):
        return "N/A"
    return f"{n:.{decimals}f}"


def format_pct(n, decimals: int = 2) -> str:
    if not _is_displayable(n):
        return "N/A"
    return f"{format_number(n, decimals)}%"


def format_usd(n) -> str:
    """
    Formats a currency amount for the report.

    Amounts of a million or more are shown as "$1.23M", thousands as
    "$12.3k", and anything smaller with two decimals and thousands separators.
    """
    if n is None or isinstance(n, bool) or (isinstance(n, float) and math.isnan(n)):
        return "N/A"
    if math.isinf(n):
        return "N/A"

    if abs(n) >= 1e6:
        return f"${n / 1e6:.2f}M"
    elif abs(n) >= 1e3:
        return f"${n / 1e3:.1f}k"

    sign = "-" if n < 0 else ""
    return f"{sign}${abs(n):,.2f}"
