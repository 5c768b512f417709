import math
from typing import Optional


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'' if n == 1 else 's'}"


def format_breakeven_period(months: Optional[float]) -> str:
    """Human-readable breakeven period, e.g. "3 months", "1 year 6 months", "Never"."""
    if months is None or not math.isfinite(months):
        return "Never"

    rounded = math.ceil(months)
    years, rem = divmod(rounded, 12)

    if years == 0:
        return _plural(rem, "month")
    if rem == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')} {_plural(rem, 'month')}"
