"""Display helpers shared by the pages and the CLI."""
from __future__ import annotations

_MISSING = "—"


def format_currency(value: float | None) -> str:
    """``20`` -> ``"$20.00"``; ``None`` renders as a dash."""
    if value is None:
        return _MISSING
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_count(value: int | None) -> str:
    if value is None:
        return _MISSING
    return f"{value:,}"
