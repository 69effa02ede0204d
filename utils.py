"""
Input sanitising and display formatting shared by the engine and CLI.
"""

from __future__ import annotations

import re
from typing import Optional

# Leading decimal number, optionally signed, optionally with an exponent.
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_numeric_value(value: str) -> Optional[float]:
    """Leading number of *value* after stripping separators, or None if there is none."""
    match = _NUMBER_PREFIX.match(value.replace(",", "").strip())
    if not match:
        return None
    return float(match.group()) or 0.0


def sanitize_numeric_value(value: str) -> float:
    """Parse user-typed numbers such as ``"250,000"`` or ``" 1,234.5 "``.

    Thousands separators and surrounding whitespace are stripped before
    parsing, so ``"250,000"`` reads as 250000 rather than 250. Empty or
    unparseable input yields 0.
    """
    parsed = parse_numeric_value(value)
    return 0.0 if parsed is None else parsed


def format_currency(amount: float) -> str:
    """Format as whole dollars, e.g. ``$12,345`` or ``-$1,000``."""
    value = round(amount)
    if value < 0:
        return f"-${-value:,}"
    return f"${value:,}"
