# liberadebt/utils.py
import math
from typing import Any

from .errors import ParseError

_STRIP_CHARS = ("$", ",", "%")


def money(x: float) -> str:
    return f"${x:.2f}"


def is_blank(value: Any) -> bool:
    """True for empty cells: None, NaN (pandas) or whitespace-only text."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def clean_number_text(text: str) -> str:
    text = text.strip()
    for ch in _STRIP_CHARS:
        text = text.replace(ch, "")
    return text.strip()


def parse_income(income: str) -> float:
    """Turn text like "$2,000.50" into 2000.5."""
    try:
        value = float(clean_number_text(income))
    except ValueError:
        raise ParseError(None, "income", f"not a dollar amount: {income!r}") from None
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise ParseError(None, "income", f"income must be a non-negative amount, got {income!r}")
    return value
