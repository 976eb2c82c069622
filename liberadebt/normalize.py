# liberadebt/normalize.py
import json
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

from .schemas import Obligation

TWO_PLACES = Decimal("0.01")


def _round2(value: Decimal) -> float:
    # half-up on the decimal text of the value, so 2.675 becomes 2.68
    return float(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def normalize_interest_rate(rate: Optional[float]) -> Optional[float]:
    """
    Express a rate as a percentage with two decimals.

    Values <= 1.0 are read as fractions (0.0599 -> 5.99), anything larger is
    already a percentage. A real rate under 1% typed as a percentage (0.5 for
    half a percent) is scaled to 50.0 by this rule.
    """
    if rate is None:
        return None
    value = Decimal(str(rate))
    if value <= 1:
        value = value * 100
    return _round2(value)


def normalize_amount(amount: Optional[float]) -> Optional[float]:
    if amount is None:
        return None
    return _round2(Decimal(str(amount)))


def obligation_payload(obligation: Obligation, position: int) -> Dict[str, Any]:
    """Key/value form of one record; absent optional fields are left out."""
    payload: Dict[str, Any] = {
        "id": position,
        "description": obligation.description,
        "type": obligation.type,
        "institution": obligation.institution,
        "remaining_balance": normalize_amount(obligation.remaining_balance),
        "interest_rate": normalize_interest_rate(obligation.interest_rate),
        "monthly_payment": normalize_amount(obligation.monthly_payment),
        "day_of_month": obligation.day_of_month,
    }
    return {k: v for k, v in payload.items() if v is not None}


def format_obligations(obligations: List[Obligation]) -> str:
    """One compact JSON object per obligation, concatenated in input order."""
    return "".join(
        json.dumps(obligation_payload(o, i), separators=(",", ":"), ensure_ascii=False)
        for i, o in enumerate(obligations, start=1)
    )
