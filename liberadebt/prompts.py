# liberadebt/prompts.py
import math
from typing import Sequence, Tuple

from .utils import money

PERSONA = (
    "You are a helpful, precise, and cautious personal debt advisor. "
    "You give educational guidance, not licensed financial advice."
)

GUIDELINES: Tuple[str, ...] = (
    "Each monthly_payment is the minimum payment, not the full amount that can be paid.",
    "Never count the same payment twice across steps of the plan.",
    "Only loans and credit cards belong in the action plan; leave other bills out of it, "
    "but still subtract their payments from the income.",
    "If no leisure or entertainment line item exists, assume a discretionary allowance of "
    "5-10% of income.",
    "Do all arithmetic yourself; the reader must not have to calculate anything.",
    "Do not list several competing strategies; return the single most efficient plan with "
    "priorities and dollar amounts.",
)

GUIDELINE_SEPARATOR = "\n- "


class PromptSynthesizer:
    """
    Builds the single instruction sent to the model:
    persona, income, obligations, goal, then the guideline clauses.
    """

    def __init__(self, guidelines: Sequence[str] = GUIDELINES, persona: str = PERSONA):
        clauses = tuple(g.strip() for g in guidelines)
        if not clauses or not all(clauses):
            raise ValueError("guidelines must be a non-empty list of non-blank clauses")
        self.guidelines = clauses
        self.persona = persona

    def build(self, income: float, normalized_obligations: str, goal: str) -> str:
        if income is None or math.isnan(income) or math.isinf(income) or income < 0:
            raise ValueError(f"income must be a finite non-negative number, got {income!r}")
        if not goal or not goal.strip():
            raise ValueError("goal must not be empty")

        return (
            f"{self.persona}\n\n"
            f"I make {money(income)} a month after taxes and deductions. "
            f"As a list of JSON objects, one per obligation, my financial obligations are: "
            f"{normalized_obligations}\n\n"
            f"My goal is: {goal}\n\n"
            f"How can I most efficiently accomplish my goal? Follow these rules:"
            f"{GUIDELINE_SEPARATOR}{GUIDELINE_SEPARATOR.join(self.guidelines)}"
        )


def synthesize_prompt(income: float, normalized_obligations: str, goal: str) -> str:
    return PromptSynthesizer().build(income, normalized_obligations, goal)
