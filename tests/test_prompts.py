#tests/test_prompts.py
import pytest

from liberadebt.normalize import format_obligations
from liberadebt.prompts import GUIDELINES, PromptSynthesizer, synthesize_prompt
from liberadebt.schemas import Obligation


def sample_obligations():
    return [
        Obligation(description="Card A", type="credit-card", monthly_payment=150.00),
        Obligation(description="Loan B", type="loan", interest_rate=0.0599, monthly_payment=300.00),
    ]


def test_prompt_carries_income_obligations_and_goal():
    formatted = format_obligations(sample_obligations())
    prompt = synthesize_prompt(2000.00, formatted, "payoff debt quickly")

    assert "$2000.00" in prompt
    assert '{"id":1,"description":"Card A","type":"credit-card","monthly_payment":150.0}' in prompt
    assert '{"id":2,"description":"Loan B","type":"loan","interest_rate":5.99,"monthly_payment":300.0}' in prompt
    assert "payoff debt quickly" in prompt


def test_sections_in_order():
    prompt = PromptSynthesizer(guidelines=["rule one", "rule two"]).build(10, "{}", "goal text")
    positions = [prompt.index(s) for s in ("advisor", "$10.00", "{}", "goal text", "- rule one", "- rule two")]
    assert positions == sorted(positions)


def test_all_guidelines_included():
    prompt = synthesize_prompt(1500, "{}", "save money")
    for clause in GUIDELINES:
        assert clause in prompt


def test_deterministic():
    assert synthesize_prompt(1500, "{}", "g") == synthesize_prompt(1500, "{}", "g")


@pytest.mark.parametrize("income", [-1.0, float("nan"), float("inf")])
def test_bad_income_rejected(income):
    with pytest.raises(ValueError):
        synthesize_prompt(income, "{}", "goal")


def test_empty_guidelines_rejected():
    with pytest.raises(ValueError):
        PromptSynthesizer(guidelines=[])
    with pytest.raises(ValueError):
        PromptSynthesizer(guidelines=["ok", "  "])


def test_empty_goal_rejected():
    with pytest.raises(ValueError):
        synthesize_prompt(100, "{}", "   ")
