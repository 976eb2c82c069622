#tests/test_pipeline.py
import os

import pandas as pd
import pytest

from liberadebt.errors import GenerationError, SourceError, ValidationError
from liberadebt.pipeline import run_advisor
from liberadebt.schemas import RunParameters

HEADER = ["Description", "Type", "Institution", "Remaining Balance", "Interest Rate", "Monthly Payment", "Day"]


class FakeBackend:
    def __init__(self, chunks, fail_after=None):
        self.chunks = chunks
        self.fail_after = fail_after
        self.calls = []

    def stream(self, model, prompt):
        self.calls.append((model, prompt))
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i == self.fail_after:
                raise RuntimeError("model crashed")
            yield chunk


def write_sheet(path, rows):
    pd.DataFrame(rows).to_excel(path, header=False, index=False)
    return str(path)


def sample_params(tmp_path, **overrides):
    source = write_sheet(tmp_path / "obligations.xlsx", [
        HEADER,
        ["Card A", "credit-card", None, None, None, 150.00, None],
        ["Loan B", "loan", None, None, 0.0599, 300.00, None],
    ])
    values = dict(
        income=2000.00,
        goal="payoff debt quickly",
        model="qwen3:0.6b",
        source_path=source,
        output_dir=str(tmp_path / "out"),
    )
    values.update(overrides)
    return RunParameters(**values)


def test_end_to_end(tmp_path):
    backend = FakeBackend(["<think>rank by APR</think>\n\n", "Pay Loan B ", "minimums first."])
    seen = []
    result = run_advisor(sample_params(tmp_path), backend, sink=seen.append)

    model, prompt = backend.calls[0]
    assert model == "qwen3:0.6b"
    assert "$2000.00" in prompt
    assert '"description":"Card A"' in prompt
    assert '"interest_rate":5.99' in prompt
    assert "payoff debt quickly" in prompt

    assert "".join(seen) == result.reply
    assert result.obligation_count == 2
    assert os.path.isabs(result.artifact_path)
    with open(result.artifact_path, encoding="utf-8") as f:
        assert f.read() == "**Goal:** payoff debt quickly\n\nPay Loan B minimums first.\n"


def test_generation_failure_writes_nothing(tmp_path):
    params = sample_params(tmp_path)
    backend = FakeBackend(["partial ", "answer", "never"], fail_after=2)
    seen = []
    with pytest.raises(GenerationError):
        run_advisor(params, backend, sink=seen.append)
    assert seen == ["partial ", "answer"]
    assert not os.path.exists(params.output_dir) or os.listdir(params.output_dir) == []


def test_bad_rows_stop_before_generation(tmp_path):
    source = write_sheet(tmp_path / "bad.xlsx", [HEADER, ["", "loan", None, None, None, 10, None]])
    backend = FakeBackend(["unused"])
    with pytest.raises(ValidationError):
        run_advisor(sample_params(tmp_path, source_path=source), backend, sink=lambda c: None)
    assert backend.calls == []


def test_missing_source(tmp_path):
    params = sample_params(tmp_path, source_path=str(tmp_path / "missing.xlsx"))
    with pytest.raises(SourceError):
        run_advisor(params, FakeBackend([]), sink=lambda c: None)
