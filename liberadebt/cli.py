# liberadebt/cli.py
import logging
from typing import Optional

import typer

from .backend import OllamaBackend
from .config import DEFAULT_GOAL, EXCLUDE_THINKING, LLM_MODEL, LOG_LEVEL, OBLIGATIONS_PATH, OUTPUT_DIR
from .errors import LiberaDebtError
from .pipeline import run_advisor
from .schemas import COMPACT_LAYOUT, FULL_LAYOUT, RunParameters
from .utils import parse_income

app = typer.Typer(help="Turn a spreadsheet of monthly obligations into AI debt-payoff advice.")

LAYOUTS = {"full": FULL_LAYOUT, "compact": COMPACT_LAYOUT}


def get_backend() -> OllamaBackend:
    return OllamaBackend()


def determine_income(income: Optional[str]) -> float:
    if not income:
        income = typer.prompt("What is your monthly income (after taxes & deductions)?")
    return parse_income(income)


def determine_goal(goal: str) -> str:
    if goal.strip() and goal != DEFAULT_GOAL:
        return goal.strip()
    answer = typer.prompt(
        f"What is your financial goal? (If you like the default option, then just press enter.)\n"
        f"Default: {DEFAULT_GOAL}\n",
        default="",
        show_default=False,
    )
    return answer.strip() or DEFAULT_GOAL


def _progress(status: str, completed: Optional[int], total: Optional[int]) -> None:
    typer.echo(f"Progress: {status} ( {completed or 0} / {total or 0} )")


@app.command()
def main(
    income: Optional[str] = typer.Option(None, help="Monthly income after taxes & deductions, e.g. 2,000."),
    goal: str = typer.Option(DEFAULT_GOAL, help="Financial goal the advice should accomplish."),
    data: str = typer.Option(OBLIGATIONS_PATH, help="Path to the obligations spreadsheet (.xlsx or .csv)."),
    model: str = typer.Option(LLM_MODEL, help="Ollama model used to write the advice."),
    output_dir: str = typer.Option(OUTPUT_DIR, help="Directory the advice file is written to."),
    exclude_thinking: bool = typer.Option(EXCLUDE_THINKING, help="Drop the model's <think> reasoning from the file."),
    layout: str = typer.Option("full", help="Spreadsheet column layout: full or compact."),
):
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if layout not in LAYOUTS:
        typer.echo(f"Unknown layout {layout!r}; choose from {', '.join(LAYOUTS)}", err=True)
        raise typer.Exit(code=2)

    try:
        params = RunParameters(
            income=determine_income(income),
            goal=determine_goal(goal),
            model=model,
            source_path=data,
            output_dir=output_dir,
            exclude_thinking=exclude_thinking,
            layout=LAYOUTS[layout],
        )
        backend = get_backend()
        backend.ensure_model(model, _progress)
        typer.echo("")
        result = run_advisor(params, backend, sink=lambda chunk: typer.echo(chunk, nl=False))
    except LiberaDebtError as e:
        typer.echo(f"\nError: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"\n\nAdvice saved to {result.artifact_path}")


if __name__ == "__main__":
    app()
