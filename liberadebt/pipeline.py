# liberadebt/pipeline.py
import logging
from typing import Iterator, Optional, Protocol

from pydantic import BaseModel

from .collector import Sink, collect_response
from .errors import GenerationError
from .ingest import load_obligations
from .normalize import format_obligations
from .output import write_artifact
from .prompts import PromptSynthesizer
from .schemas import RunParameters

logger = logging.getLogger(__name__)


class GenerationBackend(Protocol):
    def stream(self, model: str, prompt: str) -> Iterator[str]:
        ...


class RunResult(BaseModel):
    artifact_path: str
    obligation_count: int
    prompt: str
    reply: str


def run_advisor(
    params: RunParameters,
    backend: GenerationBackend,
    sink: Optional[Sink] = None,
    synthesizer: Optional[PromptSynthesizer] = None,
) -> RunResult:
    """Spreadsheet -> prompt -> streamed reply -> advice file, stopping at the first error."""
    synthesizer = synthesizer or PromptSynthesizer()

    obligations = load_obligations(params.source_path, params.layout)
    formatted = format_obligations(obligations)
    prompt = synthesizer.build(params.income, formatted, params.goal)
    logger.info("Prompt built (%d chars) for model %s", len(prompt), params.model)

    try:
        chunks = backend.stream(params.model, prompt)
    except Exception as e:
        raise GenerationError(f"error starting generation with {params.model}: {e}") from e
    response = collect_response(chunks, sink)

    path = write_artifact(response, params.goal, params.exclude_thinking, params.output_dir)
    return RunResult(
        artifact_path=path,
        obligation_count=len(obligations),
        prompt=prompt,
        reply=response.text,
    )
