# liberadebt/output.py
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from .errors import GenerationError, OutputError
from .schemas import ResponseBuffer

logger = logging.getLogger(__name__)

THINK_OPEN = "<think>"
THINK_CLOSE = "</think>"

BEGIN_REASONING = "\n\n---\n**Begin reasoning**\n\n"
END_REASONING = "\n\n**End reasoning**\n\n---\n\n"

# a closed segment plus the blank lines right after it
_SEGMENT = re.compile(re.escape(THINK_OPEN) + r".*?" + re.escape(THINK_CLOSE) + r"(?:[^\S\n]*\n)*", re.DOTALL)
_BLANK_RUN = re.compile(r"\n{3,}")
_NAME_ATTEMPTS = 5


def _opens_without_marker(text: str) -> bool:
    # some models start reasoning without emitting the opening tag
    close = text.find(THINK_CLOSE)
    if close < 0:
        return False
    open_ = text.find(THINK_OPEN)
    return open_ < 0 or close < open_


def strip_reasoning(text: str) -> str:
    """Drop every <think>...</think> segment and the blank lines following it."""
    if _opens_without_marker(text):
        text = text[text.find(THINK_CLOSE) + len(THINK_CLOSE):]
        text = re.sub(r"^(?:[^\S\n]*\n)*", "", text)
    text = _SEGMENT.sub("", text)
    dangling = text.find(THINK_OPEN)
    if dangling >= 0:
        # reasoning that never closed: nothing after it is an answer
        text = text[:dangling]
    text = text.replace(THINK_CLOSE, "")
    return _BLANK_RUN.sub("\n\n", text).strip()


def annotate_reasoning(text: str) -> str:
    """Replace the raw tags with readable begin/end reasoning delimiters."""
    if _opens_without_marker(text):
        text = THINK_OPEN + text
    text = text.replace(THINK_OPEN, BEGIN_REASONING).replace(THINK_CLOSE, END_REASONING)
    return _BLANK_RUN.sub("\n\n", text).strip()


def render_artifact(reply: str, goal: str, exclude_thinking: bool) -> str:
    body = strip_reasoning(reply) if exclude_thinking else annotate_reasoning(reply)
    header = " ".join(goal.split())
    return f"**Goal:** {header}\n\n{body}\n"


def artifact_name(now: datetime) -> str:
    return f"liberadebt_{now:%Y%m%d_%H%M%S_%f}.md"


def write_artifact(
    response: ResponseBuffer,
    goal: str,
    exclude_thinking: bool = True,
    output_dir: str = ".",
    now: Optional[datetime] = None,
) -> str:
    """
    Write the advice document and return its absolute path.

    Only a completed response is written; the file is created exclusively,
    so an existing artifact is never overwritten.
    """
    if not response.complete:
        raise GenerationError("response stream did not complete; no advice written")

    content = render_artifact(response.text, goal, exclude_thinking)
    directory = Path(output_dir).expanduser().resolve()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"error creating output directory {directory}: {e}") from e

    for attempt in range(_NAME_ATTEMPTS):
        path = directory / artifact_name(now or datetime.now())
        try:
            with open(path, "x", encoding="utf-8") as f:
                f.write(content)
            break
        except FileExistsError as e:
            if now is not None or attempt == _NAME_ATTEMPTS - 1:
                raise OutputError(f"advice file already exists: {path}") from e
        except OSError as e:
            raise OutputError(f"error writing advice to {path}: {e}") from e

    logger.info("Advice written to %s", path)
    return str(path)
