# liberadebt/collector.py
import logging
import sys
from typing import Callable, Iterable, Optional

from .errors import GenerationError
from .schemas import ResponseBuffer

logger = logging.getLogger(__name__)

Sink = Callable[[str], None]


def console_sink(chunk: str) -> None:
    sys.stdout.write(chunk)
    sys.stdout.flush()


def collect_response(chunks: Iterable[str], sink: Optional[Sink] = None) -> ResponseBuffer:
    """
    Drain a chunk stream into a ResponseBuffer, echoing every chunk to sink as it arrives.

    Any error raised while iterating becomes a GenerationError; chunks already
    echoed stay echoed, and no completed buffer is returned.
    """
    sink = sink or console_sink
    buffer = ResponseBuffer()
    try:
        for chunk in chunks:
            if not chunk:
                continue
            buffer.append(chunk)
            sink(chunk)
    except GenerationError:
        raise
    except Exception as e:
        logger.error("Stream failed after %d chunks: %s", len(buffer.chunks), e)
        raise GenerationError(f"error generating AI response: {e}") from e
    buffer.finish()
    logger.info("Response complete (%d chunks, %d chars)", len(buffer.chunks), len(buffer.text))
    return buffer
