# liberadebt/backend.py
import logging
from typing import Callable, Iterator, List, Optional

import ollama
from langchain_core.messages import HumanMessage
from langchain_ollama import ChatOllama

from .config import LLM_TEMPERATURE, OLLAMA_BASE_URL
from .errors import GenerationError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, Optional[int], Optional[int]], None]


class OllamaBackend:
    """Local Ollama server: model lifecycle through the ollama client, generation through ChatOllama."""

    def __init__(self, base_url: str = OLLAMA_BASE_URL, temperature: float = LLM_TEMPERATURE):
        self.base_url = base_url
        self.temperature = temperature
        self._client = ollama.Client(host=base_url)

    def _get_llm(self, model: str) -> ChatOllama:
        return ChatOllama(model=model, base_url=self.base_url, temperature=self.temperature)

    def is_available(self) -> bool:
        try:
            self._client.list()
            return True
        except Exception as e:
            logger.warning("Ollama not reachable at %s: %s", self.base_url, e)
            return False

    def list_models(self) -> List[str]:
        try:
            response = self._client.list()
        except Exception as e:
            raise GenerationError(f"error listing installed models: {e}") from e
        return [m.model for m in response.models if m.model]

    def pull_model(self, model: str, progress: Optional[ProgressCallback] = None) -> None:
        try:
            for update in self._client.pull(model, stream=True):
                if progress:
                    progress(update.status or "", update.completed, update.total)
        except Exception as e:
            raise GenerationError(f"error installing AI model {model}: {e}") from e

    def ensure_model(self, model: str, progress: Optional[ProgressCallback] = None) -> None:
        if not self.is_available():
            raise GenerationError(f"error establishing connection to AI at {self.base_url}")
        installed = self.list_models()
        # "qwen3" is stored as "qwen3:latest"
        wanted = model if ":" in model else f"{model}:latest"
        if wanted in installed or model in installed:
            logger.info("Model %s already installed", model)
            return
        logger.info("Pulling model %s", model)
        self.pull_model(model, progress)

    def stream(self, model: str, prompt: str) -> Iterator[str]:
        llm = self._get_llm(model)
        for chunk in llm.stream([HumanMessage(content=prompt)]):
            if isinstance(chunk.content, str) and chunk.content:
                yield chunk.content
