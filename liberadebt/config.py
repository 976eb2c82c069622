# liberadebt/config.py
import os

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DEFAULT_GOAL = "Pay off debt as quickly and efficiently as possible while not straining my monthly budget."

OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
LLM_MODEL = os.getenv("LLM_MODEL", "qwen3:0.6b")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.2"))
OBLIGATIONS_PATH = os.getenv("OBLIGATIONS_PATH", "./obligations.xlsx")
OUTPUT_DIR = os.getenv("OUTPUT_DIR", ".")
EXCLUDE_THINKING = _flag("EXCLUDE_THINKING", "true")
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
