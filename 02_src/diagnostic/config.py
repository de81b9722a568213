"""Project-level configuration and environment helpers."""

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_CHAT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_TTS_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_STT_MODEL = "gemini-2.5-flash"
DEFAULT_TTS_VOICE = "Kore"

# Gemini TTS output format
TTS_SAMPLE_RATE = 24000
TTS_CHANNELS = 1

LOGS_DIR.mkdir(parents=True, exist_ok=True)


_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY
