"""Pytest configuration and fixtures."""

import asyncio
import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import numpy as np
import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "GEMINI_API_KEY",
    "CHAT_MODEL",
    "TTS_MODEL",
    "TTS_VOICE",
    "STT_MODEL",
    "DEFAULT_LANGUAGE",
    "REQUIRE_PATIENT_INFO",
)

# 0, 0.5, -1.0 as 16-bit little-endian PCM
PCM_SAMPLES = np.array([0, 16384, -32768], dtype="<i2").tobytes()


async def settle(rounds: int = 10) -> None:
    """Let pending tasks and callbacks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeAudioOutput:
    """Audio output that plays until the test calls finish()."""

    def __init__(self):
        self.played = []
        self.cancelled = 0
        self._current = None
        self._release = asyncio.Event()

    @property
    def current(self):
        return self._current

    async def play(self, clip) -> None:
        self.played.append(clip)
        self._current = clip
        self._release = asyncio.Event()
        try:
            await self._release.wait()
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self._current = None

    def finish(self) -> None:
        self._release.set()


class FakeRecognizer:
    """Recognizer whose utterances are resolved by the test."""

    def __init__(self, available: bool = True):
        self.available = available
        self.tags = []
        self.aborted = 0
        self._pending = None

    def is_available(self) -> bool:
        return self.available

    async def recognize(self, language_tag: str) -> str:
        self.tags.append(language_tag)
        self._pending = asyncio.get_running_loop().create_future()
        return await self._pending

    def submit_audio(self, audio: bytes, mime_type: str = "audio/wav") -> bool:
        return False

    def finish(self, transcript: str) -> None:
        self._pending.set_result(transcript)

    def fail(self, error: Exception) -> None:
        self._pending.set_exception(error)

    def abort(self) -> None:
        self.aborted += 1


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep tests independent of the developer's environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tracker():
    """Create in-memory Tracker."""
    from diagnostic.tracker import Tracker

    return Tracker()


@pytest.fixture
def mock_gateway():
    """Create mock AI gateway."""
    gateway = Mock()
    gateway.converse = AsyncMock(return_value="Test response")
    gateway.synthesize_speech = AsyncMock(return_value=PCM_SAMPLES)
    return gateway


@pytest.fixture
def audio_output():
    return FakeAudioOutput()


@pytest.fixture
def recognizer():
    return FakeRecognizer()


@pytest_asyncio.fixture
async def session(mock_gateway, tracker, audio_output, recognizer):
    """Create ConversationSession for testing."""
    from diagnostic.session import ConversationSession

    s = ConversationSession(
        gateway=mock_gateway,
        tracker=tracker,
        recognizer=recognizer,
        audio_output=audio_output,
    )
    yield s
    await s.end_session()
