"""Speech-to-text capability."""

import asyncio
import os
from typing import Protocol

from google import genai
from google.genai import types

from ..config import DEFAULT_STT_MODEL
from ..errors import CaptureError
from ..logging_config import get_logger

logger = get_logger(__name__)

TRANSCRIBE_PROMPT = (
    "Transcribe the spoken words in this audio clip. The expected language is {tag}. "
    "Return only the transcript text. Return nothing if no speech is present."
)


class ISpeechRecognizer(Protocol):
    """Single-utterance speech recognition."""

    def is_available(self) -> bool:
        """Whether recognition can run at all."""
        ...

    async def recognize(self, language_tag: str) -> str:
        """Capture one utterance and return its final transcript.

        Returns "" when the utterance ended without speech. Raises CaptureError.
        """
        ...

    def submit_audio(self, audio: bytes, mime_type: str = "audio/wav") -> bool:
        """Deliver a recorded utterance. Returns False when nothing is listening."""
        ...

    def abort(self) -> None:
        """Abandon the current capture."""
        ...


class UnavailableSpeechRecognizer:
    """Stand-in when no recognition backend is configured."""

    def is_available(self) -> bool:
        return False

    async def recognize(self, language_tag: str) -> str:
        raise CaptureError("speech recognition is not available")

    def submit_audio(self, audio: bytes, mime_type: str = "audio/wav") -> bool:
        return False

    def abort(self) -> None:
        return


class GeminiSpeechRecognizer:
    """Transcribes one uploaded clip per capture with Gemini.

    recognize() waits for the client to upload the recorded utterance via
    submit_audio().
    """

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        timeout: float = 60.0,
    ):
        self._client = genai.Client(api_key=api_key)
        self._model = model or os.getenv("STT_MODEL", DEFAULT_STT_MODEL)
        self._timeout = timeout
        self._pending: asyncio.Future | None = None

    def is_available(self) -> bool:
        return True

    @property
    def awaiting_audio(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def submit_audio(self, audio: bytes, mime_type: str = "audio/wav") -> bool:
        """Deliver the recorded utterance. Returns False when nothing is listening."""
        if not self.awaiting_audio:
            return False
        self._pending.set_result((audio, mime_type))
        return True

    async def recognize(self, language_tag: str) -> str:
        pending = asyncio.get_running_loop().create_future()
        self._pending = pending
        try:
            audio, mime_type = await asyncio.wait_for(pending, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise CaptureError("no audio received") from e
        finally:
            if self._pending is pending:
                self._pending = None

        if not audio:
            return ""

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=[
                    TRANSCRIBE_PROMPT.format(tag=language_tag),
                    types.Part.from_bytes(data=audio, mime_type=mime_type),
                ],
            )
        except Exception as e:
            raise CaptureError(f"transcription failed: {e}") from e

        return (getattr(response, "text", "") or "").strip()

    def abort(self) -> None:
        if self.awaiting_audio:
            self._pending.cancel()
        self._pending = None


def create_speech_recognizer(api_key: str | None = None) -> ISpeechRecognizer:
    """Return the recognizer the current configuration supports."""
    api_key = api_key or os.getenv("GEMINI_API_KEY")
    if not api_key:
        logger.info("GEMINI_API_KEY not set, speech recognition disabled")
        return UnavailableSpeechRecognizer()
    return GeminiSpeechRecognizer(api_key=api_key)
