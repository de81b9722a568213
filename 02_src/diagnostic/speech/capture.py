"""Speech capture controller."""

import asyncio
from typing import Callable

from ..errors import CapabilityUnavailable, CaptureError
from ..logging_config import get_logger
from ..models import ListeningState
from .recognizer import ISpeechRecognizer

logger = get_logger(__name__)


class SpeechCaptureController:
    """Toggles single-utterance capture and forwards final transcripts."""

    def __init__(
        self,
        recognizer: ISpeechRecognizer,
        on_transcript: Callable[[str], None],
        language_tag: Callable[[], str],
    ):
        self._recognizer = recognizer
        self._on_transcript = on_transcript
        self._language_tag = language_tag

        self._state = ListeningState.IDLE
        self._task: asyncio.Task | None = None
        self._toggling = False

    @property
    def state(self) -> ListeningState:
        return self._state

    @property
    def recognizer(self) -> ISpeechRecognizer:
        return self._recognizer

    async def toggle(self) -> ListeningState:
        """Start capture when idle, stop it when listening."""
        if self._toggling:
            return self._state

        self._toggling = True
        try:
            if self._state is ListeningState.LISTENING:
                await self.stop()
            else:
                self._start()
        finally:
            self._toggling = False
        return self._state

    async def stop(self) -> None:
        """Cancel any active capture. Safe when idle."""
        task = self._task
        self._task = None
        self._state = ListeningState.IDLE
        self._recognizer.abort()

        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _start(self) -> None:
        if not self._recognizer.is_available():
            raise CapabilityUnavailable("speech recognition is not available")

        self._state = ListeningState.LISTENING
        self._task = asyncio.create_task(self._capture())

    async def _capture(self) -> None:
        tag = self._language_tag()
        try:
            transcript = await self._recognizer.recognize(tag)
        except CaptureError as e:
            logger.warning("Speech capture error (%s): %s", tag, e)
        else:
            if transcript and self._task is asyncio.current_task():
                self._on_transcript(transcript)
        finally:
            if self._task is asyncio.current_task():
                self._task = None
                self._state = ListeningState.IDLE
