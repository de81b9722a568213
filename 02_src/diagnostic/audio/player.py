"""Single-flight audio playback controller."""

import asyncio

from ..config import TTS_CHANNELS, TTS_SAMPLE_RATE
from ..gateway import ISpeechSynthesizer
from ..logging_config import get_logger
from ..models import IDLE_PLAYBACK, PlaybackState
from .output import AudioClip, IAudioOutput
from .pcm import decode_pcm16

logger = get_logger(__name__)


class AudioPlaybackController:
    """Plays synthesized speech for at most one message at a time.

    Each playback owns one completion future. Natural end and stop() both
    resolve it, and whichever comes first wins.
    """

    def __init__(
        self,
        synthesizer: ISpeechSynthesizer,
        output: IAudioOutput,
        sample_rate: int = TTS_SAMPLE_RATE,
        channels: int = TTS_CHANNELS,
    ):
        self._synthesizer = synthesizer
        self._output = output
        self._sample_rate = sample_rate
        self._channels = channels

        self._state: PlaybackState = IDLE_PLAYBACK
        self._completion: asyncio.Future | None = None
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def output(self) -> IAudioOutput:
        return self._output

    async def play(self, message_id: str, text: str) -> None:
        """Start playback of `text` for `message_id`, or toggle it off."""
        if self._state.message_id == message_id:
            logger.debug("Playback toggled off for %s", message_id)
            await self.stop()
            return

        # Ownership changes before the first await; the latest play() owns the state
        previous_completion, previous_task = self._completion, self._task
        completion = asyncio.get_running_loop().create_future()
        self._completion = completion
        self._task = None
        self._state = PlaybackState(message_id=message_id)
        await self._halt(previous_completion, previous_task)
        if self._completion is not completion:
            return

        audio = await self._synthesizer.synthesize_speech(text)
        if self._completion is not completion:
            # Stopped or replaced while synthesis was pending
            return
        if audio is None:
            self._finish(completion)
            return

        samples = decode_pcm16(audio, self._channels)
        if not len(samples):
            logger.warning("Synthesized audio for %s is empty", message_id)
            self._finish(completion)
            return

        clip = AudioClip(samples=samples, sample_rate=self._sample_rate)
        logger.info("Playing %.1fs of audio for %s", clip.duration, message_id)
        self._task = asyncio.create_task(self._output.play(clip))
        self._task.add_done_callback(lambda task: self._on_done(task, completion))

    async def stop(self) -> None:
        """Halt any active playback. Safe when idle."""
        completion, task = self._completion, self._task
        self._completion = None
        self._task = None
        self._state = IDLE_PLAYBACK
        await self._halt(completion, task)

    async def _halt(
        self, completion: asyncio.Future | None, task: asyncio.Task | None
    ) -> None:
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        if completion is not None and not completion.done():
            completion.set_result(None)

    async def wait(self) -> None:
        """Wait until the current playback ends or is stopped."""
        if self._completion is not None:
            await asyncio.shield(self._completion)

    def _on_done(self, task: asyncio.Task, completion: asyncio.Future) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error("Audio output failed", exc_info=task.exception())
        self._finish(completion)

    def _finish(self, completion: asyncio.Future) -> None:
        if not completion.done():
            completion.set_result(None)
        if self._completion is completion:
            self._completion = None
            self._task = None
            self._state = IDLE_PLAYBACK
