"""Audio output sinks."""

import asyncio
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .pcm import duration_seconds


@dataclass(frozen=True)
class AudioClip:
    """Decoded audio ready for output."""

    samples: np.ndarray  # (frames, channels) float32
    sample_rate: int

    @property
    def duration(self) -> float:
        return duration_seconds(self.samples, self.sample_rate)


class IAudioOutput(Protocol):
    """Platform audio output."""

    async def play(self, clip: AudioClip) -> None:
        """Play the clip and return on natural end. Cancellation hard-stops it."""
        ...

    @property
    def current(self) -> AudioClip | None:
        """The clip being played, if any."""
        ...


class ClockedAudioOutput:
    """Holds the active clip for the client to fetch and clocks its duration.

    The browser renders the audio; the server only tracks when it ends.
    """

    def __init__(self) -> None:
        self._current: AudioClip | None = None

    @property
    def current(self) -> AudioClip | None:
        return self._current

    async def play(self, clip: AudioClip) -> None:
        self._current = clip
        try:
            await asyncio.sleep(clip.duration)
        finally:
            if self._current is clip:
                self._current = None
