"""Side-channel state models."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class PlaybackState:
    """Either idle or playing exactly one message."""

    message_id: str | None = None

    @property
    def is_playing(self) -> bool:
        return self.message_id is not None


IDLE_PLAYBACK = PlaybackState()


class ListeningState(str, Enum):
    """Speech capture state."""

    IDLE = "idle"
    LISTENING = "listening"
