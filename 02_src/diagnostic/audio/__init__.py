"""Audio playback module."""

from .output import AudioClip, ClockedAudioOutput, IAudioOutput
from .pcm import decode_pcm16, to_wav_bytes
from .player import AudioPlaybackController

__all__ = [
    "AudioClip",
    "AudioPlaybackController",
    "ClockedAudioOutput",
    "IAudioOutput",
    "decode_pcm16",
    "to_wav_bytes",
]
