"""Core data models for the diagnostic service."""

from .messages import (
    DataCategory,
    EncodedImage,
    Language,
    Message,
    PatientInfo,
    Role,
)
from .state import IDLE_PLAYBACK, ListeningState, PlaybackState
from .tracing import TraceEvent

__all__ = [
    # Messages
    "DataCategory",
    "EncodedImage",
    "Language",
    "Message",
    "PatientInfo",
    "Role",
    # State
    "IDLE_PLAYBACK",
    "ListeningState",
    "PlaybackState",
    # Tracing
    "TraceEvent",
]
