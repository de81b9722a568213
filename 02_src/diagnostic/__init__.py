"""Medical Diagnostic Interface core."""

from .app import Application, IApplication
from .audio import AudioPlaybackController, ClockedAudioOutput, IAudioOutput
from .errors import (
    CapabilityUnavailable,
    CaptureError,
    ConfigurationError,
    DiagnosticError,
    GatewayError,
    SynthesisFailure,
)
from .gateway import AIGateway, IAIGateway
from .models import (
    DataCategory,
    EncodedImage,
    Language,
    ListeningState,
    Message,
    PatientInfo,
    PlaybackState,
    TraceEvent,
)
from .session import ConversationSession
from .speech import ISpeechRecognizer, SpeechCaptureController, create_speech_recognizer
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    "ConversationSession",
    # Models
    "DataCategory",
    "EncodedImage",
    "Language",
    "ListeningState",
    "Message",
    "PatientInfo",
    "PlaybackState",
    "TraceEvent",
    # Components
    "AIGateway",
    "IAIGateway",
    "AudioPlaybackController",
    "ClockedAudioOutput",
    "IAudioOutput",
    "ISpeechRecognizer",
    "SpeechCaptureController",
    "create_speech_recognizer",
    "ITracker",
    "Tracker",
    # Errors
    "DiagnosticError",
    "ConfigurationError",
    "GatewayError",
    "SynthesisFailure",
    "CaptureError",
    "CapabilityUnavailable",
]
