"""Speech capture module."""

from .capture import SpeechCaptureController
from .recognizer import (
    GeminiSpeechRecognizer,
    ISpeechRecognizer,
    UnavailableSpeechRecognizer,
    create_speech_recognizer,
)

__all__ = [
    "GeminiSpeechRecognizer",
    "ISpeechRecognizer",
    "SpeechCaptureController",
    "UnavailableSpeechRecognizer",
    "create_speech_recognizer",
]
