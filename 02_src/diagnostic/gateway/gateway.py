"""AI gateway: chat completion via Anthropic, speech synthesis via Gemini."""

import os
from typing import Protocol

import anthropic
from google import genai
from google.genai import types

from ..config import DEFAULT_CHAT_MODEL, DEFAULT_TTS_MODEL, DEFAULT_TTS_VOICE
from ..errors import ConfigurationError, GatewayError, SynthesisFailure
from ..localization import system_instruction
from ..logging_config import get_logger
from ..models import EncodedImage, Language, Message, PatientInfo

logger = get_logger(__name__)


class ISpeechSynthesizer(Protocol):
    """Text-to-speech access."""

    async def synthesize_speech(self, text: str) -> bytes | None:
        """Return 16-bit PCM audio, or None on any failure."""
        ...


class IAIGateway(ISpeechSynthesizer, Protocol):
    """Stateless access to the chat and speech endpoints."""

    async def converse(
        self,
        history: list[Message],
        new_text: str,
        language: Language,
        attachment: EncodedImage | None = None,
        patient: PatientInfo | None = None,
    ) -> str:
        """Send prior turns plus a new user turn. Raises GatewayError."""
        ...


class AIGateway:
    """Anthropic chat + Gemini TTS gateway."""

    def __init__(
        self,
        api_key: str | None = None,
        speech_api_key: str | None = None,
        model: str | None = None,
        tts_model: str | None = None,
        voice: str | None = None,
        max_tokens: int = 2048,
    ):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ConfigurationError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model or os.getenv("CHAT_MODEL", DEFAULT_CHAT_MODEL)
        self._tts_model = tts_model or os.getenv("TTS_MODEL", DEFAULT_TTS_MODEL)
        self._voice = voice or os.getenv("TTS_VOICE", DEFAULT_TTS_VOICE)
        self._max_tokens = max_tokens
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

        speech_key = speech_api_key or os.getenv("GEMINI_API_KEY")
        # Speech is optional; synthesis returns None without it
        self._speech_client = genai.Client(api_key=speech_key) if speech_key else None

    @property
    def speech_enabled(self) -> bool:
        return self._speech_client is not None

    async def converse(
        self,
        history: list[Message],
        new_text: str,
        language: Language,
        attachment: EncodedImage | None = None,
        patient: PatientInfo | None = None,
    ) -> str:
        """Generate the assistant reply for a new user turn."""
        messages = self._history_to_messages(history)
        messages.append({"role": "user", "content": self._user_content(new_text, attachment)})

        try:
            response = await self._client.messages.create(
                model=self._model,
                system=system_instruction(language, patient),
                messages=messages,
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            raise GatewayError(f"Chat API error: {e}") from e

        text = "".join(
            block.text
            for block in response.content
            if isinstance(getattr(block, "text", None), str)
        )
        if not text.strip():
            raise GatewayError("Chat API returned no text")
        return text

    async def synthesize_speech(self, text: str) -> bytes | None:
        """Synthesize `text` with the configured voice. Never raises."""
        try:
            return await self._synthesize(text)
        except SynthesisFailure as e:
            logger.warning("Speech synthesis unavailable: %s", e)
        except Exception as e:
            logger.error("Speech synthesis error: %s", e, exc_info=True)
        return None

    async def _synthesize(self, text: str) -> bytes:
        if self._speech_client is None:
            raise SynthesisFailure("GEMINI_API_KEY not set")
        if not text.strip():
            raise SynthesisFailure("nothing to synthesize")

        response = await self._speech_client.aio.models.generate_content(
            model=self._tts_model,
            contents=text,
            config=types.GenerateContentConfig(
                response_modalities=["AUDIO"],
                speech_config=types.SpeechConfig(
                    voice_config=types.VoiceConfig(
                        prebuilt_voice_config=types.PrebuiltVoiceConfig(
                            voice_name=self._voice,
                        )
                    )
                ),
            ),
        )

        try:
            audio = response.candidates[0].content.parts[0].inline_data.data
        except (AttributeError, IndexError, TypeError):
            audio = None
        if not audio:
            raise SynthesisFailure("no audio in response")
        return audio

    @staticmethod
    def _history_to_messages(history: list[Message]) -> list[dict]:
        messages = []
        for msg in history:
            # The Messages API requires the first turn to come from the user
            if not messages and msg.role == "assistant":
                continue
            messages.append(
                {"role": msg.role, "content": msg.prompt_text or "(image)"}
            )
        return messages

    @staticmethod
    def _user_content(text: str, attachment: EncodedImage | None) -> list[dict]:
        content: list[dict] = []
        if attachment is not None:
            content.append(
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": attachment.mime_type,
                        "data": attachment.data,
                    },
                }
            )
        if text.strip() or not content:
            content.append({"type": "text", "text": text})
        return content
