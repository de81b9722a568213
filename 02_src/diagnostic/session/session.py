"""ConversationSession implementation."""

import uuid

from ..audio import AudioPlaybackController, ClockedAudioOutput, IAudioOutput
from ..gateway import IAIGateway
from ..localization import (
    append_transcript,
    format_structured_data,
    strings_for,
)
from ..logging_config import get_session_logger
from ..models import (
    DataCategory,
    EncodedImage,
    Language,
    ListeningState,
    Message,
    PatientInfo,
    PlaybackState,
)
from ..speech import ISpeechRecognizer, SpeechCaptureController, UnavailableSpeechRecognizer
from ..tracker import ITracker


class ConversationSession:
    """One patient conversation: message log, turn sequencing, side channels.

    All mutations go through methods on this object. At most one chat request
    is in flight; `loading` is set before the first suspension point so
    overlapping submits are rejected.
    """

    def __init__(
        self,
        gateway: IAIGateway,
        tracker: ITracker,
        language: Language = Language.EN,
        patient: PatientInfo | None = None,
        recognizer: ISpeechRecognizer | None = None,
        audio_output: IAudioOutput | None = None,
        session_id: str | None = None,
    ):
        self.id = session_id or str(uuid.uuid4())
        self._gateway = gateway
        self._tracker = tracker
        self._language = Language(language)
        self._patient = patient
        self._logger = get_session_logger(__name__, self.id)

        self._messages: list[Message] = [
            Message(role="assistant", text=strings_for(self._language).greeting)
        ]
        self._draft = ""
        self._pending_attachment: EncodedImage | None = None
        self._loading = False
        self._ended = False

        self._player = AudioPlaybackController(
            synthesizer=gateway,
            output=audio_output or ClockedAudioOutput(),
        )
        self._capture = SpeechCaptureController(
            recognizer=recognizer or UnavailableSpeechRecognizer(),
            on_transcript=self._append_transcript,
            language_tag=lambda: strings_for(self._language).speech_tag,
        )

    # Snapshot

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def pending_attachment(self) -> EncodedImage | None:
        return self._pending_attachment

    @property
    def language(self) -> Language:
        return self._language

    @property
    def patient(self) -> PatientInfo | None:
        return self._patient

    @property
    def playback(self) -> PlaybackState:
        return self._player.state

    @property
    def listening(self) -> ListeningState:
        return self._capture.state

    @property
    def player(self) -> AudioPlaybackController:
        return self._player

    @property
    def capture(self) -> SpeechCaptureController:
        return self._capture

    # Composition

    def set_draft(self, text: str) -> None:
        self._draft = text

    def stage_attachment(self, image: EncodedImage) -> None:
        """Stage one image for the next message, replacing any staged one."""
        self._pending_attachment = image

    def remove_attachment(self) -> None:
        self._pending_attachment = None

    def set_language(self, language: Language) -> None:
        """Switch language; relocalize the greeting if nothing was sent yet."""
        self._language = Language(language)
        if len(self._messages) == 1 and self._messages[0].role == "assistant":
            self._messages[0] = Message(
                role="assistant", text=strings_for(self._language).greeting
            )

    # Turns

    async def submit_message(
        self,
        text: str | None = None,
        attachment: EncodedImage | None = None,
    ) -> Message | None:
        """Send a user turn. Returns the appended assistant message, or None if rejected."""
        text = self._draft if text is None else text
        attachment = attachment or self._pending_attachment
        return await self._send(text, attachment)

    async def submit_structured_data(self, category: DataCategory, value: str) -> Message | None:
        """Send test data formatted under its category header."""
        if not value.strip():
            return None
        text = format_structured_data(self._language, category, value)
        return await self._send(text, None)

    async def request_formal_document(self) -> Message | None:
        """Ask the backend for a formatted prescription document."""
        strings = strings_for(self._language)
        return await self._send(
            strings.document_label, None, directive=strings.document_directive
        )

    async def _send(
        self,
        text: str,
        attachment: EncodedImage | None,
        directive: str | None = None,
    ) -> Message | None:
        if self._ended or self._loading:
            return None
        if not text.strip() and attachment is None:
            return None

        history = list(self._messages)
        user_message = Message(
            role="user", text=text, attachment=attachment, directive=directive
        )
        self._messages.append(user_message)
        self._draft = ""
        self._pending_attachment = None
        self._loading = True

        self._logger.info("Message received: %s", user_message.prompt_text[:100])
        language = self._language
        try:
            await self._tracker.track(
                event_type="message_received",
                actor="conversation_session",
                data={
                    "session_id": self.id,
                    "message_id": user_message.id,
                    "has_attachment": attachment is not None,
                    "formal_document": directive is not None,
                },
            )
            reply = await self._gateway.converse(
                history=history,
                new_text=user_message.prompt_text,
                language=language,
                attachment=attachment,
                patient=self._patient,
            )
            event_type = "message_responded"
        except Exception as e:
            self._logger.error("Chat request failed: %s", e, exc_info=True)
            reply = strings_for(language).error
            event_type = "gateway_error"
        finally:
            self._loading = False

        if self._ended:
            self._logger.info("Session ended during request, reply discarded")
            return None

        assistant_message = Message(role="assistant", text=reply)
        self._messages.append(assistant_message)

        await self._tracker.track(
            event_type=event_type,
            actor="conversation_session",
            data={
                "session_id": self.id,
                "message_id": assistant_message.id,
                "reply_to": user_message.id,
            },
        )
        return assistant_message

    # Side channels

    async def play_audio(self, message_id: str) -> PlaybackState:
        """Play, switch or toggle off speech for an assistant message."""
        message = self._find_message(message_id)
        if message.role != "assistant":
            raise ValueError("Audio is only offered for assistant messages")
        if self._ended:
            return self._player.state
        await self._player.play(message.id, message.text)
        return self._player.state

    async def stop_audio(self) -> None:
        await self._player.stop()

    async def toggle_listening(self) -> ListeningState:
        """Raises CapabilityUnavailable when speech recognition is missing."""
        if self._ended:
            return self._capture.state
        return await self._capture.toggle()

    def _append_transcript(self, transcript: str) -> None:
        self._draft = append_transcript(self._draft, transcript, self._language)

    def _find_message(self, message_id: str) -> Message:
        for message in self._messages:
            if message.id == message_id:
                return message
        raise KeyError(message_id)

    # Lifecycle

    async def end_session(self) -> None:
        """Stop side channels and discard all conversation state."""
        if self._ended:
            return
        self._ended = True

        await self._player.stop()
        await self._capture.stop()

        self._messages.clear()
        self._draft = ""
        self._pending_attachment = None
        self._patient = None

        self._logger.info("Session ended")
        await self._tracker.track(
            event_type="session_ended",
            actor="conversation_session",
            data={"session_id": self.id},
        )
