"""API request and response models."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..models import DataCategory, Language, ListeningState, Message, PatientInfo
from ..session import ConversationSession


class PatientInfoModel(BaseModel):
    """Patient profile form; every field is mandatory."""

    name: str = Field(min_length=1)
    age: str = Field(min_length=1)
    gender: str = Field(min_length=1)
    phone: str = Field(min_length=1)

    def to_patient(self) -> PatientInfo:
        return PatientInfo(
            name=self.name, age=self.age, gender=self.gender, phone=self.phone
        )


class StartSessionRequest(BaseModel):
    language: Language | None = None
    patient: PatientInfoModel | None = None


class LanguageRequest(BaseModel):
    language: Language


class DraftRequest(BaseModel):
    text: str


class AttachmentRequest(BaseModel):
    """Image as produced by a browser file reader (data URI or bare base64)."""

    data_uri: str = Field(min_length=1)


class SendMessageRequest(BaseModel):
    """Omitted fields fall back to the session draft and staged attachment."""

    text: str | None = None


class StructuredDataRequest(BaseModel):
    category: DataCategory
    value: str = Field(min_length=1)


class SpeechAudioRequest(BaseModel):
    data: str = Field(min_length=1, description="Base64 encoded audio clip")
    mime_type: str = "audio/wav"


class MessageResponse(BaseModel):
    id: str
    role: str
    text: str
    timestamp: datetime
    attachment: str | None = None  # data URI preview


class SessionResponse(BaseModel):
    id: str
    language: Language
    messages: list[MessageResponse]
    loading: bool
    playing_message_id: str | None
    listening: bool
    draft: str
    pending_attachment: str | None
    patient: PatientInfoModel | None


class SendResponse(BaseModel):
    accepted: bool
    reply: MessageResponse | None
    session: SessionResponse


def message_to_response(message: Message) -> dict:
    return {
        "id": message.id,
        "role": message.role,
        "text": message.text,
        "timestamp": message.timestamp,
        "attachment": message.attachment.data_uri if message.attachment else None,
    }


def session_to_response(session: ConversationSession) -> dict:
    patient = session.patient
    return {
        "id": session.id,
        "language": session.language,
        "messages": [message_to_response(m) for m in session.messages],
        "loading": session.loading,
        "playing_message_id": session.playback.message_id,
        "listening": session.listening is ListeningState.LISTENING,
        "draft": session.draft,
        "pending_attachment": (
            session.pending_attachment.data_uri if session.pending_attachment else None
        ),
        "patient": (
            {
                "name": patient.name,
                "age": patient.age,
                "gender": patient.gender,
                "phone": patient.phone,
            }
            if patient
            else None
        ),
    }
