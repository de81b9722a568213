"""Conversation data models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Literal

Role = Literal["user", "assistant"]


class Language(str, Enum):
    """Session language."""

    EN = "en"
    ZH = "zh"


class DataCategory(str, Enum):
    """Structured test data categories."""

    BLOOD = "blood"
    URINE = "urine"
    PULSE = "pulse"
    STOOL = "stool"


@dataclass(frozen=True)
class EncodedImage:
    """An image in transport encoding (raw base64, no data-URI prefix)."""

    mime_type: str
    data: str

    @property
    def data_uri(self) -> str:
        """Preview form for rendering."""
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass(frozen=True)
class Message:
    """A single turn in the conversation log."""

    role: Role
    text: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    attachment: EncodedImage | None = None
    directive: str | None = None  # sent to the backend in place of text

    @property
    def prompt_text(self) -> str:
        """Text this turn contributes to the backend history."""
        return self.directive if self.directive is not None else self.text


@dataclass(frozen=True)
class PatientInfo:
    """Session-scoped patient profile."""

    name: str
    age: str
    gender: str
    phone: str

    def __post_init__(self) -> None:
        for field_name in ("name", "age", "gender", "phone"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Patient {field_name} is required")
