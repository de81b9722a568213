"""Application bootstrap, configuration check and session registry."""

import os
from typing import Callable, Protocol

from .config import env_flag
from .errors import ConfigurationError
from .gateway import AIGateway, IAIGateway
from .logging_config import get_logger
from .models import Language, PatientInfo
from .session import ConversationSession
from .speech import ISpeechRecognizer, create_speech_recognizer
from .tracker import ITracker, Tracker

logger = get_logger(__name__)

GatewayFactory = Callable[[str | None], IAIGateway]
RecognizerFactory = Callable[[], ISpeechRecognizer]


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """End all sessions."""
        ...

    def configure(self, api_key: str) -> None:
        """Provide the chat credential at runtime."""
        ...

    async def start_session(
        self, language: Language | None = None, patient: PatientInfo | None = None
    ) -> ConversationSession:
        """Open a new conversation."""
        ...

    def get_session(self, session_id: str) -> ConversationSession:
        """Look up an active session."""
        ...

    async def end_session(self, session_id: str) -> None:
        """End and forget a session."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        gateway_factory: GatewayFactory | None = None,
        recognizer_factory: RecognizerFactory | None = None,
        require_patient_info: bool | None = None,
        default_language: Language | str | None = None,
    ):
        self._gateway_factory = gateway_factory or (lambda key: AIGateway(api_key=key))
        self._recognizer_factory = recognizer_factory or create_speech_recognizer
        self._require_patient_info = (
            env_flag("REQUIRE_PATIENT_INFO")
            if require_patient_info is None
            else require_patient_info
        )
        self._default_language = Language(
            default_language or os.getenv("DEFAULT_LANGUAGE", Language.EN.value)
        )

        # Components (initialized in start())
        self._tracker: ITracker | None = None
        self._gateway: IAIGateway | None = None
        self._sessions: dict[str, ConversationSession] = {}

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Tracker (no dependencies)
        self._tracker = Tracker()

        # 2. Gateway; a missing credential leaves the app unconfigured
        try:
            self._gateway = self._gateway_factory(None)
            logger.info("AI gateway initialized")
        except ConfigurationError as e:
            self._gateway = None
            logger.warning("AI gateway not configured: %s", e)

    async def stop(self) -> None:
        """End every open session."""
        for session_id in list(self._sessions):
            await self.end_session(session_id)
        logger.info("Application stopped")

    def configure(self, api_key: str) -> None:
        """Build the gateway with an explicitly supplied credential."""
        if not api_key or not api_key.strip():
            raise ConfigurationError("API key must not be empty")
        self._gateway = self._gateway_factory(api_key.strip())
        logger.info("AI gateway configured at runtime")

    @property
    def is_configured(self) -> bool:
        return self._gateway is not None

    @property
    def require_patient_info(self) -> bool:
        return self._require_patient_info

    @property
    def default_language(self) -> Language:
        return self._default_language

    async def start_session(
        self,
        language: Language | None = None,
        patient: PatientInfo | None = None,
    ) -> ConversationSession:
        """Open a new conversation seeded with the localized greeting."""
        if self._gateway is None:
            raise ConfigurationError("AI gateway is not configured")
        if self._require_patient_info and patient is None:
            raise ValueError("Patient information is required to start a session")

        session = ConversationSession(
            gateway=self._gateway,
            tracker=self.tracker,
            language=language or self._default_language,
            patient=patient,
            recognizer=self._recognizer_factory(),
        )
        self._sessions[session.id] = session

        logger.info("Session %s started", session.id)
        await self.tracker.track(
            event_type="session_started",
            actor="application",
            data={
                "session_id": session.id,
                "language": session.language.value,
                "has_patient": patient is not None,
            },
        )
        return session

    def get_session(self, session_id: str) -> ConversationSession:
        """Raises KeyError for unknown or ended sessions."""
        return self._sessions[session_id]

    async def end_session(self, session_id: str) -> None:
        session = self._sessions.pop(session_id)
        await session.end_session()

    @property
    def sessions(self) -> dict[str, ConversationSession]:
        return dict(self._sessions)

    @property
    def tracker(self) -> ITracker:
        """Get tracker instance."""
        if not self._tracker:
            raise RuntimeError("Application not started")
        return self._tracker
