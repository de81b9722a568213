"""Conversation session routes."""

from fastapi import APIRouter, HTTPException

from ...app import Application
from ...errors import ConfigurationError
from ...imaging import parse_data_uri
from ...session import ConversationSession
from ..schemas import (
    AttachmentRequest,
    DraftRequest,
    LanguageRequest,
    SendMessageRequest,
    SendResponse,
    SessionResponse,
    StartSessionRequest,
    StructuredDataRequest,
    message_to_response,
    session_to_response,
)


def lookup_session(app: Application, session_id: str) -> ConversationSession:
    """Resolve a session or raise 404."""
    try:
        return app.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Session not found")


def create_sessions_router(app: Application) -> APIRouter:
    """Create session router."""
    router = APIRouter(prefix="/api/sessions", tags=["sessions"])

    def send_response(session: ConversationSession, reply) -> dict:
        return {
            "accepted": reply is not None,
            "reply": message_to_response(reply) if reply else None,
            "session": session_to_response(session),
        }

    @router.post("", response_model=SessionResponse, status_code=201)
    async def start_session(request: StartSessionRequest) -> dict:
        """Start a conversation, optionally with a patient profile."""
        try:
            patient = request.patient.to_patient() if request.patient else None
            session = await app.start_session(language=request.language, patient=patient)
        except ConfigurationError as e:
            raise HTTPException(
                status_code=503,
                detail={"message": str(e), "action": "configure"},
            )
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return session_to_response(session)

    @router.get("/{session_id}", response_model=SessionResponse)
    async def get_session(session_id: str) -> dict:
        return session_to_response(lookup_session(app, session_id))

    @router.delete("/{session_id}", status_code=204)
    async def end_session(session_id: str) -> None:
        """End the session and return to the start screen."""
        lookup_session(app, session_id)
        await app.end_session(session_id)

    @router.put("/{session_id}/language", response_model=SessionResponse)
    async def set_language(session_id: str, request: LanguageRequest) -> dict:
        session = lookup_session(app, session_id)
        session.set_language(request.language)
        return session_to_response(session)

    @router.put("/{session_id}/draft", response_model=SessionResponse)
    async def set_draft(session_id: str, request: DraftRequest) -> dict:
        session = lookup_session(app, session_id)
        session.set_draft(request.text)
        return session_to_response(session)

    @router.put("/{session_id}/attachment", response_model=SessionResponse)
    async def stage_attachment(session_id: str, request: AttachmentRequest) -> dict:
        """Stage one image for the next message."""
        session = lookup_session(app, session_id)
        try:
            image = parse_data_uri(request.data_uri)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        session.stage_attachment(image)
        return session_to_response(session)

    @router.delete("/{session_id}/attachment", response_model=SessionResponse)
    async def remove_attachment(session_id: str) -> dict:
        session = lookup_session(app, session_id)
        session.remove_attachment()
        return session_to_response(session)

    @router.post("/{session_id}/messages", response_model=SendResponse)
    async def send_message(session_id: str, request: SendMessageRequest) -> dict:
        """Send the draft (or the given text) with any staged image."""
        session = lookup_session(app, session_id)
        reply = await session.submit_message(request.text)
        return send_response(session, reply)

    @router.post("/{session_id}/structured-data", response_model=SendResponse)
    async def send_structured_data(session_id: str, request: StructuredDataRequest) -> dict:
        session = lookup_session(app, session_id)
        reply = await session.submit_structured_data(request.category, request.value)
        return send_response(session, reply)

    @router.post("/{session_id}/formal-document", response_model=SendResponse)
    async def request_formal_document(session_id: str) -> dict:
        session = lookup_session(app, session_id)
        reply = await session.request_formal_document()
        return send_response(session, reply)

    return router
