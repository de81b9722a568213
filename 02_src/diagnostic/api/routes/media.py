"""Audio playback and speech capture routes."""

import base64
import binascii

from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel

from ...app import Application
from ...audio import to_wav_bytes
from ...errors import CapabilityUnavailable
from ...localization import strings_for
from ...models import ListeningState
from ..schemas import SpeechAudioRequest
from .sessions import lookup_session


class PlaybackResponse(BaseModel):
    playing_message_id: str | None


class ListeningResponse(BaseModel):
    listening: bool
    draft: str


def create_media_router(app: Application) -> APIRouter:
    """Create audio and speech router."""
    router = APIRouter(prefix="/api/sessions", tags=["media"])

    @router.post(
        "/{session_id}/messages/{message_id}/audio",
        response_model=PlaybackResponse,
    )
    async def play_audio(session_id: str, message_id: str) -> dict:
        """Play speech for a message; a second call for the same message stops it."""
        session = lookup_session(app, session_id)
        try:
            state = await session.play_audio(message_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Message not found")
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"playing_message_id": state.message_id}

    @router.delete("/{session_id}/audio", response_model=PlaybackResponse)
    async def stop_audio(session_id: str) -> dict:
        session = lookup_session(app, session_id)
        await session.stop_audio()
        return {"playing_message_id": None}

    @router.get("/{session_id}/audio")
    async def get_audio(session_id: str) -> Response:
        """The clip currently playing, as WAV."""
        session = lookup_session(app, session_id)
        clip = session.player.output.current
        if clip is None:
            raise HTTPException(status_code=404, detail="Nothing is playing")
        return Response(
            content=to_wav_bytes(clip.samples, clip.sample_rate),
            media_type="audio/wav",
        )

    @router.post("/{session_id}/speech/toggle", response_model=ListeningResponse)
    async def toggle_listening(session_id: str) -> dict:
        """Start or stop speech capture."""
        session = lookup_session(app, session_id)
        try:
            state = await session.toggle_listening()
        except CapabilityUnavailable:
            raise HTTPException(
                status_code=501,
                detail={
                    "message": strings_for(session.language).capability_notice,
                    "blocking": True,
                },
            )
        return {"listening": state is ListeningState.LISTENING, "draft": session.draft}

    @router.post("/{session_id}/speech/audio", status_code=202)
    async def submit_speech_audio(session_id: str, request: SpeechAudioRequest) -> dict:
        """Deliver the recorded utterance to the active capture."""
        session = lookup_session(app, session_id)
        recognizer = session.capture.recognizer
        if not recognizer.is_available():
            raise HTTPException(status_code=501, detail="Speech recognition is not available")
        try:
            audio = base64.b64decode(request.data, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(status_code=400, detail="Invalid base64 audio")
        if not recognizer.submit_audio(audio, request.mime_type):
            raise HTTPException(status_code=409, detail="Not listening")
        return {"accepted": True}

    return router
