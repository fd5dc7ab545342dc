"""/api/v1/session — start, act on, and inspect the play session."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from fable.api.dependencies import get_session_manager
from fable.api.schemas import (
    ActionRequest,
    ActionResponse,
    NarrationSchema,
    SessionStateResponse,
    StartRequest,
    StartResponse,
    TranscriptResponse,
)
from fable.api.session_manager import SessionManager, SessionNotStarted
from fable.engine.session import SessionRecovery
from fable.errors import ParseError

router = APIRouter()


@router.post("/session/start", response_model=StartResponse)
def start_session(
    body: StartRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> StartResponse:
    start = manager.start(body.log)
    result = start.result
    if isinstance(result, SessionRecovery):
        return StartResponse(status="recovered", error=result.error, log=result.restored_path)
    return StartResponse(
        status="restored",
        init_txt=result.init_txt,
        historic_txt=result.historic_txt,
        log=start.path,
    )


@router.post("/session/actions", response_model=ActionResponse)
def perform_action(
    body: ActionRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> ActionResponse:
    try:
        step, log = manager.act(body.command)
    except SessionNotStarted as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ParseError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ActionResponse(
        accepted=step.ok,
        text=step.text,
        error=step.error,
        turn=manager.turn,
        log=log,
    )


@router.get("/session", response_model=SessionStateResponse)
def get_session(
    manager: SessionManager = Depends(get_session_manager),
) -> SessionStateResponse:
    if not manager.started:
        raise HTTPException(status_code=409, detail="No session started.")
    return SessionStateResponse(**manager.view())


@router.get("/session/transcript", response_model=TranscriptResponse)
def get_transcript(
    since: int = Query(0, ge=0, description="Return narration from this turn onward"),
    manager: SessionManager = Depends(get_session_manager),
) -> TranscriptResponse:
    lines = manager.transcript.since_turn(since)
    return TranscriptResponse(
        turn=manager.turn,
        lines=[NarrationSchema(turn=line.turn, source=line.source, text=line.text) for line in lines],
    )
