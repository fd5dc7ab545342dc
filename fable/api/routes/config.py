"""GET /api/v1/config — expose engine configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from fable.api.dependencies import get_session_manager
from fable.api.schemas import EngineConfigResponse
from fable.api.session_manager import SessionManager

router = APIRouter()


@router.get("/config", response_model=EngineConfigResponse)
def get_config(
    manager: SessionManager = Depends(get_session_manager),
) -> EngineConfigResponse:
    cfg = manager.config
    return EngineConfigResponse(
        story_file=cfg.story_file,
        story_title=manager.story.title,
        transcript_limit=cfg.transcript_limit,
        log_level=cfg.log_level,
    )
