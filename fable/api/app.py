"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fable.api.dependencies import set_session_manager
from fable.api.routes import api_router
from fable.api.session_manager import SessionManager
from fable.config import EngineConfig
from fable.utils.logging import setup_logging

if TYPE_CHECKING:
    from fable.story.schema import Story

logger = logging.getLogger(__name__)


def create_app(config: EngineConfig | None = None, story: Story | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    *story* overrides loading ``config.story_file``.
    """
    if config is None:
        config = EngineConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = SessionManager(_config, story=story)
        set_session_manager(manager)
        logger.info("API server started — story %r loaded.", manager.story.title)
        yield
        set_session_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Fable Session API",
        description=(
            "Interactive-fiction session history and replay.\n\n"
            "## API Groups\n\n"
            "- **Session** — Start or restore a session from a saved log, perform actions, inspect state\n"
            "- **Config** — Read-only engine configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Session", "description": "Start or resume a play session from a persisted history log, send player commands, read the narration transcript. Every action response carries the log to persist."},
            {"name": "Config", "description": "Read-only engine configuration and the loaded story title."},
        ],
    )

    # CORS — allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
