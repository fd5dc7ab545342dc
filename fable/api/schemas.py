"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Session ---

class StartRequest(BaseModel):
    log: str = Field("", description="Previously persisted history log; empty for a new game.")


class StartResponse(BaseModel):
    status: str                       # "restored" or "recovered"
    init_txt: list[str] = []
    historic_txt: list[str] = []
    error: str | None = None
    log: str                          # the log the client should persist now


class ActionRequest(BaseModel):
    command: str = Field(..., examples=["take lamp", "use key with door", "talk to keeper"])


class ActionResponse(BaseModel):
    accepted: bool
    text: list[str] = []
    error: str | None = None
    turn: int
    log: str


class SessionStateResponse(BaseModel):
    turn: int
    room: str
    visible: list[str]
    exits: list[str]
    inventory: list[str]
    say_options: list[str]
    history: list[str]
    log: str


# --- Transcript ---

class NarrationSchema(BaseModel):
    turn: int
    source: str
    text: str


class TranscriptResponse(BaseModel):
    turn: int
    lines: list[NarrationSchema]


# --- Config ---

class EngineConfigResponse(BaseModel):
    story_file: str
    story_title: str
    transcript_limit: int
    log_level: str
