"""Engine configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for a server or headless replay run."""

    # Story
    story_file: str = "story.json"

    # History log read and rewritten by the headless CLI
    save_file: str = "save.txt"

    # Transcript
    transcript_limit: int = 500            # narration lines kept for the API feed

    # Logging
    log_level: str = "INFO"
