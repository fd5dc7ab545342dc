"""Load story definitions from JSON files."""

from __future__ import annotations

import logging
from pathlib import Path

from fable.story.schema import Story

logger = logging.getLogger(__name__)


def load_story(path: str | Path) -> Story:
    """Read and validate a story file. Raises ``pydantic.ValidationError`` on bad content."""
    path = Path(path)
    story = Story.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info(
        "Loaded story %r from %s (%d rooms, %d objects)",
        story.title, path, len(story.rooms), len(story.objects),
    )
    return story
