"""Entry point: ``python -m fable``.

Supports two modes:
  - ``python -m fable``                        → Launch the FastAPI session server
  - ``python -m fable replay STORY --save F``  → Headless replay of a saved history log
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive-fiction session history and replay")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI session server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--story", type=str, default="story.json")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless replay ---
    rep = sub.add_parser("replay", help="Replay a saved history log and print the narration")
    rep.add_argument("story", type=str)
    rep.add_argument("--save", type=str, default="save.txt")
    rep.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from fable.api.app import create_app
    from fable.config import EngineConfig

    config = EngineConfig(story_file=args.story, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_replay(args: argparse.Namespace) -> int:
    from fable.config import EngineConfig
    from fable.engine.session import SessionRecovery, init_story
    from fable.story.loader import load_story
    from fable.story.state import StoryState
    from fable.utils.logging import setup_logging

    config = EngineConfig(story_file=args.story, save_file=args.save, log_level=args.log_level)
    setup_logging(config.log_level)

    story = load_story(config.story_file)
    save_path = Path(config.save_file)
    log = save_path.read_text(encoding="utf-8") if save_path.exists() else ""

    result = init_story(log, StoryState(story))
    if isinstance(result, SessionRecovery):
        logger.error("History could not be fully restored: %s", result.error)
        save_path.write_text(result.restored_path, encoding="utf-8")
        logger.info("Rewrote %s with the %d restorable entries", save_path,
                    len(result.restored_path.splitlines()))
        return 1

    for line in result.init_txt + result.historic_txt:
        print(line)
    return 0


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "replay":
        sys.exit(_run_replay(args))


if __name__ == "__main__":
    main()
