from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from storypack.config import settings
from storypack.errors import StoryPackError
from storypack.logging_config import configure_logging
from storypack.services.file_service import load_json
from storypack.services.story_pack_service import StoryPackService

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Score a match feed and write the top highlights as a story pack."
    )
    parser.add_argument(
        "--match-events",
        default=settings.match_events_path,
        help="Path to the match commentary feed JSON.",
    )
    parser.add_argument(
        "--squads",
        default=settings.squads_path,
        help="Path to the squads feed JSON.",
    )
    parser.add_argument(
        "--weights",
        default=settings.weights_path,
        help="Path to the scoring weights JSON (bundled weights when omitted).",
    )
    parser.add_argument(
        "--highlights",
        type=int,
        default=settings.highlight_count,
        help="Number of highlight pages to include.",
    )
    parser.add_argument(
        "--output",
        default=settings.story_output_path,
        help="Where to write the story pack JSON.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    configure_logging(service=f"{settings.service_name}-cli")
    args = _parse_args(argv)

    logger.info(
        "story_pack_cli_started",
        extra={"match_events": args.match_events, "highlights": args.highlights},
    )
    try:
        service = StoryPackService(load_json(args.match_events), load_json(args.squads))
        service.load_configuration(args.weights)
        pack = service.build(args.highlights)
        output = service.output_story_pack(pack, args.output)
    except StoryPackError as exc:
        logger.error("story_pack_cli_failed", extra={"error": str(exc)})
        raise SystemExit(1) from exc

    logger.info(
        "story_pack_cli_completed",
        extra={"story_id": pack.story_id, "output": str(output)},
    )


if __name__ == "__main__":
    main()
