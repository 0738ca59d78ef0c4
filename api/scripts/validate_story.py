from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from storypack.errors import StoryPackError, StoryPackValidationError
from storypack.services.file_service import load_json
from storypack.services.story import validate_story_pack


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a story pack JSON file.")
    parser.add_argument("path", help="Path to the story JSON file.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    try:
        validate_story_pack(load_json(args.path))
    except StoryPackValidationError as exc:
        print(f"{args.path} is invalid!", file=sys.stderr)
        print(json.dumps(exc.errors, indent=2), file=sys.stderr)
        raise SystemExit(1) from exc
    except StoryPackError as exc:
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"{args.path} is valid according to the story pack schema")


if __name__ == "__main__":
    main()
