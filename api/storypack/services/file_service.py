"""JSON file I/O for feeds, weights and story packs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..errors import FeedLoadError

logger = logging.getLogger(__name__)


def load_json(file_path: str | Path) -> Any:
    """Read and parse a UTF-8 JSON file.

    Raises:
        FeedLoadError: if the file is missing, unreadable or not valid JSON
    """
    path = Path(file_path).resolve()
    logger.info("file_load_started", extra={"path": str(path)})
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("file_load_failed", extra={"path": str(path), "error": str(exc)})
        raise FeedLoadError(f"Could not load JSON from {path}: {exc}", path=str(path)) from exc


def dump_json(file_path: str | Path, data: Any) -> Path:
    """Pretty-print ``data`` to ``file_path`` (2-space indent), creating parents."""
    path = Path(file_path).resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
    except OSError as exc:
        logger.error("file_write_failed", extra={"path": str(path), "error": str(exc)})
        raise
    logger.info("file_write_completed", extra={"path": str(path)})
    return path
