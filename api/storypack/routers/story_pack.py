"""
Story Pack API endpoints.

- GET  /         : liveness text
- POST /convert  : feeds in, story pack JSON out
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from ..errors import InvalidScoringConfigError, StoryPackError
from ..services.scoring import load_scoring_config
from ..services.story_pack_service import StoryPackService
from .schemas import ConvertRequest, ErrorResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Story Pack API is running!"


@router.post(
    "/convert",
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def convert(request: ConvertRequest) -> dict[str, Any]:
    """Score the match feed and return the assembled story pack."""
    try:
        config = load_scoring_config(request.weights)
    except InvalidScoringConfigError as exc:
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc

    try:
        service = StoryPackService(request.match_feed, request.squad_feed)
        service.configure(config)
        pack = service.build(request.highlights)
    except StoryPackError as exc:
        logger.error("convert_failed", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process input",
        ) from exc
    except (AttributeError, KeyError, TypeError) as exc:
        # Feed documents whose nesting does not match the expected shape
        logger.exception("convert_malformed_feed", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process input",
        ) from exc

    return pack.to_json_dict()
