"""
Pydantic schemas for the story pack conversion endpoint.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ConvertRequest(BaseModel):
    """Raw feeds for one match, plus optional weights and highlight count."""

    match_feed: dict[str, Any] = Field(..., description="Commentary feed (matchInfo + messages)")
    squad_feed: dict[str, Any] = Field(..., description="Squad feed (squad[*].person[*])")
    weights: dict[str, Any] | None = Field(
        default=None,
        description="Scoring weights document; the bundled weights when omitted",
    )
    highlights: int | None = Field(
        default=None,
        ge=0,
        description="Number of highlight pages; HIGHLIGHT_COUNT when omitted",
    )


class ErrorResponse(BaseModel):
    detail: str | list[dict[str, Any]]
