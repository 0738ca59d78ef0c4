"""
Pydantic schemas for the story pack output.

A story pack is an ordered list of pages (one cover, one highlight per
selected event, one closing info page) plus summary metrics and
provenance. These models are the authoritative output contract; anything
written to disk or returned over HTTP is validated against them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError

from ...errors import StoryPackValidationError
from ...utils.datetime_utils import to_iso_z

MAX_HIGHLIGHT_MINUTE = 130


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must contain non-whitespace text")
    return value


NonEmptyStr = Annotated[str, AfterValidator(_require_text)]


# ============================================================================
# PAGES
# ============================================================================


class CoverPage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["cover"] = "cover"
    headline: NonEmptyStr
    subheadline: str | None = None
    image: NonEmptyStr


class HighlightPage(BaseModel):
    """One selected event rendered as a slide."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["highlight"] = "highlight"
    minute: int = Field(..., ge=0, le=MAX_HIGHLIGHT_MINUTE)
    headline: NonEmptyStr
    caption: NonEmptyStr
    image: str | None = None
    explanation: str | None = None


class InfoPage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["info"] = "info"
    headline: NonEmptyStr
    body: str | None = None


StoryPage = Annotated[
    Union[CoverPage, HighlightPage, InfoPage],
    Field(discriminator="type"),
]


# ============================================================================
# STORY PACK
# ============================================================================


class StoryMetrics(BaseModel):
    """Summary counts. Extra integer metrics are allowed."""

    model_config = ConfigDict(frozen=True, extra="allow")

    goals: int | None = Field(default=None, ge=0)
    highlights: int | None = Field(default=None, ge=0)


class StoryPack(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    story_id: NonEmptyStr
    title: NonEmptyStr
    pages: list[StoryPage]
    metrics: StoryMetrics | None = None
    source: NonEmptyStr
    created_at: datetime

    @property
    def highlight_pages(self) -> list[HighlightPage]:
        return [page for page in self.pages if isinstance(page, HighlightPage)]

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-ready dict with ``Z``-suffixed timestamps and no null fields."""
        data = self.model_dump(mode="json", exclude_none=True)
        data["created_at"] = to_iso_z(self.created_at)
        return data


def validate_story_pack(data: Mapping[str, Any]) -> StoryPack:
    """Validate an arbitrary mapping against the StoryPack contract.

    Raises:
        StoryPackValidationError: listing every violation found
    """
    try:
        return StoryPack.model_validate(data)
    except ValidationError as exc:
        errors = [
            {
                "path": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        raise StoryPackValidationError(
            f"Story pack failed validation with {len(errors)} error(s)",
            errors=errors,
        ) from exc
