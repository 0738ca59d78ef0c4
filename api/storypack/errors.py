"""Exception hierarchy for story-pack generation.

Only conditions the caller can act on are exceptions. A malformed event
(a goal without a team reference) or a lookup miss (unknown player, absent
weight) is never an error: the affected rule does not fire, or a neutral
fallback applies.
"""

from __future__ import annotations


class StoryPackError(Exception):
    """Base class for all story-pack failures."""

    pass


class ConfigurationMissingError(StoryPackError):
    """Raised when scoring is requested before a ScoringConfig is supplied."""

    def __init__(
        self,
        message: str = "Scoring configuration not loaded. Call load_configuration() first.",
    ) -> None:
        super().__init__(message)


class InvalidScoringConfigError(StoryPackError):
    """Raised when a weights document does not match the ScoringConfig shape."""

    pass


class FeedLoadError(StoryPackError):
    """Raised when an input JSON document cannot be read or parsed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class StoryPackValidationError(StoryPackError):
    """Raised when a story pack fails schema validation."""

    def __init__(self, message: str, errors: list[dict] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class AssemblyError(StoryPackError):
    """Raised when a selected event cannot be turned into a highlight page."""

    pass
