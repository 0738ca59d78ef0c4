"""Configuration for the story-pack service."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults for local runs."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(__file__), "..", "..", ".env"),
        env_file_encoding="utf-8",
        extra="allow",
    )

    service_name: str = Field(default="storypack", alias="SERVICE_NAME")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str | None = Field(default=None, alias="LOG_LEVEL")

    match_events_path: str = Field(default="data/match_events.json", alias="MATCH_EVENTS_PATH")
    squads_path: str = Field(default="data/squads.json", alias="SQUADS_PATH")
    # None means the weights bundled with the package
    weights_path: str | None = Field(default=None, alias="WEIGHTS_PATH")
    story_output_path: str = Field(default="out/story.json", alias="STORY_OUTPUT_PATH")

    highlight_count: int = Field(default=10, alias="HIGHLIGHT_COUNT", ge=0)
    story_source: str = Field(default="match_events.json", alias="STORY_SOURCE")
    cover_image: str = Field(default="images/cover.jpg", alias="COVER_IMAGE")

    @property
    def allowed_cors_origins(self) -> list[str]:
        """Allow local dev ports for the web UI."""
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
