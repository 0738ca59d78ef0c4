from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storypack.config import settings
from storypack.logging_config import configure_logging
from storypack.middleware.logging import StructuredLoggingMiddleware
from storypack.routers import story_pack

configure_logging(service=f"{settings.service_name}-api")

app = FastAPI(title="storypack", version="1.0.0")

app.add_middleware(StructuredLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(story_pack.router)


@app.get("/healthz")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
