"""Main entry point for the forum karma service."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from forum_karma.api.v1 import admin_router, users_router, votes_router
from forum_karma.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description="Vote and karma consistency engine for the forum API",
    version=settings.app_version,
)

app.include_router(votes_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("forum_karma.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
