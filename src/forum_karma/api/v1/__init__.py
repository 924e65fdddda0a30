"""Version 1 API endpoints."""

from .endpoints import admin_router, users_router, votes_router

__all__ = [
    "admin_router",
    "users_router",
    "votes_router",
]
