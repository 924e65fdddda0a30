"""Endpoint routers for API v1."""

from .admin import router as admin_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = ["admin_router", "users_router", "votes_router"]
