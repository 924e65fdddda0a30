"""SQLAlchemy models for the forum karma service."""

from .comment import Comment
from .moderation import ModerationLogEntry
from .notification import Notification
from .post import Post
from .user import User
from .vote import Vote

__all__ = [
    "Comment",
    "ModerationLogEntry",
    "Notification",
    "Post",
    "User",
    "Vote",
]
