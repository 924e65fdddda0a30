"""Content lookup and counter storage for posts and comments."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from forum_karma.domain.counters import CounterDelta
from forum_karma.domain.targets import PostTarget, Target
from forum_karma.models import Comment, Post

__all__ = ["ContentRef", "ContentRepository", "Counters"]


@dataclass(frozen=True)
class ContentRef:
    """What the engine needs to know about a vote target."""

    target: Target
    author_id: int
    is_locked: bool
    deleted: bool


@dataclass(frozen=True)
class Counters:
    """Snapshot of a content item's vote counters."""

    upvotes: int
    downvotes: int
    score: int


def _model_for(target: Target) -> type[Post] | type[Comment]:
    return Post if isinstance(target, PostTarget) else Comment


class ContentRepository:
    """Reads content metadata and moves vote counters with SQL-side increments."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def lookup(self, target: Target) -> ContentRef | None:
        """Return author and lock state for ``target``, or ``None`` if it does not exist.

        A comment counts as locked when it or its parent post is locked.
        """
        if isinstance(target, PostTarget):
            row = self.session.execute(
                select(Post.author_id, Post.is_locked, Post.deleted).where(Post.id == target.id)
            ).first()
            if row is None:
                return None
            return ContentRef(target, row.author_id, bool(row.is_locked), bool(row.deleted))

        row = self.session.execute(
            select(
                Comment.author_id,
                Comment.is_locked,
                Comment.deleted,
                Post.is_locked.label("post_locked"),
            )
            .join(Post, Comment.post_id == Post.id)
            .where(Comment.id == target.id)
        ).first()
        if row is None:
            return None
        return ContentRef(
            target,
            row.author_id,
            bool(row.is_locked or row.post_locked),
            bool(row.deleted),
        )

    def read_counters(self, target: Target) -> Counters:
        """Return the stored counters for ``target``."""
        model = _model_for(target)
        row = self.session.execute(
            select(model.upvotes, model.downvotes, model.score).where(model.id == target.id)
        ).one()
        return Counters(upvotes=row.upvotes, downvotes=row.downvotes, score=row.score)

    def apply_delta(self, target: Target, delta: CounterDelta) -> None:
        """Add ``delta`` to the counters in a single UPDATE statement."""
        if delta.is_noop:
            return
        model = _model_for(target)
        self.session.execute(
            update(model)
            .where(model.id == target.id)
            .values(
                upvotes=model.upvotes + delta.up,
                downvotes=model.downvotes + delta.down,
                score=model.score + delta.score,
            )
        )

    def replace_counters(self, target: Target, counters: Counters) -> None:
        """Overwrite the stored counters for ``target``."""
        model = _model_for(target)
        self.session.execute(
            update(model)
            .where(model.id == target.id)
            .values(
                upvotes=counters.upvotes,
                downvotes=counters.downvotes,
                score=counters.score,
            )
        )
