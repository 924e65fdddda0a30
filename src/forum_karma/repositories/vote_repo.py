"""Authoritative vote storage.

The repository is a plain key-value map from (voter, target) to a vote value.
It does not decide whether a transition is legal; uniqueness of the pair is
enforced by the ``vote`` table's unique constraints.
"""
from __future__ import annotations

from sqlalchemy import and_, case, func, select
from sqlalchemy.orm import Session

from forum_karma.domain.targets import PostTarget, Target, TargetKind
from forum_karma.models import Comment, Post, Vote

__all__ = ["VoteRepository"]


def _target_clause(target: Target):
    if isinstance(target, PostTarget):
        return Vote.post_id == target.id
    return Vote.comment_id == target.id


class VoteRepository:
    """Thin wrapper around database access for vote rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(self, voter_id: int, target: Target, *, for_update: bool = False) -> Vote | None:
        """Return the voter's vote on ``target`` or ``None``.

        ``for_update`` locks the row until the enclosing transaction ends on
        backends that support row locks.
        """
        stmt = select(Vote).where(Vote.voter_id == voter_id, _target_clause(target))
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalars().first()

    def get_value(self, voter_id: int, target: Target) -> int:
        """Return the stored value, or 0 when the voter holds no vote."""
        vote = self.get(voter_id, target)
        return vote.value if vote is not None else 0

    def get_by_id(self, vote_id: int, *, for_update: bool = False) -> Vote | None:
        """Return a vote by primary key."""
        stmt = select(Vote).where(Vote.id == vote_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalars().first()

    def upsert(
        self,
        voter_id: int,
        target: Target,
        value: int,
        existing: Vote | None = None,
    ) -> Vote:
        """Create the voter's vote on ``target`` or update it in place.

        A concurrent insert of the same pair surfaces as ``IntegrityError``
        on flush.
        """
        vote = existing if existing is not None else self.get(voter_id, target, for_update=True)
        if vote is not None:
            vote.value = value
        else:
            vote = Vote(
                voter_id=voter_id,
                post_id=target.id if target.kind is TargetKind.POST else None,
                comment_id=target.id if target.kind is TargetKind.COMMENT else None,
                value=value,
            )
            self.session.add(vote)
        self.session.flush()
        return vote

    def delete(self, vote: Vote) -> None:
        """Remove a vote row."""
        self.session.delete(vote)
        self.session.flush()

    def tally(self, target: Target) -> tuple[int, int]:
        """Return ``(upvotes, downvotes)`` counted directly from vote rows."""
        stmt = select(
            func.coalesce(func.sum(case((Vote.value == 1, 1), else_=0)), 0),
            func.coalesce(func.sum(case((Vote.value == -1, 1), else_=0)), 0),
        ).where(_target_clause(target))
        upvotes, downvotes = self.session.execute(stmt).one()
        return int(upvotes), int(downvotes)

    def sum_received(self, author_id: int, kind: TargetKind) -> int:
        """Return the net vote value other users cast on ``author_id``'s content."""
        if kind is TargetKind.POST:
            content = Post
            join_on = Vote.post_id == Post.id
        else:
            content = Comment
            join_on = Vote.comment_id == Comment.id
        stmt = (
            select(func.coalesce(func.sum(Vote.value), 0))
            .select_from(Vote)
            .join(content, join_on)
            .where(and_(content.author_id == author_id, Vote.voter_id != author_id))
        )
        return int(self.session.execute(stmt).scalar_one())
