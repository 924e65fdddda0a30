"""Tagged vote targets.

A vote applies to exactly one post or exactly one comment. Representing the
target as a small variant type keeps that rule out of runtime validation.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar


class TargetKind(str, enum.Enum):
    """Kind of content a vote can be cast on."""

    POST = "post"
    COMMENT = "comment"


@dataclass(frozen=True)
class PostTarget:
    """Vote target pointing at a post."""

    id: int
    kind: ClassVar[TargetKind] = TargetKind.POST


@dataclass(frozen=True)
class CommentTarget:
    """Vote target pointing at a comment."""

    id: int
    kind: ClassVar[TargetKind] = TargetKind.COMMENT


Target = PostTarget | CommentTarget


def make_target(kind: TargetKind | str, target_id: int) -> Target:
    """Build the target variant for ``kind``.

    Raises:
        ValueError: If ``kind`` is not a known target kind.
    """
    kind = TargetKind(kind)
    if kind is TargetKind.POST:
        return PostTarget(target_id)
    return CommentTarget(target_id)
