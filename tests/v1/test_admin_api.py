# tests/v1/test_admin_api.py
from __future__ import annotations

from fastapi import status
from sqlalchemy import select

from forum_karma.domain.targets import PostTarget
from forum_karma.models import ModerationLogEntry, Vote
from forum_karma.services.voting import VotingService


def _upvote(db_session, voter, post) -> int:
    VotingService().cast_vote(db_session, PostTarget(post.id), voter.id, 1)
    return db_session.execute(select(Vote.id)).scalar_one()


def test_admin_retracts_vote(client, auth_headers, db_session, admin, author, voter, test_post) -> None:
    vote_id = _upvote(db_session, voter, test_post)
    url = f"/api/v1/admin/votes/{vote_id}/retract"

    response = client.post(url, json={"reason": "vote manipulation"}, headers=auth_headers(admin))
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {}

    db_session.refresh(test_post)
    db_session.refresh(author)
    assert (test_post.upvotes, test_post.score) == (0, 0)
    assert author.karma_post == 0
    assert db_session.execute(select(ModerationLogEntry)).scalars().one().reason == "vote manipulation"

    response = client.post(url, json={"reason": "vote manipulation"}, headers=auth_headers(admin))
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_non_admin_cannot_retract(client, auth_headers, db_session, voter, other_voter, test_post) -> None:
    vote_id = _upvote(db_session, voter, test_post)
    response = client.post(
        f"/api/v1/admin/votes/{vote_id}/retract",
        json={"reason": "spam"},
        headers=auth_headers(other_voter),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert db_session.get(Vote, vote_id) is not None


def test_retract_requires_reason(client, auth_headers, db_session, admin, voter, test_post) -> None:
    vote_id = _upvote(db_session, voter, test_post)
    response = client.post(
        f"/api/v1/admin/votes/{vote_id}/retract",
        json={"reason": ""},
        headers=auth_headers(admin),
    )
    assert response.status_code == 422


def test_recompute_user_karma(client, auth_headers, db_session, admin, author, voter, test_post) -> None:
    _upvote(db_session, voter, test_post)
    author.karma_post = 50
    db_session.commit()

    response = client.post(
        f"/api/v1/admin/users/{author.id}/karma/recompute",
        headers=auth_headers(admin),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"post": 1, "comment": 0, "awardee": 0, "awarder": 0, "total": 1}


def test_recompute_counters(client, auth_headers, db_session, admin, voter, test_post) -> None:
    _upvote(db_session, voter, test_post)
    test_post.upvotes = 9
    test_post.score = 9
    db_session.commit()

    response = client.post(
        f"/api/v1/admin/content/post/{test_post.id}/counters/recompute",
        headers=auth_headers(admin),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"upvotes": 1, "downvotes": 0, "score": 1}


def test_recompute_counters_missing_content(client, auth_headers, admin) -> None:
    response = client.post(
        "/api/v1/admin/content/comment/9999/counters/recompute",
        headers=auth_headers(admin),
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_read_user_karma(client, db_session, author, voter, test_post, test_comment) -> None:
    _upvote(db_session, voter, test_post)

    response = client.get(f"/api/v1/users/{author.id}/karma")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"post": 1, "comment": 0, "awardee": 0, "awarder": 0, "total": 1}


def test_read_karma_unknown_user(client) -> None:
    response = client.get("/api/v1/users/9999/karma")
    assert response.status_code == status.HTTP_404_NOT_FOUND
