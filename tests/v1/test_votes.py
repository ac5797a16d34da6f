# mypy: ignore-errors
# tests/v1/test_votes.py
"""Tests for vote-related endpoints."""

from fastapi import status


def _vote(client, headers, content_type, content_id, direction):
    return client.post(
        "/api/v1/votes/",
        json={"content_type": content_type, "content_id": content_id, "direction": direction},
        headers=headers,
    )


def test_cast_upvote(client, auth_token, test_user, question) -> None:
    response = _vote(client, auth_token, "question", question.id, "up")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["votes"] == 1
    assert body["voters"] == [{"user_id": test_user.id, "vote": 1}]


def test_duplicate_vote_conflicts(client, auth_token, answer) -> None:
    assert _vote(client, auth_token, "answer", answer.id, "down").status_code == 200

    response = _vote(client, auth_token, "answer", answer.id, "down")

    assert response.status_code == status.HTTP_409_CONFLICT
    assert "already voted" in response.json()["detail"]


def test_flip_vote(client, auth_token, other_auth_token, question) -> None:
    _vote(client, other_auth_token, "question", question.id, "up")
    _vote(client, auth_token, "question", question.id, "up")

    response = _vote(client, auth_token, "question", question.id, "down")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["votes"] == 0


def test_vote_invalid_direction(client, auth_token, question) -> None:
    response = _vote(client, auth_token, "question", question.id, "sideways")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_vote_invalid_content_type(client, auth_token, question) -> None:
    response = _vote(client, auth_token, "comment", question.id, "up")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_vote_nonexistent_content(client, auth_token) -> None:
    response = _vote(client, auth_token, "question", 99999, "up")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_vote_requires_auth(client, question) -> None:
    response = client.post(
        "/api/v1/votes/",
        json={"content_type": "question", "content_id": question.id, "direction": "up"},
    )
    assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


def test_my_vote(client, auth_token, other_auth_token, answer) -> None:
    _vote(client, auth_token, "answer", answer.id, "down")

    mine = client.get(f"/api/v1/votes/answer/{answer.id}/my-vote", headers=auth_token)
    theirs = client.get(f"/api/v1/votes/answer/{answer.id}/my-vote", headers=other_auth_token)

    assert mine.json()["vote"] == -1
    assert theirs.json()["vote"] == 0
