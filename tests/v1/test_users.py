# mypy: ignore-errors
# tests/v1/test_users.py
"""Tests for user administration endpoints."""

from fastapi import status


def test_admin_deletes_user(client, admin_token, auth_token, test_user, question, answer) -> None:
    question_id = question.id

    response = client.delete(f"/api/v1/users/{test_user.id}", headers=admin_token)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["deleted_questions"] == 1
    assert data["deleted_answers"] == 1
    # The deleted account's token no longer authenticates.
    again = client.get(f"/api/v1/votes/question/{question_id}/my-vote", headers=auth_token)
    assert again.status_code == status.HTTP_401_UNAUTHORIZED


def test_moderator_cannot_delete_user(client, moderator_token, test_user) -> None:
    response = client.delete(f"/api/v1/users/{test_user.id}", headers=moderator_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_delete_missing_user(client, admin_token) -> None:
    response = client.delete("/api/v1/users/424242", headers=admin_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_bad_token_rejected(client, test_user) -> None:
    response = client.delete(
        f"/api/v1/users/{test_user.id}", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
