# mypy: ignore-errors
# tests/v1/test_reports.py
"""Tests for report endpoints."""

from fastapi import status


def test_submit_report(client, other_auth_token, question) -> None:
    response = client.post(
        "/api/v1/reports/",
        json={"content_type": "question", "content_id": question.id, "reason": "spam"},
        headers=other_auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["status"] == "pending"
    assert data["severity"] == "medium"
    assert data["action_taken"] == "none"


def test_moderator_report_flags_answer(client, moderator_token, answer) -> None:
    response = client.post(
        "/api/v1/reports/",
        json={"content_type": "answer", "content_id": answer.id, "reason": "abuse"},
        headers=moderator_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["severity"] == "high"

    fetched = client.get(f"/api/v1/answers/{answer.id}")
    assert fetched.json()["status"] == "flagged"


def test_report_missing_content(client, auth_token) -> None:
    response = client.post(
        "/api/v1/reports/",
        json={"content_type": "answer", "content_id": 404404, "reason": "spam"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_report_requires_reason(client, auth_token, question) -> None:
    response = client.post(
        "/api/v1/reports/",
        json={"content_type": "question", "content_id": question.id, "reason": ""},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_report_visible_to_filer_and_moderators_only(
    client, auth_token, other_auth_token, moderator_token, question
) -> None:
    created = client.post(
        "/api/v1/reports/",
        json={"content_type": "question", "content_id": question.id, "reason": "spam"},
        headers=other_auth_token,
    ).json()

    url = f"/api/v1/reports/{created['id']}"
    assert client.get(url, headers=other_auth_token).status_code == status.HTTP_200_OK
    assert client.get(url, headers=moderator_token).status_code == status.HTTP_200_OK
    assert client.get(url, headers=auth_token).status_code == status.HTTP_403_FORBIDDEN
