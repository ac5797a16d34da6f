# mypy: ignore-errors
# tests/v1/test_moderation.py
"""Tests for moderation endpoints."""

from fastapi import status


def _report(client, headers, content_type, content_id, reason="spam") -> dict:
    response = client.post(
        "/api/v1/reports/",
        json={"content_type": content_type, "content_id": content_id, "reason": reason},
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def test_resolve_closes_every_pending_report(
    client, auth_token, other_auth_token, moderator_token, question
) -> None:
    first = _report(client, auth_token, "question", question.id)
    second = _report(client, other_auth_token, "question", question.id)

    response = client.put(
        f"/api/v1/moderation/reports/{first['id']}",
        json={"action": "approve", "note": "fine"},
        headers=moderator_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "reviewed"
    other = client.get(f"/api/v1/reports/{second['id']}", headers=moderator_token).json()
    assert other["status"] == "reviewed"
    assert client.get(f"/api/v1/questions/{question.id}").json()["status"] == "open"


def test_resolve_twice_conflicts(client, other_auth_token, moderator_token, question) -> None:
    report = _report(client, other_auth_token, "question", question.id)
    url = f"/api/v1/moderation/reports/{report['id']}"
    client.put(url, json={"action": "remove"}, headers=moderator_token)

    response = client.put(url, json={"action": "approve"}, headers=moderator_token)

    assert response.status_code == status.HTTP_409_CONFLICT


def test_regular_user_cannot_moderate(client, auth_token, other_auth_token, question) -> None:
    report = _report(client, other_auth_token, "question", question.id)

    response = client.put(
        f"/api/v1/moderation/reports/{report['id']}",
        json={"action": "approve"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_unknown_action_is_rejected(client, other_auth_token, moderator_token, question) -> None:
    report = _report(client, other_auth_token, "question", question.id)

    response = client.put(
        f"/api/v1/moderation/reports/{report['id']}",
        json={"action": "ban"},
        headers=moderator_token,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_list_pending_reports(client, auth_token, moderator_token, answer, question) -> None:
    _report(client, auth_token, "answer", answer.id)
    _report(client, auth_token, "question", question.id)

    response = client.get(
        "/api/v1/moderation/reports",
        params={"content_type": "answer"},
        headers=moderator_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert [item["content_id"] for item in response.json()] == [answer.id]


def test_direct_action_on_answer(client, auth_token, moderator_token, answer) -> None:
    _report(client, auth_token, "answer", answer.id)

    response = client.post(
        f"/api/v1/moderation/answer/{answer.id}/actions",
        json={"action": "remove", "note": "abusive"},
        headers=moderator_token,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "removed"
    assert data["reports_closed"] == 1


def test_delete_question_and_history(
    client, auth_token, other_auth_token, moderator_token, question, answer
) -> None:
    _report(client, auth_token, "answer", answer.id)
    _report(client, other_auth_token, "question", question.id)
    question_id, answer_id = question.id, answer.id

    response = client.delete(f"/api/v1/moderation/question/{question_id}", headers=moderator_token)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["deleted"]["answers"] == 1
    assert client.get(f"/api/v1/questions/{question_id}").status_code == 404
    assert client.get(f"/api/v1/answers/{answer_id}").status_code == 404
    history = client.get(
        f"/api/v1/moderation/question/{question_id}/history", headers=moderator_token
    ).json()
    assert len(history) == 1
    assert history[0]["action_taken"] == "content_removed"
