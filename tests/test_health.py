# mypy: ignore-errors
# tests/test_health.py
"""Tests for service-level endpoints."""

from fastapi import status


def test_health_check(client) -> None:
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root(client) -> None:
    data = client.get("/").json()
    assert data["name"] == "Quorum Stage"
    assert data["docs"] == "/docs"
