# src/quorum_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    answers_router,
    moderation_router,
    questions_router,
    reports_router,
    users_router,
    votes_router,
)

__all__ = [
    "questions_router",
    "answers_router",
    "votes_router",
    "reports_router",
    "moderation_router",
    "users_router",
]
