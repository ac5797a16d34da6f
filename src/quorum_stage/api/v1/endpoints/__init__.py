# src/quorum_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .answers import router as answers_router
from .moderation import router as moderation_router
from .questions import router as questions_router
from .reports import router as reports_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "questions_router",
    "answers_router",
    "votes_router",
    "reports_router",
    "moderation_router",
    "users_router",
]
