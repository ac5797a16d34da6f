# src/quorum_stage/models/__init__.py
"""SQLAlchemy models for the Quorum application."""

from .answer import Answer
from .question import Question
from .report import Report
from .user import User
from .vote import ContentVote

__all__ = [
    "Answer",
    "ContentVote",
    "Question",
    "Report",
    "User",
]
