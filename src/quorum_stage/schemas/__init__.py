# src/quorum_stage/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .content import (
    AnswerCreate,
    AnswerResponse,
    QuestionCreate,
    QuestionResponse,
    StatusChange,
)
from .moderation import (
    ContentDeletionResponse,
    ModerationDecision,
    ModerationOutcomeResponse,
    UserDeletionResponse,
)
from .report import ReportCreate, ReportResponse
from .vote import MyVoteResponse, VoteCreate, VoteResponse, VoterEntry

__all__ = [
    "AnswerCreate", "AnswerResponse",
    "QuestionCreate", "QuestionResponse", "StatusChange",
    "ContentDeletionResponse", "ModerationDecision",
    "ModerationOutcomeResponse", "UserDeletionResponse",
    "ReportCreate", "ReportResponse",
    "MyVoteResponse", "VoteCreate", "VoteResponse", "VoterEntry",
]
