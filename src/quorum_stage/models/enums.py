# src/quorum_stage/models/enums.py
"""Enumerations shared by models, services and schemas."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Enum as SAEnum


class UserRole(str, Enum):
    """Platform roles attached to a user account."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"
    SUPER_ADMIN = "superAdmin"


class UserStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    BANNED = "banned"


class ContentKind(str, Enum):
    """Tag identifying which content table a reference points at."""

    QUESTION = "question"
    ANSWER = "answer"


class QuestionStatus(str, Enum):
    OPEN = "open"
    UNDER_REVIEW = "under review"
    RESOLVED = "resolved"
    REMOVED = "removed"
    REJECTED = "rejected"


class AnswerStatus(str, Enum):
    ACTIVE = "active"
    REMOVED = "removed"
    FLAGGED = "flagged"


class ReportStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    DISMISSED = "dismissed"


class ReportSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ActionTaken(str, Enum):
    """Outcome recorded on a report once a moderator has handled it."""

    NONE = "none"
    WARNING = "warning"
    CONTENT_REMOVED = "content_removed"
    USER_SUSPENDED = "user_suspended"


class ModerationAction(str, Enum):
    """Decisions a moderation actor can apply to reported content."""

    APPROVE = "approve"
    REJECT = "reject"
    DELETE = "delete"
    WARN = "warn"
    REMOVE = "remove"
    DISMISS = "dismiss"


class VoteDirection(str, Enum):
    UP = "up"
    DOWN = "down"

    @property
    def value_int(self) -> int:
        """Return the signed vote value stored in the voter set."""
        return 1 if self is VoteDirection.UP else -1


def enum_column(enum_cls: type[Enum], name: str) -> SAEnum:
    """Build a portable string-backed column type for ``enum_cls``.

    Values (not member names) are persisted so that rows read naturally in
    the database, e.g. ``"under review"`` rather than ``"UNDER_REVIEW"``.
    """
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        validate_strings=True,
        values_callable=lambda members: [member.value for member in members],
    )
