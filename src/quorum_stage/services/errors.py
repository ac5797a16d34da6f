# src/quorum_stage/services/errors.py
"""Exceptions raised by the moderation and voting services.

Each class carries the HTTP status the API layer responds with, so endpoints
can translate any of them without a lookup table.
"""

from __future__ import annotations

from collections.abc import Sequence


class ModerationError(RuntimeError):
    """Base exception for every expected service-layer failure."""

    status_code = 400


class NotFoundError(ModerationError):
    """Referenced content, report or user does not exist."""

    status_code = 404


class DuplicateVoteError(ModerationError):
    """The voter already holds a vote in the requested direction."""

    status_code = 409


class InvalidTransitionError(ModerationError):
    """A status change or action is not permitted from the current state."""

    status_code = 409


class AlreadyResolvedError(ModerationError):
    """The report has already been reviewed or dismissed."""

    status_code = 409


class PermissionDeniedError(ModerationError):
    """The actor's role does not allow the requested operation."""

    status_code = 403


class CascadeFailureError(ModerationError):
    """A multi-record deletion could not be committed.

    Nothing from the cascade was committed; every step listed in
    ``remaining_steps`` is idempotent and safe to run again.
    """

    status_code = 503

    def __init__(self, message: str, *, failed_step: str, remaining_steps: Sequence[str]) -> None:
        super().__init__(message)
        self.failed_step = failed_step
        self.remaining_steps = tuple(remaining_steps)
