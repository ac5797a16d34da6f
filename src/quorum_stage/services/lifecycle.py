# src/quorum_stage/services/lifecycle.py
"""Status state machine for questions and answers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from quorum_stage.core.security import Actor
from quorum_stage.db.time import utcnow
from quorum_stage.models import Answer, Question
from quorum_stage.models.enums import (
    AnswerStatus,
    ContentKind,
    ModerationAction,
    QuestionStatus,
)
from quorum_stage.services.errors import (
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)

Content = Question | Answer
E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class ContentProfile:
    """Capabilities of one content kind: its table, states and moderation targets."""

    kind: ContentKind
    model: type[Question] | type[Answer]
    status_enum: type[Enum]
    initial_status: Enum
    review_status: Enum
    transitions: Mapping[Enum, frozenset[Enum]]
    action_targets: Mapping[ModerationAction, Enum]

    def parse_status(self, raw: str | Enum) -> Enum:
        """Return the status member for ``raw`` or raise InvalidTransitionError."""
        return parse_choice(self.status_enum, raw, f"{self.kind.value} status")

    def can_transition(self, current: Enum, target: Enum) -> bool:
        return target in self.transitions.get(current, frozenset())


QUESTION_PROFILE = ContentProfile(
    kind=ContentKind.QUESTION,
    model=Question,
    status_enum=QuestionStatus,
    initial_status=QuestionStatus.OPEN,
    review_status=QuestionStatus.UNDER_REVIEW,
    transitions={
        # open -> open lets an approval re-stamp an item that was never queued.
        QuestionStatus.OPEN: frozenset(
            {
                QuestionStatus.OPEN,
                QuestionStatus.UNDER_REVIEW,
                QuestionStatus.RESOLVED,
                QuestionStatus.REMOVED,
                QuestionStatus.REJECTED,
            }
        ),
        QuestionStatus.UNDER_REVIEW: frozenset(
            {
                QuestionStatus.OPEN,
                QuestionStatus.RESOLVED,
                QuestionStatus.REMOVED,
                QuestionStatus.REJECTED,
            }
        ),
        QuestionStatus.RESOLVED: frozenset({QuestionStatus.REMOVED}),
        QuestionStatus.REJECTED: frozenset({QuestionStatus.REMOVED}),
        QuestionStatus.REMOVED: frozenset(),
    },
    action_targets={
        ModerationAction.APPROVE: QuestionStatus.OPEN,
        ModerationAction.REJECT: QuestionStatus.REJECTED,
        ModerationAction.REMOVE: QuestionStatus.REMOVED,
    },
)

ANSWER_PROFILE = ContentProfile(
    kind=ContentKind.ANSWER,
    model=Answer,
    status_enum=AnswerStatus,
    initial_status=AnswerStatus.ACTIVE,
    review_status=AnswerStatus.FLAGGED,
    transitions={
        AnswerStatus.ACTIVE: frozenset(
            {AnswerStatus.ACTIVE, AnswerStatus.FLAGGED, AnswerStatus.REMOVED}
        ),
        AnswerStatus.FLAGGED: frozenset({AnswerStatus.ACTIVE, AnswerStatus.REMOVED}),
        AnswerStatus.REMOVED: frozenset(),
    },
    action_targets={
        ModerationAction.APPROVE: AnswerStatus.ACTIVE,
        ModerationAction.REMOVE: AnswerStatus.REMOVED,
    },
)

PROFILES: dict[ContentKind, ContentProfile] = {
    ContentKind.QUESTION: QUESTION_PROFILE,
    ContentKind.ANSWER: ANSWER_PROFILE,
}


def profile_for(kind: ContentKind | str) -> ContentProfile:
    """Return the profile registered for ``kind``."""
    return PROFILES[parse_choice(ContentKind, kind, "content type")]


def parse_choice(enum_cls: type[E], raw: str | Enum, label: str) -> E:
    """Return the ``enum_cls`` member for ``raw`` or raise InvalidTransitionError."""
    if isinstance(raw, enum_cls):
        return raw
    value = raw.value if isinstance(raw, Enum) else raw
    try:
        return enum_cls(value)
    except ValueError as err:
        raise InvalidTransitionError(f"Unknown {label}: {value!r}") from err


def append_note(existing: str | None, note: str | None, label: str) -> str | None:
    """Append ``note`` to the moderation history without overwriting it."""
    if not note:
        return existing
    entry = f"{label}: {note}"
    if not existing:
        return entry
    return f"{existing}\n{entry}"


class ContentLifecycle:
    """Service applying status transitions and moderation stamps to content."""

    @staticmethod
    def get(db: Session, kind: ContentKind, content_id: int) -> Content:
        """Return the content item or raise NotFoundError."""
        profile = profile_for(kind)
        content = db.get(profile.model, content_id)
        if content is None:
            raise NotFoundError(f"{profile.kind.value.capitalize()} {content_id} not found")
        return content

    @staticmethod
    def lock(db: Session, kind: ContentKind, content_id: int) -> Content:
        """Load the content row for update so concurrent writers on it serialize."""
        profile = profile_for(kind)
        content = db.execute(
            select(profile.model)
            .where(profile.model.id == content_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if content is None:
            raise NotFoundError(f"{profile.kind.value.capitalize()} {content_id} not found")
        return content

    @staticmethod
    def stamp(content: Content, actor: Actor, note: str | None) -> None:
        """Record who moderated ``content`` and when, appending ``note``."""
        content.moderator_note = append_note(content.moderator_note, note, actor.note_label)
        content.moderated_by_id = actor.id
        content.moderated_at = utcnow()

    def transition(
        self,
        content: Content,
        profile: ContentProfile,
        target: Enum,
        actor: Actor,
        note: str | None = None,
    ) -> Content:
        """Move ``content`` to ``target`` if the state machine allows it.

        Moderation actors always leave an audit stamp. Questions also record
        activity so that resolved or reopened threads resurface.
        """
        current = content.status
        if not profile.can_transition(current, target):
            raise InvalidTransitionError(
                f"Cannot move {profile.kind.value} {content.id} "
                f"from '{current.value}' to '{target.value}'"
            )
        content.status = target
        if actor.is_moderation_actor:
            self.stamp(content, actor, note)
        if isinstance(content, Question):
            content.last_activity_at = utcnow()
        logger.info(
            "%s %s moved %s -> %s by user %s",
            profile.kind.value,
            content.id,
            current.value,
            target.value,
            actor.id,
        )
        return content

    def change_status(
        self,
        db: Session,
        kind: ContentKind,
        content_id: int,
        actor: Actor,
        new_status: str | Enum,
        note: str | None = None,
    ) -> Content:
        """Apply a requested status change and commit it.

        Owners may only mark their own question resolved; every other change
        requires a moderation actor.
        """
        profile = profile_for(kind)
        target = profile.parse_status(new_status)
        content = self.lock(db, kind, content_id)
        owner_resolving = (
            profile.kind is ContentKind.QUESTION
            and target is QuestionStatus.RESOLVED
            and content.user_id == actor.id
        )
        if not (actor.is_moderation_actor or owner_resolving):
            db.rollback()
            raise PermissionDeniedError("Only moderators may change this status")
        try:
            self.transition(content, profile, target, actor, note)
        except InvalidTransitionError:
            db.rollback()
            raise
        db.commit()
        db.refresh(content)
        return content

    def apply_action(
        self,
        content: Content,
        profile: ContentProfile,
        action: ModerationAction,
        actor: Actor,
        note: str | None,
    ) -> Content:
        """Translate a moderation decision into a status transition."""
        target = profile.action_targets.get(action)
        if target is None:
            raise InvalidTransitionError(
                f"Action '{action.value}' does not apply to a {profile.kind.value}"
            )
        return self.transition(content, profile, target, actor, note)

    def mark_for_review(
        self,
        content: Content,
        profile: ContentProfile,
        actor: Actor,
        note: str | None,
    ) -> bool:
        """Push untouched content into its review state.

        Returns False when the item has already left its initial state; the
        item is then left as it is.
        """
        if content.status != profile.initial_status:
            return False
        self.transition(content, profile, profile.review_status, actor, note)
        return True
