# src/quorum_stage/services/votes.py
"""Vote ledger: per-user voter sets and their aggregate scores."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from sqlalchemy import Select, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quorum_stage.models import ContentVote
from quorum_stage.models.enums import ContentKind, VoteDirection
from quorum_stage.services.errors import DuplicateVoteError
from quorum_stage.services.lifecycle import Content, ContentLifecycle, parse_choice, profile_for

logger = logging.getLogger(__name__)


@dataclass
class VoteTally:
    """Aggregate score of an item together with the voter set it derives from."""

    votes: int
    voters: dict[int, int] = field(default_factory=dict)


def _sum_query(kind: ContentKind, content_id: int) -> Select[tuple[int]]:
    return select(func.coalesce(func.sum(ContentVote.value), 0)).where(
        ContentVote.content_type == kind, ContentVote.content_id == content_id
    )


class VoteLedger:
    """Service casting votes and keeping ``votes`` equal to the voter-set sum."""

    def __init__(self, lifecycle: ContentLifecycle | None = None) -> None:
        self.lifecycle = lifecycle or ContentLifecycle()

    def cast_vote(
        self,
        db: Session,
        kind: ContentKind,
        content_id: int,
        voter_id: int,
        direction: VoteDirection | str,
    ) -> VoteTally:
        """Record ``voter_id``'s vote and recompute the item's score.

        A first vote adds an entry; a vote opposite to the existing one flips
        it. Repeating the same direction is rejected and changes nothing.

        Raises:
            NotFoundError: If the content item does not exist.
            DuplicateVoteError: If the voter already voted this way.
        """
        kind = profile_for(kind).kind
        direction = parse_choice(VoteDirection, direction, "vote direction")
        try:
            content = self._record(db, kind, content_id, voter_id, direction)
        except IntegrityError:
            # Another transaction stored this voter's first vote after our
            # lookup; decide again against the committed row.
            db.rollback()
            logger.info(
                "Concurrent first vote by user %s on %s %s, re-deciding",
                voter_id,
                kind.value,
                content_id,
            )
            content = self._record(db, kind, content_id, voter_id, direction)
        db.commit()
        logger.info(
            "User %s voted %+d on %s %s (score now %d)",
            voter_id,
            direction.value_int,
            kind.value,
            content_id,
            content.votes,
        )
        return self.tally(db, kind, content_id)

    def _record(
        self,
        db: Session,
        kind: ContentKind,
        content_id: int,
        voter_id: int,
        direction: VoteDirection,
    ) -> Content:
        """Apply the add/flip/duplicate decision and recompute the score; no commit."""
        value = direction.value_int
        # The row lock serializes concurrent voters on this item.
        content = self.lifecycle.lock(db, kind, content_id)

        existing = self._existing_vote(db, kind, content_id, voter_id)
        if existing is not None and existing.value == value:
            db.rollback()
            raise DuplicateVoteError(
                f"User {voter_id} has already voted {direction.value} "
                f"on {kind.value} {content_id}"
            )

        if existing is None:
            db.add(
                ContentVote(
                    content_type=kind,
                    content_id=content_id,
                    voter_user_id=voter_id,
                    value=value,
                )
            )
        else:
            existing.value = value
        db.flush()

        content.votes = db.execute(_sum_query(kind, content_id)).scalar_one()
        return content

    @staticmethod
    def _existing_vote(
        db: Session, kind: ContentKind, content_id: int, voter_id: int
    ) -> ContentVote | None:
        return db.get(ContentVote, (kind, content_id, voter_id), with_for_update=True)

    @staticmethod
    def tally(db: Session, kind: ContentKind, content_id: int) -> VoteTally:
        """Return the stored score and the voter set of an item."""
        rows = db.execute(
            select(ContentVote.voter_user_id, ContentVote.value)
            .where(ContentVote.content_type == kind, ContentVote.content_id == content_id)
            .order_by(ContentVote.voter_user_id)
        ).all()
        model = profile_for(kind).model
        votes = db.execute(select(model.votes).where(model.id == content_id)).scalar_one_or_none()
        return VoteTally(votes=votes or 0, voters={voter: value for voter, value in rows})

    @staticmethod
    def get_vote(db: Session, kind: ContentKind, content_id: int, voter_id: int) -> int:
        """Return the voter's current value on an item, or 0 if none."""
        vote = db.get(ContentVote, (kind, content_id, voter_id))
        return vote.value if vote else 0

    @staticmethod
    def sync_aggregates(db: Session, items: Iterable[tuple[ContentKind, int]]) -> int:
        """Recompute ``votes`` in place for each (kind, id); returns rows updated.

        Used by cascades that remove voter rows in bulk; does not commit.
        """
        updated = 0
        for kind, content_id in items:
            model = profile_for(kind).model
            result = db.execute(
                update(model)
                .where(model.id == content_id)
                .values(votes=_sum_query(kind, content_id).scalar_subquery())
                .execution_options(synchronize_session=False)
            )
            updated += result.rowcount or 0
        return updated
