# src/quorum_stage/services/cascade.py
"""Retriable multi-record deletions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quorum_stage.core.settings import settings
from quorum_stage.services.errors import CascadeFailureError

logger = logging.getLogger(__name__)

COMMIT_STEP = "commit"


@dataclass(frozen=True)
class CascadeStep:
    """One idempotent sub-operation of a cascade.

    ``apply`` must select its rows by predicate (never by previously loaded
    ORM state) so that it can be re-run after a rollback, and returns the
    number of rows it touched.
    """

    name: str
    apply: Callable[[Session], int]


def run_cascade(
    db: Session,
    steps: Sequence[CascadeStep],
    *,
    max_attempts: int | None = None,
) -> dict[str, int]:
    """Apply ``steps`` in order inside one transaction and commit.

    A database error in any step (or in the commit) rolls the whole
    transaction back and the full sequence is attempted again, up to
    ``max_attempts`` times. Any other exception rolls back and propagates
    unchanged.

    Returns:
        Row counts keyed by step name.

    Raises:
        CascadeFailureError: If every attempt failed. Nothing was committed.
    """
    attempts = max_attempts or settings.cascade_max_attempts
    names = [step.name for step in steps]
    failed_step = COMMIT_STEP
    last_error: SQLAlchemyError | None = None

    for attempt in range(1, attempts + 1):
        counts: dict[str, int] = {}
        try:
            for step in steps:
                failed_step = step.name
                counts[step.name] = step.apply(db)
            failed_step = COMMIT_STEP
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            last_error = exc
            logger.warning(
                "Cascade step '%s' failed on attempt %d/%d: %s",
                failed_step,
                attempt,
                attempts,
                exc,
            )
            continue
        except BaseException:
            # Not retriable; leave no half-applied cascade on the session.
            db.rollback()
            raise
        if attempt > 1:
            logger.info("Cascade %s succeeded on attempt %d", names, attempt)
        return counts

    logger.error("Cascade %s abandoned after %d attempts at step '%s'", names, attempts, failed_step)
    raise CascadeFailureError(
        f"Cascade failed at step '{failed_step}' after {attempts} attempts",
        failed_step=failed_step,
        remaining_steps=names,
    ) from last_error
