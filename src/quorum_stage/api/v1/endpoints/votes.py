"""Vote-related endpoints for the Quorum API."""

from __future__ import annotations

from fastapi import APIRouter, status

from quorum_stage.api.v1.dependencies import ActorDep, SessionDep, VoteLedgerDep, raise_http
from quorum_stage.models.enums import ContentKind
from quorum_stage.schemas.vote import MyVoteResponse, VoteCreate, VoteResponse, VoterEntry
from quorum_stage.services.errors import ModerationError

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteResponse, status_code=status.HTTP_200_OK)
async def cast_vote(
    vote_data: VoteCreate,
    actor: ActorDep,
    ledger: VoteLedgerDep,
    db: SessionDep,
) -> VoteResponse:
    """Cast, or flip, the caller's vote on a question or answer.

    Repeating the current direction is rejected with 409.
    """
    try:
        tally = ledger.cast_vote(
            db, vote_data.content_type, vote_data.content_id, actor.id, vote_data.direction
        )
    except ModerationError as err:
        raise_http(err)
    return VoteResponse(
        content_type=vote_data.content_type,
        content_id=vote_data.content_id,
        votes=tally.votes,
        voters=[VoterEntry(user_id=voter, vote=value) for voter, value in tally.voters.items()],
    )


@router.get("/{content_type}/{content_id}/my-vote", response_model=MyVoteResponse)
async def get_my_vote(
    content_type: ContentKind,
    content_id: int,
    actor: ActorDep,
    ledger: VoteLedgerDep,
    db: SessionDep,
) -> MyVoteResponse:
    vote = ledger.get_vote(db, content_type, content_id, actor.id)
    return MyVoteResponse(content_type=content_type, content_id=content_id, vote=vote)
