# src/quorum_stage/schemas/vote.py
"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from quorum_stage.models.enums import ContentKind, VoteDirection


class VoteCreate(BaseModel):
    """Schema for casting or flipping a vote."""

    content_type: ContentKind
    content_id: int
    direction: VoteDirection = Field(..., description="'up' or 'down'")


class VoterEntry(BaseModel):
    user_id: int
    vote: int


class VoteResponse(BaseModel):
    """Score of an item and the voter set it is computed from."""

    content_type: ContentKind
    content_id: int
    votes: int
    voters: list[VoterEntry]


class MyVoteResponse(BaseModel):
    content_type: ContentKind
    content_id: int
    vote: int = Field(..., description="1, -1, or 0 when the caller has not voted")
