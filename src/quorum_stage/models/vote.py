# src/quorum_stage/models/vote.py
"""Models capturing voting interactions on questions and answers."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from quorum_stage.db.session import Base
from quorum_stage.models.enums import ContentKind, enum_column


class ContentVote(Base):
    """Per-user vote on a content item.

    One row is one entry of the item's voter set; the owning item's
    ``votes`` column is the sum of ``value`` over these rows.
    """

    __tablename__ = "content_vote"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_content_vote_value"),
        Index("ix_content_vote_content", "content_type", "content_id"),
        Index("ix_content_vote_voter", "voter_user_id"),
    )

    # Composite primary key prevents duplicate votes from the same user.
    content_type: Mapped[ContentKind] = mapped_column(
        enum_column(ContentKind, "content_kind"),
        primary_key=True,
    )
    content_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    voter_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        primary_key=True,
    )

    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
