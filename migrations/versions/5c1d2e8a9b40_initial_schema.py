"""initial schema

Revision ID: 5c1d2e8a9b40
Revises:
Create Date: 2026-10-19 09:12:44.318902

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1d2e8a9b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _stamp_columns() -> list[sa.Column]:
    return [
        sa.Column("moderator_note", sa.Text(), nullable=True),
        sa.Column(
            "moderated_by_id",
            sa.Integer(),
            sa.ForeignKey("user_account.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("moderated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _content_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user_account.id"), nullable=False),
        sa.Column("votes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        *_stamp_columns(),
    ]


def upgrade() -> None:
    """Create accounts, content, votes and reports."""
    op.create_table(
        "user_account",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "question",
        *_content_columns(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.Text(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("answers_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_activity_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("answers_count >= 0", name="ck_question_answers_count"),
    )
    op.create_index("ix_question_user_id", "question", ["user_id"])
    op.create_index("ix_question_status", "question", ["status"])

    op.create_table(
        "answer",
        *_content_columns(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "question_id",
            sa.Integer(),
            sa.ForeignKey("question.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("is_accepted", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_answer_user_id", "answer", ["user_id"])
    op.create_index("ix_answer_question_id", "answer", ["question_id"])

    op.create_table(
        "content_vote",
        sa.Column("content_type", sa.String(length=32), nullable=False),
        sa.Column("content_id", sa.Integer(), nullable=False),
        sa.Column(
            "voter_user_id", sa.Integer(), sa.ForeignKey("user_account.id"), nullable=False
        ),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.PrimaryKeyConstraint("content_type", "content_id", "voter_user_id"),
        sa.CheckConstraint("value IN (1, -1)", name="ck_content_vote_value"),
    )
    op.create_index("ix_content_vote_content", "content_vote", ["content_type", "content_id"])
    op.create_index("ix_content_vote_voter", "content_vote", ["voter_user_id"])

    op.create_table(
        "report",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("content_type", sa.String(length=32), nullable=False),
        sa.Column("content_id", sa.Integer(), nullable=False),
        sa.Column(
            "reported_by_id", sa.Integer(), sa.ForeignKey("user_account.id"), nullable=False
        ),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("severity", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("action_taken", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        *_stamp_columns(),
    )
    op.create_index("ix_report_reported_by_id", "report", ["reported_by_id"])
    op.create_index("ix_report_content", "report", ["content_type", "content_id", "status"])


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index("ix_report_content", table_name="report")
    op.drop_index("ix_report_reported_by_id", table_name="report")
    op.drop_table("report")
    op.drop_index("ix_content_vote_voter", table_name="content_vote")
    op.drop_index("ix_content_vote_content", table_name="content_vote")
    op.drop_table("content_vote")
    op.drop_index("ix_answer_question_id", table_name="answer")
    op.drop_index("ix_answer_user_id", table_name="answer")
    op.drop_table("answer")
    op.drop_index("ix_question_status", table_name="question")
    op.drop_index("ix_question_user_id", table_name="question")
    op.drop_table("question")
    op.drop_table("user_account")
