"""initial schema

Revision ID: 3c1a9e5f7b20
Revises:
Create Date: 2026-10-19 09:12:41.503118

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1a9e5f7b20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, content, votes, moderation and notification tables."""
    op.create_table(
        "user_account",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "question",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_question_created_at", "question", ["created_at"])
    op.create_index("ix_question_owner_id", "question", ["owner_id"])

    op.create_table(
        "answer",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("votes", sa.Integer(), nullable=False),
        sa.Column("is_accepted", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["question_id"], ["question.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["owner_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_answer_question_id_is_accepted", "answer", ["question_id", "is_accepted"]
    )
    op.create_index("ix_answer_owner_id", "answer", ["owner_id"])

    op.create_table(
        "answer_vote",
        sa.Column("answer_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.CheckConstraint("value IN (1, -1)", name="ck_answer_vote_value"),
        sa.ForeignKeyConstraint(["answer_id"], ["answer.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("answer_id", "user_id"),
    )
    op.create_index("ix_answer_vote_user_id", "answer_vote", ["user_id"])

    op.create_table(
        "report",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("report_type", sa.String(length=16), nullable=False),
        sa.Column("target_id", sa.Integer(), nullable=False),
        sa.Column("reported_by", sa.Integer(), nullable=True),
        sa.Column("content_owner", sa.Integer(), nullable=False),
        sa.Column("reason", sa.String(length=32), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("priority", sa.String(length=16), nullable=False),
        sa.Column("auto_flagged", sa.Boolean(), nullable=False),
        sa.Column("severity_score", sa.Integer(), nullable=True),
        sa.Column("admin_action", sa.String(length=32), nullable=True),
        sa.Column("reviewed_by", sa.Integer(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["reported_by"], ["user_account.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["content_owner"], ["user_account.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reviewed_by"], ["user_account.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_report_status_created_at", "report", ["status", "created_at"])
    op.create_index("ix_report_target", "report", ["report_type", "target_id"])
    op.create_index(
        "uq_report_pending_reporter",
        "report",
        ["report_type", "target_id", "reported_by"],
        unique=True,
        sqlite_where=sa.text("status = 'pending'"),
        postgresql_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        "user_moderation",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("banned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("banned_by", sa.Integer(), nullable=True),
        sa.Column("ban_reason", sa.Text(), nullable=True),
        sa.Column("trust_score", sa.SmallInteger(), nullable=False),
        sa.Column("total_reports", sa.Integer(), nullable=False),
        sa.Column("valid_reports", sa.Integer(), nullable=False),
        sa.Column("content_removed", sa.Integer(), nullable=False),
        sa.Column("last_reported_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "trust_score >= 0 AND trust_score <= 100",
            name="ck_user_moderation_trust_score",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["banned_by"], ["user_account.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index("ix_user_moderation_status", "user_moderation", ["status"])

    op.create_table(
        "moderation_warning",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("moderation_id", sa.Integer(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("issued_by", sa.Integer(), nullable=True),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["moderation_id"], ["user_moderation.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["issued_by"], ["user_account.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_moderation_warning_moderation_id", "moderation_warning", ["moderation_id"]
    )

    op.create_table(
        "moderation_suspension",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("moderation_id", sa.Integer(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("duration_days", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("issued_by", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["moderation_id"], ["user_moderation.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["issued_by"], ["user_account.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_moderation_suspension_moderation_id", "moderation_suspension", ["moderation_id"]
    )

    op.create_table(
        "notification",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=True),
        sa.Column("answer_id", sa.Integer(), nullable=True),
        sa.Column("from_user_id", sa.Integer(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user_account.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["from_user_id"], ["user_account.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_notification_user_read_created",
        "notification",
        ["user_id", "is_read", "created_at"],
    )


def downgrade() -> None:
    """Drop every table created by ``upgrade``."""
    op.drop_index("ix_notification_user_read_created", table_name="notification")
    op.drop_table("notification")
    op.drop_index("ix_moderation_suspension_moderation_id", table_name="moderation_suspension")
    op.drop_table("moderation_suspension")
    op.drop_index("ix_moderation_warning_moderation_id", table_name="moderation_warning")
    op.drop_table("moderation_warning")
    op.drop_index("ix_user_moderation_status", table_name="user_moderation")
    op.drop_table("user_moderation")
    op.drop_index("uq_report_pending_reporter", table_name="report")
    op.drop_index("ix_report_target", table_name="report")
    op.drop_index("ix_report_status_created_at", table_name="report")
    op.drop_table("report")
    op.drop_index("ix_answer_vote_user_id", table_name="answer_vote")
    op.drop_table("answer_vote")
    op.drop_index("ix_answer_owner_id", table_name="answer")
    op.drop_index("ix_answer_question_id_is_accepted", table_name="answer")
    op.drop_table("answer")
    op.drop_index("ix_question_owner_id", table_name="question")
    op.drop_index("ix_question_created_at", table_name="question")
    op.drop_table("question")
    op.drop_table("user_account")
