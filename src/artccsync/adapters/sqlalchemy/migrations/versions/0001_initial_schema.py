"""Initial facility schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "controller",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("cid", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("home_facility", sa.String(), nullable=False),
        sa.Column("is_on_roster", sa.Boolean(), nullable=False),
        sa.Column("roles", sa.String(), nullable=False),
        sa.Column("operating_initials", sa.String(length=2), nullable=True),
        sa.Column("join_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("loa_until", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_controller"),
        sa.UniqueConstraint("cid", name="uq_controller_cid"),
        sa.UniqueConstraint("operating_initials", name="uq_controller_operating_initials"),
    )
    op.create_table(
        "certification",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("cid", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column(
            "value",
            sa.Enum(
                "none",
                "training",
                "solo",
                "certified",
                native_enum=False,
                length=16,
                name="certification_value",
            ),
            nullable=False,
        ),
        sa.Column("changed_on", sa.DateTime(timezone=True), nullable=False),
        sa.Column("set_by", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_certification"),
        sa.UniqueConstraint("cid", "name", name="uq_certification_cid_name"),
    )
    op.create_index("ix_certification_cid", "certification", ["cid"])
    op.create_table(
        "activity",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("cid", sa.Integer(), nullable=False),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column("minutes", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_activity"),
        sa.UniqueConstraint("cid", "month", name="uq_activity_cid_month"),
    )
    op.create_index("ix_activity_cid", "activity", ["cid"])
    op.create_table(
        "solo_certification",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("cid", sa.Integer(), nullable=False),
        sa.Column("issued_by", sa.Integer(), nullable=False),
        sa.Column("position", sa.String(), nullable=False),
        sa.Column("reported", sa.Boolean(), nullable=False),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expiration_date", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_solo_certification"),
    )
    op.create_index("ix_solo_certification_cid", "solo_certification", ["cid"])
    op.create_table(
        "no_show",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("cid", sa.Integer(), nullable=False),
        sa.Column("reported_by", sa.Integer(), nullable=False),
        sa.Column("entry_type", sa.String(), nullable=False),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notified", sa.Boolean(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_no_show"),
    )
    op.create_index("ix_no_show_cid", "no_show", ["cid"])
    op.create_table(
        "sync_request",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("payload", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_sync_request"),
    )
    op.create_index("ix_sync_request_action", "sync_request", ["action"])


def downgrade() -> None:
    op.drop_index("ix_sync_request_action", table_name="sync_request")
    op.drop_table("sync_request")
    op.drop_index("ix_no_show_cid", table_name="no_show")
    op.drop_table("no_show")
    op.drop_index("ix_solo_certification_cid", table_name="solo_certification")
    op.drop_table("solo_certification")
    op.drop_index("ix_activity_cid", table_name="activity")
    op.drop_table("activity")
    op.drop_index("ix_certification_cid", table_name="certification")
    op.drop_table("certification")
    op.drop_table("controller")
