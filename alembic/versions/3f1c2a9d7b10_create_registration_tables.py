"""create therapist_registrations and therapists

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

registration_status = sa.Enum(
    "PENDING", "APPROVED", "REJECTED", name="registration_status_enum"
)
therapist_status = sa.Enum(
    "ACTIVE", "INACTIVE", "SUSPENDED", name="therapist_status_enum"
)


def upgrade() -> None:
    """Upgrade schema - registrations and the therapist roster."""

    op.create_table(
        "therapist_registrations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("whatsapp", sa.String(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("gender", sa.String(), nullable=False),
        sa.Column("experience", sa.String(), nullable=False),
        sa.Column("work_area", sa.String(), nullable=False),
        sa.Column("availability", sa.String(), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", registration_status, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("reviewed_by", sa.String(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_therapist_registrations_whatsapp", "therapist_registrations", ["whatsapp"]
    )
    op.create_index(
        "ix_therapist_registrations_status", "therapist_registrations", ["status"]
    )
    op.create_index(
        "ix_therapist_registrations_submitted_at",
        "therapist_registrations",
        ["submitted_at"],
    )

    op.create_table(
        "therapists",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("registration_id", sa.Uuid(), nullable=False),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("whatsapp", sa.String(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("gender", sa.String(), nullable=False),
        sa.Column("experience", sa.String(), nullable=False),
        sa.Column("work_area", sa.String(), nullable=False),
        sa.Column("availability", sa.String(), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", therapist_status, nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["registration_id"],
            ["therapist_registrations.id"],
            ondelete="RESTRICT",
        ),
        # One therapist per registration; approval relies on this for idempotency
        sa.UniqueConstraint("registration_id", name="uq_therapists_registration_id"),
    )
    op.create_index("ix_therapists_whatsapp", "therapists", ["whatsapp"])
    op.create_index("ix_therapists_status", "therapists", ["status"])
    op.create_index("ix_therapists_joined_at", "therapists", ["joined_at"])


def downgrade() -> None:
    """Downgrade schema - drop registration tables."""
    op.drop_index("ix_therapists_joined_at", table_name="therapists")
    op.drop_index("ix_therapists_status", table_name="therapists")
    op.drop_index("ix_therapists_whatsapp", table_name="therapists")
    op.drop_table("therapists")
    op.drop_index(
        "ix_therapist_registrations_submitted_at",
        table_name="therapist_registrations",
    )
    op.drop_index(
        "ix_therapist_registrations_status", table_name="therapist_registrations"
    )
    op.drop_index(
        "ix_therapist_registrations_whatsapp", table_name="therapist_registrations"
    )
    op.drop_table("therapist_registrations")
    therapist_status.drop(op.get_bind(), checkfirst=True)
    registration_status.drop(op.get_bind(), checkfirst=True)
