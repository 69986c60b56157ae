"""initial_schema

Create the schema for Crew:
- Users (organizers and participants, identified by phone)
- Tenders (staffing requests with quota and derived status)
- Tender invites (owned by tenders, registered or guest)

Revision ID: 3c1f9a7d2e40
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE user_role AS ENUM ('organizer', 'participant');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE tender_status AS ENUM ('open', 'full', 'closed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invite_kind AS ENUM ('registered', 'guest');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invite_status AS ENUM ('pending', 'accepted', 'rejected');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM(
                "organizer", "participant", name="user_role", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("credits", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("phone", name="uq_users_phone"),
        sa.CheckConstraint("credits >= 0", name="credits_non_negative"),
    )

    # ========================================================================
    # TENDERS table
    # ========================================================================
    op.create_table(
        "tenders",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("organizer_id", sa.UUID(), nullable=False),
        sa.Column("organizer_name", sa.String(255), nullable=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("pay", sa.Integer(), nullable=False),
        sa.Column("quota", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "open", "full", "closed", name="tender_status", create_type=False
            ),
            nullable=False,
            server_default="open",
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("closed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["organizer_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("quota >= 1", name="quota_positive"),
        sa.CheckConstraint("pay >= 0", name="pay_non_negative"),
    )
    op.create_index("idx_tenders_organizer_id", "tenders", ["organizer_id"])
    op.create_index(
        "idx_tenders_created_at",
        "tenders",
        [sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_tenders_scheduled_date_status", "tenders", ["scheduled_date", "status"]
    )

    # ========================================================================
    # TENDER_INVITES table
    # ========================================================================
    op.create_table(
        "tender_invites",
        sa.Column("tender_id", sa.UUID(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column(
            "kind",
            postgresql.ENUM("registered", "guest", name="invite_kind", create_type=False),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=True),  # No FK, weak reference
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending",
                "accepted",
                "rejected",
                name="invite_status",
                create_type=False,
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["tender_id"], ["tenders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("tender_id", "position"),
        sa.CheckConstraint(
            "(kind = 'registered' AND user_id IS NOT NULL) OR "
            "(kind = 'guest' AND user_id IS NULL)",
            name="invite_kind_matches_user",
        ),
    )
    op.create_index("idx_tender_invites_user_id", "tender_invites", ["user_id"])
    op.create_index(
        "idx_tender_invites_unique_user",
        "tender_invites",
        ["tender_id", "user_id"],
        unique=True,
        postgresql_where=sa.text("kind = 'registered'"),
    )
    op.create_index(
        "idx_tender_invites_unique_guest_phone",
        "tender_invites",
        ["tender_id", "phone"],
        unique=True,
        postgresql_where=sa.text("kind = 'guest'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_tender_invites_unique_guest_phone", table_name="tender_invites")
    op.drop_index("idx_tender_invites_unique_user", table_name="tender_invites")
    op.drop_index("idx_tender_invites_user_id", table_name="tender_invites")
    op.drop_table("tender_invites")

    op.drop_index("idx_tenders_scheduled_date_status", table_name="tenders")
    op.drop_index("idx_tenders_created_at", table_name="tenders")
    op.drop_index("idx_tenders_organizer_id", table_name="tenders")
    op.drop_table("tenders")

    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS invite_status")
    op.execute("DROP TYPE IF EXISTS invite_kind")
    op.execute("DROP TYPE IF EXISTS tender_status")
    op.execute("DROP TYPE IF EXISTS user_role")
