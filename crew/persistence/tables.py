"""SQLAlchemy table definitions for Crew.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    Time,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("phone", String(32), nullable=False, unique=True),
    Column(
        "role",
        Enum("organizer", "participant", name="user_role", create_type=False),
        nullable=False,
    ),
    Column("credits", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("credits >= 0", name="credits_non_negative"),
)

# ============================================================================
# TENDERS TABLE
# ============================================================================
tenders_table = Table(
    "tenders",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "organizer_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("organizer_name", String(255), nullable=True),  # Denormalized from users
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=True),
    Column("location", String(255), nullable=True),
    Column("scheduled_date", Date, nullable=False),
    Column("start_time", Time, nullable=False),
    Column("end_time", Time, nullable=False),
    Column("pay", Integer, nullable=False),
    Column("quota", Integer, nullable=False),
    Column(
        "status",
        Enum("open", "full", "closed", name="tender_status", create_type=False),
        nullable=False,
        server_default="open",
    ),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("closed_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("quota >= 1", name="quota_positive"),
    CheckConstraint("pay >= 0", name="pay_non_negative"),
)

Index("idx_tenders_organizer_id", tenders_table.c.organizer_id)
Index("idx_tenders_created_at", tenders_table.c.created_at.desc())
Index(
    "idx_tenders_scheduled_date_status",
    tenders_table.c.scheduled_date,
    tenders_table.c.status,
)

# ============================================================================
# TENDER INVITES TABLE (owned by tenders, rewritten as one unit)
# ============================================================================
tender_invites_table = Table(
    "tender_invites",
    metadata,
    Column(
        "tender_id",
        UUID,
        ForeignKey("tenders.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("position", Integer, primary_key=True),  # Insertion order
    Column(
        "kind",
        Enum("registered", "guest", name="invite_kind", create_type=False),
        nullable=False,
    ),
    # Weak reference: no FK so invites survive account deletion
    Column("user_id", UUID, nullable=True),
    Column("name", String(255), nullable=False),  # Snapshot at invite time
    Column("phone", String(32), nullable=False),  # Snapshot at invite time
    Column(
        "status",
        Enum("pending", "accepted", "rejected", name="invite_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "(kind = 'registered' AND user_id IS NOT NULL) OR "
        "(kind = 'guest' AND user_id IS NULL)",
        name="invite_kind_matches_user",
    ),
)

Index("idx_tender_invites_user_id", tender_invites_table.c.user_id)

# One invite per registered user per tender
Index(
    "idx_tender_invites_unique_user",
    tender_invites_table.c.tender_id,
    tender_invites_table.c.user_id,
    unique=True,
    postgresql_where=tender_invites_table.c.kind == "registered",
)

# One invite per guest phone per tender
Index(
    "idx_tender_invites_unique_guest_phone",
    tender_invites_table.c.tender_id,
    tender_invites_table.c.phone,
    unique=True,
    postgresql_where=tender_invites_table.c.kind == "guest",
)
