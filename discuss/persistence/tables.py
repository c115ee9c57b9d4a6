"""SQLAlchemy table definitions for the metadata store.

Schema provisioning happens outside this service; these definitions only
describe the tables the repositories read and write.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CATEGORIES TABLE
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(100), nullable=False, unique=True),
    Column("slug", String(100), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column(
        "status",
        Enum("active", "archived", name="category_status", create_type=False),
        nullable=False,
        server_default="active",
    ),
    Column("created_by", UUID, nullable=True),  # Identity provider user id
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_categories_status", categories_table.c.status)

# ============================================================================
# THREADS TABLE
# ============================================================================
threads_table = Table(
    "threads",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("slug", String(500), nullable=False, unique=True),
    Column("title", String(500), nullable=False),
    Column(
        "category_id",
        UUID,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("author_id", UUID, nullable=False),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("is_locked", Boolean, nullable=False, server_default="false"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    # Derived from the content document; see ReplyCounterSynchronizer
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column("last_reply_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_reply_by", UUID, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("reply_count >= 0", name="reply_count_non_negative"),
    CheckConstraint("view_count >= 0", name="view_count_non_negative"),
)

Index("idx_threads_category_id", threads_table.c.category_id)
Index("idx_threads_created_at", threads_table.c.created_at.desc())
Index("idx_threads_last_reply_at", threads_table.c.last_reply_at.desc())
Index("idx_threads_is_pinned", threads_table.c.is_pinned)
