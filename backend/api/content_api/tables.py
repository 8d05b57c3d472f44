from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

content_items = Table(
    "content_items",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("content_type", String(32), nullable=False),
    Column("region", String(32), nullable=False),
    Column("category", String(128), nullable=False),
    Column("status", String(32), nullable=False),
    Column("priority", String(16), nullable=False),
    Column("pinned", Boolean, nullable=False, default=False),
    Column("scheduled_publish_at", DateTime(timezone=True)),
    Column("scheduled_unpublish_at", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("created_by", String(255), nullable=False),
    Column("approved_at", DateTime(timezone=True)),
    Column("approved_by", String(255)),
    Column("published_at", DateTime(timezone=True)),
    Column("published_by", String(255)),
    Column("archived_at", DateTime(timezone=True)),
    Column("archived_by", String(255)),
    Column("last_modified_at", DateTime(timezone=True), nullable=False),
    Column("last_modified_by", String(255), nullable=False),
    Column("version", Integer, nullable=False, default=1),
    Column("internal", Boolean, nullable=False, default=False),
    Index("ix_content_items_region_status", "region", "status"),
)

content_tags = Table(
    "content_tags",
    metadata,
    Column(
        "content_id",
        String(36),
        ForeignKey("content_items.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("tag", String(128), primary_key=True),
)

content_variants = Table(
    "content_variants",
    metadata,
    Column("id", String(36), primary_key=True),
    Column(
        "content_item_id",
        String(36),
        ForeignKey("content_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("language_code", String(16), nullable=False),
    Column("title", String(400), nullable=False),
    Column("body_html", Text, nullable=False),
    Column("is_default_lang", Boolean, nullable=False, default=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Column("updated_by", String(255), nullable=False),
    UniqueConstraint("content_item_id", "language_code", name="uq_content_variants_item_lang"),
)
