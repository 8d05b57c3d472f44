"""Content items, tags and language variants.

- content_items: one row per item, region/status indexed for the feed
- content_tags: one row per (item, tag)
- content_variants: one row per (item, language), unique on the pair
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "20261019_0001_content_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "content_items",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("content_type", sa.String(32), nullable=False),
        sa.Column("region", sa.String(32), nullable=False),
        sa.Column("category", sa.String(128), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("priority", sa.String(16), nullable=False),
        sa.Column("pinned", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("scheduled_publish_at", sa.DateTime(timezone=True)),
        sa.Column("scheduled_unpublish_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("approved_at", sa.DateTime(timezone=True)),
        sa.Column("approved_by", sa.String(255)),
        sa.Column("published_at", sa.DateTime(timezone=True)),
        sa.Column("published_by", sa.String(255)),
        sa.Column("archived_at", sa.DateTime(timezone=True)),
        sa.Column("archived_by", sa.String(255)),
        sa.Column("last_modified_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified_by", sa.String(255), nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("internal", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_content_items_region_status", "content_items", ["region", "status"])

    op.create_table(
        "content_tags",
        sa.Column(
            "content_id",
            sa.String(36),
            sa.ForeignKey("content_items.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("tag", sa.String(128), primary_key=True),
    )

    op.create_table(
        "content_variants",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "content_item_id",
            sa.String(36),
            sa.ForeignKey("content_items.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("language_code", sa.String(16), nullable=False),
        sa.Column("title", sa.String(400), nullable=False),
        sa.Column("body_html", sa.Text, nullable=False),
        sa.Column("is_default_lang", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_by", sa.String(255), nullable=False),
        sa.UniqueConstraint(
            "content_item_id", "language_code", name="uq_content_variants_item_lang"
        ),
    )
    op.create_index(
        "ix_content_variants_content_item_id", "content_variants", ["content_item_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_content_variants_content_item_id", table_name="content_variants")
    op.drop_table("content_variants")
    op.drop_table("content_tags")
    op.drop_index("ix_content_items_region_status", table_name="content_items")
    op.drop_table("content_items")
