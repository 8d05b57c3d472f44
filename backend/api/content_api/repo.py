from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Connection

from content_api.models import ContentItem, ContentType, ContentVariant, Priority, Status
from content_api.tables import content_items, content_tags, content_variants


# ----------------------------
# Row mapping helpers
# ----------------------------

def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize to aware UTC. Naive values are taken as UTC: SQLite hands them
    back even for DateTime(timezone=True), and everything written is UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _item_from_row(row: Any, tags: frozenset[str]) -> ContentItem:
    return ContentItem(
        id=row["id"],
        content_type=ContentType(row["content_type"]),
        region=row["region"],
        category=row["category"],
        status=Status(row["status"]),
        priority=Priority(row["priority"]),
        pinned=bool(row["pinned"]),
        tags=tags,
        scheduled_publish_at=as_utc(row["scheduled_publish_at"]),
        scheduled_unpublish_at=as_utc(row["scheduled_unpublish_at"]),
        created_at=as_utc(row["created_at"]),
        created_by=row["created_by"],
        approved_at=as_utc(row["approved_at"]),
        approved_by=row["approved_by"],
        published_at=as_utc(row["published_at"]),
        published_by=row["published_by"],
        archived_at=as_utc(row["archived_at"]),
        archived_by=row["archived_by"],
        last_modified_at=as_utc(row["last_modified_at"]),
        last_modified_by=row["last_modified_by"],
        version=int(row["version"]),
        internal=bool(row["internal"]),
    )


def _to_utc_row(row: Dict[str, Any]) -> Dict[str, Any]:
    # SQLite stores the wall-clock part only, so convert before writing.
    return {k: as_utc(v) if isinstance(v, datetime) else v for k, v in row.items()}


def _item_to_row(item: ContentItem) -> Dict[str, Any]:
    row = _to_utc_row(asdict(item))
    row.pop("tags")
    row["content_type"] = item.content_type.value
    row["status"] = item.status.value
    row["priority"] = item.priority.value
    return row


def _variant_from_row(row: Any) -> ContentVariant:
    return ContentVariant(
        id=row["id"],
        content_item_id=row["content_item_id"],
        language_code=row["language_code"],
        title=row["title"],
        body_html=row["body_html"],
        is_default_lang=bool(row["is_default_lang"]),
        updated_at=as_utc(row["updated_at"]),
        updated_by=row["updated_by"],
    )


def _tags_for(conn: Connection, item_ids: List[str]) -> Dict[str, frozenset[str]]:
    if not item_ids:
        return {}
    rows = conn.execute(
        select(content_tags.c.content_id, content_tags.c.tag).where(
            content_tags.c.content_id.in_(item_ids)
        )
    ).all()
    grouped: Dict[str, set[str]] = {item_id: set() for item_id in item_ids}
    for content_id, tag in rows:
        grouped[content_id].add(tag)
    return {k: frozenset(v) for k, v in grouped.items()}


# ----------------------------
# Content items
# ----------------------------

def count_items(conn: Connection) -> int:
    return int(conn.execute(select(func.count()).select_from(content_items)).scalar_one())


def find_item_by_id(conn: Connection, item_id: str) -> Optional[ContentItem]:
    row = conn.execute(
        select(content_items).where(content_items.c.id == item_id)
    ).mappings().first()
    if row is None:
        return None
    return _item_from_row(row, _tags_for(conn, [item_id])[item_id])


def lock_item(conn: Connection, item_id: str) -> Optional[str]:
    """
    Row lock on the item for the rest of the transaction.
    Serializes writers that touch the item's variants.
    """
    return conn.execute(
        select(content_items.c.id).where(content_items.c.id == item_id).with_for_update()
    ).scalar_one_or_none()


def save_item(conn: Connection, item: ContentItem) -> ContentItem:
    """Insert or update the item row and replace its tag set."""
    row = _item_to_row(item)
    exists = conn.execute(
        select(content_items.c.id).where(content_items.c.id == item.id)
    ).first()

    if exists is None:
        conn.execute(insert(content_items).values(**row))
    else:
        row.pop("id")
        conn.execute(update(content_items).where(content_items.c.id == item.id).values(**row))
        conn.execute(delete(content_tags).where(content_tags.c.content_id == item.id))

    if item.tags:
        conn.execute(
            insert(content_tags),
            [{"content_id": item.id, "tag": tag} for tag in sorted(item.tags)],
        )
    return item


def find_by_region_and_status_order_by_published_at_desc(
    conn: Connection, region: str, status: Status
) -> List[ContentItem]:
    rows = conn.execute(
        select(content_items)
        .where(content_items.c.region == region, content_items.c.status == status.value)
        .order_by(content_items.c.published_at.desc().nulls_last(), content_items.c.id.asc())
    ).mappings().all()

    tags = _tags_for(conn, [r["id"] for r in rows])
    return [_item_from_row(r, tags[r["id"]]) for r in rows]


# ----------------------------
# Variants
# ----------------------------

def find_variants_by_item(conn: Connection, item_id: str) -> List[ContentVariant]:
    rows = conn.execute(
        select(content_variants)
        .where(content_variants.c.content_item_id == item_id)
        .order_by(content_variants.c.language_code.asc())
    ).mappings().all()
    return [_variant_from_row(r) for r in rows]


def find_variant_by_item_and_language(
    conn: Connection, item_id: str, language_code: str
) -> Optional[ContentVariant]:
    row = conn.execute(
        select(content_variants).where(
            content_variants.c.content_item_id == item_id,
            content_variants.c.language_code == language_code,
        )
    ).mappings().first()
    return _variant_from_row(row) if row is not None else None


def find_default_variant(conn: Connection, item_id: str) -> Optional[ContentVariant]:
    row = conn.execute(
        select(content_variants)
        .where(
            content_variants.c.content_item_id == item_id,
            content_variants.c.is_default_lang.is_(True),
        )
        .order_by(content_variants.c.language_code.asc())
        .limit(1)
    ).mappings().first()
    return _variant_from_row(row) if row is not None else None


def clear_default_flags(conn: Connection, item_id: str, except_language: str) -> int:
    result = conn.execute(
        update(content_variants)
        .where(
            content_variants.c.content_item_id == item_id,
            content_variants.c.language_code != except_language,
            content_variants.c.is_default_lang.is_(True),
        )
        .values(is_default_lang=False)
    )
    return int(result.rowcount or 0)


def save_variant(conn: Connection, variant: ContentVariant) -> ContentVariant:
    row = _to_utc_row(asdict(variant))
    exists = conn.execute(
        select(content_variants.c.id).where(content_variants.c.id == variant.id)
    ).first()

    if exists is None:
        conn.execute(insert(content_variants).values(**row))
    else:
        row.pop("id")
        conn.execute(
            update(content_variants).where(content_variants.c.id == variant.id).values(**row)
        )
    return variant
