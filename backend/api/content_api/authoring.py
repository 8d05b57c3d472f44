from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Type, TypeVar

from sqlalchemy.engine import Engine

from content_api import repo
from content_api.access import enforce_region
from content_api.auth import Caller
from content_api.db import begin_write
from content_api.errors import BadRequest, Conflict, Forbidden, NotFound
from content_api.models import ContentItem, ContentType, ContentVariant, Priority, Status
from content_api.schemas import CreateContentIn, UpsertVariantIn
from content_api.workflow import WorkflowError, is_published, validate_publish

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _enum_or_default(enum_cls: Type[E], value: Optional[str], default: E, field_name: str) -> E:
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise BadRequest(f"invalid {field_name}")


def create_content(engine: Engine, request: CreateContentIn, caller: Caller) -> ContentItem:
    if _blank(request.region) or _blank(request.category):
        raise BadRequest("region and category are required")

    if request.region not in caller.regions:
        logger.warning(
            "Create denied: caller=%s region=%s caller_regions=%s",
            caller.subject,
            request.region,
            sorted(caller.regions),
        )
        raise Forbidden("not allowed to create content in this region")

    content_type = _enum_or_default(ContentType, request.content_type, ContentType.ARTICLE, "contentType")
    priority = _enum_or_default(Priority, request.priority, Priority.NORMAL, "priority")

    now = _now()
    item = ContentItem(
        id=str(uuid.uuid4()),
        content_type=content_type,
        region=request.region,
        category=request.category,
        tags=frozenset(request.tags or ()),
        status=Status.DRAFT,
        priority=priority,
        pinned=request.pinned,
        scheduled_publish_at=repo.as_utc(request.scheduled_publish_at),
        scheduled_unpublish_at=repo.as_utc(request.scheduled_unpublish_at),
        internal=request.internal,
        created_at=now,
        created_by=caller.subject,
        last_modified_at=now,
        last_modified_by=caller.subject,
    )

    with begin_write(engine) as conn:
        repo.save_item(conn, item)

    logger.info("Created content %s in region %s by %s", item.id, item.region, caller.subject)
    return item


def upsert_variant(
    engine: Engine, item_id: str, request: UpsertVariantIn, caller: Caller
) -> ContentVariant:
    """
    Create or update the (item, language) variant.

    The whole read-modify-write runs under a lock on the item row so that two
    concurrent default-language swaps cannot leave zero or two defaults.
    """
    with begin_write(engine) as conn:
        if repo.lock_item(conn, item_id) is None:
            raise NotFound("content not found")
        item = repo.find_item_by_id(conn, item_id)

        enforce_region(item.region, caller.regions)

        if _blank(request.language_code) or request.title is None or request.body_html is None:
            raise BadRequest("languageCode, title, bodyHtml are required")

        now = _now()
        existing = repo.find_variant_by_item_and_language(conn, item_id, request.language_code)
        if existing is None:
            variant = ContentVariant(
                id=str(uuid.uuid4()),
                content_item_id=item_id,
                language_code=request.language_code,
                title=request.title,
                body_html=request.body_html,
                updated_at=now,
                updated_by=caller.subject,
            )
        else:
            variant = replace(
                existing,
                title=request.title,
                body_html=request.body_html,
                updated_at=now,
                updated_by=caller.subject,
            )

        if request.is_default_lang:
            cleared = repo.clear_default_flags(conn, item_id, except_language=request.language_code)
            if cleared:
                logger.info("Cleared default language on %d variant(s) of %s", cleared, item_id)
            variant = replace(variant, is_default_lang=True)

        repo.save_variant(conn, variant)

    logger.info(
        "Upserted variant %s/%s (default=%s) by %s",
        item_id,
        variant.language_code,
        variant.is_default_lang,
        caller.subject,
    )
    return variant


def publish(engine: Engine, item_id: str, caller: Caller) -> ContentItem:
    with begin_write(engine) as conn:
        if repo.lock_item(conn, item_id) is None:
            raise NotFound("content not found")
        item = repo.find_item_by_id(conn, item_id)

        enforce_region(item.region, caller.regions)

        if not repo.find_variants_by_item(conn, item_id):
            raise Conflict("cannot publish without a language variant")

        if is_published(item.status):
            logger.info("Content %s already published; leaving it unchanged", item_id)
            return item

        try:
            validate_publish(item.status)
        except WorkflowError as e:
            raise Conflict(str(e))

        now = _now()
        item = replace(
            item,
            status=Status.PUBLISHED,
            published_at=now,
            published_by=caller.subject,
            last_modified_at=now,
            last_modified_by=caller.subject,
        )
        repo.save_item(conn, item)

    logger.info("Published content %s in region %s by %s", item_id, item.region, caller.subject)
    return item
