from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Collection, List, Optional

from sqlalchemy.engine import Engine

from content_api import repo
from content_api.access import enforce_region
from content_api.errors import Conflict, NotFound
from content_api.models import ContentType, Priority, Status
from content_api.selector import select_variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedItem:
    id: str
    content_type: ContentType
    region: str
    category: str
    tags: frozenset[str]
    priority: Priority
    pinned: bool
    status: Status
    published_at: Optional[datetime]
    scheduled_unpublish_at: Optional[datetime]
    display_language: str
    available_languages: List[str]
    title: str
    created_by: str
    created_at: datetime
    approved_by: Optional[str]
    approved_at: Optional[datetime]
    version: int
    internal: bool


@dataclass(frozen=True)
class ContentView:
    id: str
    content_type: ContentType
    region: str
    category: str
    tags: frozenset[str]
    priority: Priority
    status: Status
    published_at: Optional[datetime]
    selected_language: str
    available_languages: List[str]
    title: str
    body_html: str
    created_by: str
    created_at: datetime
    approved_by: Optional[str]
    approved_at: Optional[datetime]
    version: int
    internal: bool


def get_content_view(
    engine: Engine,
    item_id: str,
    requested_lang: Optional[str],
    caller_regions: Collection[str],
) -> ContentView:
    with engine.connect() as conn:
        item = repo.find_item_by_id(conn, item_id)
        if item is None:
            raise NotFound("content not found")

        enforce_region(item.region, caller_regions)

        variants = repo.find_variants_by_item(conn, item_id)

    if not variants:
        raise Conflict("no language variants exist for this content")

    selection = select_variant(variants, requested_lang)
    chosen = selection.variant

    return ContentView(
        id=item.id,
        content_type=item.content_type,
        region=item.region,
        category=item.category,
        tags=item.tags,
        priority=item.priority,
        status=item.status,
        published_at=item.published_at,
        selected_language=chosen.language_code,
        available_languages=selection.available_languages,
        title=chosen.title,
        body_html=chosen.body_html,
        created_by=item.created_by,
        created_at=item.created_at,
        approved_by=item.approved_by,
        approved_at=item.approved_at,
        version=item.version,
        internal=item.internal,
    )


def get_feed(
    engine: Engine,
    region: str,
    lang: Optional[str],
    caller_regions: Collection[str],
) -> List[FeedItem]:
    """
    Published items of one region, newest first, each rendered in the
    requested language when it exists and in its fallback otherwise.
    """
    enforce_region(region, caller_regions)

    feed: List[FeedItem] = []
    with engine.connect() as conn:
        published = repo.find_by_region_and_status_order_by_published_at_desc(
            conn, region, Status.PUBLISHED
        )

        for item in published:
            variants = repo.find_variants_by_item(conn, item.id)
            if not variants:
                logger.warning("Published content %s has no variants; left out of feed", item.id)
                continue

            selection = select_variant(variants, lang)
            chosen = selection.variant
            feed.append(
                FeedItem(
                    id=item.id,
                    content_type=item.content_type,
                    region=item.region,
                    category=item.category,
                    tags=item.tags,
                    priority=item.priority,
                    pinned=item.pinned,
                    status=item.status,
                    published_at=item.published_at,
                    scheduled_unpublish_at=item.scheduled_unpublish_at,
                    display_language=chosen.language_code,
                    available_languages=selection.available_languages,
                    title=chosen.title,
                    created_by=item.created_by,
                    created_at=item.created_at,
                    approved_by=item.approved_by,
                    approved_at=item.approved_at,
                    version=item.version,
                    internal=item.internal,
                )
            )

    return feed
