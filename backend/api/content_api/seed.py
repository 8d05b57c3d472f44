"""Demo data loader.

Creates the tables when they are missing and inserts a handful of published
items across the US, JP and RU regions. Does nothing when content exists.

    python -m content_api.seed
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Iterable, Tuple

from sqlalchemy.engine import Engine

from content_api import repo
from content_api.config import configure_logging, get_settings
from content_api.db import begin_write, get_engine
from content_api.models import ContentItem, ContentType, ContentVariant, Priority, Status
from content_api.tables import metadata

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)

# (lang, title, body, is_default)
Variant = Tuple[str, str, str, bool]

DEMO_CONTENT = [
    {
        "region": "US",
        "category": "PRODUCT_UPDATES",
        "tags": {"launch", "feature"},
        "priority": Priority.HIGH,
        "pinned": True,
        "published_ago": 1 * DAY,
        "approved_ago": 2 * DAY,
        "created_by": "sarah.williams",
        "approved_by": "james.chen",
        "version": 1,
        "internal": False,
        "variants": [
            (
                "en",
                "New Dashboard Analytics Released",
                "<p>We've launched advanced analytics features for real-time dashboard insights. "
                "Track metrics, create custom reports, and export data effortlessly.</p>",
                True,
            ),
            (
                "ja",
                "新しいダッシュボード分析がリリースされました",
                "<p>リアルタイムダッシュボード分析の高度な機能をリリースしました。</p>",
                False,
            ),
        ],
    },
    {
        "region": "JP",
        "category": "POLICIES",
        "content_type": ContentType.POLICY,
        "tags": {"compliance", "security"},
        "priority": Priority.URGENT,
        "published_ago": 3 * DAY,
        "approved_ago": 4 * DAY,
        "created_by": "tanaka.yuki",
        "approved_by": "suzuki.kenji",
        "version": 2,
        "internal": True,
        "variants": [
            ("ja", "データセキュリティポリシー更新", "<p>新しいデータセキュリティポリシーが発効します。</p>", True),
        ],
    },
    {
        "region": "RU",
        "category": "ANNOUNCEMENTS",
        "content_type": ContentType.ANNOUNCEMENT,
        "tags": {"announcement", "training"},
        "priority": Priority.NORMAL,
        "published_ago": 5 * DAY,
        "approved_ago": 6 * DAY,
        "created_by": "ivanov.boris",
        "approved_by": "volkov.dmitri",
        "version": 1,
        "internal": False,
        "variants": [
            (
                "ru",
                "Начало подготовки к новому году",
                "<p>Новый год — отличное время для обновления ваших навыков и знаний.</p>",
                True,
            ),
        ],
    },
    {
        "region": "US",
        "category": "GUIDELINES",
        "content_type": ContentType.GUIDELINE,
        "tags": {"documentation", "best-practices"},
        "priority": Priority.NORMAL,
        "published_ago": 7 * DAY,
        "approved_ago": 8 * DAY,
        "created_by": "alice.johnson",
        "approved_by": "bob.smith",
        "version": 3,
        "internal": False,
        "variants": [
            (
                "en",
                "API Integration Best Practices",
                "<p>Follow these guidelines to ensure seamless API integrations with proper "
                "error handling and security.</p>",
                True,
            ),
        ],
    },
    {
        "region": "JP",
        "category": "FAQ",
        "content_type": ContentType.FAQ,
        "tags": {"support", "help"},
        "priority": Priority.LOW,
        "published_ago": 2 * DAY,
        "approved_ago": 3 * DAY,
        "created_by": "support.team",
        "approved_by": "manager.jp",
        "version": 1,
        "internal": False,
        "variants": [
            (
                "ja",
                "よくある質問（FAQ）",
                "<h3>Q: パスワードをリセットするには？</h3>"
                "<p>A: 「ログイン」ページで「パスワードを忘れた」をクリックしてください。</p>",
                True,
            ),
        ],
    },
]


def _variants(item_id: str, author: str, now: datetime, rows: Iterable[Variant]):
    for lang, title, body, is_default in rows:
        yield ContentVariant(
            id=str(uuid.uuid4()),
            content_item_id=item_id,
            language_code=lang,
            title=title,
            body_html=body,
            is_default_lang=is_default,
            updated_at=now,
            updated_by=author,
        )


def seed(engine: Engine, now: datetime | None = None) -> int:
    """Returns the number of items inserted (0 when the store already has data)."""
    now = now or datetime.now(timezone.utc)
    metadata.create_all(engine)

    with begin_write(engine) as conn:
        if repo.count_items(conn) > 0:
            logger.info("Content store not empty; skipping seed")
            return 0

        for entry in DEMO_CONTENT:
            author = entry["created_by"]
            published_at = now - entry["published_ago"]
            item = ContentItem(
                id=str(uuid.uuid4()),
                content_type=entry.get("content_type", ContentType.ARTICLE),
                region=entry["region"],
                category=entry["category"],
                tags=frozenset(entry["tags"]),
                status=Status.PUBLISHED,
                priority=entry["priority"],
                pinned=entry.get("pinned", False),
                created_at=published_at - 2 * DAY,
                created_by=author,
                approved_at=now - entry["approved_ago"],
                approved_by=entry["approved_by"],
                published_at=published_at,
                published_by=entry["approved_by"],
                last_modified_at=published_at,
                last_modified_by=author,
                version=entry["version"],
                internal=entry["internal"],
            )
            repo.save_item(conn, item)
            for variant in _variants(item.id, author, now, entry["variants"]):
                repo.save_variant(conn, variant)

    logger.info("Seeded %d content items", len(DEMO_CONTENT))
    return len(DEMO_CONTENT)


def main() -> None:
    configure_logging(get_settings().log_level)
    seed(get_engine())


if __name__ == "__main__":
    main()
