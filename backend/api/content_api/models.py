from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


class ContentType(str, enum.Enum):
    ARTICLE = "ARTICLE"
    POLICY = "POLICY"
    ANNOUNCEMENT = "ANNOUNCEMENT"
    CAMPAIGN = "CAMPAIGN"
    GUIDELINE = "GUIDELINE"
    FAQ = "FAQ"


class Status(str, enum.Enum):
    DRAFT = "DRAFT"
    IN_REVIEW = "IN_REVIEW"
    APPROVED = "APPROVED"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class Priority(str, enum.Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


@dataclass(frozen=True)
class ContentItem:
    id: str
    content_type: ContentType
    region: str
    category: str
    status: Status
    priority: Priority
    created_at: datetime
    created_by: str
    last_modified_at: datetime
    last_modified_by: str
    tags: frozenset[str] = field(default_factory=frozenset)
    pinned: bool = False
    scheduled_publish_at: Optional[datetime] = None
    scheduled_unpublish_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    published_at: Optional[datetime] = None
    published_by: Optional[str] = None
    archived_at: Optional[datetime] = None
    archived_by: Optional[str] = None
    version: int = 1
    internal: bool = False


@dataclass(frozen=True)
class ContentVariant:
    id: str
    content_item_id: str
    language_code: str
    title: str
    body_html: str
    updated_at: datetime
    updated_by: str
    is_default_lang: bool = False
