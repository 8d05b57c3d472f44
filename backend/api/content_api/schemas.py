from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from content_api.models import ContentType, Priority, Status


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------
# Requests
# ---------------------------------

# Required fields are Optional here on purpose: the services report missing
# values as BadRequest with a readable message.
class CreateContentIn(ApiModel):
    content_type: Optional[str] = None
    region: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    priority: Optional[str] = None
    pinned: bool = False
    scheduled_publish_at: Optional[datetime] = None
    scheduled_unpublish_at: Optional[datetime] = None
    internal: bool = False


class UpsertVariantIn(ApiModel):
    language_code: Optional[str] = None
    title: Optional[str] = None
    body_html: Optional[str] = None
    is_default_lang: bool = False


# ---------------------------------
# Responses
# ---------------------------------

class _SortedTags(ApiModel):
    tags: List[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def _sort_tags(cls, value):
        return sorted(value or [])


class ContentItemOut(_SortedTags):
    id: str
    content_type: ContentType
    region: str
    category: str
    status: Status
    priority: Priority
    pinned: bool
    scheduled_publish_at: Optional[datetime] = None
    scheduled_unpublish_at: Optional[datetime] = None
    created_at: datetime
    created_by: str
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    published_at: Optional[datetime] = None
    published_by: Optional[str] = None
    archived_at: Optional[datetime] = None
    archived_by: Optional[str] = None
    last_modified_at: datetime
    last_modified_by: str
    version: int
    internal: bool


class ContentVariantOut(ApiModel):
    id: str
    content_item_id: str
    language_code: str
    title: str
    body_html: str
    is_default_lang: bool
    updated_at: datetime
    updated_by: str


class FeedItemOut(_SortedTags):
    id: str
    content_type: ContentType
    region: str
    category: str
    priority: Priority
    pinned: bool
    status: Status
    published_at: Optional[datetime] = None
    scheduled_unpublish_at: Optional[datetime] = None
    display_language: str
    available_languages: List[str]
    title: str
    created_by: str
    created_at: datetime
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    version: int
    internal: bool


class ContentViewOut(_SortedTags):
    id: str
    content_type: ContentType
    region: str
    category: str
    priority: Priority
    status: Status
    published_at: Optional[datetime] = None
    selected_language: str
    available_languages: List[str]
    title: str
    body_html: str
    created_by: str
    created_at: datetime
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    version: int
    internal: bool
