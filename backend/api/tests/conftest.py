import os
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from content_api import repo
from content_api.auth import Caller, create_access_token
from content_api.config import Settings, get_settings
from content_api.db import get_engine, make_engine
from content_api.models import ContentItem, ContentType, ContentVariant, Priority, Status
from content_api.tables import metadata

# content_api.main reads settings at import time.
os.environ.setdefault("JWT_SECRET", "test-secret")

BASE_TIME = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'content.db'}")
    metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", jwt_secret="test-secret")


@pytest.fixture
def client(engine, settings):
    from content_api.main import app

    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def token_for(settings):
    def _token(subject="alice", **claims):
        return create_access_token(subject, claims, settings)

    return _token


@pytest.fixture
def auth_headers(token_for):
    def _headers(subject="alice", **claims):
        return {"Authorization": f"Bearer {token_for(subject, **claims)}"}

    return _headers


@pytest.fixture
def us_editor():
    return Caller(subject="alice", claims={"regions": ["US"]})


@pytest.fixture
def jp_editor():
    return Caller(subject="kenji", claims={"regions": ["JP"]})


@pytest.fixture
def make_item(engine):
    """Insert an item (and optional variants) straight through the repo."""

    def _make(
        region="US",
        status=Status.DRAFT,
        published_at=None,
        variants=(),
        category="NEWS",
        tags=(),
    ):
        item = ContentItem(
            id=str(uuid.uuid4()),
            content_type=ContentType.ARTICLE,
            region=region,
            category=category,
            tags=frozenset(tags),
            status=status,
            priority=Priority.NORMAL,
            created_at=BASE_TIME,
            created_by="seed",
            last_modified_at=BASE_TIME,
            last_modified_by="seed",
            published_at=published_at,
        )
        with engine.begin() as conn:
            repo.save_item(conn, item)
            for lang, is_default in variants:
                repo.save_variant(
                    conn,
                    ContentVariant(
                        id=str(uuid.uuid4()),
                        content_item_id=item.id,
                        language_code=lang,
                        title=f"{lang} title",
                        body_html=f"<p>{lang} body</p>",
                        is_default_lang=is_default,
                        updated_at=BASE_TIME,
                        updated_by="seed",
                    ),
                )
        return item

    return _make


def days_ago(n: int) -> datetime:
    return BASE_TIME - timedelta(days=n)
