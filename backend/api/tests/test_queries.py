import pytest

from conftest import days_ago
from content_api import queries
from content_api.errors import Conflict, Forbidden, NotFound
from content_api.models import Status


# ---------------------------------
# get_content_view
# ---------------------------------

def test_view_selects_requested_language(engine, make_item):
    item = make_item(region="US", variants=[("ja", False), ("en", True)])

    view = queries.get_content_view(engine, item.id, "ja", {"US"})

    assert view.selected_language == "ja"
    assert view.title == "ja title"
    assert view.body_html == "<p>ja body</p>"
    assert view.available_languages == ["en", "ja"]
    assert view.region == "US"


def test_view_falls_back_to_default(engine, make_item):
    item = make_item(region="US", variants=[("ja", False), ("en", True)])
    assert queries.get_content_view(engine, item.id, None, {"US"}).selected_language == "en"


def test_view_without_default_uses_smallest_code(engine, make_item):
    item = make_item(region="US", variants=[("ru", False), ("ja", False)])
    assert queries.get_content_view(engine, item.id, None, {"US"}).selected_language == "ja"


def test_view_does_not_require_published_status(engine, make_item):
    item = make_item(region="US", status=Status.DRAFT, variants=[("en", True)])
    assert queries.get_content_view(engine, item.id, "en", {"US"}).status is Status.DRAFT


def test_view_unknown_item(engine):
    with pytest.raises(NotFound):
        queries.get_content_view(engine, "missing", None, {"US"})


def test_view_other_region(engine, make_item):
    item = make_item(region="US", variants=[("en", True)])
    with pytest.raises(Forbidden):
        queries.get_content_view(engine, item.id, None, {"JP"})


def test_view_without_variants_conflicts(engine, make_item):
    item = make_item(region="US")
    with pytest.raises(Conflict):
        queries.get_content_view(engine, item.id, None, {"US"})


# ---------------------------------
# get_feed
# ---------------------------------

def test_feed_only_published_items_of_region_newest_first(engine, make_item):
    older = make_item(region="JP", status=Status.PUBLISHED, published_at=days_ago(3), variants=[("ja", True)])
    newer = make_item(region="JP", status=Status.PUBLISHED, published_at=days_ago(1), variants=[("ja", True)])
    make_item(region="JP", status=Status.DRAFT, variants=[("ja", True)])
    make_item(region="US", status=Status.PUBLISHED, published_at=days_ago(0), variants=[("en", True)])

    feed = queries.get_feed(engine, "JP", None, {"JP"})

    assert [f.id for f in feed] == [newer.id, older.id]
    assert all(f.status is Status.PUBLISHED for f in feed)


def test_feed_missing_language_falls_back_per_item(engine, make_item):
    make_item(region="JP", status=Status.PUBLISHED, published_at=days_ago(1), variants=[("ja", True), ("en", False)])
    make_item(region="JP", status=Status.PUBLISHED, published_at=days_ago(2), variants=[("en", True)])

    feed = queries.get_feed(engine, "JP", "ru", {"JP"})

    assert [f.display_language for f in feed] == ["ja", "en"]
    assert feed[0].available_languages == ["en", "ja"]


def test_feed_uses_requested_language_when_present(engine, make_item):
    make_item(region="US", status=Status.PUBLISHED, published_at=days_ago(1), variants=[("en", True), ("ja", False)])

    feed = queries.get_feed(engine, "US", "ja", {"US"})

    assert feed[0].display_language == "ja"
    assert feed[0].title == "ja title"


def test_feed_skips_items_without_variants(engine, make_item):
    make_item(region="US", status=Status.PUBLISHED, published_at=days_ago(1))
    kept = make_item(region="US", status=Status.PUBLISHED, published_at=days_ago(2), variants=[("en", False)])

    feed = queries.get_feed(engine, "US", None, {"US"})

    assert [f.id for f in feed] == [kept.id]


def test_feed_carries_tags(engine, make_item):
    make_item(
        region="US",
        status=Status.PUBLISHED,
        published_at=days_ago(1),
        variants=[("en", True)],
        tags=("launch", "feature"),
    )
    assert queries.get_feed(engine, "US", None, {"US"})[0].tags == {"launch", "feature"}


def test_feed_other_region(engine):
    with pytest.raises(Forbidden):
        queries.get_feed(engine, "JP", None, {"US"})


def test_feed_empty_region(engine):
    assert queries.get_feed(engine, "RU", None, {"RU"}) == []
