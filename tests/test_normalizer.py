from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.modules.cms_api.schemas import StructuredArticle
from src.modules.normalizer.service import normalizer_service, parse_release_date
from src.modules.renderer.schemas import RenderedArticle

CATEGORY_URL = "https://www.binance.com/en/support/announcement/new-cryptocurrency-listing"


def test_structured_article_is_normalized(article):
    item = normalizer_service.normalize(StructuredArticle.model_validate(article), CATEGORY_URL)

    assert item.title == "New Listing"
    assert item.description == "New Listing"
    assert item.guid == "CMS-123"
    assert item.link.endswith("/CMS-123")
    assert item.link == f"{CATEGORY_URL}/CMS-123"
    assert item.pub_date == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def test_rendered_article_with_string_epoch():
    raw = RenderedArticle.model_validate(
        {"code": "abc", "title": "Delist XYZ", "releaseDate": "1700000000000", "type": 1}
    )
    item = normalizer_service.normalize(raw, CATEGORY_URL)
    assert item.pub_date == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def test_rendered_article_with_formatted_date():
    raw = RenderedArticle.model_validate(
        {"code": "abc", "title": "Delist XYZ", "releaseDate": "2024-03-05 10:00:00"}
    )
    item = normalizer_service.normalize(raw, CATEGORY_URL)
    assert item.pub_date == datetime(2024, 3, 5, 10, 0, tzinfo=timezone.utc)


def test_unparseable_date_keeps_item_without_pub_date(caplog):
    raw = RenderedArticle.model_validate(
        {"code": "abc", "title": "Delist XYZ", "releaseDate": "soon"}
    )
    item = normalizer_service.normalize(raw, CATEGORY_URL)
    assert item.guid == "abc"
    assert item.pub_date is None
    assert "Could not parse release date" in caplog.text


def test_normalize_all_keeps_order(article):
    second = dict(article, code="CMS-124", title="Second")
    items = normalizer_service.normalize_all(
        [StructuredArticle.model_validate(a) for a in (article, second)], CATEGORY_URL
    )
    assert [i.guid for i in items] == ["CMS-123", "CMS-124"]


def test_items_are_immutable(article):
    item = normalizer_service.normalize(StructuredArticle.model_validate(article), CATEGORY_URL)
    with pytest.raises(ValidationError):
        item.title = "changed"


def test_parse_release_date_with_offset():
    parsed = parse_release_date("2024-03-05T18:00:00+08:00")
    assert parsed == datetime(2024, 3, 5, 10, 0, tzinfo=timezone.utc)


def test_missing_release_date_keeps_item_without_pub_date(caplog):
    raw = RenderedArticle.model_validate({"code": "no-date", "title": "Undated", "releaseDate": None})
    item = normalizer_service.normalize(raw, CATEGORY_URL)
    assert item.guid == "no-date"
    assert item.pub_date is None
    assert "Could not parse release date" in caplog.text


def test_structured_article_without_release_date(article):
    del article["releaseDate"]
    item = normalizer_service.normalize(StructuredArticle.model_validate(article), CATEGORY_URL)
    assert item.pub_date is None
