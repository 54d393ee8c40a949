import asyncio

import httpx
import pytest

from fakes import cms_envelope, make_cms_api
from src.modules.announcement.exceptions import (
    CatalogNotFoundError,
    StructuredFetchError,
    StructuredTimeoutError,
    StructuredTransportError,
)
from src.modules.cms_api.service import DESKTOP_USER_AGENTS


def test_returns_articles_of_requested_catalog(article):
    service, transport = make_cms_api(
        lambda request: httpx.Response(200, json=cms_envelope(161, [article]))
    )

    articles = asyncio.run(service.fetch_articles(161))

    assert [a.code for a in articles] == ["CMS-123"]
    assert articles[0].release_date == 1700000000000
    assert len(transport.requests) == 1


def test_request_shape(article):
    service, transport = make_cms_api(
        lambda request: httpx.Response(200, json=cms_envelope(161, [article]))
    )
    asyncio.run(service.fetch_articles(161))

    request = transport.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/bapi/composite/v1/public/cms/article/list/query"
    assert dict(request.url.params) == {"type": "1", "pageNo": "1", "pageSize": "10"}
    assert request.headers["User-Agent"] in DESKTOP_USER_AGENTS


def test_missing_catalog_raises_not_found(article):
    service, _ = make_cms_api(
        lambda request: httpx.Response(200, json=cms_envelope(49, [article]))
    )
    with pytest.raises(CatalogNotFoundError):
        asyncio.run(service.fetch_articles(161))


def test_unsuccessful_envelope_raises_not_found():
    body = {"code": "100001", "message": "rate limited", "success": False, "data": None}
    service, _ = make_cms_api(lambda request: httpx.Response(200, json=body))
    with pytest.raises(CatalogNotFoundError):
        asyncio.run(service.fetch_articles(161))


def test_malformed_envelope_raises_structured_error():
    service, _ = make_cms_api(lambda request: httpx.Response(200, text="<html>blocked</html>"))
    with pytest.raises(StructuredFetchError):
        asyncio.run(service.fetch_articles(161))


def test_timeout_raises_timeout_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    service, _ = make_cms_api(handler)
    with pytest.raises(StructuredTimeoutError):
        asyncio.run(service.fetch_articles(161))


def test_http_error_status_raises_transport_error():
    service, _ = make_cms_api(lambda request: httpx.Response(403, text="forbidden"))
    with pytest.raises(StructuredTransportError) as excinfo:
        asyncio.run(service.fetch_articles(161))
    assert not isinstance(excinfo.value, StructuredTimeoutError)


def test_connection_error_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    service, _ = make_cms_api(handler)
    with pytest.raises(StructuredTransportError):
        asyncio.run(service.fetch_articles(161))
