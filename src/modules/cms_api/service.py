import logging
import random

import httpx
from pydantic import ValidationError

from src.config.settings import settings
from src.modules.announcement.exceptions import (
    CatalogNotFoundError,
    StructuredTimeoutError,
    StructuredTransportError,
)
from src.modules.cms_api.schemas import CatalogListResponse, StructuredArticle

logger = logging.getLogger(__name__)

ARTICLE_LIST_TYPE = 1
FIRST_PAGE = 1

DESKTOP_USER_AGENTS = [
    (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/131.0.0.0 Safari/537.36"
    ),
    (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_6) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) "
        "Version/17.6 Safari/605.1.15"
    ),
    (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 14.6; rv:130.0) "
        "Gecko/20100101 Firefox/130.0"
    ),
    (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/129.0.0.0 Safari/537.36 Edg/129.0.0.0"
    ),
]


def random_user_agent() -> str:
    return random.choice(DESKTOP_USER_AGENTS)


class CmsApiService:
    """Reads announcement catalogs from the public CMS list API."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{settings.base_url}{settings.api_path}"

    def _params(self) -> dict[str, int]:
        return {
            "type": ARTICLE_LIST_TYPE,
            "pageNo": FIRST_PAGE,
            "pageSize": settings.api_page_size,
        }

    async def _fetch(self) -> CatalogListResponse:
        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.get(
                    self.url,
                    params=self._params(),
                    headers={"User-Agent": random_user_agent()},
                    timeout=settings.api_timeout,
                )
                response.raise_for_status()
            except httpx.TimeoutException as exc:
                raise StructuredTimeoutError(
                    f"CMS list API timed out after {settings.api_timeout}s"
                ) from exc
            except httpx.HTTPError as exc:
                raise StructuredTransportError(f"CMS list API request failed: {exc}") from exc

        try:
            return CatalogListResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise CatalogNotFoundError(f"Malformed CMS list API envelope: {exc}") from exc

    async def fetch_articles(self, catalog_id: int) -> list[StructuredArticle]:
        envelope = await self._fetch()
        if not envelope.success or envelope.data is None:
            raise CatalogNotFoundError(
                f"CMS list API returned code={envelope.code} message={envelope.message}"
            )

        catalog = next(
            (c for c in envelope.data.catalogs if c.catalog_id == catalog_id), None
        )
        if catalog is None:
            raise CatalogNotFoundError(f"Catalog {catalog_id} not found in CMS list API")

        logger.info(
            "CMS list API returned %d articles for catalog %d",
            len(catalog.articles), catalog_id,
        )
        return catalog.articles


cms_api_service = CmsApiService()
