import json
import logging

from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from pydantic import ValidationError

from src.config.settings import settings
from src.modules.announcement.exceptions import ExtractionError
from src.modules.cms_api.service import random_user_agent
from src.modules.renderer.browser import BrowserPool, browser_pool
from src.modules.renderer.schemas import CatalogDetail, RenderedArticle

logger = logging.getLogger(__name__)

APP_DATA_ID = "__APP_DATA"
CATALOG_DETAIL_KEY = "catalogDetail"


def parse_app_data(html: str) -> dict:
    """Return the JSON application state embedded in the rendered page."""
    soup = BeautifulSoup(html, "lxml")
    marker = soup.find(id=APP_DATA_ID)
    if marker is None:
        raise ExtractionError(f"Marker element #{APP_DATA_ID} not found in rendered page")

    raw = marker.string or marker.get_text()
    try:
        app_data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ExtractionError(f"#{APP_DATA_ID} does not contain valid JSON: {exc}") from exc
    if not isinstance(app_data, dict):
        raise ExtractionError(f"#{APP_DATA_ID} JSON is not an object")
    return app_data


def find_catalog_detail(app_data: dict) -> CatalogDetail:
    """Locate the route state exposing ``catalogDetail`` and validate it.

    Route ids in ``appState.loader.dataByRouteId`` change with every front-end
    deploy, so the map's values are scanned instead of addressing a key.
    """
    try:
        data_by_route = app_data["appState"]["loader"]["dataByRouteId"]
    except (KeyError, TypeError) as exc:
        raise ExtractionError("Application state has no loader.dataByRouteId map") from exc
    if not isinstance(data_by_route, dict):
        raise ExtractionError("loader.dataByRouteId is not a map")

    for route_state in data_by_route.values():
        if isinstance(route_state, dict) and CATALOG_DETAIL_KEY in route_state:
            try:
                return CatalogDetail.model_validate(route_state[CATALOG_DETAIL_KEY])
            except ValidationError as exc:
                raise ExtractionError(f"Malformed {CATALOG_DETAIL_KEY}: {exc}") from exc

    raise ExtractionError(f"No route state exposes {CATALOG_DETAIL_KEY}")


class RendererService:
    """Extracts announcement articles from the browser-rendered category page."""

    def __init__(self, pool: BrowserPool = browser_pool) -> None:
        self._pool = pool

    async def _render(self, url: str) -> str:
        async with self._pool.page(user_agent=random_user_agent()) as page:
            await page.goto(
                url,
                wait_until="networkidle",
                timeout=settings.render_navigation_timeout * 1000,
            )
            await page.wait_for_selector(
                f"#{APP_DATA_ID}",
                state="attached",
                timeout=settings.render_selector_timeout * 1000,
            )
            return await page.content()

    async def fetch_articles(self, url: str) -> list[RenderedArticle]:
        try:
            html = await self._render(url)
        except PlaywrightTimeoutError as exc:
            raise ExtractionError(f"Timed out waiting for #{APP_DATA_ID} on {url}") from exc
        except PlaywrightError as exc:
            raise ExtractionError(f"Browser failed to render {url}: {exc}") from exc

        detail = find_catalog_detail(parse_app_data(html))
        logger.info(
            "Rendered page returned %d articles for catalog %s",
            len(detail.articles), detail.catalog_id,
        )
        return detail.articles


renderer_service = RendererService()
