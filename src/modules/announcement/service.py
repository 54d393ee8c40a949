import logging

from src.config.settings import settings
from src.modules.announcement.composer import FallbackComposer
from src.modules.announcement.schemas import Feed, FeedItem
from src.modules.cache.service import CacheService, cache_service
from src.modules.catalog.models import Category, resolve_category
from src.modules.cms_api.schemas import StructuredArticle
from src.modules.cms_api.service import CmsApiService, cms_api_service
from src.modules.normalizer.service import NormalizerService, normalizer_service
from src.modules.renderer.schemas import RenderedArticle
from src.modules.renderer.service import RendererService, renderer_service

logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "binance:announcement"


def category_url(category: Category) -> str:
    return f"{settings.announcement_url}/{category.key}"


def category_page_url(category: Category) -> str:
    return f"{category_url(category)}?c={category.catalog_id}&navId={category.catalog_id}"


def cache_key(category: Category) -> str:
    return f"{CACHE_NAMESPACE}:{category.key}:{category.catalog_id}"


class AnnouncementService:
    def __init__(
        self,
        cms_api: CmsApiService = cms_api_service,
        renderer: RendererService = renderer_service,
        normalizer: NormalizerService = normalizer_service,
        cache: CacheService = cache_service,
    ) -> None:
        self._cms_api = cms_api
        self._renderer = renderer
        self._normalizer = normalizer
        self._cache = cache
        self._composer = FallbackComposer()
        self._composer.add_step("cms_api", self._from_api)
        self._composer.add_step("rendered_page", self._from_page)

    async def _from_api(self, category: Category) -> list[StructuredArticle]:
        return await self._cms_api.fetch_articles(category.catalog_id)

    async def _from_page(self, category: Category) -> list[RenderedArticle]:
        return await self._renderer.fetch_articles(category_page_url(category))

    async def _collect(self, category: Category) -> list[FeedItem]:
        outcome = await self._composer.run(category)
        items = self._normalizer.normalize_all(outcome.articles, category_url(category))
        logger.info(
            "Collected %d items for %s via %s", len(items), category.key, outcome.source
        )
        return items

    async def get_items(self, category_key: str) -> list[FeedItem]:
        category = resolve_category(category_key)
        return await self._cache.try_get(
            cache_key(category), lambda: self._collect(category)
        )

    async def get_feed(self, category_key: str) -> Feed:
        category = resolve_category(category_key)
        items = await self.get_items(category.key)
        return Feed(
            title=f"Binance {category.key}",
            link=category_page_url(category),
            item=items,
        )


announcement_service = AnnouncementService()
