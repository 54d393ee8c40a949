import logging
from datetime import datetime, timezone

from dateutil import parser as dateparser

from src.modules.announcement.schemas import FeedItem
from src.modules.cms_api.schemas import StructuredArticle
from src.modules.renderer.schemas import RenderedArticle

logger = logging.getLogger(__name__)

RawArticle = StructuredArticle | RenderedArticle


def parse_release_date(value: int | float | str | None) -> datetime:
    """Parse an upstream release date into an aware UTC datetime.

    Numbers and digit-only strings are epoch milliseconds. Anything else goes
    through dateutil; naive results are assumed to be UTC.
    """
    if value is None:
        raise ValueError("no release date")
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            value = int(text)
        else:
            parsed = dateparser.parse(text)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


class NormalizerService:
    def normalize(self, article: RawArticle, category_url: str) -> FeedItem:
        try:
            pub_date = parse_release_date(article.release_date)
        except (ValueError, OverflowError, OSError) as exc:
            logger.warning(
                "Could not parse release date %r for %s: %s",
                article.release_date, article.code, exc,
            )
            pub_date = None

        return FeedItem(
            title=article.title,
            description=article.title,
            guid=article.code,
            link=f"{category_url}/{article.code}",
            pub_date=pub_date,
        )

    def normalize_all(self, articles: list[RawArticle], category_url: str) -> list[FeedItem]:
        return [self.normalize(article, category_url) for article in articles]


normalizer_service = NormalizerService()
