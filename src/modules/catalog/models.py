from dataclasses import dataclass

from src.modules.announcement.exceptions import UnknownCategoryError


@dataclass(frozen=True)
class Category:
    key: str
    catalog_id: int


CATEGORIES: dict[str, Category] = {c.key: c for c in [
    Category("new-cryptocurrency-listing", 48),
    Category("latest-binance-news", 49),
    Category("latest-activities", 93),
    Category("new-fiat-listings", 50),
    Category("api-updates", 51),
    Category("crypto-airdrop", 128),
    Category("wallet-maintenance-updates", 157),
    Category("delisting", 161),
]}

DEFAULT_CATEGORY = "new-cryptocurrency-listing"


def resolve_category(key: str) -> Category:
    try:
        return CATEGORIES[key]
    except KeyError:
        raise UnknownCategoryError(key) from None
