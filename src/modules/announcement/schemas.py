from datetime import datetime

from pydantic import BaseModel, ConfigDict


class FeedItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    guid: str
    link: str
    pub_date: datetime | None = None


class Feed(BaseModel):
    """Shape handed to the feed route: channel title, channel link, items."""

    title: str
    link: str
    item: list[FeedItem]
