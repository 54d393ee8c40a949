from pydantic import BaseModel, ConfigDict, Field


class RenderedArticle(BaseModel):
    """Article embedded in the page's application state.

    The release date is usually epoch milliseconds but the page state may
    carry a formatted string instead.
    """

    model_config = ConfigDict(populate_by_name=True)

    code: str
    title: str
    release_date: int | float | str | None = Field(default=None, alias="releaseDate")
    type: int | None = None


class CatalogDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    catalog_id: int | None = Field(default=None, alias="catalogId")
    catalog_name: str | None = Field(default=None, alias="catalogName")
    articles: list[RenderedArticle]
