from pydantic import BaseModel, ConfigDict, Field


class StructuredArticle(BaseModel):
    """Article as returned by the CMS list API (``releaseDate`` in epoch ms)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    code: str
    title: str
    type: int
    release_date: int | None = Field(default=None, alias="releaseDate")


class Catalog(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    catalog_id: int = Field(alias="catalogId")
    catalog_name: str | None = Field(default=None, alias="catalogName")
    articles: list[StructuredArticle] = []


class CatalogListData(BaseModel):
    catalogs: list[Catalog] = []


class CatalogListResponse(BaseModel):
    code: str
    success: bool
    message: str | None = None
    data: CatalogListData | None = None
