"""Pydantic schemas for IMDb-API responses.

Used to check snapshot entries; the raw provider payload is what gets
stored in the snapshot, not these models.
"""

from pydantic import BaseModel, ConfigDict, Field


class ProviderModel(BaseModel):
    """Strict, permissive-about-extras base for provider payloads."""

    model_config = ConfigDict(strict=True, extra="allow", populate_by_name=True)


class SearchResult(ProviderModel):
    id: str
    result_type: str | None = Field(default=None, alias="resultType")
    image: str | None = None
    title: str | None = None
    description: str | None = None


class SearchMovieData(ProviderModel):
    """Response of ``/SearchMovie``: candidates ranked by the provider."""

    search_type: str | None = Field(default=None, alias="searchType")
    expression: str | None = None
    results: list[SearchResult]
    error_message: str | None = Field(default=None, alias="errorMessage")


class PlainTextHTML(ProviderModel):
    plain_text: str = Field(alias="plainText")
    html: str


class TitleWikipedia(ProviderModel):
    url: str
    plot_short: PlainTextHTML = Field(alias="plotShort")
    plot_full: PlainTextHTML = Field(alias="plotFull")


class TitleData(ProviderModel):
    """Response of ``/Title/{id}/Wikipedia``."""

    id: str
    original_title: str = Field(alias="originalTitle")
    image: str
    plot: str
    directors: str
    writers: str
    stars: str
    wikipedia: TitleWikipedia
    error_message: str | None = Field(default=None, alias="errorMessage")
