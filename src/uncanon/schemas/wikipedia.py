"""Pydantic schemas for Wikipedia page summary responses."""

from pydantic import BaseModel, ConfigDict


class Thumbnail(BaseModel):
    model_config = ConfigDict(strict=True, extra="allow")

    source: str


class PageURL(BaseModel):
    model_config = ConfigDict(strict=True, extra="allow")

    page: str


class ContentURLs(BaseModel):
    model_config = ConfigDict(strict=True, extra="allow")

    desktop: PageURL
    mobile: PageURL


class PageSummary(BaseModel):
    """Response of ``/page/summary/{title}``."""

    model_config = ConfigDict(strict=True, extra="allow")

    title: str | None = None
    extract: str
    extract_html: str
    content_urls: ContentURLs
    thumbnail: Thumbnail | None = None
