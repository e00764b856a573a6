"""Pydantic models for decoded search API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PhotoUrls(BaseModel):
    model_config = ConfigDict(frozen=True)

    regular: str
    full: str


class PhotoAuthor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class PhotoRecord(BaseModel):
    """One photo from a search response."""

    model_config = ConfigDict(frozen=True)

    id: str
    description: str | None = None
    urls: PhotoUrls
    user: PhotoAuthor

    @property
    def regular_url(self) -> str:
        return self.urls.regular

    @property
    def full_url(self) -> str:
        return self.urls.full

    @property
    def author_name(self) -> str:
        return self.user.name

    @property
    def caption(self) -> str:
        """Text shown under the thumbnail; empty when the photo has no description."""

        return self.description or ""


class SearchResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: list[PhotoRecord]


__all__ = [
    "PhotoAuthor",
    "PhotoRecord",
    "PhotoUrls",
    "SearchResponse",
]
