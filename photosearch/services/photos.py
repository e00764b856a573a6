"""Photo search against the Unsplash ``/search/photos`` endpoint."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from photosearch.domain.models import PhotoRecord, SearchResponse
from photosearch.services.base import BaseHttpService
from photosearch.services.exceptions import DecodeFailure, MalformedRequest, TransportFailure

SEARCH_PATH = "search/photos"
PER_PAGE = 30


class PhotoSearchService(BaseHttpService):
    """Turns a free-text query into decoded photo records with one GET request.

    Every call ends in exactly one outcome: the list of records, or one of
    ``MalformedRequest``, ``TransportFailure`` and ``DecodeFailure``. Nothing is
    retried, cached or logged here; overlapping calls are independent.
    """

    async def search_photos(self, query: str) -> list[PhotoRecord]:
        url = self.build_search_url(query)

        try:
            response = await self._client.get(url)
        except httpx.RequestError as exc:
            raise TransportFailure(f"Photo search request failed: {exc}", cause=exc) from exc

        return self.decode_response(response)

    def build_search_url(self, query: str) -> httpx.URL:
        access_key = self._read_secret(self._settings.access_key)
        if not access_key:
            raise MalformedRequest("Unsplash access key is not configured.")

        base_url = str(self._settings.base_url).rstrip("/")
        params = {
            "query": query,
            "per_page": PER_PAGE,
            "client_id": access_key,
        }
        try:
            # Lone surrogates and similar cannot be percent-encoded.
            query.encode("utf-8")
            return httpx.URL(f"{base_url}/{SEARCH_PATH}", params=params)
        except (UnicodeEncodeError, httpx.InvalidURL) as exc:
            raise MalformedRequest(f"Cannot build search URL for query {query!r}: {exc}") from exc

    @staticmethod
    def decode_response(response: httpx.Response) -> list[PhotoRecord]:
        # Status is not checked: error pages fail decoding instead.
        try:
            payload = SearchResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeFailure(
                f"Unexpected search response (HTTP {response.status_code}): "
                f"{exc.error_count()} invalid field(s)",
                errors=exc.errors(include_url=False),
                status_code=response.status_code,
            ) from exc
        return list(payload.results)


__all__ = ["PER_PAGE", "PhotoSearchService"]
