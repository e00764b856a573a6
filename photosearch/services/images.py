"""Download and decode photo bitmaps for display."""

from __future__ import annotations

from io import BytesIO
from typing import Literal

import httpx
from PIL import Image

from photosearch.domain.models import PhotoRecord
from photosearch.services.base import BaseHttpService
from photosearch.services.exceptions import DecodeFailure, MalformedRequest, TransportFailure

ImageVariant = Literal["regular", "full"]


class ImageService(BaseHttpService):
    """Fetches the display-size or full-size image of a photo record."""

    async def load_image(
        self, record: PhotoRecord, *, variant: ImageVariant = "regular"
    ) -> Image.Image:
        if variant == "regular":
            raw_url = record.regular_url
        elif variant == "full":
            raw_url = record.full_url
        else:
            raise MalformedRequest(f"Unknown image variant: {variant!r}")

        try:
            url = httpx.URL(raw_url)
        except httpx.InvalidURL as exc:
            raise MalformedRequest(f"Invalid image URL for photo {record.id}: {exc}") from exc
        if url.scheme not in ("http", "https"):
            raise MalformedRequest(f"Unsupported image URL for photo {record.id}: {raw_url!r}")

        try:
            response = await self._client.get(url)
        except httpx.RequestError as exc:
            raise TransportFailure(f"Image download failed: {exc}", cause=exc) from exc

        return self.decode_image(response.content, status_code=response.status_code)

    @staticmethod
    def decode_image(raw: bytes, *, status_code: int | None = None) -> Image.Image:
        try:
            image = Image.open(BytesIO(raw))
            image.load()
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise DecodeFailure(
                f"Response is not a decodable image (HTTP {status_code}): {exc}",
                status_code=status_code,
            ) from exc
        return image


__all__ = ["ImageService", "ImageVariant"]
