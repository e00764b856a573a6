"""Shared plumbing for services that talk to the photo API over HTTP."""

from __future__ import annotations

from typing import Any

import httpx

from photosearch.config import UnsplashSettings


class BaseHttpService:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: UnsplashSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or UnsplashSettings()

    @staticmethod
    def _read_secret(secret: Any) -> str | None:
        if not secret:
            return None
        try:
            return secret.get_secret_value()
        except AttributeError:
            return str(secret)


__all__ = ["BaseHttpService"]
