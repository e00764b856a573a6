"""Domain-specific exceptions."""

from __future__ import annotations

from typing import Any, Sequence


class ServiceError(Exception):
    pass


class StorageError(ServiceError):
    """Raised by key-value storage backends when the slot cannot be read or written."""


class FetchError(ServiceError):
    """Base class for the terminal failures of a photo search or image download."""


class MalformedRequest(FetchError):
    """The request URL could not be built; nothing was sent."""


class TransportFailure(FetchError):
    """The HTTP transport failed before a response body was available."""

    def __init__(self, message: str, *, cause: BaseException) -> None:
        super().__init__(message)
        self.cause = cause


class DecodeFailure(FetchError):
    """The response body did not match the expected shape."""

    def __init__(
        self,
        message: str,
        *,
        errors: Sequence[dict[str, Any]] = (),
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = list(errors)
        self.status_code = status_code

    @property
    def locations(self) -> list[str]:
        """Dotted paths of the offending fields, e.g. ``results.0.urls.full``."""

        return [".".join(str(part) for part in error.get("loc", ())) for error in self.errors]


__all__ = [
    "DecodeFailure",
    "FetchError",
    "MalformedRequest",
    "ServiceError",
    "StorageError",
    "TransportFailure",
]
