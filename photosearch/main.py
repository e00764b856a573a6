"""Command-line entrypoint."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import cyclopts
import httpx
from sqlalchemy.exc import SQLAlchemyError

from photosearch.config import AppSettings, get_settings
from photosearch.db.session import Database
from photosearch.domain.models import PhotoRecord
from photosearch.logging import configure_logging, logger
from photosearch.services.exceptions import FetchError
from photosearch.services.history import SearchHistoryService
from photosearch.services.photos import PhotoSearchService
from photosearch.storage.base import KeyValueStore, MemoryKeyValueStore
from photosearch.storage.sql import SqlKeyValueStore

app = cyclopts.App(name="photosearch", help="Search Unsplash photos from the terminal.")


@asynccontextmanager
async def open_history(settings: AppSettings) -> AsyncIterator[SearchHistoryService]:
    database = Database(settings=settings)
    try:
        try:
            await database.create_schema()
            store: KeyValueStore = SqlKeyValueStore(database)
        except SQLAlchemyError as exc:
            # An unopenable history database falls back to an in-memory list.
            logger.warning("search_history_unavailable", error=str(exc))
            store = MemoryKeyValueStore()
        yield SearchHistoryService(store, settings.history)
    finally:
        await database.dispose()


def format_photo(photo: PhotoRecord, *, full: bool = False) -> str:
    url = photo.full_url if full else photo.regular_url
    caption = photo.caption or "-"
    return f"{photo.id}\t{photo.author_name}\t{caption}\t{url}"


async def run_search(
    query: str,
    *,
    settings: AppSettings,
    full: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    async with open_history(settings) as history:
        await history.record_query(query)

    async with httpx.AsyncClient(
        transport=transport, timeout=settings.unsplash.request_timeout_seconds
    ) as client:
        service = PhotoSearchService(client, settings=settings.unsplash)
        try:
            photos = await service.search_photos(query)
        except FetchError as exc:
            logger.warning(
                "photo_search_failed",
                query=query,
                error_type=exc.__class__.__name__,
                error=str(exc),
            )
            print(f"Search failed: {exc}", file=sys.stderr)
            return 1

    logger.info("photo_search_completed", query=query, results=len(photos))
    if not photos:
        print("No photos found.")
    for photo in photos:
        print(format_photo(photo, full=full))
    return 0


async def run_history(text: str, *, settings: AppSettings) -> int:
    async with open_history(settings) as history:
        entries = await history.filter_history(text) if text else await history.get_history()
    for entry in entries:
        print(entry)
    return 0


@app.command
def search(query: str, /, *, full: bool = False) -> None:
    """Search photos and remember the query.

    Args:
        query: Free-text search terms.
        full: Print full-resolution URLs instead of display-size ones.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    exit_code = asyncio.run(run_search(query, settings=settings, full=full))
    if exit_code:
        raise SystemExit(exit_code)


@app.command
def history(text: str = "", /) -> None:
    """Show recent searches, optionally only those containing TEXT.

    Args:
        text: Case-insensitive fragment to match anywhere in a query.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    asyncio.run(run_history(text, settings=settings))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
