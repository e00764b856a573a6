"""Tests for logging configuration and the command-line entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
import pytest
import structlog
from pydantic import SecretStr

from photosearch import main as main_module
from photosearch.config import AppSettings, DatabaseSettings, UnsplashSettings
from photosearch.logging import configure_logging
from photosearch.services.history import SearchHistoryService
from photosearch.storage.base import MemoryKeyValueStore


def test_configure_logging_outputs_json(capsys):
    configure_logging()
    logger = structlog.get_logger()
    logger.info("unit-test", foo="bar")
    captured = capsys.readouterr()
    assert "unit-test" in captured.err
    assert '"foo": "bar"' in captured.err
    assert captured.out == ""


def test_configure_logging_accepts_level_names(capsys):
    configure_logging("WARNING")
    logger = structlog.get_logger()
    logger.info("hidden-event")
    logger.warning("shown-event")
    err = capsys.readouterr().err
    assert "hidden-event" not in err
    assert "shown-event" in err


@pytest.fixture
def settings():
    return AppSettings(unsplash=UnsplashSettings(access_key=SecretStr("key")))


@pytest.fixture
def history_store(monkeypatch):
    store = MemoryKeyValueStore()

    @asynccontextmanager
    async def fake_open_history(settings):
        yield SearchHistoryService(store, settings.history)

    monkeypatch.setattr(main_module, "open_history", fake_open_history)
    return store


def _photo(photo_id: str, description: str | None) -> dict:
    return {
        "id": photo_id,
        "description": description,
        "urls": {"regular": f"https://img/{photo_id}/r", "full": f"https://img/{photo_id}/f"},
        "user": {"name": "Ann"},
    }


@pytest.mark.asyncio
async def test_run_search_records_query_and_prints_results(settings, history_store, capsys):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": [_photo("1", "Red fox"), _photo("2", None)]})

    code = await main_module.run_search(
        "fox", settings=settings, transport=httpx.MockTransport(handler)
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "1\tAnn\tRed fox\thttps://img/1/r" in out
    assert "2\tAnn\t-\thttps://img/2/r" in out
    assert await history_store.read("searchHistory") == ["fox"]


@pytest.mark.asyncio
async def test_run_search_full_urls(settings, history_store, capsys):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": [_photo("1", "Red fox")]})

    await main_module.run_search(
        "fox", settings=settings, full=True, transport=httpx.MockTransport(handler)
    )

    assert "https://img/1/f" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_search_reports_failure(settings, history_store, capsys):
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    code = await main_module.run_search(
        "fox", settings=settings, transport=httpx.MockTransport(handler)
    )

    captured = capsys.readouterr()
    assert code == 1
    assert "Search failed" in captured.err
    assert await history_store.read("searchHistory") == ["fox"]


@pytest.mark.asyncio
async def test_run_search_with_no_results(settings, history_store, capsys):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": []})

    code = await main_module.run_search(
        "", settings=settings, transport=httpx.MockTransport(handler)
    )

    assert code == 0
    assert "No photos found." in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_search_survives_unopenable_history_database(tmp_path, capsys):
    dsn = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nested' / 'history.db'}"
    settings = AppSettings(
        unsplash=UnsplashSettings(access_key=SecretStr("key"), request_timeout_seconds=7),
        database=DatabaseSettings(dsn=dsn),
    )
    requests: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"results": [_photo("1", "Red fox")]})

    code = await main_module.run_search(
        "fox", settings=settings, transport=httpx.MockTransport(handler)
    )

    assert code == 0
    assert len(requests) == 1
    assert requests[0].extensions["timeout"]["read"] == 7
    assert "1\tAnn\tRed fox\thttps://img/1/r" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_history_filters_entries(settings, history_store, capsys):
    await history_store.write("searchHistory", ["grab a coffee", "mountains", "Abstract"])

    await main_module.run_history("ab", settings=settings)
    filtered = capsys.readouterr().out.splitlines()
    await main_module.run_history("", settings=settings)
    everything = capsys.readouterr().out.splitlines()

    assert filtered == ["grab a coffee", "Abstract"]
    assert everything == ["grab a coffee", "mountains", "Abstract"]


def test_search_command_exits_non_zero_on_failure(monkeypatch, settings):
    async def fake_run_search(query, *, settings, full=False, transport=None):
        return 1

    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "configure_logging", lambda level: None)
    monkeypatch.setattr(main_module, "run_search", fake_run_search)

    with pytest.raises(SystemExit) as excinfo:
        main_module.search("fox")

    assert excinfo.value.code == 1


def test_history_command_runs_with_settings(monkeypatch, settings):
    seen = {}

    async def fake_run_history(text, *, settings):
        seen["args"] = (text, settings)
        return 0

    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "configure_logging", lambda level: None)
    monkeypatch.setattr(main_module, "run_history", fake_run_history)

    main_module.history("cat")

    assert seen["args"] == ("cat", settings)
