"""
Tests for the posts API over an ASGI transport.

The PostService dependency is replaced with one wired to the in-memory
record store and search index.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from devblog.config.settings import Settings
from devblog import main
from devblog.main import create_app
from devblog.api.posts import get_post_service
from devblog.services.errors import IndexSyncError, SearchError


def _build_app(service):
    app = create_app(Settings(), manage_connections=False)
    app.dependency_overrides[get_post_service] = lambda: service
    return app


@pytest_asyncio.fixture
async def api(post_service):
    transport = httpx.ASGITransport(app=_build_app(post_service))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_health(api):
    response = await api.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_create_then_get(api):
    response = await api.post("/api/posts", json={
        "title": "Intro", "content": "Hello\nWorld", "tags": "go,systems",
    })
    assert response.status_code == 200
    assert response.json() == {"id": 1, "saved": True}

    response = await api.get("/api/posts/1")
    assert response.status_code == 200
    body = response.json()
    assert body["content"] == "Hello\nWorld"
    assert body["tag_names"] == ["go", "systems"]


@pytest.mark.asyncio
async def test_edit_of_unknown_post_is_not_saved(api):
    response = await api.post("/api/posts", json={"id": 77, "title": "Ghost"})

    assert response.status_code == 200
    assert response.json() == {"id": None, "saved": False}


@pytest.mark.asyncio
async def test_list_returns_previews(api):
    await api.post("/api/posts", json={"title": "long", "content": "x" * 500})

    response = await api.get("/api/posts")

    assert response.status_code == 200
    assert response.json()[0]["content"] == "x" * 400 + "..."


@pytest.mark.asyncio
async def test_get_unknown_post_404(api):
    response = await api.get("/api/posts/5")
    assert response.status_code == 404
    assert response.json()["detail"] == "Post not found"


@pytest.mark.asyncio
async def test_search(api):
    await api.post("/api/posts", json={"title": "Intro", "content": "Hello", "tags": "go"})

    response = await api.get("/api/posts/search", params={"q": "intro rust"})

    assert response.status_code == 200
    body = response.json()
    assert body["terms"] == ["intro", "rust"]
    assert body["total"] == 1
    assert body["hits"][0]["title"] == "Intro"


@pytest.mark.asyncio
async def test_empty_search_returns_no_hits(api):
    await api.post("/api/posts", json={"title": "Intro", "content": "Hello"})

    response = await api.get("/api/posts/search")

    assert response.json() == {"terms": [], "hits": [], "total": 0}


@pytest.mark.asyncio
async def test_delete(api):
    await api.post("/api/posts", json={"title": "Intro", "content": "Hello"})

    response = await api.delete("/api/posts/1")
    assert response.status_code == 204

    assert (await api.get("/api/posts/1")).status_code == 404
    # Unknown ids are ignored
    assert (await api.delete("/api/posts/1")).status_code == 204


@pytest.mark.asyncio
async def test_index_failure_maps_to_502(api, search_index):
    search_index.fail_status = 503

    response = await api.post("/api/posts", json={"title": "Intro", "content": "Hello"})

    assert response.status_code == 502
    assert "Index sync failed for post 1" in response.json()["detail"]


@pytest.mark.asyncio
async def test_delete_and_search_failures_map_to_502():
    service = AsyncMock()
    service.delete.side_effect = IndexSyncError(3, "timed out")
    service.search.side_effect = SearchError("index unavailable")

    transport = httpx.ASGITransport(app=_build_app(service))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        assert (await client.delete("/api/posts/3")).status_code == 502
        assert (await client.get("/api/posts/search", params={"q": "x"})).status_code == 502


def test_post_service_dependency_uses_configured_result_size():
    app = SimpleNamespace(state=SimpleNamespace(
        db_pool=object(),
        index_sync=object(),
        settings=Settings(_env_file=None, search_result_size=3),
    ))

    service = get_post_service(SimpleNamespace(app=app))

    assert service.search_result_size == 3
    assert service.index_sync is app.state.index_sync


def test_create_app_configures_logging(monkeypatch):
    levels = []
    monkeypatch.setattr(main, "configure_logging", levels.append)

    main.create_app(Settings(_env_file=None, log_level="DEBUG"), manage_connections=False)

    assert levels == ["DEBUG"]


def test_module_exposes_app():
    assert main.app.title == "DevBlog"
