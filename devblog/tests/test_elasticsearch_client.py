"""
Tests for the Elasticsearch REST client against a mock transport.
"""

import httpx
import pytest

from devblog.services.elasticsearch_client import ElasticsearchClient
from devblog.services.errors import SearchIndexError


@pytest.mark.asyncio
async def test_create_index_is_idempotent(es_client, search_index):
    assert await es_client.create_index("posts", {"settings": {}}) is True
    assert await es_client.create_index("posts", {"settings": {}}) is False
    assert "posts" in search_index.indices


@pytest.mark.asyncio
async def test_create_index_other_400_raises():
    def reject(request):
        return httpx.Response(400, json={'error': {'type': 'illegal_argument_exception', 'reason': 'bad analyzer'}})

    client = ElasticsearchClient("http://es.test", transport=httpx.MockTransport(reject))
    async with client:
        with pytest.raises(SearchIndexError) as exc_info:
            await client.create_index("posts", {})

    assert exc_info.value.status_code == 400
    assert "bad analyzer" in str(exc_info.value)


@pytest.mark.asyncio
async def test_upsert_creates_then_updates(es_client, search_index):
    await es_client.create_index("blog", {})

    assert await es_client.upsert("blog", 1, {"title": "a"}) == "created"
    assert await es_client.upsert("blog", 1, {"title": "b"}) == "updated"
    assert search_index.documents("blog") == {"1": {"title": "b"}}


@pytest.mark.asyncio
async def test_delete_by_id_missing_document_returns_false(es_client):
    await es_client.create_index("blog", {})
    await es_client.upsert("blog", 5, {"title": "x"})

    assert await es_client.delete_by_id("blog", 5) is True
    assert await es_client.delete_by_id("blog", 5) is False


@pytest.mark.asyncio
async def test_delete_index(es_client):
    await es_client.create_index("blog", {})
    assert await es_client.delete_index("blog") is True
    assert await es_client.delete_index("blog") is False


@pytest.mark.asyncio
async def test_search_returns_raw_hits(es_client):
    await es_client.create_index("blog", {})
    await es_client.upsert("blog", 1, {"title": "Intro", "content": "", "tags": []})

    hits = await es_client.search("blog", {
        "query": {"bool": {"should": [
            {"multi_match": {"query": "int", "fields": ["title"], "type": "most_fields"}}
        ], "minimum_should_match": 1}},
    })

    assert [h["_id"] for h in hits] == ["1"]
    assert hits[0]["_source"]["title"] == "Intro"


@pytest.mark.asyncio
async def test_server_error_raises_with_status(es_client, search_index):
    search_index.fail_status = 503

    with pytest.raises(SearchIndexError) as exc_info:
        await es_client.upsert("blog", 1, {})

    assert exc_info.value.status_code == 503
    assert "index unavailable" in str(exc_info.value)


@pytest.mark.asyncio
async def test_connection_error_raises(es_client, search_index):
    search_index.fail_connect = True

    with pytest.raises(SearchIndexError) as exc_info:
        await es_client.delete_by_id("blog", 1)

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_timeout_raises():
    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with ElasticsearchClient("http://es.test", timeout=0.5, transport=httpx.MockTransport(slow)) as client:
        with pytest.raises(SearchIndexError, match="timed out"):
            await client.search("blog", {})


@pytest.mark.asyncio
async def test_not_connected_raises():
    client = ElasticsearchClient("http://es.test")

    with pytest.raises(SearchIndexError, match="not connected"):
        await client.upsert("blog", 1, {})


@pytest.mark.asyncio
async def test_close_is_safe_twice(search_index):
    client = ElasticsearchClient("http://es.test/", transport=search_index.transport())
    assert client.base_url == "http://es.test"

    await client.connect()
    assert client.client is not None
    await client.close()
    await client.close()
    assert client.client is None


@pytest.mark.asyncio
async def test_search_empty_bool_matches_all_and_match_none_matches_nothing(es_client):
    await es_client.create_index("blog", {})
    await es_client.upsert("blog", 1, {"title": "Intro", "content": "", "tags": []})
    await es_client.upsert("blog", 2, {"title": "Other", "content": "", "tags": []})

    empty_bool = await es_client.search("blog", {"query": {"bool": {"should": [], "minimum_should_match": 1}}})
    match_none = await es_client.search("blog", {"query": {"match_none": {}}})

    assert {h["_id"] for h in empty_bool} == {"1", "2"}
    assert match_none == []
