"""
Pytest configuration for devblog tests.
"""

import pytest
import pytest_asyncio

from devblog.services.elasticsearch_client import ElasticsearchClient
from devblog.services.index_sync import IndexSync
from devblog.services.post_service import PostService
from devblog.services.tag_reconciler import TagReconciler
from devblog.tests.fakes import (
    FakePostRepository,
    FakePostTagRepository,
    FakeRecordStore,
    FakeSearchIndex,
    FakeTagRepository,
)


def pytest_configure(config):
    """Configure pytest with asyncio marker."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test."
    )


@pytest.fixture
def store():
    return FakeRecordStore()


@pytest.fixture
def post_repo(store):
    return FakePostRepository(store)


@pytest.fixture
def tag_repo(store):
    return FakeTagRepository(store)


@pytest.fixture
def post_tag_repo(store):
    return FakePostTagRepository(store)


@pytest.fixture
def tag_reconciler(tag_repo, post_tag_repo):
    return TagReconciler(tag_repo, post_tag_repo)


@pytest.fixture
def search_index():
    return FakeSearchIndex()


@pytest_asyncio.fixture
async def es_client(search_index):
    """ElasticsearchClient wired to the in-memory search index."""
    client = ElasticsearchClient("http://es.test:9200", timeout=1.0, transport=search_index.transport())
    await client.connect()
    try:
        yield client
    finally:
        await client.close()


@pytest_asyncio.fixture
async def index_sync(es_client):
    sync = IndexSync(es_client, index_name="blog")
    await sync.ensure_index()
    return sync


@pytest.fixture
def post_service(post_repo, post_tag_repo, tag_reconciler, index_sync):
    return PostService(
        post_repo=post_repo,
        post_tag_repo=post_tag_repo,
        tag_reconciler=tag_reconciler,
        index_sync=index_sync,
    )
