"""
Index Sync - pushes post snapshots to the search index

Single point of contact between the post lifecycle and Elasticsearch:
- live posts are upserted by id (index if absent, replace if present)
- removed posts are deleted by id; the rest of the document is ignored
- searches built by the query builder run through here as well

Index topology (created once by ensure_index):
- edge_ngrams token filter: n-grams anchored at the token start, 1..50 chars
- partial_text analyzer: standard tokenizer + lowercase + edge_ngrams
- full_text analyzer: standard tokenizer + lowercase
- title/content/tags are indexed with partial_text and searched with
  full_text, so a typed prefix matches the stored n-grams. Each field also
  has a `.full` sub-field for whole-word matching.
"""
import logging
from typing import Any, Dict, List

from devblog.models.domain.post import IndexDocument
from devblog.services.elasticsearch_client import ElasticsearchClient
from devblog.services.errors import IndexSyncError, SearchError, SearchIndexError

logger = logging.getLogger(__name__)

DEFAULT_INDEX_NAME = "blog"

EDGE_NGRAM_MIN = 1
EDGE_NGRAM_MAX = 50

INDEXED_TEXT_FIELDS = ("title", "content", "tags")


def _text_field() -> Dict[str, Any]:
    return {
        "type": "text",
        "analyzer": "partial_text",
        "search_analyzer": "full_text",
        "fields": {
            "full": {"type": "text", "analyzer": "full_text"},
        },
    }


def build_index_body() -> Dict[str, Any]:
    """Settings and mappings for the posts index"""
    return {
        "settings": {
            "number_of_shards": 1,
            "number_of_replicas": 1,
            "analysis": {
                "filter": {
                    "edge_ngrams": {
                        "type": "edge_ngram",
                        "min_gram": EDGE_NGRAM_MIN,
                        "max_gram": EDGE_NGRAM_MAX,
                    },
                },
                "analyzer": {
                    "partial_text": {
                        "type": "custom",
                        "tokenizer": "standard",
                        "filter": ["lowercase", "edge_ngrams"],
                    },
                    "full_text": {
                        "type": "custom",
                        "tokenizer": "standard",
                        "filter": ["lowercase"],
                    },
                },
            },
        },
        "mappings": {
            "properties": {
                "id": {"type": "integer"},
                **{name: _text_field() for name in INDEXED_TEXT_FIELDS},
            },
        },
    }


class IndexSync:
    """Service that mirrors post changes into the search index"""

    def __init__(self, client: ElasticsearchClient, index_name: str = DEFAULT_INDEX_NAME):
        self.client = client
        self.index_name = index_name

    async def ensure_index(self) -> bool:
        """
        Create the posts index if missing. Safe to call at every start.

        Returns:
            True if the index was created by this call
        """
        return await self.client.create_index(self.index_name, build_index_body())

    async def push(self, doc: IndexDocument) -> None:
        """
        Push one document change and wait for the index to answer.

        Raises:
            IndexSyncError: index unreachable, timed out or rejected the write
        """
        try:
            if doc.deleted:
                removed = await self.client.delete_by_id(self.index_name, doc.id)
                if removed:
                    logger.info(f"Removed post {doc.id} from index '{self.index_name}'")
                else:
                    logger.warning(f"Post {doc.id} was not in index '{self.index_name}'")
            else:
                result = await self.client.upsert(self.index_name, doc.id, doc.to_source())
                logger.info(f"Indexed post {doc.id} ({result}) in '{self.index_name}'")
        except SearchIndexError as e:
            logger.error(f"Index push failed for post {doc.id}: {e}")
            raise IndexSyncError(doc.id, str(e), status_code=e.status_code) from e

    async def search(self, body: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Run a search request against the posts index.

        Raises:
            SearchError: index unreachable, timed out or rejected the query
        """
        try:
            return await self.client.search(self.index_name, body)
        except SearchIndexError as e:
            logger.error(f"Search failed on '{self.index_name}': {e}")
            raise SearchError(str(e)) from e
