"""
Elasticsearch Client - Search index REST operations

The search index is a derived replica of the record store. This client is
the only code that talks to it over HTTP; it is constructed once per
process, connected at startup and closed at shutdown.

Operations:
- create_index(name, body)      PUT    /{index}
- delete_index(name)            DELETE /{index}
- upsert(index, id, document)   PUT    /{index}/_doc/{id}
- delete_by_id(index, id)       DELETE /{index}/_doc/{id}
- search(index, body)           POST   /{index}/_search
- refresh(index)                POST   /{index}/_refresh

Every transport failure, timeout or non-2xx answer is raised as
SearchIndexError. Nothing is retried here.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from devblog.services.errors import SearchIndexError

logger = logging.getLogger(__name__)


class ElasticsearchClient:
    """Async client for the Elasticsearch REST API"""

    def __init__(
        self,
        base_url: str = "http://localhost:9200",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._transport = transport

        self.client: Optional[httpx.AsyncClient] = None

    async def connect(self):
        """Open the HTTP connection pool"""
        if not self.client:
            self.client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={'Content-Type': 'application/json'},
            )
            logger.info(f"Connected to Elasticsearch at {self.base_url}")

    async def close(self):
        """Close the HTTP connection pool"""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info("Closed Elasticsearch connection")

    async def __aenter__(self) -> 'ElasticsearchClient':
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        allow_status: tuple = ()
    ) -> httpx.Response:
        """Issue a request; non-2xx answers not listed in allow_status raise"""
        if not self.client:
            raise SearchIndexError("Elasticsearch client is not connected")

        try:
            response = await self.client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            raise SearchIndexError(f"{method} {path} timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise SearchIndexError(f"{method} {path} failed: {e}") from e

        if response.is_success or response.status_code in allow_status:
            return response

        raise SearchIndexError(
            f"{method} {path} returned {response.status_code}: {self._error_reason(response)}",
            status_code=response.status_code,
        )

    @staticmethod
    def _error_reason(response: httpx.Response) -> str:
        try:
            error = response.json().get('error')
        except ValueError:
            return response.text[:200]

        if isinstance(error, dict):
            return error.get('reason') or error.get('type') or str(error)
        return str(error)

    @staticmethod
    def _error_type(response: httpx.Response) -> Optional[str]:
        try:
            error = response.json().get('error')
        except ValueError:
            return None
        if isinstance(error, dict):
            return error.get('type')
        return None

    # ===== Index Operations =====

    async def create_index(self, name: str, body: Dict[str, Any]) -> bool:
        """
        Create an index with settings and mappings.

        Returns:
            True if created, False if it already existed
        """
        response = await self._request('PUT', f"/{name}", json=body, allow_status=(400,))
        if response.status_code == 400:
            if self._error_type(response) == 'resource_already_exists_exception':
                logger.info(f"Index '{name}' already exists")
                return False
            raise SearchIndexError(
                f"PUT /{name} returned 400: {self._error_reason(response)}",
                status_code=400,
            )

        logger.info(f"Created index '{name}'")
        return True

    async def delete_index(self, name: str) -> bool:
        """Drop an index. Returns False if it did not exist."""
        response = await self._request('DELETE', f"/{name}", allow_status=(404,))
        return response.status_code != 404

    async def refresh(self, name: str) -> None:
        """Make recent writes visible to search"""
        await self._request('POST', f"/{name}/_refresh")

    # ===== Document Operations =====

    async def upsert(self, index: str, doc_id: Any, document: Dict[str, Any]) -> str:
        """
        Index a document under an explicit id, replacing any previous version.

        Returns:
            Elasticsearch result ("created" or "updated")
        """
        response = await self._request('PUT', f"/{index}/_doc/{doc_id}", json=document)
        return response.json().get('result', '')

    async def delete_by_id(self, index: str, doc_id: Any) -> bool:
        """
        Remove a document by id.

        Returns:
            True if removed, False if it was not in the index
        """
        response = await self._request('DELETE', f"/{index}/_doc/{doc_id}", allow_status=(404,))
        return response.status_code != 404

    # ===== Query Operations =====

    async def search(self, index: str, body: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Execute a search request.

        Returns:
            Raw hits ({_id, _score, _source}) in ranked order
        """
        response = await self._request('POST', f"/{index}/_search", json=body)
        return response.json().get('hits', {}).get('hits', [])
