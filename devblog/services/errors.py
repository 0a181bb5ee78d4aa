"""
Service-level exceptions
"""
from typing import Optional


class DevBlogError(Exception):
    """Base class for errors raised by the devblog services"""


class SearchIndexError(DevBlogError):
    """The search index was unreachable, timed out, or rejected a request"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class IndexSyncError(DevBlogError):
    """
    A post change could not be pushed to the search index.

    The record store mutation that triggered the push has already been
    committed; the index lags until the post is saved again or reindexed.
    """

    def __init__(self, post_id: int, message: str, status_code: Optional[int] = None):
        super().__init__(f"Index sync failed for post {post_id}: {message}")
        self.post_id = post_id
        self.status_code = status_code


class SearchError(DevBlogError):
    """A search request could not be served by the search index"""
