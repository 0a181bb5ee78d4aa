"""
Services - post lifecycle, tag reconciliation and search index access
"""
from .errors import DevBlogError, SearchIndexError, IndexSyncError, SearchError
from .elasticsearch_client import ElasticsearchClient
from .index_sync import IndexSync, build_index_body
from .query_builder import split_terms, build_query, build_search_body
from .tag_reconciler import TagReconciler, ReconcileResult, parse_tag_field
from .post_service import PostService

__all__ = [
    'DevBlogError',
    'SearchIndexError',
    'IndexSyncError',
    'SearchError',
    'ElasticsearchClient',
    'IndexSync',
    'build_index_body',
    'split_terms',
    'build_query',
    'build_search_body',
    'TagReconciler',
    'ReconcileResult',
    'parse_tag_field',
    'PostService',
]
