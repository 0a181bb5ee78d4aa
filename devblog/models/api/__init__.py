"""
API request/response models
"""
from .post import PostSave, PostSaved, PostSummary, PostDetail, SearchHit, SearchResponse

__all__ = ['PostSave', 'PostSaved', 'PostSummary', 'PostDetail', 'SearchHit', 'SearchResponse']
