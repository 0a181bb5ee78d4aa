"""
Domain models - storage-agnostic representations
"""
from .post import Post, PostTag, IndexDocument

__all__ = ['Post', 'PostTag', 'IndexDocument']
