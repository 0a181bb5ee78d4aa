"""
Repository Pattern - Storage abstraction layer

Repositories hide PostgreSQL details from business logic.
Consumers work with domain models, not asyncpg records.

Storage:
- PostRepository: posts (+ tag names joined for reads)
- TagRepository: tags (shared, append-only vocabulary)
- PostTagRepository: post_tags associations

The connection pool is created by the process (see devblog.config) and
passed in; repositories hold no other state.
"""
from .post_repository import PostRepository
from .tag_repository import TagRepository
from .post_tag_repository import PostTagRepository
from .schema import initialize_schema

__all__ = [
    'PostRepository',
    'TagRepository',
    'PostTagRepository',
    'initialize_schema',
]
