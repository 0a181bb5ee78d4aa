"""
Post domain models
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Post:
    """
    Post domain model - storage-agnostic representation

    Storage: PostgreSQL (posts table, tag names joined from post_tags/tags)

    `id` is assigned by the store on first save and never reused.
    `content` holds the stored form (line breaks as <br /> tokens).
    """
    title: str
    content: str
    id: Optional[int] = None
    tags: List[str] = field(default_factory=list)

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class PostTag:
    """Association between a post and a tag; (post_id, tag_id) is unique."""
    post_id: int
    tag_id: int
    tag_name: Optional[str] = None


@dataclass
class IndexDocument:
    """
    Snapshot of a post's searchable state, or a removal marker.

    When `deleted` is set only `id` is meaningful.
    """
    id: int
    title: str = ""
    content: str = ""
    tags: List[str] = field(default_factory=list)
    deleted: bool = False

    @classmethod
    def from_post(cls, post: Post, content: Optional[str] = None) -> 'IndexDocument':
        return cls(
            id=post.id,
            title=post.title,
            content=post.content if content is None else content,
            tags=list(post.tags),
        )

    @classmethod
    def removal(cls, post_id: int) -> 'IndexDocument':
        return cls(id=post_id, deleted=True)

    def to_source(self) -> Dict[str, Any]:
        """Body sent to the search index on upsert"""
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'tags': list(self.tags),
        }
