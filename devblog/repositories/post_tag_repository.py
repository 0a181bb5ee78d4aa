"""
PostTag Repository - PostgreSQL storage for post/tag associations

Storage: PostgreSQL (post_tags table, PRIMARY KEY (post_id, tag_id))
"""
import logging
from typing import Iterable, List, Optional
import asyncpg

from devblog.models.domain.post import PostTag

logger = logging.getLogger(__name__)


class PostTagRepository:
    """
    Repository for PostTag associations

    Removing an association never removes the Tag itself.
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_post(
        self,
        post_id: int,
        names: Optional[Iterable[str]] = None
    ) -> List[PostTag]:
        """
        Get tag associations for a post.

        Args:
            post_id: Post id
            names: Optional subset of tag names to restrict to

        Returns:
            Associations with tag names, ordered by name
        """
        async with self.db_pool.acquire() as conn:
            if names is None:
                rows = await conn.fetch("""
                    SELECT pt.post_id, pt.tag_id, t.name
                    FROM post_tags pt
                    JOIN tags t ON t.id = pt.tag_id
                    WHERE pt.post_id = $1
                    ORDER BY t.name
                """, post_id)
            else:
                rows = await conn.fetch("""
                    SELECT pt.post_id, pt.tag_id, t.name
                    FROM post_tags pt
                    JOIN tags t ON t.id = pt.tag_id
                    WHERE pt.post_id = $1 AND t.name = ANY($2::text[])
                    ORDER BY t.name
                """, post_id, list(names))

            return [
                PostTag(post_id=row['post_id'], tag_id=row['tag_id'], tag_name=row['name'])
                for row in rows
            ]

    # =========================================================================
    # CREATE OPERATION
    # =========================================================================

    async def create(self, post_id: int, tag_id: int) -> bool:
        """
        Attach a tag to a post.

        Returns:
            True if the association was created, False if it already existed
        """
        async with self.db_pool.acquire() as conn:
            result = await conn.execute("""
                INSERT INTO post_tags (post_id, tag_id)
                VALUES ($1, $2)
                ON CONFLICT (post_id, tag_id) DO NOTHING
            """, post_id, tag_id)

            return int(result.split()[-1]) > 0

    # =========================================================================
    # DELETE OPERATIONS
    # =========================================================================

    async def delete(self, post_id: int, tag_id: int) -> bool:
        async with self.db_pool.acquire() as conn:
            result = await conn.execute("""
                DELETE FROM post_tags
                WHERE post_id = $1 AND tag_id = $2
            """, post_id, tag_id)

            return int(result.split()[-1]) > 0

    async def delete_by_post(self, post_id: int) -> int:
        """
        Remove every association of a post.

        Returns:
            Number of associations removed
        """
        async with self.db_pool.acquire() as conn:
            result = await conn.execute("""
                DELETE FROM post_tags WHERE post_id = $1
            """, post_id)

            rows_deleted = int(result.split()[-1])
            if rows_deleted:
                logger.info(f"Removed {rows_deleted} tag associations from post {post_id}")
            return rows_deleted
