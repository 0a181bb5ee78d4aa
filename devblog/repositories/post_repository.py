"""
Post Repository - PostgreSQL storage for posts

Storage: PostgreSQL (posts table; tag names joined from post_tags + tags)
"""
import logging
from typing import Optional, List
import asyncpg

from devblog.models.domain.post import Post

logger = logging.getLogger(__name__)


class PostRepository:
    """
    Repository for Post domain model

    Reads always return the post together with its tag names (ordered by
    name) so callers can build index documents from a single fetch.
    """

    _SELECT_WITH_TAGS = """
        SELECT p.id, p.title, p.content, p.created_at, p.updated_at,
               COALESCE(
                   array_agg(t.name ORDER BY t.name) FILTER (WHERE t.name IS NOT NULL),
                   '{}'
               ) AS tag_names
        FROM posts p
        LEFT JOIN post_tags pt ON pt.post_id = p.id
        LEFT JOIN tags t ON t.id = pt.tag_id
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    @staticmethod
    def _row_to_post(row) -> Post:
        return Post(
            id=row['id'],
            title=row['title'],
            content=row['content'],
            tags=list(row['tag_names'] or []),
            created_at=row['created_at'],
            updated_at=row['updated_at'],
        )

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, post_id: int) -> Optional[Post]:
        """
        Retrieve post by ID, with its tag names.

        Args:
            post_id: Store-assigned post id

        Returns:
            Post model or None
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(
                self._SELECT_WITH_TAGS + """
                WHERE p.id = $1
                GROUP BY p.id
            """, post_id)

            if not row:
                return None

            return self._row_to_post(row)

    async def get_all_with_tags(self) -> List[Post]:
        """
        Get all posts with their tag names, newest id first.

        Returns:
            List of posts
        """
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch(
                self._SELECT_WITH_TAGS + """
                GROUP BY p.id
                ORDER BY p.id DESC
            """)

            return [self._row_to_post(row) for row in rows]

    # =========================================================================
    # CREATE OPERATION
    # =========================================================================

    async def create(self, post: Post) -> Post:
        """
        Create a new post.

        Args:
            post: Post model (id is ignored; the store assigns it)

        Returns:
            Created post with id and timestamps
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                INSERT INTO posts (title, content, created_at, updated_at)
                VALUES ($1, $2, NOW(), NOW())
                RETURNING id, created_at, updated_at
            """, post.title, post.content)

            post.id = row['id']
            post.created_at = row['created_at']
            post.updated_at = row['updated_at']

            logger.info(f"Created post {post.id}")
            return post

    # =========================================================================
    # UPDATE OPERATIONS
    # =========================================================================

    async def update(self, post: Post) -> bool:
        """
        Overwrite title and content of an existing post.

        Returns:
            True if a row was updated
        """
        async with self.db_pool.acquire() as conn:
            result = await conn.execute("""
                UPDATE posts
                SET title = $2, content = $3, updated_at = NOW()
                WHERE id = $1
            """, post.id, post.title, post.content)

            rows_updated = int(result.split()[-1])
            if rows_updated > 0:
                logger.info(f"Updated post {post.id}")
                return True
            return False

    # =========================================================================
    # DELETE OPERATION
    # =========================================================================

    async def delete(self, post_id: int) -> bool:
        """
        Delete a post row.

        Returns:
            True if deleted, False if not found
        """
        async with self.db_pool.acquire() as conn:
            result = await conn.execute("""
                DELETE FROM posts WHERE id = $1
            """, post_id)

            rows_deleted = int(result.split()[-1])
            if rows_deleted > 0:
                logger.info(f"Deleted post {post_id}")
                return True
            return False
