"""
Tag Repository - PostgreSQL storage for the shared tag vocabulary

Storage: PostgreSQL (tags table, UNIQUE(name))
"""
import logging
from typing import Dict, Iterable
import asyncpg

logger = logging.getLogger(__name__)


class TagRepository:
    """
    Repository for the tags table

    Tags are shared across posts and never deleted. Name uniqueness is
    enforced by the database so concurrent get-or-create calls for the same
    name collapse to a single row.
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    async def get_or_create(self, name: str) -> int:
        """
        Resolve a tag name to its id, creating the tag if absent.

        The insert is a no-op when another transaction already holds the
        name; the follow-up select then returns the winner's id.

        Args:
            name: Exact tag name (case-sensitive)

        Returns:
            Tag id
        """
        async with self.db_pool.acquire() as conn:
            tag_id = await conn.fetchval("""
                INSERT INTO tags (name)
                VALUES ($1)
                ON CONFLICT (name) DO NOTHING
                RETURNING id
            """, name)

            if tag_id is not None:
                logger.info(f"Created tag '{name}' ({tag_id})")
                return tag_id

            tag_id = await conn.fetchval("""
                SELECT id FROM tags WHERE name = $1
            """, name)
            logger.debug(f"Tag '{name}' already exists ({tag_id})")
            return tag_id

    async def get_or_create_many(self, names: Iterable[str]) -> Dict[str, int]:
        """Resolve several names; returns name -> id"""
        resolved = {}
        for name in names:
            resolved[name] = await self.get_or_create(name)
        return resolved
