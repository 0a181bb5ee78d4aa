#!/usr/bin/env python3
"""
Reindex Posts
=============

Pushes every post in the record store to the search index.

Saves write PostgreSQL first and Elasticsearch second, without a shared
transaction. If a push failed (index down, timeout), that post's index
document lags until the post is saved again. This script closes the gap
for all posts at once.

Usage:
    # Count posts only
    python -m devblog.scripts.reindex_posts --dry-run

    # Push every post (upsert by id)
    python -m devblog.scripts.reindex_posts

    # Drop and recreate the index first (also removes orphaned documents)
    python -m devblog.scripts.reindex_posts --recreate
"""

import argparse
import asyncio
import logging

from devblog.config import create_postgres_pool, create_search_client, get_settings
from devblog.models.domain.post import IndexDocument
from devblog.repositories.post_repository import PostRepository
from devblog.repositories.schema import initialize_schema
from devblog.services.errors import IndexSyncError
from devblog.services.index_sync import IndexSync
from devblog.utils.text_utils import to_display

logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')
logger = logging.getLogger(__name__)


async def reindex(post_repo: PostRepository, index_sync: IndexSync, recreate: bool = False,
                  dry_run: bool = False) -> dict:
    """Push all posts; returns counts of pushed and failed posts"""
    posts = await post_repo.get_all_with_tags()
    logger.info(f"Found {len(posts)} posts in the record store")

    stats = {'total': len(posts), 'pushed': 0, 'failed': 0}
    if dry_run:
        return stats

    if recreate:
        dropped = await index_sync.client.delete_index(index_sync.index_name)
        logger.info(f"Index '{index_sync.index_name}' {'dropped' if dropped else 'did not exist'}")
    await index_sync.ensure_index()

    for post in posts:
        doc = IndexDocument.from_post(post, content=to_display(post.content))
        try:
            await index_sync.push(doc)
            stats['pushed'] += 1
        except IndexSyncError as e:
            logger.warning(f"  Skipped post {post.id}: {e}")
            stats['failed'] += 1

    await index_sync.client.refresh(index_sync.index_name)
    return stats


async def main():
    parser = argparse.ArgumentParser(description="Push all posts to the search index")
    parser.add_argument('--recreate', action='store_true', help='Drop and recreate the index first')
    parser.add_argument('--dry-run', action='store_true', help='Only count posts')
    args = parser.parse_args()

    settings = get_settings()
    db_pool = await create_postgres_pool(settings)
    search_client = await create_search_client(settings)

    try:
        await initialize_schema(db_pool)
        stats = await reindex(
            PostRepository(db_pool),
            IndexSync(search_client, index_name=settings.search_index_name),
            recreate=args.recreate,
            dry_run=args.dry_run,
        )
        logger.info(f"Done: {stats['pushed']}/{stats['total']} pushed, {stats['failed']} failed")
    finally:
        await search_client.close()
        await db_pool.close()


if __name__ == "__main__":
    asyncio.run(main())
