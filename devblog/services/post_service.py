"""
Post Service - record store writes and their propagation to the search index

Every successful save (create or edit) and every delete ends with exactly
one push to the search index:

    save_or_update -> PostRepository -> TagReconciler -> IndexSync.push(upsert)
    delete         -> PostTagRepository -> IndexSync.push(removal) -> PostRepository

The two stores are not written in one transaction. The record store is
committed first and is authoritative; if the push fails, IndexSyncError
propagates to the caller and the index lags until the post is saved again
(or devblog.scripts.reindex_posts is run). Nothing is rolled back or retried.

Edits and deletes of unknown post ids are silent no-ops.
"""
import logging
from typing import List, Optional

from devblog.models.api.post import PostDetail, PostSummary, SearchHit
from devblog.models.domain.post import IndexDocument, Post
from devblog.repositories.post_repository import PostRepository
from devblog.repositories.post_tag_repository import PostTagRepository
from devblog.services.index_sync import IndexSync
from devblog.services.query_builder import build_search_body, split_terms
from devblog.services.tag_reconciler import TagReconciler, parse_tag_field
from devblog.utils.text_utils import make_preview, to_display, to_storage

logger = logging.getLogger(__name__)


class PostService:
    """Owns the post lifecycle and the read projections used by the API"""

    def __init__(
        self,
        post_repo: PostRepository,
        post_tag_repo: PostTagRepository,
        tag_reconciler: TagReconciler,
        index_sync: IndexSync,
        search_result_size: int = 20
    ):
        self.post_repo = post_repo
        self.post_tag_repo = post_tag_repo
        self.tag_reconciler = tag_reconciler
        self.index_sync = index_sync
        self.search_result_size = search_result_size

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def save_or_update(
        self,
        post_id: Optional[int],
        title: str,
        content: str,
        tag_field: Optional[str]
    ) -> Optional[int]:
        """
        Create a post (post_id absent or <= 0) or edit an existing one.

        Returns:
            The post id, or None when the post is missing (edit of an unknown
            id, or deleted by another request before the index push)

        Raises:
            IndexSyncError: the record store was updated but the index push failed
        """
        new_tags = parse_tag_field(tag_field)

        if post_id is None or post_id <= 0:
            post = await self._create(title, content, new_tags)
        else:
            post = await self._edit(post_id, title, content, new_tags)
            if post is None:
                logger.warning(f"Edit of unknown post {post_id} ignored")
                return None

        current = await self.post_repo.get_by_id(post.id)
        if current is None:
            # Deleted concurrently; that delete already pushed the removal
            logger.warning(f"Post {post.id} was deleted during save, index push skipped")
            return None

        await self.index_sync.push(self._index_document(current))
        return post.id

    async def delete(self, post_id: int) -> bool:
        """
        Delete a post, its tag associations and its index document.

        The index removal is issued before the post row is deleted.

        Returns:
            True if the post existed

        Raises:
            IndexSyncError: associations were removed but the index push failed
        """
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            logger.warning(f"Delete of unknown post {post_id} ignored")
            return False

        await self.post_tag_repo.delete_by_post(post_id)
        await self.index_sync.push(IndexDocument.removal(post_id))
        await self.post_repo.delete(post_id)
        return True

    async def _create(self, title: str, content: str, new_tags) -> Post:
        post = await self.post_repo.create(Post(title=title, content=to_storage(content)))
        await self.tag_reconciler.reconcile(post.id, set(), new_tags)
        return post

    async def _edit(self, post_id: int, title: str, content: str, new_tags) -> Optional[Post]:
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            return None

        old_tags = set(post.tags)
        post.title = title
        post.content = to_storage(content)
        await self.post_repo.update(post)

        await self.tag_reconciler.reconcile(post.id, old_tags, new_tags)
        return post

    @staticmethod
    def _index_document(post: Post) -> IndexDocument:
        # Index the typed text, not the storage tokens
        return IndexDocument.from_post(post, content=to_display(post.content))

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def list_posts(self) -> List[PostSummary]:
        """All posts, newest first, with 400-character body previews"""
        posts = await self.post_repo.get_all_with_tags()
        return [
            PostSummary(
                id=post.id,
                title=post.title,
                content=make_preview(post.content),
                tag_names=post.tags,
            )
            for post in posts
        ]

    async def get_post(self, post_id: int) -> Optional[PostDetail]:
        """One post with its full body in edit-form (display) form"""
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            return None

        return PostDetail(
            id=post.id,
            title=post.title,
            content=to_display(post.content),
            tag_names=post.tags,
        )

    async def search(self, raw_phrase: str) -> List[SearchHit]:
        """
        Search posts by any term of the phrase across title, content and tags.

        Raises:
            SearchError: the search index could not serve the query
        """
        terms = split_terms(raw_phrase)
        hits = await self.index_sync.search(build_search_body(terms, size=self.search_result_size))

        results = []
        for hit in hits:
            source = hit.get('_source', {})
            results.append(SearchHit(
                id=int(source.get('id', hit.get('_id'))),
                title=source.get('title', ''),
                content=make_preview(source.get('content', '')),
                tag_names=source.get('tags', []),
                score=hit.get('_score'),
            ))

        logger.debug(f"Search {terms} returned {len(results)} hits")
        return results
