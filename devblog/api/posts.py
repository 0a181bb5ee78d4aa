"""
Posts API
=========

REST endpoints for authoring and searching posts.

- GET    /api/posts              list (newest first, previews)
- GET    /api/posts/search?q=    search title/content/tags
- GET    /api/posts/{post_id}    single post (full body, edit form)
- POST   /api/posts              create (no id / id <= 0) or edit
- DELETE /api/posts/{post_id}    delete post and its index document

Edits and deletes of unknown ids succeed without changing anything.
Search index failures are reported as 502; the record store write that
preceded them stays committed.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from typing import List

from devblog.models.api.post import (
    PostDetail,
    PostSave,
    PostSaved,
    PostSummary,
    SearchResponse,
)
from devblog.repositories.post_repository import PostRepository
from devblog.repositories.post_tag_repository import PostTagRepository
from devblog.repositories.tag_repository import TagRepository
from devblog.services.errors import IndexSyncError, SearchError
from devblog.services.post_service import PostService
from devblog.services.query_builder import split_terms
from devblog.services.tag_reconciler import TagReconciler


router = APIRouter(prefix="/api/posts", tags=["Posts"])


def get_post_service(request: Request) -> PostService:
    """Build a request-scoped PostService over the process-owned handles"""
    state = request.app.state
    post_tag_repo = PostTagRepository(state.db_pool)
    return PostService(
        post_repo=PostRepository(state.db_pool),
        post_tag_repo=post_tag_repo,
        tag_reconciler=TagReconciler(TagRepository(state.db_pool), post_tag_repo),
        index_sync=state.index_sync,
        search_result_size=state.settings.search_result_size,
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=List[PostSummary])
async def list_posts(service: PostService = Depends(get_post_service)):
    """List all posts, newest first, with truncated bodies."""
    return await service.list_posts()


@router.get("/search", response_model=SearchResponse)
async def search_posts(
    q: str = Query("", description="Search phrase; any term may match"),
    service: PostService = Depends(get_post_service),
):
    """Search posts by title, content and tags (prefix matching)."""
    try:
        hits = await service.search(q)
    except SearchError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return SearchResponse(terms=split_terms(q), hits=hits, total=len(hits))


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(post_id: int, service: PostService = Depends(get_post_service)):
    """Get a single post with its full body."""
    post = await service.get_post(post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.post("", response_model=PostSaved)
async def save_post(data: PostSave, service: PostService = Depends(get_post_service)):
    """Create or edit a post and push it to the search index."""
    try:
        post_id = await service.save_or_update(data.id, data.title, data.content, data.tags)
    except IndexSyncError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return PostSaved(id=post_id, saved=post_id is not None)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, service: PostService = Depends(get_post_service)):
    """Delete a post; unknown ids are ignored."""
    try:
        await service.delete(post_id)
    except IndexSyncError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
