"""
Tag Reconciler - keeps a post's tag associations in step with its tag field

    to_add    = new - old   -> get-or-create each tag, attach one by one
    to_remove = old - new   -> detach matching associations one by one

Names compare exactly (case-sensitive). Tags themselves are never deleted;
the vocabulary only grows.
"""
import logging
from dataclasses import dataclass
from typing import AbstractSet, Optional, Set, Tuple

from devblog.repositories.post_tag_repository import PostTagRepository
from devblog.repositories.tag_repository import TagRepository

logger = logging.getLogger(__name__)

TAG_DELIMITER = ","


def parse_tag_field(tag_field: Optional[str]) -> Set[str]:
    """
    Split the submitted tag field into a set of names.

    Only the delimiter is significant: segments are not trimmed, so
    "go, rust" yields {"go", " rust"}. Empty segments are dropped since an
    empty string cannot name a tag.
    """
    if not tag_field:
        return set()
    return {name for name in tag_field.split(TAG_DELIMITER) if name}


@dataclass(frozen=True)
class ReconcileResult:
    """Names attached and detached by one reconciliation"""
    added: Tuple[str, ...] = ()
    removed: Tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


class TagReconciler:
    """Applies the minimal tag association diff for a post"""

    def __init__(self, tag_repo: TagRepository, post_tag_repo: PostTagRepository):
        self.tag_repo = tag_repo
        self.post_tag_repo = post_tag_repo

    async def reconcile(
        self,
        post_id: int,
        old_tag_names: AbstractSet[str],
        new_tag_names: AbstractSet[str]
    ) -> ReconcileResult:
        to_add = sorted(set(new_tag_names) - set(old_tag_names))
        to_remove = sorted(set(old_tag_names) - set(new_tag_names))

        if to_remove:
            await self._detach(post_id, to_remove)
        if to_add:
            await self._attach(post_id, to_add)

        result = ReconcileResult(added=tuple(to_add), removed=tuple(to_remove))
        if result.changed:
            logger.info(f"Post {post_id} tags: +{list(result.added)} -{list(result.removed)}")
        return result

    async def _attach(self, post_id: int, names):
        tag_ids = await self.tag_repo.get_or_create_many(names)
        for name in names:
            await self.post_tag_repo.create(post_id, tag_ids[name])

    async def _detach(self, post_id: int, names):
        associations = await self.post_tag_repo.get_by_post(post_id, names=names)
        for association in associations:
            await self.post_tag_repo.delete(post_id, association.tag_id)
