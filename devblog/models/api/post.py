"""
Pydantic models for Post
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class PostSave(BaseModel):
    """Model for creating or editing a post (id absent or <= 0 means create)"""
    id: Optional[int] = None
    title: str
    content: str = ""
    tags: str = Field("", description="Comma separated tag names")


class PostSaved(BaseModel):
    """Result of a save: id is None when an edit targeted a missing post"""
    id: Optional[int] = None
    saved: bool


class PostSummary(BaseModel):
    """Post as shown in the list view (preview body)"""
    id: int
    title: str
    content: str
    tag_names: List[str] = []

    model_config = {
        "from_attributes": True
    }


class PostDetail(BaseModel):
    """Post as shown in the single view and the edit form (full body)"""
    id: int
    title: str
    content: str
    tag_names: List[str] = []

    model_config = {
        "from_attributes": True
    }

    @property
    def tags(self) -> str:
        """Tag names joined back into the edit form's field format"""
        return ",".join(self.tag_names)


class SearchHit(BaseModel):
    """Ranked search result projected from the index"""
    id: int
    title: str
    content: str
    tag_names: List[str] = []
    score: Optional[float] = None


class SearchResponse(BaseModel):
    """Search results for a phrase"""
    terms: List[str]
    hits: List[SearchHit]
    total: int
