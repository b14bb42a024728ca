import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from postbuild.schemas.search import SearchRecord


class HeadingEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    anchor: str
    text: str
    level: int = Field(..., ge=1, le=3)


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str = ""
    author: str = ""
    date: datetime.date
    tags: List[str] = Field(default_factory=list)
    heroImage: Optional[str] = None
    bodyMarkdown: str
    renderedHtml: str
    tableOfContents: List[HeadingEntry] = Field(default_factory=list)
    readingTimeMinutes: int = Field(..., ge=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class BuildResult(BaseModel):
    """Everything a build hands to the page assembler."""

    posts: List[Post] = Field(default_factory=list)
    relatedPosts: Dict[str, List[Post]] = Field(default_factory=dict)
    searchIndex: List[SearchRecord] = Field(default_factory=list)

    def get_post(self, slug: str) -> Optional[Post]:
        return next((p for p in self.posts if p.slug == slug), None)

    def related_for(self, slug: str) -> List[Post]:
        return self.relatedPosts.get(slug, [])
