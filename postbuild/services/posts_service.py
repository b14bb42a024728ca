import logging
from typing import List

from pydantic import ValidationError

from postbuild.errors import FrontmatterParseError
from postbuild.schemas.post import BuildResult, Post
from postbuild.services.frontmatter_parser import (
    derive_title,
    normalize_hero_image,
    normalize_tags,
    normalize_text,
    parse_date,
    parse_document,
)
from postbuild.services.markdown_renderer import render_markdown
from postbuild.services.related_posts import build_related_map
from postbuild.services.search_index import build_search_index
from postbuild.utils import calculate_reading_time

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, repo, render=render_markdown):
        self.repo = repo
        self.render = render

    def compile_posts(self) -> List[Post]:
        """Compile every source document, newest first."""
        posts = []
        for path in self.repo.list_post_files():
            slug = self.repo.slug_for(path)
            posts.append(compile_post(self.repo.read(path), slug, render=self.render))
            logger.info(f"Compiled {slug}")
        return sort_posts(posts)

    def build(self) -> BuildResult:
        posts = self.compile_posts()
        result = BuildResult(
            posts=posts,
            relatedPosts=build_related_map(posts),
            searchIndex=build_search_index(posts),
        )
        logger.info(f"Built {len(posts)} posts")
        return result


def compile_post(text: str, slug: str, *, render=render_markdown) -> Post:
    """Parse frontmatter, render the body and return the immutable Post."""
    metadata, body = parse_document(text, source=slug)
    html, toc = render(body, source=slug)

    try:
        return Post(
            slug=slug,
            title=derive_title(metadata, slug),
            description=normalize_text(metadata.get("description")),
            author=normalize_text(metadata.get("author")),
            date=parse_date(metadata.get("date"), source=slug),
            tags=normalize_tags(metadata.get("tags")),
            heroImage=normalize_hero_image(metadata.get("heroImage")),
            bodyMarkdown=body,
            renderedHtml=html,
            tableOfContents=toc,
            readingTimeMinutes=calculate_reading_time(body),
            metadata=metadata,
        )
    except ValidationError as e:
        raise FrontmatterParseError(f"invalid metadata: {e}", source=slug) from e


def sort_posts(posts: List[Post]) -> List[Post]:
    return sorted(posts, key=lambda p: p.date, reverse=True)
