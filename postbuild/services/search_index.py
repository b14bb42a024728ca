import json
import logging
import re
from pathlib import Path
from typing import List, Sequence

from postbuild.errors import SearchIndexWriteError
from postbuild.schemas.post import Post
from postbuild.schemas.search import SearchRecord

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 300

# A trailing "<..." without its closing ">" is dropped as well
_TAG_PATTERN = re.compile(r"<[^>]*>?")


def strip_tags(html: str) -> str:
    return _TAG_PATTERN.sub("", html)


def make_snippet(html: str, length: int = SNIPPET_LENGTH) -> str:
    """Plain text of ``html`` cut to ``length`` characters, even mid-word."""
    return strip_tags(html)[:length]


def build_search_record(post: Post) -> SearchRecord:
    return SearchRecord(
        title=post.title,
        slug=post.slug,
        description=post.description,
        tags=list(post.tags),
        snippet=make_snippet(post.renderedHtml),
    )


def build_search_index(posts: Sequence[Post]) -> List[SearchRecord]:
    return [build_search_record(post) for post in posts]


def write_search_index(records: Sequence[SearchRecord], path: Path) -> Path:
    """Persist the index as a compact JSON array using the ``content`` key for snippets."""
    payload = [record.model_dump(by_alias=True) for record in records]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, separators=(",", ":")),
            encoding="utf-8",
        )
    except OSError as e:
        raise SearchIndexWriteError(f"could not write search index: {e}", source=str(path)) from e

    logger.info(f"Search index written to {path} ({len(payload)} records)")
    return path
