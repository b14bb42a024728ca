import datetime
import textwrap
from pathlib import Path

from postbuild.errors import FileSystemError
from postbuild.schemas.post import Post


class FakeRepo:
    """
    Minimal in-memory stand-in for FilePostsRepo.
    Documents are keyed by file name and dedented on read.
    """

    def __init__(self, docs: dict[str, str], suffix: str = ".md"):
        self.docs = docs
        self.suffix = suffix
        self.reads = []

    def list_post_files(self):
        return sorted(Path(name) for name in self.docs if name.endswith(self.suffix))

    def read(self, path: Path) -> str:
        self.reads.append(path.name)
        if path.name not in self.docs:
            raise FileSystemError("missing", source=path.name)
        return textwrap.dedent(self.docs[path.name]).lstrip()

    def slug_for(self, path: Path) -> str:
        return path.name.removesuffix(self.suffix)


def make_post(slug: str, tags=None, date=None, **overrides) -> Post:
    """Build a Post directly, bypassing parsing and rendering."""
    fields = {
        "slug": slug,
        "title": slug.title(),
        "date": date or datetime.date(2024, 1, 1),
        "tags": tags or [],
        "bodyMarkdown": "body",
        "renderedHtml": "<p>body</p>",
        "readingTimeMinutes": 1,
    }
    fields.update(overrides)
    return Post(**fields)
