from pathlib import Path
from typing import List

from postbuild.errors import FileSystemError
from postbuild.settings import settings


class FilePostsRepo:
    def __init__(self, content_dir: str | Path | None = None, suffix: str | None = None):
        self.content_dir = Path(content_dir or settings.CONTENT_DIR)
        self.suffix = suffix or settings.SOURCE_SUFFIX

    def list_post_files(self) -> List[Path]:
        if not self.content_dir.is_dir():
            raise FileSystemError(
                "content directory does not exist", source=str(self.content_dir)
            )
        return sorted(
            path
            for path in self.content_dir.iterdir()
            if path.is_file() and path.name.endswith(self.suffix)
        )

    def read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileSystemError(f"could not read source: {e}", source=str(path)) from e

    def slug_for(self, path: Path) -> str:
        return path.name.removesuffix(self.suffix)
