import logging
import sys

from postbuild.errors import BuildError
from postbuild.repos.posts_repo import FilePostsRepo
from postbuild.schemas.post import BuildResult
from postbuild.services.posts_service import PostsService
from postbuild.services.search_index import write_search_index
from postbuild.settings import Settings, settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build(config: Settings = settings) -> BuildResult:
    """Compile the content directory and persist search.json."""
    repo = FilePostsRepo(config.CONTENT_DIR, config.SOURCE_SUFFIX)
    result = PostsService(repo=repo).build()
    write_search_index(result.searchIndex, config.search_index_path)
    return result


def run(config: Settings = settings) -> int:
    configure_logging(config.LOG_LEVEL)
    logger.info(f"Starting build from {config.CONTENT_DIR}")
    try:
        result = build(config)
    except BuildError as e:
        logger.error(f"Build failed: {e}", exc_info=True)
        return 1
    logger.info(f"Build complete: {len(result.posts)} posts")
    return 0


if __name__ == "__main__":
    sys.exit(run())
