import logging
from typing import Dict, List, Sequence

from postbuild.schemas.post import Post

logger = logging.getLogger(__name__)

RELATED_POSTS_LIMIT = 3


def count_shared_tags(target: Post, other: Post) -> int:
    other_tags = set(other.tags)
    return sum(1 for tag in target.tags if tag in other_tags)


def related_posts(
    target: Post, posts: Sequence[Post], limit: int = RELATED_POSTS_LIMIT
) -> List[Post]:
    """
    Rank the other posts by how many of ``target``'s tags they share.

    ``posts`` is expected newest first; ``sorted`` is stable, so posts with the
    same number of shared tags keep that order.
    """
    scored = [
        (count_shared_tags(target, post), post)
        for post in posts
        if post.slug != target.slug
    ]
    scored = [(matches, post) for matches, post in scored if matches > 0]
    scored.sort(key=lambda item: item[0], reverse=True)
    return [post for _, post in scored[:limit]]


def build_related_map(posts: Sequence[Post]) -> Dict[str, List[Post]]:
    related = {post.slug: related_posts(post, posts) for post in posts}
    logger.debug(
        f"Ranked related posts for {len(related)} posts "
        f"({sum(1 for r in related.values() if r)} with matches)"
    )
    return related
