import datetime
import logging
from typing import Any, Dict, List, Optional, Tuple

import yaml
from frontmatter.default_handlers import YAMLHandler

from postbuild.errors import FrontmatterParseError

logger = logging.getLogger(__name__)


def parse_document(text: str, source: Optional[str] = None) -> Tuple[Dict[str, Any], str]:
    """Split a raw document into its YAML metadata header and markdown body.

    Raises FrontmatterParseError when the header is missing, is not valid
    YAML, or does not describe a mapping.
    """
    handler = YAMLHandler()
    text = text.strip()
    if not handler.detect(text):
        raise FrontmatterParseError("missing frontmatter header", source=source)

    try:
        header, content = handler.split(text)
    except ValueError as e:
        raise FrontmatterParseError("unterminated frontmatter header", source=source) from e

    try:
        metadata = yaml.safe_load(header)
    except yaml.YAMLError as e:
        raise FrontmatterParseError(f"unparsable frontmatter: {e}", source=source) from e

    # an empty header loads as None
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontmatterParseError(
            f"frontmatter is not a mapping, got {type(metadata).__name__}", source=source
        )

    logger.debug(f"Parsed frontmatter keys for {source}: {list(metadata)}")
    return metadata, content.strip()


def derive_title(metadata: dict, slug: str) -> str:
    """Get a human-readable title, falling back to the humanized slug."""
    if metadata and metadata.get("title"):
        return str(metadata["title"])
    clean_slug = slug.replace("-", " ").replace("_", " ")
    return clean_slug.title()


def normalize_text(value) -> str:
    if value is None:
        return ""
    return str(value)


def normalize_tags(value) -> List[str]:
    """
    Normalize tag metadata into an ordered list of unique strings.
    """
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        tags = [str(item) for item in value if item is not None]
        return list(dict.fromkeys(tags))
    return [str(value)]


def normalize_hero_image(value) -> Optional[str]:
    if not value:
        return None
    return str(value)


def parse_date(value, source: Optional[str] = None) -> datetime.date:
    """Coerce a frontmatter date (YAML date, datetime or ISO string) to a date."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.datetime.fromisoformat(value.strip()).date()
        except ValueError as e:
            raise FrontmatterParseError(f"invalid date {value!r}", source=source) from e
    raise FrontmatterParseError("missing date", source=source)
