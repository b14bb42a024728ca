import datetime
import textwrap

import pytest

from postbuild.errors import FrontmatterParseError
from postbuild.services.frontmatter_parser import (
    derive_title,
    normalize_hero_image,
    normalize_tags,
    normalize_text,
    parse_date,
    parse_document,
)


def doc(text: str) -> str:
    return textwrap.dedent(text).lstrip()


def test_parse_document_splits_metadata_and_body():
    metadata, body = parse_document(
        doc(
            """
            ---
            title: Hello
            date: 2024-06-01
            tags: [python, web]
            ---
            # Heading

            Body text.
            """
        )
    )

    assert metadata["title"] == "Hello"
    assert metadata["date"] == datetime.date(2024, 6, 1)
    assert metadata["tags"] == ["python", "web"]
    assert body.startswith("# Heading")
    assert "title:" not in body


def test_parse_document_without_header_raises():
    with pytest.raises(FrontmatterParseError) as exc:
        parse_document("# Just markdown\n\nNo header here.", source="plain")

    assert exc.value.source == "plain"
    assert "plain" in str(exc.value)


def test_parse_document_with_invalid_yaml_raises():
    with pytest.raises(FrontmatterParseError):
        parse_document(
            doc(
                """
                ---
                title: [unclosed
                ---
                body
                """
            )
        )


def test_parse_document_with_unterminated_header_raises():
    with pytest.raises(FrontmatterParseError):
        parse_document("---\ntitle: Hello\n\nbody without a closing line\n")


@pytest.mark.parametrize(
    "header",
    [
        "- 1\n- 2",
        "just text",
    ],
)
def test_parse_document_with_non_mapping_header_raises(header):
    with pytest.raises(FrontmatterParseError) as exc:
        parse_document(f"---\n{header}\n---\nbody\n", source="odd")

    assert "not a mapping" in str(exc.value)
    assert exc.value.source == "odd"


def test_parse_document_with_empty_header_yields_empty_metadata():
    assert parse_document("---\n---\nbody\n") == ({}, "body")


def test_derive_title_prefers_metadata():
    assert derive_title({"title": "Given"}, "some-slug") == "Given"


def test_derive_title_humanizes_slug():
    assert derive_title({}, "my-first_post") == "My First Post"


def test_normalize_tags_handles_shapes():
    assert normalize_tags(None) == []
    assert normalize_tags("solo") == ["solo"]
    assert normalize_tags(["b", "a", "b", None]) == ["b", "a"]
    assert normalize_tags(42) == ["42"]


def test_normalize_text_and_hero_image():
    assert normalize_text(None) == ""
    assert normalize_text(3) == "3"
    assert normalize_hero_image("") is None
    assert normalize_hero_image("https://cdn.example.com/a.png") == "https://cdn.example.com/a.png"


def test_parse_date_accepts_dates_datetimes_and_strings():
    assert parse_date(datetime.date(2024, 1, 2)) == datetime.date(2024, 1, 2)
    assert parse_date(datetime.datetime(2024, 1, 2, 15, 30)) == datetime.date(2024, 1, 2)
    assert parse_date("2024-01-02T08:00:00") == datetime.date(2024, 1, 2)


def test_parse_date_rejects_missing_or_garbage():
    with pytest.raises(FrontmatterParseError):
        parse_date(None, source="post")
    with pytest.raises(FrontmatterParseError):
        parse_date("next tuesday", source="post")
