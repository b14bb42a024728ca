"""
Markdown to HTML rendering with heading and blockquote interceptors.

Python-Markdown builds an ElementTree which the treeprocessors below walk
once inline markup has been rendered. Each heading and blockquote is
serialized, handed to a pure interceptor function that returns HTML, and the
element is swapped for a stash placeholder carrying that HTML.

Treeprocessor order (higher runs first):
    heading_source  25   raw heading source, before inline rendering
    inline          20   (Python-Markdown)
    prettify        10   (Python-Markdown)
    unescape         0   (Python-Markdown)
    headings        -5   anchors + table of contents
    blockquotes    -10   callouts; paragraphs are already rendered here
"""

import logging
import re
import xml.etree.ElementTree as etree
from typing import Dict, List, NamedTuple, Optional, Tuple

import markdown
from markdown.extensions import Extension
from markdown.serializers import to_html_string
from markdown.treeprocessors import Treeprocessor

from postbuild.errors import MarkdownRenderError
from postbuild.schemas.post import HeadingEntry

logger = logging.getLogger(__name__)

TOC_MAX_LEVEL = 3
HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}

_ANCHOR_SEPARATOR = re.compile(r"[^A-Za-z0-9_]+")

_CALLOUT_PATTERN = re.compile(
    r"^\s*<p>\[!(NOTE|TIP|IMPORTANT|WARNING|CAUTION)\].*?</p>(.*)\Z",
    re.IGNORECASE | re.DOTALL,
)

CALLOUT_ICONS = {
    "note": '<svg class="w-6 h-6" fill="none" viewBox="0 0 24 24" stroke="currentColor"><path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="M13 16h-1v-4h-1m1-4h.01M21 12a9 9 0 11-18 0 9 9 0 0118 0z" /></svg>',
    "tip": '<svg class="w-6 h-6" fill="none" viewBox="0 0 24 24" stroke="currentColor"><path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="M9.663 17h4.673M12 3v1m6.364 1.636l-.707.707M21 12h-1M4 12H3m3.343-5.657l-.707-.707m2.828 9.9a5 5 0 117.072 0l-.548.547A3.374 3.374 0 0014 18.469V19a2 2 0 11-4 0v-.531c0-.895-.356-1.754-.988-2.386l-.548-.547z" /></svg>',
    "important": '<svg class="w-6 h-6" fill="none" viewBox="0 0 24 24" stroke="currentColor"><path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="M5 3v4M3 5h4M6 17v4m-2-2h4m5-16l2.286 6.857L21 12l-5.714 2.143L13 21l-2.286-6.857L5 12l5.714-2.143L13 3z" /></svg>',
    "warning": '<svg class="w-6 h-6" fill="none" viewBox="0 0 24 24" stroke="currentColor"><path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="M12 9v2m0 4h.01m-6.938 4h13.856c1.54 0 2.502-1.667 1.732-3L13.732 4c-.77-1.333-2.694-1.333-3.464 0L3.34 16c-.77 1.333.192 3 1.732 3z" /></svg>',
    "caution": '<svg class="w-6 h-6" fill="none" viewBox="0 0 24 24" stroke="currentColor"><path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="M18.364 18.364A9 9 0 005.636 5.636m12.728 12.728A9 9 0 015.636 5.636m12.728 12.728L5.636 5.636" /></svg>',
}

CALLOUT_COLORS = {
    "note": "border-blue-500 bg-blue-500/10 text-blue-200",
    "tip": "border-green-500 bg-green-500/10 text-green-200",
    "important": "border-purple-500 bg-purple-500/10 text-purple-200",
    "warning": "border-yellow-500 bg-yellow-500/10 text-yellow-200",
    "caution": "border-red-500 bg-red-500/10 text-red-200",
}

# Must start with a block-level tag so the raw-html postprocessor drops the
# wrapping <p> of the stash placeholder.
CALLOUT_TEMPLATE = (
    '<div class="callout my-8 p-4 border-l-4 rounded-r-lg flex gap-4 {color}" data-callout="{kind}">\n'
    '<div class="shrink-0 mt-1">{icon}</div>\n'
    '<div class="prose prose-invert prose-sm max-w-none">\n'
    '<strong class="block mb-1 capitalize text-white font-bold">{title}</strong>\n'
    "{body}\n"
    "</div>\n"
    "</div>"
)


class HeadingToken(NamedTuple):
    text: str  # rendered inline HTML
    level: int
    raw: str  # markdown source of the heading text


def heading_anchor(text: str) -> str:
    """Lowercase the text and collapse every run of non-word characters to '-'."""
    return _ANCHOR_SEPARATOR.sub("-", text.lower())


def render_heading(heading: HeadingToken, toc: List[HeadingEntry]) -> str:
    """Heading interceptor: emit an anchored heading and record it in ``toc``."""
    if heading.level not in HEADING_TAGS.values():
        raise MarkdownRenderError(f"unsupported heading level {heading.level!r}")

    anchor = heading_anchor(heading.raw or heading.text)
    if heading.level <= TOC_MAX_LEVEL:
        toc.append(HeadingEntry(anchor=anchor, text=heading.text, level=heading.level))
    return f'<h{heading.level} id="{anchor}">{heading.text}</h{heading.level}>'


def render_blockquote(html: str) -> str:
    """
    Blockquote interceptor. ``html`` is the already rendered inner content.
    A first paragraph opening with ``[!NOTE]``, ``[!TIP]``, ``[!IMPORTANT]``,
    ``[!WARNING]`` or ``[!CAUTION]`` turns the blockquote into a callout.
    That paragraph is dropped and whatever follows it is the callout body.
    Anything else is returned as a plain blockquote.
    """
    if not isinstance(html, str):
        raise MarkdownRenderError(
            f"blockquote interceptor expects rendered HTML, got {type(html).__name__}"
        )

    match = _CALLOUT_PATTERN.match(html)
    if not match:
        return f"<blockquote>{html}</blockquote>"

    title = match.group(1)
    kind = title.lower()
    body = match.group(2).strip()

    logger.debug(f"Rendering {kind} callout")
    return CALLOUT_TEMPLATE.format(
        color=CALLOUT_COLORS.get(kind, CALLOUT_COLORS["note"]),
        icon=CALLOUT_ICONS.get(kind, CALLOUT_ICONS["note"]),
        kind=kind,
        title=title,
        body=body,
    )


def _inner_html(element: etree.Element) -> str:
    html = to_html_string(element)
    start = html.index(">") + 1
    end = html.rindex(f"</{element.tag}>")
    return html[start:end]


def _parent_map(root: etree.Element) -> Dict[etree.Element, etree.Element]:
    return {child: parent for parent in root.iter() for child in parent}


class _InterceptorTreeprocessor(Treeprocessor):
    def replace_with_html(
        self, parent: etree.Element, element: etree.Element, html: str
    ) -> None:
        placeholder = etree.Element("p")
        placeholder.text = self.md.htmlStash.store(html)
        placeholder.tail = element.tail
        parent[list(parent).index(element)] = placeholder

    def resolve_placeholders(self, html: str) -> str:
        for postprocessor in self.md.postprocessors:
            html = postprocessor.run(html)
        return html


class HeadingSourceTreeprocessor(Treeprocessor):
    """Remember each heading's markdown source before inline rendering replaces it."""

    def __init__(self, md, raw_headings: Dict[etree.Element, str]):
        super().__init__(md)
        self.raw_headings = raw_headings

    def run(self, root):
        for element in root.iter():
            if element.tag in HEADING_TAGS:
                self.raw_headings[element] = (element.text or "").strip()


class HeadingTreeprocessor(_InterceptorTreeprocessor):
    def __init__(self, md, raw_headings: Dict[etree.Element, str], toc: List[HeadingEntry]):
        super().__init__(md)
        self.raw_headings = raw_headings
        self.toc = toc

    def run(self, root):
        parents = _parent_map(root)
        headings = [el for el in root.iter() if el.tag in HEADING_TAGS]
        for element in headings:
            token = HeadingToken(
                text=self.resolve_placeholders(_inner_html(element)).strip(),
                level=HEADING_TAGS[element.tag],
                raw=self.raw_headings.get(element, ""),
            )
            self.replace_with_html(parents[element], element, render_heading(token, self.toc))


class BlockquoteTreeprocessor(_InterceptorTreeprocessor):
    def run(self, root):
        parents = _parent_map(root)
        # Innermost first, so an outer blockquote sees its nested ones already rendered
        for element in reversed(list(root.iter("blockquote"))):
            html = render_blockquote(_inner_html(element))
            self.replace_with_html(parents[element], element, html)


class ContentInterceptorExtension(Extension):
    """Registers the heading and blockquote interceptors, collecting headings into ``toc``."""

    def __init__(self, toc: List[HeadingEntry], **kwargs):
        self.toc = toc
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        raw_headings: Dict[etree.Element, str] = {}
        md.treeprocessors.register(
            HeadingSourceTreeprocessor(md, raw_headings), "heading_source", 25
        )
        md.treeprocessors.register(
            HeadingTreeprocessor(md, raw_headings, self.toc), "headings", -5
        )
        md.treeprocessors.register(BlockquoteTreeprocessor(md), "blockquotes", -10)


def render_markdown(
    body: str, source: Optional[str] = None
) -> Tuple[str, List[HeadingEntry]]:
    """Render a markdown body, returning the HTML and its table of contents."""
    toc: List[HeadingEntry] = []
    md = markdown.Markdown(
        extensions=[
            "fenced_code",
            "codehilite",
            "tables",
            ContentInterceptorExtension(toc=toc),
        ],
        extension_configs={
            "codehilite": {"guess_lang": False, "css_class": "highlight"},
        },
    )

    try:
        html = md.convert(body)
    except MarkdownRenderError as e:
        raise MarkdownRenderError(str(e), source=source) from e
    except Exception as e:
        raise MarkdownRenderError(f"failed to render markdown: {e}", source=source) from e

    logger.debug(f"Rendered {source}: {len(html)} chars, {len(toc)} toc entries")
    return html, toc
