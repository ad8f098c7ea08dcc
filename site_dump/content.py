"""HTML cleaning utilities that turn a parsed page into archival prose."""

from __future__ import annotations

import copy
import logging
import re
from typing import List, Sequence

from bs4 import BeautifulSoup, Tag
from bs4.element import PreformattedString
from soupsieve import SelectorSyntaxError

logger = logging.getLogger("site_dump")

STRUCTURAL_TAGS = (
    "script",
    "style",
    "iframe",
    "noscript",
    "svg",
    "canvas",
    "code",
    "pre",
    "link",
    "meta",
)

BOILERPLATE_SELECTORS = (
    # ids
    "#header",
    "#footer",
    "#nav",
    "#navigation",
    "#menu",
    "#sidebar",
    "#comments",
    "#related",
    "#social",
    "#sharing",
    "#ad",
    "#ads",
    "#advertisement",
    # classes
    ".header",
    ".footer",
    ".nav",
    ".navigation",
    ".menu",
    ".sidebar",
    ".comments",
    ".related",
    ".social",
    ".sharing",
    ".ad",
    ".ads",
    ".advertisement",
    # framework scaffolding
    "[data-nextjs-data]",
    "[data-reactroot]",
    "[id^='__next']",
    "[class^='__next']",
    # overlays
    ".cookie-banner",
    ".popup",
    ".modal",
    ".overlay",
    ".notification",
    # navigation UI
    ".breadcrumbs",
    ".pagination",
    ".search",
    ".search-form",
    # controls
    ".button",
    ".btn",
    ".icon",
    ".dropdown",
    ".tooltip",
)

CONTENT_SELECTORS = (
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "p",
    "article",
    "section",
    "main",
    ".content",
    ".article",
    ".post",
    ".entry",
    "li",
    "td",
    "th",
    "dt",
    "dd",
    "figcaption",
    "blockquote",
)

TEXT_NODE_EXCLUDED_PARENTS = {
    "script",
    "style",
    "noscript",
    "iframe",
    "svg",
    "canvas",
    "code",
    "title",
}

CODE_TOKENS = (
    "function(",
    "() =>",
    "var ",
    "const ",
    "let ",
    "self.__next",
    "window.",
    "document.",
    "$.",
    "jQuery",
    "/static/",
    "/_next/",
    ".js",
    ".css",
    "<div",
    "<span",
    "<script",
    "<style",
    "===",
    "!==",
    "++",
    "--",
)

HEADING_PATTERN = re.compile(r"^h[1-6]$")
HIDDEN_STYLE_PATTERN = re.compile(
    r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE
)
STRUCTURAL_PUNCTUATION_PATTERN = re.compile(r"[{}\[\]\"':]")
SPECIAL_CHAR_PATTERN = re.compile(r"[^\w\s]")
BRACED_FRAGMENT_PATTERN = re.compile(r"\{[^{}]*\}")
EXCESS_WHITESPACE_PATTERN = re.compile(r"\s{3,}")

MAX_TEXT_NODE_CHARS = 500
MAX_UNSPACED_LINE_CHARS = 100
MAX_SPECIAL_CHAR_RATIO = 0.3


def extract_title(soup: BeautifulSoup) -> str:
    """Return the document title with whitespace collapsed."""
    if soup.title:
        title = " ".join(soup.title.get_text().split())
        if title:
            return title
    return "No Title"


def _has_hidden_style(tag: Tag) -> bool:
    return bool(HIDDEN_STYLE_PATTERN.search(tag.get("style", "") or ""))


def _decompose_all(tags: Sequence[Tag]) -> None:
    for tag in tags:
        if not tag.decomposed:
            tag.decompose()


def strip_structural(root: Tag) -> None:
    """Remove non-prose elements and inline-hidden elements."""
    _decompose_all(root.find_all(list(STRUCTURAL_TAGS)))
    _decompose_all([tag for tag in root.find_all(style=True) if _has_hidden_style(tag)])


def strip_boilerplate(root: Tag, selectors: Sequence[str] = BOILERPLATE_SELECTORS) -> None:
    """Remove navigation, ads and other page chrome matched by selector."""
    try:
        _decompose_all(root.select(", ".join(selectors)))
        return
    except SelectorSyntaxError as exc:
        logger.debug("Combined boilerplate selector failed (%s); applying one by one", exc)
    for selector in selectors:
        try:
            _decompose_all(root.select(selector))
        except SelectorSyntaxError:
            logger.debug("Skipping unsupported selector %r", selector)


def _is_hidden(tag: Tag) -> bool:
    return tag.has_attr("hidden") or _has_hidden_style(tag)


def _collect_text_nodes(root: Tag) -> List[str]:
    blocks: List[str] = []
    for node in root.find_all(string=True):
        if isinstance(node, PreformattedString):
            continue
        parent = node.parent
        if parent is not None and (
            parent.name in TEXT_NODE_EXCLUDED_PARENTS or _is_hidden(parent)
        ):
            continue
        text = node.strip()
        if text and len(text) < MAX_TEXT_NODE_CHARS:
            blocks.append(text)
    return blocks


def extract_text_blocks(root: Tag) -> List[str]:
    """Collect text from content elements, falling back to paragraphs, then raw text nodes."""
    blocks: List[str] = []
    elements = root.select(", ".join(CONTENT_SELECTORS))
    if elements:
        for element in elements:
            text = element.get_text().strip()
            if not text:
                continue
            if HEADING_PATTERN.match(element.name):
                blocks.append(f"\n== {text} ==\n")
            else:
                blocks.append(text)
        return blocks

    paragraphs = root.find_all("p")
    if paragraphs:
        for paragraph in paragraphs:
            text = paragraph.get_text().strip()
            if text:
                blocks.append(text)
        return blocks

    return _collect_text_nodes(root)


def is_code_like(line: str) -> bool:
    """Heuristic check for script, markup or data fragments masquerading as prose."""
    if any(token in line for token in CODE_TOKENS):
        return True
    if len(STRUCTURAL_PUNCTUATION_PATTERN.findall(line)) > 3:
        return True
    if len(line) > MAX_UNSPACED_LINE_CHARS and " " not in line:
        return True
    special = SPECIAL_CHAR_PATTERN.findall(line)
    return len(special) > len(line) * MAX_SPECIAL_CHAR_RATIO


def filter_code_like_content(text: str) -> str:
    """Drop code-like and empty lines, then strip brace fragments and collapse whitespace."""
    kept = []
    for line in text.split("\n"):
        trimmed = line.strip()
        if not trimmed or is_code_like(trimmed):
            continue
        kept.append(line)
    result = "\n".join(kept)
    result = BRACED_FRAGMENT_PATTERN.sub("", result)
    return EXCESS_WHITESPACE_PATTERN.sub("\n\n", result)


def clean_content(soup: BeautifulSoup) -> str:
    """Produce cleaned prose for a page without modifying the given soup."""
    clone = copy.copy(soup)
    # html.parser adds no <body> when the markup omits it
    root = clone.body or clone
    strip_structural(root)
    strip_boilerplate(root)
    return filter_code_like_content("\n".join(extract_text_blocks(root)))
