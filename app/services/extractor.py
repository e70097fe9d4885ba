"""HTML → :class:`BlogContent` extraction.

Everything here is pure: the input is the raw HTML string returned by the
fetcher and nothing touches the network.  lxml recovers from broken markup,
so any ``str`` input yields a record.
"""

import re
from typing import List

from bs4 import BeautifulSoup

from app.models.blog_content import BlogContent, ImageRef

NO_TITLE = "No title found"

# Common article containers, highest priority first.  Every selector is
# evaluated; the one yielding the most text wins.
CONTENT_SELECTORS = (
    "article",
    ".post-content",
    ".entry-content",
    ".content",
    ".post-body",
    "main",
    ".container",
)

_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

_WHITESPACE_RE = re.compile(r"\s+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")


def _text(node) -> str:
    return node.get_text().strip() if node is not None else ""


def _extract_title(soup: BeautifulSoup) -> str:
    # Every <title> counts, inline SVG titles included.
    title = "".join(node.get_text() for node in soup.find_all("title")).strip()
    return title or _text(soup.find("h1")) or NO_TITLE


def _extract_description(soup: BeautifulSoup) -> str:
    for attrs in ({"name": "description"}, {"property": "og:description"}):
        meta = soup.find("meta", attrs=attrs)
        if meta and meta.get("content"):
            return str(meta["content"])
    return ""


def _extract_content(soup: BeautifulSoup) -> str:
    content = ""
    for selector in CONTENT_SELECTORS:
        matches = soup.select(selector)
        if not matches:
            continue
        text = "".join(node.get_text() for node in matches).strip()
        if len(text) > len(content):
            content = text

    if not content:
        content = _text(soup.body or soup)

    return normalize_whitespace(content)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces, then blank-line runs, then trim."""
    text = _WHITESPACE_RE.sub(" ", text)
    text = _BLANK_LINES_RE.sub("\n", text)
    return text.strip()


def _extract_headings(soup: BeautifulSoup) -> List[str]:
    headings: List[str] = []
    for tag in soup.find_all(_HEADING_TAGS):
        text = _text(tag)
        if text:
            headings.append(text)
    return headings


def _extract_images(soup: BeautifulSoup) -> List[ImageRef]:
    images: List[ImageRef] = []
    for img in soup.find_all("img"):
        src = img.get("src")
        if src:
            images.append(ImageRef(src=str(src), alt=str(img.get("alt") or "")))
    return images


def extract_blog_content(html: str) -> BlogContent:
    """Parse *html* into a :class:`BlogContent` record."""
    soup = BeautifulSoup(html, "lxml")
    return BlogContent(
        title=_extract_title(soup),
        meta_description=_extract_description(soup),
        content=_extract_content(soup),
        headings=_extract_headings(soup),
        images=_extract_images(soup),
    )
