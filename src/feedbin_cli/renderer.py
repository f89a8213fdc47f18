"""Plain-text rendering of entries for the terminal."""

import re

from bs4 import BeautifulSoup

from .models import Entry

NO_CONTENT_PLACEHOLDER = "No content available."
SEPARATOR = "-" * 80

_DROPPED_TAGS = ["script", "style", "noscript", "template"]
_BLOCK_TAGS = [
    "p", "div", "li", "h1", "h2", "h3", "h4", "h5", "h6",
    "blockquote", "pre", "tr", "table", "ul", "ol", "figure", "section", "article",
]  # fmt: skip
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


def format_published(entry: Entry) -> str:
    """Format the publication time as ``YYYY-MM-DD HH:MM``, or the raw value."""
    published_at = entry.published_at
    if published_at is None:
        return entry.published or "unknown"
    return published_at.strftime("%Y-%m-%d %H:%M")


def html_to_text(raw_value: str) -> str:
    """Return terminal-safe text extracted from an HTML fragment.

    Block elements end with a blank line regardless of the whitespace the
    parser keeps between tags.
    """
    soup = BeautifulSoup(raw_value, "html.parser")
    for tag in soup(_DROPPED_TAGS):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(_BLOCK_TAGS):
        block.append("\n\n")

    text = soup.get_text()
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _CONTROL_CHARS.sub("", text)
    text = "\n".join(line.rstrip() for line in text.split("\n")).strip()
    return re.sub(r"\n{3,}", "\n\n", text)


def render(entry: Entry) -> str:
    """Render an entry as a header, a separator and its body text."""
    lines = [
        f"Title: {entry.title}",
        f"Published: {format_published(entry)}",
    ]
    if entry.author:
        lines.append(f"Author: {entry.author}")
    if entry.feed_title:
        lines.append(f"Feed: {entry.feed_title}")
    lines.append(f"URL: {entry.url}")

    body = html_to_text(entry.content) if entry.content else ""
    if not body:
        body = NO_CONTENT_PLACEHOLDER

    header = _CONTROL_CHARS.sub("", "\n".join(lines))
    return f"{header}\n\n{SEPARATOR}\n\n{body}\n\n{SEPARATOR}"
