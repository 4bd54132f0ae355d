"""
Sanitizing of job description HTML.

Job content is written by recruiters in a rich text editor or imported from
an ATS feed, then rendered as-is on the public careers site.
"""
import html
from typing import Optional

from bs4 import BeautifulSoup

ALLOWED_TAGS = {
    "p", "br", "ul", "ol", "li", "em", "strong", "b", "i", "u",
    "a", "h1", "h2", "h3", "h4", "blockquote",
}

# Removed together with their content
DROPPED_TAGS = {"script", "style", "iframe", "object", "embed", "form"}

SAFE_URL_SCHEMES = ("http://", "https://", "mailto:")


def sanitize_html(content: Optional[str]) -> Optional[str]:
    """Keep formatting tags, strip attributes (except safe link targets) and scripts."""
    if content is None:
        return None
    soup = BeautifulSoup(content, "html.parser")
    for tag in soup.find_all(DROPPED_TAGS):
        tag.decompose()
    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
        elif tag.name == "a":
            href = (tag.get("href") or "").strip()
            tag.attrs = {"href": href} if href.lower().startswith(SAFE_URL_SCHEMES) else {}
        else:
            tag.attrs = {}
    return str(soup).strip()


def sanitize_imported_html(content: Optional[str]) -> Optional[str]:
    """ATS feeds (Greenhouse) deliver HTML entity-escaped; unescape before sanitizing."""
    if not content:
        return None
    return sanitize_html(html.unescape(content))
