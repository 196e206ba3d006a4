"""
HTML Sanitizer

Minimal allow-list filter for richtext and custom_html markup.

- script/style/iframe/object/embed and form controls are removed with their content
- Other tags outside the allow list are unwrapped (children kept)
- Attributes outside the per-tag allow list and all on* handlers are dropped
- javascript:/vbscript: URLs are removed from href and src

This is not a general-purpose sandbox.
"""

import logging
import re

from bs4 import BeautifulSoup, Comment

logger = logging.getLogger(__name__)

ALLOWED_TAGS: frozenset[str] = frozenset({
    "p", "div", "span", "strong", "em", "b", "i", "u", "br", "hr",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li",
    "blockquote",
    "a",
    "img",
    "section", "article", "header", "footer", "nav",
    "button",
    "table", "thead", "tbody", "tr", "td", "th",
})

REMOVED_TAGS: tuple[str, ...] = (
    "script", "style", "iframe", "frame", "frameset", "object", "embed",
    "applet", "noscript", "template", "link", "meta", "base", "svg", "math",
    "form", "input", "textarea", "select", "option",
)

GLOBAL_ATTRIBUTES: frozenset[str] = frozenset({"class", "id", "style"})

TAG_ATTRIBUTES: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "title", "target", "rel"}),
    "img": frozenset({"src", "alt", "title", "width", "height"}),
    "button": frozenset({"type", "aria-label"}),
}

URL_ATTRIBUTES: frozenset[str] = frozenset({"href", "src"})

_UNSAFE_SCHEMES = ("javascript:", "vbscript:")
_STRIP_PATTERN = re.compile(r"[\x00-\x20]+")


def is_safe_url(value: str) -> bool:
    """Check a URL attribute value against script-bearing schemes."""
    compact = _STRIP_PATTERN.sub("", value).lower()
    if compact.startswith(_UNSAFE_SCHEMES):
        return False
    if compact.startswith("data:") and not compact.startswith("data:image/"):
        return False
    return True


def _is_safe_style(value: str) -> bool:
    compact = _STRIP_PATTERN.sub("", value).lower()
    return "javascript:" not in compact and "expression(" not in compact


def _clean_attributes(tag) -> None:
    allowed = GLOBAL_ATTRIBUTES | TAG_ATTRIBUTES.get(tag.name, frozenset())
    kept = {}
    for name, value in tag.attrs.items():
        lowered = name.lower()
        if lowered.startswith("on") or lowered not in allowed:
            continue
        if lowered in URL_ATTRIBUTES and not is_safe_url(str(value)):
            logger.debug(f"Dropping unsafe {lowered} on <{tag.name}>")
            continue
        if lowered == "style" and not _is_safe_style(str(value)):
            continue
        kept[name] = value
    tag.attrs = kept


def sanitize_html(html: str | None, max_length: int | None = None) -> str:
    """
    Filter markup down to the allow list.

    Args:
        html: Untrusted markup (None or empty yields "")
        max_length: Optional cap on the input length; longer input is truncated

    Returns:
        Sanitized markup string
    """
    if not html:
        return ""

    if max_length is not None and len(html) > max_length:
        logger.warning(
            f"Markup of {len(html)} characters truncated to {max_length}"
        )
        html = html[:max_length]

    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(REMOVED_TAGS):
        if tag.decomposed:
            continue
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue
        _clean_attributes(tag)

    return str(soup)
