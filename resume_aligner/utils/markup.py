"""
Inline Markup Utilities

Resume text carries a small amount of inline HTML (<b>, <a href=...>) that the
rendering layer interprets. The parser treats it as opaque payload and only
strips it when a line has to be compared against a fixed vocabulary.
"""

import html
import re
from dataclasses import dataclass


@dataclass(frozen=True)
class MarkupPatterns:
    """Regex patterns for inline markup recognized in resume text."""

    # Any opening, closing or self-closing tag
    TAG: str = r"</?[a-zA-Z][^<>]*>"

    # Bold wrappers that may surround a "Label:" prefix
    BOLD_OPEN: str = r"<(?:b|strong)>"
    BOLD_CLOSE: str = r"</(?:b|strong)>"


def strip_markup(text: str) -> str:
    """
    Remove inline markup tags and decode HTML entities.

    Args:
        text: Text that may contain tags like <b>...</b> or <a href="...">...</a>

    Returns:
        Plain text with tags removed, entities decoded and ends trimmed

    Example:
        >>> strip_markup("<b>EDUCATION</b>")
        'EDUCATION'
        >>> strip_markup('<a href="mailto:x@y.com">x@y.com</a> &amp; more')
        'x@y.com & more'
    """
    if not text:
        return ""
    return html.unescape(re.sub(MarkupPatterns.TAG, "", text)).strip()


def has_markup(text: str) -> bool:
    """Check whether text contains any inline markup tag."""
    return re.search(MarkupPatterns.TAG, text) is not None
