"""Readable text extraction from raw page HTML."""

import re

import logfire
from bs4 import BeautifulSoup, ParserRejectedMarkup

from webreader.constants import DOCUMENT_METADATA_TAGS, NON_CONTENT_TAGS

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs into single spaces and trim the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def extract_text(html: str | bytes | None) -> str:
    """
    Reduce a page's markup to a single line of readable body text.

    Scripts, styles, inline SVG and layout chrome (nav, header, footer) are
    removed before the text is read, so their contents never reach the
    result. Only ``<body>`` text is kept; for pages that omit the optional
    ``<body>`` tag, everything outside ``<head>`` is read instead. Malformed
    markup yields whatever text the parser could recover; this function
    does not raise.

    Args:
        html: Raw page markup, or None

    Returns:
        Whitespace-normalized text, or "" when there is nothing to extract
    """
    if not html:
        return ""

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        logfire.warn("HTML parser rejected markup", error=str(e))
        return ""

    for tag in soup.find_all(list(NON_CONTENT_TAGS)):
        # Nested matches are already gone with their ancestor
        if not tag.decomposed:
            tag.decompose()

    if soup.body is not None:
        return normalize_whitespace(soup.body.get_text())

    # The <body> start tag is optional; read the document minus its metadata
    for tag in soup.find_all(list(DOCUMENT_METADATA_TAGS)):
        if not tag.decomposed:
            tag.decompose()
    return normalize_whitespace(soup.get_text())
