"""Bounding of extracted page text before it is sent as model context."""

from webreader.constants import DEFAULT_MAX_EXTRACT_CHARS


def resolve_max_chars(
    max_len: object, default: int = DEFAULT_MAX_EXTRACT_CHARS
) -> int:
    """Return max_len if it is a positive integer, else default."""
    if isinstance(max_len, int) and not isinstance(max_len, bool) and max_len > 0:
        return max_len
    return default


def truncate_context(text: str, max_len: int = DEFAULT_MAX_EXTRACT_CHARS) -> str:
    """
    Cut text to at most max_len characters.

    This is a hard character cut with no word-boundary handling. Text that
    already fits is returned unchanged.
    """
    limit = resolve_max_chars(max_len)
    if len(text) <= limit:
        return text
    return text[:limit]
