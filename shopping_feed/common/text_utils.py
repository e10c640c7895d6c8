"""
Text Utilities

Helper functions for text processing and cleanup.
"""

import re

_TAG_RE = re.compile(r'<[^>]*>')
_WHITESPACE_RE = re.compile(r'\s+')


def strip_html(html: str) -> str:
    """
    Remove HTML tags and normalize whitespace.

    Entities are left as-is; only tags are dropped.

    Args:
        html: HTML fragment (may be None or empty)

    Returns:
        Plain text with whitespace runs collapsed to single spaces
    """
    if not html:
        return ""

    text = _TAG_RE.sub('', html)

    # Clean up extra whitespace
    return _WHITESPACE_RE.sub(' ', text).strip()
