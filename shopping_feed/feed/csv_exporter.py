"""
Merchant Feed CSV Serializer

Renders feed rows as comma-separated text for Google Merchant Center.

Quoting is done per field: a value is wrapped in double quotes only
when it contains a double quote, a comma or a newline, and embedded
quotes are doubled. Lines are separated by a bare "\\n" with no
trailing newline.
"""

from typing import Any, Iterable, List, Sequence

from ..models import FeedRow

# Merchant Center columns (exact order)
FEED_FIELDNAMES = [
    'id', 'title', 'description', 'link', 'image_link', 'additional_image_link',
    'availability', 'price', 'sale_price', 'brand', 'condition', 'gtin',
    'identifier_exists', 'product_type', 'item_group_id', 'color', 'size',
    'material', 'shipping_weight',
]

_SPECIAL_CHARS = ('"', ',', '\n')


def escape_csv_field(value: Any) -> str:
    """
    Escape one field value.

    Args:
        value: Any value; falsy values (None, "", 0) become ""

    Returns:
        Field text, quoted if needed
    """
    if not value:
        return ""

    text = str(value)
    if any(char in text for char in _SPECIAL_CHARS):
        return '"' + text.replace('"', '""') + '"'
    return text


def render_line(values: Iterable[Any]) -> str:
    return ",".join(escape_csv_field(value) for value in values)


def render_csv(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """
    Render a header and rows into one CSV document.

    Header cells are emitted as-is; every data field is escaped.

    Args:
        header: Column names
        rows: Row value sequences, same order as header

    Returns:
        Document text without trailing newline
    """
    lines: List[str] = [",".join(header)]
    lines.extend(render_line(row) for row in rows)
    return "\n".join(lines)


def render_feed(rows: Iterable[FeedRow]) -> str:
    """Render FeedRow objects under the Merchant Center header."""
    return render_csv(FEED_FIELDNAMES, (row.to_list() for row in rows))
