"""
Merchant feed generation.

Modules:
    resolvers    - Pure per-field derivations (availability, prices, options...)
    row_builder  - FeedRow construction per product variant
    csv_exporter - CSV escaping and document rendering
    generator    - End-to-end feed generation
"""

from .csv_exporter import FEED_FIELDNAMES, escape_csv_field, render_csv, render_feed
from .generator import MerchantFeedGenerator
from .row_builder import FeedRowBuilder

__all__ = [
    'FEED_FIELDNAMES',
    'escape_csv_field',
    'render_csv',
    'render_feed',
    'FeedRowBuilder',
    'MerchantFeedGenerator',
]
