"""
Shopify integration modules.

Modules:
    api_client - REST client for Shopify Admin API
    catalog    - Paginated product fetching and payload parsing
"""

from .api_client import ShopifyAPIClient, ShopifyAPIError
from .catalog import (
    PaginationLimitError,
    fetch_all_products,
    iter_product_pages,
    parse_product,
)

__all__ = [
    # API Client
    'ShopifyAPIClient',
    'ShopifyAPIError',
    # Catalog
    'PaginationLimitError',
    'fetch_all_products',
    'iter_product_pages',
    'parse_product',
]
