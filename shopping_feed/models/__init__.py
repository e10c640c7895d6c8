"""
Data models for catalog products and feed rows.

This module contains pure data classes with no business logic.
"""

from .product import (
    CatalogImage,
    CatalogOption,
    CatalogProduct,
    CatalogVariant,
    FeedRow,
)

__all__ = ['CatalogImage', 'CatalogOption', 'CatalogVariant', 'CatalogProduct', 'FeedRow']
