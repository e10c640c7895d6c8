"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Fields requested from the Admin REST products endpoint
PRODUCT_FIELDS = (
    "id", "title", "handle", "variants", "images", "body_html",
    "vendor", "product_type", "status", "options", "tags",
)

# Shopify REST caps `limit` at 250
MAX_PAGE_SIZE = 250
PAGE_SIZE = MAX_PAGE_SIZE

# Upper bound on pages fetched in one run (250 * 1000 products)
MAX_PAGES = 1000

ACTIVE_STATUS = "active"

# Variant title Shopify assigns when a product has no options
NO_VARIATION_TITLE = "Default Title"

DEFAULT_WEIGHT_UNIT = "kg"

# Localized option names tried in order; first non-empty value wins
OPTION_ALIASES = {
    "color": ["Color", "Farbe"],
    "size": ["Size", "Größe"],
    "material": ["Material"],
}
