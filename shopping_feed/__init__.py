"""
Shopify Merchant Feed Generator

Modules:
    models   - Data models (CatalogProduct, CatalogVariant, FeedRow)
    common   - Shared utilities (config loader, logging, text cleanup)
    shopify  - Shopify Admin API client and catalog pagination
    feed     - Field resolvers, row builder, CSV serializer, feed generator
    server   - HTTP endpoint serving the generated feed
    cli      - Command line entry point
"""
