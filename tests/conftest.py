"""Shared test fixtures."""

from decimal import Decimal

import pytest

from shopping_feed.models import CatalogImage, CatalogOption, CatalogProduct, CatalogVariant


def product_payload(product_id=1, status="active", variants=None, **overrides):
    """Build a products.json element the way the Admin API returns it."""
    data = {
        "id": product_id,
        "title": f"Product {product_id}",
        "handle": f"product-{product_id}",
        "body_html": "<p>Description</p>",
        "vendor": "Acme",
        "product_type": "Skincare",
        "status": status,
        "tags": "",
        "images": [],
        "options": [{"name": "Title", "position": 1}],
        "variants": variants if variants is not None else [
            {
                "id": product_id * 10,
                "title": "Default Title",
                "sku": "",
                "price": "10.00",
                "compare_at_price": None,
                "inventory_management": None,
                "inventory_quantity": 0,
                "barcode": None,
                "weight": 0.0,
                "weight_unit": "kg",
                "option1": "Default Title",
                "option2": None,
                "option3": None,
            }
        ],
    }
    data.update(overrides)
    return data


@pytest.fixture
def lotion_variant():
    """Single untracked variant of the Lotion product."""
    return CatalogVariant(
        id=456,
        title="Default Title",
        sku="",
        price=Decimal("19.99"),
        inventory_management=None,
        inventory_quantity=0,
        barcode="",
        option1="Default Title",
    )


@pytest.fixture
def lotion_product(lotion_variant):
    """Active product with one default variant and no images."""
    return CatalogProduct(
        id=123,
        title="Lotion",
        handle="lotion",
        body_html="<p>Soft   <b>lotion</b></p>\n<p>for dry skin</p>",
        vendor="Acme",
        product_type="Body Care",
        status="active",
        options=[CatalogOption(name="Title", position=1)],
        variants=[lotion_variant],
    )


@pytest.fixture
def apparel_product():
    """Product with German option names and several tracked variants."""
    return CatalogProduct(
        id=789,
        title="Hoodie",
        handle="hoodie",
        body_html="<div>Warm, cozy \"premium\" hoodie</div>",
        vendor="Lunaglow",
        product_type="Apparel",
        status="active",
        images=[
            CatalogImage(src="https://cdn.example.com/hoodie-1.jpg", position=1),
            CatalogImage(src="https://cdn.example.com/hoodie-2.jpg", position=2),
            CatalogImage(src="https://cdn.example.com/hoodie-3.jpg", position=3),
        ],
        options=[
            CatalogOption(name="Größe", position=1),
            CatalogOption(name="farbe", position=2),
            CatalogOption(name="Material", position=3),
        ],
        variants=[
            CatalogVariant(
                id=1001,
                title="M / Schwarz / Baumwolle",
                sku="HOOD-M-BLK",
                price=Decimal("39.90"),
                compare_at_price=Decimal("49.90"),
                inventory_management="shopify",
                inventory_quantity=3,
                barcode="4006381333931",
                weight=0.5,
                weight_unit="kg",
                option1="M",
                option2="Schwarz",
                option3="Baumwolle",
            ),
            CatalogVariant(
                id=1002,
                title="L / Weiß / Baumwolle",
                sku="",
                price=Decimal("39.90"),
                compare_at_price=Decimal("39.90"),
                inventory_management="shopify",
                inventory_quantity=0,
                barcode=None,
                weight=None,
                option1="L",
                option2="Weiß",
                option3="Baumwolle",
            ),
        ],
    )


@pytest.fixture
def make_payload():
    """Factory for Admin API product payloads."""
    return product_payload
