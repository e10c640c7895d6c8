"""Tests for shopping_feed/shopify/catalog.py"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from shopping_feed.shopify.api_client import ShopifyAPIError
from shopping_feed.shopify.catalog import (
    PaginationLimitError,
    fetch_all_products,
    iter_product_pages,
    parse_product,
)


def paged_client(pages):
    """Client whose get_page returns (body, next_query) for each page in turn."""
    client = MagicMock()
    responses = []
    for index, products in enumerate(pages):
        is_last = index == len(pages) - 1
        next_query = None if is_last else {"limit": "250", "page_info": f"cursor-{index + 1}"}
        responses.append(({"products": products}, next_query))
    client.get_page.side_effect = responses
    return client


class TestParseProduct:
    def test_parses_core_fields(self, make_payload):
        product = parse_product(make_payload(product_id=5, vendor="Acme"))
        assert product.id == 5
        assert product.handle == "product-5"
        assert product.vendor == "Acme"
        assert product.status == "active"
        assert len(product.variants) == 1

    def test_prices_are_decimals(self, make_payload):
        variants = [{"id": 1, "price": "19.99", "compare_at_price": "24.99"}]
        variant = parse_product(make_payload(variants=variants)).variants[0]
        assert variant.price == Decimal("19.99")
        assert variant.compare_at_price == Decimal("24.99")

    def test_empty_compare_at_price_is_none(self, make_payload):
        variants = [{"id": 1, "price": "19.99", "compare_at_price": ""}]
        variant = parse_product(make_payload(variants=variants)).variants[0]
        assert variant.compare_at_price is None

    def test_malformed_price_is_none(self, make_payload):
        variants = [{"id": 1, "price": "n/a"}]
        variant = parse_product(make_payload(variants=variants)).variants[0]
        assert variant.price is None

    @pytest.mark.parametrize("raw", ["NaN", "sNaN", "Infinity", "-Infinity", "inf"])
    def test_non_finite_price_is_none(self, make_payload, raw):
        variants = [{"id": 1, "price": raw, "compare_at_price": raw}]
        variant = parse_product(make_payload(variants=variants)).variants[0]
        assert variant.price is None
        assert variant.compare_at_price is None

    def test_huge_price_is_kept(self, make_payload):
        variants = [{"id": 1, "price": "1E+30"}]
        variant = parse_product(make_payload(variants=variants)).variants[0]
        assert variant.price == Decimal("1E+30")

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
    def test_non_finite_weight_is_none(self, make_payload, raw):
        variants = [{"id": 1, "price": "1.00", "weight": raw}]
        variant = parse_product(make_payload(variants=variants)).variants[0]
        assert variant.weight is None

    def test_keeps_null_inventory_management(self, make_payload):
        variants = [{"id": 1, "price": "1.00", "inventory_management": None, "inventory_quantity": -4}]
        variant = parse_product(make_payload(variants=variants)).variants[0]
        assert variant.inventory_management is None
        assert variant.inventory_quantity == -4

    def test_missing_collections_default_to_empty(self):
        product = parse_product({"id": 9, "images": None, "options": None, "variants": None})
        assert product.images == []
        assert product.options == []
        assert product.variants == []
        assert product.body_html is None

    def test_images_and_options_keep_order(self, make_payload):
        data = make_payload(
            images=[{"src": "https://cdn.example.com/a.jpg", "position": 1},
                    {"src": "https://cdn.example.com/b.jpg", "position": 2}],
            options=[{"name": "Size", "position": 1}, {"name": "Color", "position": 2}],
        )
        product = parse_product(data)
        assert [img.src for img in product.images] == [
            "https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"
        ]
        assert [(o.name, o.position) for o in product.options] == [("Size", 1), ("Color", 2)]


class TestIterProductPages:
    def test_first_request_sets_fields_and_limit(self):
        client = paged_client([[{"id": 1}]])
        list(iter_product_pages(client))

        endpoint, query = client.get_page.call_args_list[0].args
        assert endpoint == "products.json"
        assert query["limit"] == "250"
        assert query["fields"] == (
            "id,title,handle,variants,images,body_html,vendor,product_type,status,options,tags"
        )

    def test_follows_returned_query_verbatim(self):
        client = paged_client([[{"id": 1}], [{"id": 2}], [{"id": 3}]])
        list(iter_product_pages(client))

        queries = [c.args[1] for c in client.get_page.call_args_list]
        assert queries[1] == {"limit": "250", "page_info": "cursor-1"}
        assert queries[2] == {"limit": "250", "page_info": "cursor-2"}

    def test_stops_on_empty_query(self):
        client = MagicMock()
        client.get_page.return_value = ({"products": [{"id": 1}]}, {})
        pages = list(iter_product_pages(client))
        assert len(pages) == 1
        assert client.get_page.call_count == 1

    def test_page_cap_raises(self):
        client = MagicMock()
        client.get_page.return_value = ({"products": [{"id": 1}]}, {"page_info": "again"})

        with pytest.raises(PaginationLimitError, match="exceeded 3 pages"):
            list(iter_product_pages(client, max_pages=3))

        assert client.get_page.call_count == 3

    def test_page_cap_is_source_error(self):
        assert issubclass(PaginationLimitError, ShopifyAPIError)


class TestFetchAllProducts:
    def test_concatenates_pages_in_order(self):
        pages = [
            [{"id": i} for i in range(1, 251)],
            [{"id": i} for i in range(251, 501)],
            [{"id": i} for i in range(501, 521)],
        ]
        products = fetch_all_products(paged_client(pages))

        assert len(products) == 520
        assert [p.id for p in products] == list(range(1, 521))

    def test_single_page(self):
        products = fetch_all_products(paged_client([[{"id": 7}, {"id": 8}]]))
        assert [p.id for p in products] == [7, 8]

    def test_empty_catalog(self):
        assert fetch_all_products(paged_client([[]])) == []

    def test_drops_duplicates_across_pages(self):
        products = fetch_all_products(paged_client([[{"id": 1}, {"id": 2}], [{"id": 2}, {"id": 3}]]))
        assert [p.id for p in products] == [1, 2, 3]

    def test_products_without_id_are_all_kept(self):
        pages = [[{"title": "A"}, {"id": None, "title": "B"}], [{"title": "C"}, {"id": 4}]]
        products = fetch_all_products(paged_client(pages))
        assert [p.title for p in products] == ["A", "B", "C", ""]
        assert products[3].id == 4

    def test_propagates_source_errors(self):
        client = MagicMock()
        client.get_page.side_effect = [
            ({"products": [{"id": 1}]}, {"page_info": "next"}),
            ShopifyAPIError("API Error 401: Unauthorized", status_code=401),
        ]

        with pytest.raises(ShopifyAPIError, match="401"):
            fetch_all_products(client)
