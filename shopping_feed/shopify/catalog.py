"""
Shopify Catalog Reader

Walks the Admin REST products endpoint page by page and converts
the JSON payloads into CatalogProduct models.
"""

import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterator, List, Optional

from ..common.constants import MAX_PAGES, PAGE_SIZE, PRODUCT_FIELDS
from ..models import CatalogImage, CatalogOption, CatalogProduct, CatalogVariant
from .api_client import ShopifyAPIClient, ShopifyAPIError

logger = logging.getLogger(__name__)

PRODUCTS_ENDPOINT = "products.json"


class PaginationLimitError(ShopifyAPIError):
    """Source kept returning a next page beyond the page cap."""


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    # NaN and Infinity parse but cannot be compared or formatted
    return amount if amount.is_finite() else None


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def parse_variant(data: Dict[str, Any]) -> CatalogVariant:
    """Convert a variant JSON object into a CatalogVariant."""
    return CatalogVariant(
        id=data.get("id", ""),
        title=data.get("title") or "",
        sku=data.get("sku") or "",
        price=_to_decimal(data.get("price")),
        compare_at_price=_to_decimal(data.get("compare_at_price")),
        inventory_management=data.get("inventory_management"),
        inventory_quantity=_to_int(data.get("inventory_quantity")),
        barcode=_to_str(data.get("barcode")),
        weight=_to_float(data.get("weight")),
        weight_unit=data.get("weight_unit") or None,
        option1=_to_str(data.get("option1")),
        option2=_to_str(data.get("option2")),
        option3=_to_str(data.get("option3")),
    )


def parse_product(data: Dict[str, Any]) -> CatalogProduct:
    """
    Convert a product JSON object into a CatalogProduct.

    Missing or malformed optional fields fall back to None/empty
    values; nothing here raises on incomplete payloads.

    Args:
        data: One element of the "products" array

    Returns:
        CatalogProduct with images, options and variants in API order
    """
    images = [
        CatalogImage(src=img.get("src") or "", position=_to_int(img.get("position")))
        for img in data.get("images") or []
    ]
    options = [
        CatalogOption(name=opt.get("name") or "", position=_to_int(opt.get("position")))
        for opt in data.get("options") or []
    ]
    variants = [parse_variant(v) for v in data.get("variants") or []]

    return CatalogProduct(
        id=data.get("id", ""),
        title=data.get("title") or "",
        handle=data.get("handle") or "",
        body_html=data.get("body_html"),
        vendor=data.get("vendor"),
        product_type=data.get("product_type"),
        status=data.get("status") or "",
        tags=data.get("tags") or "",
        images=images,
        options=options,
        variants=variants,
    )


def iter_product_pages(
    client: ShopifyAPIClient,
    page_size: int = PAGE_SIZE,
    max_pages: int = MAX_PAGES
) -> Iterator[List[Dict[str, Any]]]:
    """
    Yield raw product pages in order until the source is exhausted.

    The first request sets limit and fields; every following request
    sends exactly the query returned with the previous page.

    Args:
        client: API client exposing get_page(endpoint, params)
        page_size: Products per page (Shopify maximum is 250)
        max_pages: Abort after this many pages

    Yields:
        List of product dicts for each page

    Raises:
        PaginationLimitError: If more than max_pages pages are reported
        ShopifyAPIError: Propagated from the client
    """
    query: Optional[Dict[str, str]] = {
        "fields": ",".join(PRODUCT_FIELDS),
        "limit": str(page_size),
    }
    pages = 0

    while query:
        if pages >= max_pages:
            raise PaginationLimitError(
                f"Pagination exceeded {max_pages} pages for {PRODUCTS_ENDPOINT}",
                endpoint=PRODUCTS_ENDPOINT,
            )

        body, query = client.get_page(PRODUCTS_ENDPOINT, query)
        pages += 1

        products = body.get("products") or []
        logger.debug("Fetched page %d (%d products)", pages, len(products))
        yield products


def fetch_all_products(
    client: ShopifyAPIClient,
    page_size: int = PAGE_SIZE,
    max_pages: int = MAX_PAGES
) -> List[CatalogProduct]:
    """
    Fetch the whole catalog as one ordered list.

    Products repeated across pages (e.g. when the catalog changes
    mid-run) are kept only at their first position. Products
    without an id are never treated as duplicates.

    Args:
        client: API client exposing get_page(endpoint, params)
        page_size: Products per page
        max_pages: Page cap, see iter_product_pages

    Returns:
        Products in API order
    """
    products: List[CatalogProduct] = []
    seen_ids = set()

    for page in iter_product_pages(client, page_size=page_size, max_pages=max_pages):
        for data in page:
            product = parse_product(data)
            if product.id in ("", None):
                # Nothing to dedupe on; keep it
                logger.warning("Product without id: %s", product.handle or product.title)
            elif product.id in seen_ids:
                logger.warning("Skipped duplicate product: %s", product.id)
                continue
            else:
                seen_ids.add(product.id)
            products.append(product)

    logger.info("Fetched %d products", len(products))
    return products
