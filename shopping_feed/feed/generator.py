"""
Merchant Feed Generator

Fetches the full Shopify catalog, keeps active products and renders
one feed line per variant.
"""

import logging
import os
from typing import Iterable, Iterator, List, Tuple

from ..common.config_loader import FeedSettings
from ..common.constants import ACTIVE_STATUS, MAX_PAGES, PAGE_SIZE
from ..models import CatalogProduct, FeedRow
from ..shopify.api_client import ShopifyAPIClient
from ..shopify.catalog import fetch_all_products
from .csv_exporter import render_feed
from .row_builder import FeedRowBuilder

logger = logging.getLogger(__name__)


class MerchantFeedGenerator:
    """
    Generates the Merchant Center CSV feed for a Shopify store.

    A run either returns the complete document or raises; no partial
    feed is produced.

    Usage:
        with ShopifyAPIClient(shop, token) as client:
            generator = MerchantFeedGenerator(client, FeedRowBuilder(shop_url, "EUR"))
            csv_text = generator.generate()
    """

    def __init__(
        self,
        client: ShopifyAPIClient,
        row_builder: FeedRowBuilder,
        page_size: int = PAGE_SIZE,
        max_pages: int = MAX_PAGES,
    ):
        self.client = client
        self.row_builder = row_builder
        self.page_size = page_size
        self.max_pages = max_pages

    @classmethod
    def from_settings(cls, settings: FeedSettings) -> "MerchantFeedGenerator":
        """Create a generator (and its API client) from loaded settings."""
        client = ShopifyAPIClient(settings.host_name, settings.access_token)
        row_builder = FeedRowBuilder(
            shop_url=settings.shop_url,
            currency=settings.currency,
            option_aliases=settings.option_aliases,
            id_prefix=settings.id_prefix,
            no_variation_title=settings.no_variation_title,
        )
        return cls(client, row_builder, page_size=settings.page_size, max_pages=settings.max_pages)

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def fetch_products(self) -> List[CatalogProduct]:
        return fetch_all_products(self.client, page_size=self.page_size, max_pages=self.max_pages)

    def build_rows(self, products: Iterable[CatalogProduct]) -> Iterator[FeedRow]:
        """
        Yield feed rows for active products, product by product.

        Args:
            products: Products in catalog order

        Yields:
            One FeedRow per variant of each active product
        """
        for product in products:
            if product.status != ACTIVE_STATUS:
                continue
            yield from self.row_builder.build_rows(product)

    def _generate(self) -> Tuple[str, int]:
        products = self.fetch_products()
        rows = list(self.build_rows(products))

        active = sum(1 for p in products if p.status == ACTIVE_STATUS)
        logger.info("Built %d feed rows from %d active of %d products",
                    len(rows), active, len(products))

        return render_feed(rows), len(rows)

    def generate(self) -> str:
        """
        Generate the full feed document.

        Returns:
            CSV text (header + one line per active variant)

        Raises:
            ShopifyAPIError: If fetching the catalog fails
        """
        document, _ = self._generate()
        return document

    def export(self, output_path: str) -> int:
        """
        Generate the feed and write it to a file.

        The file is only written after the whole feed was generated.

        Args:
            output_path: Output CSV file path

        Returns:
            Number of data rows written
        """
        document, row_count = self._generate()

        os.makedirs(os.path.dirname(output_path) or '.', exist_ok=True)
        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            f.write(document)

        logger.info("Wrote %d rows to %s", row_count, output_path)
        return row_count
