"""
Feed Row Builder

Composes the field resolvers into one FeedRow per product variant.
"""

from typing import Dict, List, Optional, Sequence

from ..common.constants import NO_VARIATION_TITLE, OPTION_ALIASES
from ..models import CatalogProduct, CatalogVariant, FeedRow
from . import resolvers

CONDITION_NEW = "new"


class FeedRowBuilder:
    """
    Builds Merchant Center rows for product variants.

    Usage:
        builder = FeedRowBuilder(shop_url="https://example.com", currency="EUR")
        rows = builder.build_rows(product)
    """

    def __init__(
        self,
        shop_url: str,
        currency: str,
        option_aliases: Optional[Dict[str, Sequence[str]]] = None,
        id_prefix: str = "shopify",
        no_variation_title: str = NO_VARIATION_TITLE,
    ):
        """
        Initialize the builder.

        Args:
            shop_url: Storefront base URL (product links are <shop_url>/products/<handle>)
            currency: ISO 4217 currency code for price columns
            option_aliases: Candidate option names for color/size/material
            id_prefix: Prefix for synthetic ids of variants without SKU
            no_variation_title: Variant title meaning "product has no options"
        """
        self.shop_url = shop_url.rstrip("/")
        self.currency = currency
        self.option_aliases = option_aliases if option_aliases is not None else OPTION_ALIASES
        self.id_prefix = id_prefix
        self.no_variation_title = no_variation_title

    def _option(self, product: CatalogProduct, variant: CatalogVariant, attribute: str) -> str:
        return resolvers.resolve_option(product, variant, self.option_aliases.get(attribute, ()))

    def product_link(self, product: CatalogProduct) -> str:
        return f"{self.shop_url}/products/{product.handle}"

    def build_row(self, product: CatalogProduct, variant: CatalogVariant) -> FeedRow:
        """
        Convert a product/variant pair to a feed row.

        Args:
            product: Parent product
            variant: Variant to convert

        Returns:
            FeedRow with all 19 columns populated ("" where data is missing)
        """
        tier = resolvers.get_price_tier(variant, self.currency)
        barcode = variant.barcode or ""

        return FeedRow(
            id=resolvers.get_item_id(product, variant, self.id_prefix),
            title=resolvers.build_title(product, variant, self.no_variation_title),
            description=resolvers.clean_description(product.body_html),
            link=self.product_link(product),
            image_link=resolvers.get_image_link(product),
            additional_image_link=resolvers.get_additional_image_links(product),
            availability=resolvers.get_availability(variant, product.status),
            price=tier.price,
            sale_price=tier.sale_price,
            brand=product.vendor or "",
            condition=CONDITION_NEW,
            gtin=barcode,
            identifier_exists=resolvers.get_identifier_exists(barcode),
            product_type=product.product_type or "",
            item_group_id=product.id,
            color=self._option(product, variant, "color"),
            size=self._option(product, variant, "size"),
            material=self._option(product, variant, "material"),
            shipping_weight=resolvers.get_shipping_weight(variant),
        )

    def build_rows(self, product: CatalogProduct) -> List[FeedRow]:
        """Build one row per variant, in variant order."""
        return [self.build_row(product, variant) for variant in product.variants]
