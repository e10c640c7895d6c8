"""
Feed Field Resolvers

Pure functions deriving single Merchant Center attributes from a
product/variant pair. Missing source data always resolves to an
empty string (or the documented default), never to an error.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import NamedTuple, Optional, Sequence

from ..common.constants import ACTIVE_STATUS, DEFAULT_WEIGHT_UNIT, NO_VARIATION_TITLE
from ..common.text_utils import strip_html
from ..models import CatalogProduct, CatalogVariant

IN_STOCK = "in_stock"
OUT_OF_STOCK = "out_of_stock"

_CENTS = Decimal("0.01")
_OPTION_SLOTS = (1, 2, 3)


class PriceTier(NamedTuple):
    """Regular price and sale price columns."""
    price: str
    sale_price: str


def get_availability(variant: CatalogVariant, product_status: str) -> str:
    """
    Determine stock status for a variant.

    Inactive products are always out of stock. Variants without
    inventory tracking are always in stock, whatever their quantity.
    """
    if product_status != ACTIVE_STATUS:
        return OUT_OF_STOCK
    if variant.inventory_management is None:
        return IN_STOCK
    return IN_STOCK if variant.inventory_quantity > 0 else OUT_OF_STOCK


def get_variant_option(product: CatalogProduct, variant: CatalogVariant, option_name: str) -> str:
    """
    Look up a variant's value for a named product option.

    Args:
        product: Product holding the option definitions
        variant: Variant holding positional values (option1..option3)
        option_name: Option name, matched case-insensitively

    Returns:
        Option value, or "" if the product has no such option
    """
    wanted = option_name.lower()
    for option in product.options:
        if option.name.lower() == wanted:
            if option.position not in _OPTION_SLOTS:
                return ""
            return getattr(variant, f"option{option.position}") or ""
    return ""


def resolve_option(product: CatalogProduct, variant: CatalogVariant, candidates: Sequence[str]) -> str:
    """Return the first non-empty option value among candidate names."""
    for name in candidates:
        value = get_variant_option(product, variant, name)
        if value:
            return value
    return ""


def format_price(amount: Decimal, currency: str) -> str:
    """Format as "12.34 EUR" (two decimals, half-up rounding); "" if the amount cannot be quantized."""
    try:
        quantized = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return ""
    return f"{quantized} {currency}"


def has_sale_price(variant: CatalogVariant) -> bool:
    """A sale applies when compare-at price is set and higher than price."""
    if variant.price is None or variant.compare_at_price is None:
        return False
    return variant.compare_at_price > variant.price


def get_price_tier(variant: CatalogVariant, currency: str) -> PriceTier:
    """
    Derive the price and sale_price columns.

    On sale, the pre-discount compare-at price is shown as the regular
    price and the current price becomes the sale price.

    Args:
        variant: Variant with price and optional compare-at price
        currency: ISO 4217 code appended to each amount

    Returns:
        PriceTier(price, sale_price); sale_price is "" without a sale.
        Both are "" if the variant has no usable price. A compare-at
        price too large to format is ignored.
    """
    if variant.price is None:
        return PriceTier("", "")

    if has_sale_price(variant):
        regular = format_price(variant.compare_at_price, currency)
        if regular:
            return PriceTier(price=regular, sale_price=format_price(variant.price, currency))
    return PriceTier(price=format_price(variant.price, currency), sale_price="")


def get_identifier_exists(barcode: Optional[str]) -> str:
    """'false' when there is no GTIN; left empty (implicitly true) otherwise."""
    return "" if barcode else "false"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def get_shipping_weight(variant: CatalogVariant) -> str:
    """Render weight as "<value> <unit>", or "" when weight is unset or not positive."""
    if variant.weight is None or variant.weight <= 0:
        return ""
    unit = variant.weight_unit or DEFAULT_WEIGHT_UNIT
    return f"{_format_number(variant.weight)} {unit}"


def clean_description(html: Optional[str]) -> str:
    return strip_html(html or "")


def build_title(
    product: CatalogProduct,
    variant: CatalogVariant,
    no_variation_title: str = NO_VARIATION_TITLE
) -> str:
    """Product title, suffixed with " - <variant title>" for real variants."""
    if variant.title == no_variation_title:
        return product.title
    return f"{product.title} - {variant.title}"


def get_image_link(product: CatalogProduct) -> str:
    return product.images[0].src if product.images else ""


def get_additional_image_links(product: CatalogProduct) -> str:
    # Plain comma join; the CSV serializer quotes the whole field.
    return ",".join(img.src for img in product.images[1:])


def get_item_id(product: CatalogProduct, variant: CatalogVariant, prefix: str = "shopify") -> str:
    """SKU, or "<prefix>_<product id>_<variant id>" when the SKU is empty."""
    if variant.sku:
        return variant.sku
    return f"{prefix}_{product.id}_{variant.id}"
