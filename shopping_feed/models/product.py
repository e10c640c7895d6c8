"""
Product data models.

Pure data classes for catalog data read from Shopify and the
feed rows derived from it. No business logic - only data structure definitions.
"""

from dataclasses import astuple, dataclass, field
from decimal import Decimal
from typing import List, Optional, Union


@dataclass
class CatalogImage:
    """Product image as returned by the Admin API."""
    src: str
    position: int = 0


@dataclass
class CatalogOption:
    """Product option; position links it to variant.option1..option3."""
    name: str
    position: int


@dataclass
class CatalogVariant:
    """
    One purchasable configuration of a product.

    Optional fields keep None when the source omits them:
    - compare_at_price: None unless the variant is marked down
    - inventory_management: None means inventory is not tracked
    - weight_unit: None means the default unit ("kg")
    """
    id: Union[int, str]
    title: str = ""
    sku: str = ""
    price: Optional[Decimal] = None
    compare_at_price: Optional[Decimal] = None
    inventory_management: Optional[str] = None
    inventory_quantity: int = 0
    barcode: Optional[str] = None
    weight: Optional[float] = None
    weight_unit: Optional[str] = None
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None


@dataclass
class CatalogProduct:
    """Product with its options, images and variants (all in API order)."""
    id: Union[int, str]
    title: str = ""
    handle: str = ""
    body_html: Optional[str] = None
    vendor: Optional[str] = None
    product_type: Optional[str] = None
    status: str = ""
    tags: str = ""
    images: List[CatalogImage] = field(default_factory=list)
    options: List[CatalogOption] = field(default_factory=list)
    variants: List[CatalogVariant] = field(default_factory=list)


@dataclass
class FeedRow:
    """One Merchant Center feed line. Field order is the column order."""
    id: str
    title: str
    description: str
    link: str
    image_link: str
    additional_image_link: str
    availability: str
    price: str
    sale_price: str
    brand: str
    condition: str
    gtin: str
    identifier_exists: str
    product_type: str
    item_group_id: Union[int, str]
    color: str
    size: str
    material: str
    shipping_weight: str

    def to_list(self) -> list:
        return list(astuple(self))
