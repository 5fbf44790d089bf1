"""Domain entities."""

from .order_items import (
    CouponItem,
    FeeItem,
    ItemKind,
    MerchandiseItem,
    OrderItem,
    Product,
    ShippingItem,
    TaxItem,
)

__all__ = [
    "CouponItem",
    "FeeItem",
    "ItemKind",
    "MerchandiseItem",
    "OrderItem",
    "Product",
    "ShippingItem",
    "TaxItem",
]
