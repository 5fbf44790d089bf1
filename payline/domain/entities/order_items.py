"""
Shop order items as a tagged union.

Each variant carries an explicit field set and a `kind` tag matching the
item stream names the order store uses ("line_item", "shipping", "fee",
"coupon", "tax"). Amounts are major-unit Decimals as stored by the shop.
"""
from dataclasses import dataclass, field, fields
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import ClassVar, Dict, Optional, Union


class ItemKind(str, Enum):
    LINE_ITEM = "line_item"
    SHIPPING = "shipping"
    FEE = "fee"
    COUPON = "coupon"
    TAX = "tax"


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not a decimal amount: {value!r}") from e


class _DecimalFields:
    """Coerces every Decimal-annotated field on a frozen dataclass."""

    def __post_init__(self):
        for f in fields(self):
            if f.type in (Decimal, "Decimal"):
                object.__setattr__(self, f.name, _as_decimal(getattr(self, f.name)))


@dataclass(frozen=True)
class Product:
    """Catalogue product or variation referenced by a line item."""

    product_id: Union[int, str]
    sku: str = ""
    virtual: bool = False


@dataclass(frozen=True)
class MerchandiseItem(_DecimalFields):
    """
    Product line.

    `taxes` is the item's tax breakdown: rate id -> tax amount. The shop
    stores an empty string for rates that do not apply to the item.
    """

    kind: ClassVar[ItemKind] = ItemKind.LINE_ITEM

    name: str
    quantity: Optional[int] = 1
    subtotal: Decimal = Decimal("0")
    subtotal_tax: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")
    taxes: Dict[str, object] = field(default_factory=dict)
    product: Optional[Product] = None
    variant: Optional[Product] = None

    @property
    def resolved_product(self) -> Optional[Product]:
        """The variant when the line points at one, else the product."""
        return self.variant or self.product


@dataclass(frozen=True)
class ShippingItem(_DecimalFields):
    kind: ClassVar[ItemKind] = ItemKind.SHIPPING

    name: str
    method_id: str = ""
    instance_id: str = ""
    total: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")
    taxes: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class FeeItem(_DecimalFields):
    kind: ClassVar[ItemKind] = ItemKind.FEE

    name: str
    total: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")
    taxes: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class CouponItem(_DecimalFields):
    kind: ClassVar[ItemKind] = ItemKind.COUPON

    name: str
    discount: Decimal = Decimal("0")
    discount_tax: Decimal = Decimal("0")


@dataclass(frozen=True)
class TaxItem:
    """Tax rate applied somewhere on the order."""

    kind: ClassVar[ItemKind] = ItemKind.TAX

    rate_id: str
    label: str = ""


OrderItem = Union[MerchandiseItem, ShippingItem, FeeItem, CouponItem, TaxItem]
