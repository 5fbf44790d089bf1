"""
Provider order-line value objects.

CRITICAL: This file must contain ZERO imports from pydantic or requests.
All amounts are integers in minor currency units.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List

MAX_TEXT_LENGTH = 200


class OrderLineType(str, Enum):
    """Line types accepted by the provider."""

    PHYSICAL = "physical"
    DIGITAL = "digital"
    SHIPPING_FEE = "shippingFee"
    SURCHARGE = "surcharge"


@dataclass(frozen=True)
class OrderLine:
    """
    Single provider order line.

    Attributes:
        type: Line classification
        reference: SKU / product id / item name, at most 200 chars
        description: Item name without markup, at most 200 chars
        quantity: Positive item count
        unit_price: Price per unit incl. vat, before discount
        unit_discount_amount: Discount per unit incl. vat
        vat: Vat rate as a whole percentage (0-100)
        total_amount: Line total incl. vat, after discount
        total_vat_amount: Vat part of total_amount
    """

    type: OrderLineType
    reference: str
    description: str
    quantity: int
    unit_price: int
    unit_discount_amount: int
    vat: int
    total_amount: int
    total_vat_amount: int

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError(f"Invalid quantity: {self.quantity}")
        if not 0 <= self.vat <= 100:
            raise ValueError(f"Invalid vat rate: {self.vat}")
        if len(self.reference) > MAX_TEXT_LENGTH:
            raise ValueError("reference exceeds 200 characters")
        if len(self.description) > MAX_TEXT_LENGTH:
            raise ValueError("description exceeds 200 characters")


@dataclass(frozen=True)
class OrderTotals:
    """
    Aggregate order amounts.

    Balance Equation (MUST ALWAYS HOLD):
        total_amount = total_amount_excl_vat + total_vat_amount
    """

    total_amount: int
    total_amount_excl_vat: int
    total_vat_amount: int

    def validate_balance(self, tolerance: int = 1) -> bool:
        difference = self.total_amount - (self.total_amount_excl_vat + self.total_vat_amount)
        return abs(difference) <= tolerance


@dataclass(frozen=True)
class MappedOrder:
    """Result of mapping one order: its lines and aggregate totals."""

    order_lines: List[OrderLine] = field(default_factory=list)
    totals: OrderTotals = field(default_factory=lambda: OrderTotals(0, 0, 0))
