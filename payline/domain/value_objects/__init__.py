"""Domain value objects."""

from .money import Money, minor_unit_exponent
from .order_line import MAX_TEXT_LENGTH, MappedOrder, OrderLine, OrderLineType, OrderTotals

__all__ = [
    "Money",
    "minor_unit_exponent",
    "MAX_TEXT_LENGTH",
    "MappedOrder",
    "OrderLine",
    "OrderLineType",
    "OrderTotals",
]
