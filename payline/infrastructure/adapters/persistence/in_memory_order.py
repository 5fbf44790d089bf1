"""
In-memory order source.

This is an IOrderSource implementation for testing and demos.
"""
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union

from payline.application.interfaces import IOrderSource
from payline.domain.entities import (
    FeeItem,
    ItemKind,
    MerchandiseItem,
    OrderItem,
    ShippingItem,
)
from payline.domain.exceptions import DataError

logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, str]


class InMemoryOrder(IOrderSource):
    """
    Order held in memory.

    When no totals are given, `recalculate()` derives them from the items:
    total = sum of (total + total_tax) over line, shipping and fee items,
    total_tax = sum of their total_tax. Coupon discounts are already part
    of the line totals.
    """

    def __init__(
        self,
        currency: str = "SEK",
        items: Optional[Iterable[OrderItem]] = None,
        tax_rates: Optional[Dict[str, Amount]] = None,
        total: Optional[Amount] = None,
        total_tax: Optional[Amount] = None,
    ):
        self._currency = currency
        self._items: List[OrderItem] = list(items or [])
        self._tax_rates = {str(k): Decimal(str(v)) for k, v in (tax_rates or {}).items()}
        self._auto_totals = total is None
        self._total = Decimal(str(total)) if total is not None else Decimal("0")
        self._total_tax = Decimal(str(total_tax)) if total_tax is not None else Decimal("0")
        self.recalculated = 0

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def total(self) -> Decimal:
        return self._total

    @property
    def total_tax(self) -> Decimal:
        return self._total_tax

    def get_items(self, kind: ItemKind = ItemKind.LINE_ITEM) -> List[OrderItem]:
        return [item for item in self._items if item.kind == kind]

    def get_tax_rate(self, rate_id: str) -> Optional[Decimal]:
        return self._tax_rates.get(str(rate_id))

    def recalculate(self) -> None:
        for item in self._items:
            if isinstance(item, MerchandiseItem) and (item.quantity or 0) < 0:
                raise DataError(f"Item '{item.name}' has negative quantity {item.quantity}")
        self.recalculated += 1

        if not self._auto_totals:
            return

        charged = [i for i in self._items if isinstance(i, (MerchandiseItem, ShippingItem, FeeItem))]
        self._total_tax = sum((i.total_tax for i in charged), Decimal("0"))
        self._total = sum((i.total + i.total_tax for i in charged), Decimal("0"))
        logger.debug(f"Recalculated totals: total={self._total}, tax={self._total_tax}")
