"""
Shop order to Ledyer order-line mapper.

Every amount leaves this module as an integer in minor currency units.
Rounding is HALF_UP on Decimal values; floats are never compared.
"""
import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, List, Optional, Union

from payline.application.interfaces import IOrderSource
from payline.domain.entities import (
    CouponItem,
    FeeItem,
    ItemKind,
    MerchandiseItem,
    OrderItem,
    ShippingItem,
    TaxItem,
)
from payline.domain.exceptions import DataError
from payline.domain.value_objects import (
    MAX_TEXT_LENGTH,
    MappedOrder,
    Money,
    OrderLine,
    OrderLineType,
    OrderTotals,
)

logger = logging.getLogger(__name__)

LineFilter = Callable[[OrderLine, MerchandiseItem], Optional[OrderLine]]

_SCRIPT_STYLE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]*>")


def strip_tags(text: str) -> str:
    text = _SCRIPT_STYLE.sub("", text)
    return _TAG.sub("", text).strip()


def truncate(value) -> str:
    return str(value)[:MAX_TEXT_LENGTH]


class OrderLineMapper:
    """
    Maps a shop order to provider order lines plus aggregate totals.

    `line_filter` is called with each mapped merchandise line and its source
    item; it may return the line, a replacement, or a falsy value to drop
    it. Shipping, fee and coupon lines are not passed through the filter.
    """

    def __init__(self, line_filter: Optional[LineFilter] = None) -> None:
        self._line_filter = line_filter

    def map_order(self, order: IOrderSource) -> MappedOrder:
        """
        Map an order.

        Args:
            order: Order source; its totals are recalculated first

        Returns:
            MappedOrder with lines in item order: line items, shipping, fees

        Raises:
            DataError: If recalculation fails or an item cannot be mapped
        """
        try:
            order.recalculate()
        except DataError:
            raise
        except Exception as e:
            raise DataError(f"Could not recalculate order totals: {e}") from e

        currency = order.currency
        totals = self.map_totals(order)
        tax_items = [item for item in order.get_items(ItemKind.TAX) if isinstance(item, TaxItem)]

        order_lines: List[OrderLine] = []
        for kind in (ItemKind.LINE_ITEM, ItemKind.SHIPPING, ItemKind.FEE):
            for item in order.get_items(kind):
                line = self._map_item(order, item, currency, tax_items)
                if line:
                    order_lines.append(line)

        logger.info(
            f"[MAPPER] Built {len(order_lines)} order line(s): "
            f"total={totals.total_amount}, vat={totals.total_vat_amount} {currency} (minor units)"
        )
        return MappedOrder(order_lines=order_lines, totals=totals)

    @staticmethod
    def map_totals(order: IOrderSource) -> OrderTotals:
        total = Money.of(order.total, order.currency)
        total_tax = Money.of(order.total_tax, order.currency)
        return OrderTotals(
            total_amount=total.minor_amount,
            total_amount_excl_vat=(total - total_tax).minor_amount,
            total_vat_amount=total_tax.minor_amount,
        )

    def _map_item(
        self,
        order: IOrderSource,
        item: OrderItem,
        currency: str,
        tax_items: List[TaxItem],
    ) -> Optional[OrderLine]:
        try:
            if isinstance(item, MerchandiseItem):
                line = self.map_merchandise_item(order, item, currency, tax_items)
            elif isinstance(item, ShippingItem):
                line = self.map_charge_item(
                    order, item, currency, tax_items,
                    OrderLineType.SHIPPING_FEE, f"{item.method_id}:{item.instance_id}",
                )
            elif isinstance(item, FeeItem):
                line = self.map_charge_item(
                    order, item, currency, tax_items, OrderLineType.SURCHARGE, "Fee"
                )
            elif isinstance(item, CouponItem):
                line = self.map_coupon_item(item, currency)
            else:
                logger.debug(f"[MAPPER] Skipping {type(item).__name__} in item stream")
                return None
        except ValueError as e:
            raise DataError(f"Cannot map order item '{getattr(item, 'name', item)}': {e}") from e

        if not isinstance(item, MerchandiseItem) or self._line_filter is None:
            return line

        # Filter exceptions propagate unchanged.
        filtered = self._line_filter(line, item)
        if not filtered:
            logger.debug(f"[MAPPER] Line filter dropped item '{item.name}'")
        return filtered or None

    def map_merchandise_item(
        self,
        order: IOrderSource,
        item: MerchandiseItem,
        currency: str,
        tax_items: List[TaxItem],
    ) -> OrderLine:
        quantity = item.quantity or 1
        product = item.resolved_product

        unit_price = Money.of(item.subtotal + item.subtotal_tax, currency).divided_by(quantity)

        if item.subtotal > item.total:
            discount = Money.of(
                item.subtotal + item.subtotal_tax - item.total - item.total_tax, currency
            ).divided_by(quantity)
        else:
            discount = Money.of(0, currency)

        return OrderLine(
            type=OrderLineType.PHYSICAL if product and not product.virtual else OrderLineType.DIGITAL,
            reference=truncate(self.get_item_reference(item)),
            description=truncate(strip_tags(item.name)),
            quantity=quantity,
            unit_price=unit_price.minor_amount,
            unit_discount_amount=discount.minor_amount,
            vat=self.get_item_tax_rate(order, item.taxes, tax_items),
            total_amount=Money.of(item.total + item.total_tax, currency).minor_amount,
            total_vat_amount=Money.of(item.total_tax, currency).minor_amount,
        )

    def map_charge_item(
        self,
        order: IOrderSource,
        item: Union[ShippingItem, FeeItem],
        currency: str,
        tax_items: List[TaxItem],
        line_type: OrderLineType,
        reference: str,
    ) -> OrderLine:
        """Shipping and fee items: one unit priced at the full line total."""
        total = Money.of(item.total + item.total_tax, currency)
        return OrderLine(
            type=line_type,
            reference=truncate(reference),
            description=truncate(strip_tags(item.name)),
            quantity=1,
            unit_price=total.minor_amount,
            unit_discount_amount=0,
            vat=self.get_item_tax_rate(order, item.taxes, tax_items),
            total_amount=total.minor_amount,
            total_vat_amount=Money.of(item.total_tax, currency).minor_amount,
        )

    @staticmethod
    def map_coupon_item(item: CouponItem, currency: str) -> OrderLine:
        discount = Money.of(item.discount, currency)
        return OrderLine(
            type=OrderLineType.DIGITAL,
            reference="Discount",
            description=truncate(strip_tags(item.name)),
            quantity=1,
            unit_price=discount.minor_amount,
            unit_discount_amount=0,
            vat=0,
            total_amount=discount.minor_amount,
            total_vat_amount=Money.of(item.discount_tax, currency).minor_amount,
        )

    @staticmethod
    def get_item_reference(item: MerchandiseItem):
        """Variant SKU, then product SKU, then product id; item name if no product."""
        if item.variant is None and item.product is None:
            return item.name
        for candidate in (item.variant, item.product):
            if candidate is not None and candidate.sku:
                return candidate.sku
        return item.resolved_product.product_id

    @staticmethod
    def get_item_tax_rate(order: IOrderSource, taxes: dict, tax_items: List[TaxItem]) -> int:
        """
        Vat rate of an item as a whole percentage.

        Walks the order's tax items in order and returns the first nonzero
        rate whose id has a value in the item's tax breakdown. 0 otherwise.
        """
        breakdown = {str(key): value for key, value in (taxes or {}).items()}
        for tax_item in tax_items:
            value = breakdown.get(str(tax_item.rate_id))
            if value is None or value == "":
                continue
            rate = order.get_tax_rate(tax_item.rate_id)
            if rate is None:
                continue
            percent = int(Decimal(str(rate)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
            if percent:
                return percent
        return 0
