"""Application layer interfaces."""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Optional

from payline.domain.entities import ItemKind, OrderItem


class IOrderSource(ABC):
    """
    Interface for the shop order being mapped.

    This interface defines what the mapper reads from the order store,
    so the mapping stays independent of any particular shop backend.
    """

    @property
    @abstractmethod
    def currency(self) -> str:
        """ISO 4217 currency code of the order."""

    @property
    @abstractmethod
    def total(self) -> Decimal:
        """Order grand total incl. tax, major units."""

    @property
    @abstractmethod
    def total_tax(self) -> Decimal:
        """Order tax total, major units."""

    @abstractmethod
    def recalculate(self) -> None:
        """
        Refresh shipping, taxes and totals before mapping.

        Raises:
            Exception: If the order state is inconsistent
        """

    @abstractmethod
    def get_items(self, kind: ItemKind = ItemKind.LINE_ITEM) -> List[OrderItem]:
        """
        Get the order's items of one kind.

        Args:
            kind: Item stream to read (line items by default)

        Returns:
            Items in order
        """

    @abstractmethod
    def get_tax_rate(self, rate_id: str) -> Optional[Decimal]:
        """
        Look up a tax-rate record.

        Args:
            rate_id: Tax rate identifier

        Returns:
            Rate in percent (e.g. Decimal("25.0000")), or None if unknown
        """


class IRequestLogSink(ABC):
    """Destination for provider request/response log entries."""

    @abstractmethod
    def log(self, entry: Dict[str, Any], enabled: bool) -> None:
        """
        Record one request/response exchange.

        Args:
            entry: Formatted log entry
            enabled: Logging-enabled flag from settings; nothing is written when False
        """


__all__ = ["IOrderSource", "IRequestLogSink"]
