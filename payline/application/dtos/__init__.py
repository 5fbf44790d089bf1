"""Application DTOs."""

from .order_line_dto import CaptureOrderRequest, EditOrderLinesRequest, OrderLineDTO

__all__ = ["CaptureOrderRequest", "EditOrderLinesRequest", "OrderLineDTO"]
