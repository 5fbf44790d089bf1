"""Application services."""
from .order_management_service import OrderManagementService

__all__ = ["OrderManagementService"]
