"""Application service for Ledyer order management operations."""

import logging
from typing import Any, Dict, Optional

from payline.application.dtos import CaptureOrderRequest, EditOrderLinesRequest
from payline.application.interfaces import IOrderSource
from payline.infrastructure.adapters.ledyer.client import AuthenticatedRequestClient
from payline.infrastructure.adapters.ledyer.order_mapper import OrderLineMapper

logger = logging.getLogger(__name__)


class OrderManagementService:
    """
    Builds provider payloads from shop orders and submits them.

    Responsibilities:
    - Map the shop order (OrderLineMapper)
    - Shape the payload (DTOs)
    - Send it (AuthenticatedRequestClient)
    """

    def __init__(
        self,
        client: AuthenticatedRequestClient,
        mapper: Optional[OrderLineMapper] = None,
    ) -> None:
        self._client = client
        self._mapper = mapper or OrderLineMapper()

    def build_edit_payload(self, order: IOrderSource) -> Dict[str, Any]:
        return EditOrderLinesRequest.from_mapped(self._mapper.map_order(order)).to_payload()

    def build_capture_payload(self, order: IOrderSource) -> Dict[str, Any]:
        return CaptureOrderRequest.from_mapped(self._mapper.map_order(order)).to_payload()

    def edit_order_lines(self, ledyer_order_id: str, order: IOrderSource) -> Any:
        """
        Replace the order lines of a provider order with the shop order's.

        Raises:
            DataError: If the order cannot be mapped
            RequestError: If the provider call fails
        """
        payload = self.build_edit_payload(order)
        logger.info(
            f"[LEDYER] Editing order {ledyer_order_id}: "
            f"{len(payload['orderLines'])} line(s), total={payload['totalOrderAmount']}"
        )
        return self._client.request(f"v1/orders/{ledyer_order_id}/edit", "POST", payload)

    def capture_order(self, ledyer_order_id: str, order: IOrderSource) -> Any:
        """
        Capture a provider order for the shop order's current lines.

        Raises:
            DataError: If the order cannot be mapped
            RequestError: If the provider call fails
        """
        payload = self.build_capture_payload(order)
        logger.info(
            f"[LEDYER] Capturing order {ledyer_order_id}: amount={payload['totalCaptureAmount']}"
        )
        return self._client.request(f"v1/orders/{ledyer_order_id}/capture", "POST", payload)

    def get_order(self, ledyer_order_id: str) -> Any:
        return self._client.request(f"v1/orders/{ledyer_order_id}", "GET")
