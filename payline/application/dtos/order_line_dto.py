"""Application DTOs for provider order-line payloads."""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from payline.domain.value_objects import MappedOrder, OrderLine, OrderLineType


class OrderLineDTO(BaseModel):
    """Wire shape of one provider order line."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=True)

    type: OrderLineType = Field(..., description="Line type")
    reference: str = Field(..., max_length=200, description="SKU or other reference")
    description: str = Field(..., max_length=200, description="Item name")
    quantity: int = Field(..., gt=0, description="Quantity")
    unit_price: int = Field(..., alias="unitPrice", description="Unit price incl. vat, minor units")
    unit_discount_amount: int = Field(
        ..., alias="unitDiscountAmount", description="Unit discount incl. vat, minor units"
    )
    vat: int = Field(..., ge=0, le=100, description="Vat rate in percent")
    total_amount: int = Field(..., alias="totalAmount", description="Line total, minor units")
    total_vat_amount: int = Field(..., alias="totalVatAmount", description="Line vat, minor units")

    @classmethod
    def from_domain(cls, line: OrderLine) -> "OrderLineDTO":
        return cls(
            type=line.type,
            reference=line.reference,
            description=line.description,
            quantity=line.quantity,
            unit_price=line.unit_price,
            unit_discount_amount=line.unit_discount_amount,
            vat=line.vat,
            total_amount=line.total_amount,
            total_vat_amount=line.total_vat_amount,
        )


class EditOrderLinesRequest(BaseModel):
    """Body for replacing the order lines of a provider order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    order_lines: List[OrderLineDTO] = Field(default_factory=list, alias="orderLines")
    total_order_amount: int = Field(..., alias="totalOrderAmount")
    total_order_amount_excl_vat: int = Field(..., alias="totalOrderAmountExclVat")
    total_order_vat_amount: int = Field(..., alias="totalOrderVatAmount")

    @classmethod
    def from_mapped(cls, mapped: MappedOrder) -> "EditOrderLinesRequest":
        return cls(
            order_lines=[OrderLineDTO.from_domain(line) for line in mapped.order_lines],
            total_order_amount=mapped.totals.total_amount,
            total_order_amount_excl_vat=mapped.totals.total_amount_excl_vat,
            total_order_vat_amount=mapped.totals.total_vat_amount,
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class CaptureOrderRequest(BaseModel):
    """Body for capturing a provider order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    order_lines: List[OrderLineDTO] = Field(default_factory=list, alias="orderLines")
    total_capture_amount: int = Field(..., alias="totalCaptureAmount")

    @classmethod
    def from_mapped(cls, mapped: MappedOrder) -> "CaptureOrderRequest":
        return cls(
            order_lines=[OrderLineDTO.from_domain(line) for line in mapped.order_lines],
            total_capture_amount=mapped.totals.total_amount,
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
