"""Response models for the pharmacy POS shipment import endpoint."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ShippingOrderSummary(_ApiModel):
    """Shipping order created server side from the uploaded rows."""

    soid: Any = None
    supplier: Any = None
    item_count: Any = Field(default=None, alias="itemCount")
    total_amount: Any = Field(default=None, alias="totalAmount")
    created_at: Any = Field(default=None, alias="createdAt")


class ImportSummary(_ApiModel):
    """Per-item import counters reported by the server."""

    total_items: Any = Field(default=None, alias="totalItems")
    success_count: Any = Field(default=None, alias="successCount")
    fail_count: Any = Field(default=None, alias="failCount")
    errors: List[Any] | None = None


class UploadOutcome(_ApiModel):
    """Decoded body of an upload response."""

    success: bool = False
    msg: str | None = None
    shipping_order: ShippingOrderSummary | None = Field(default=None, alias="shippingOrder")
    summary: ImportSummary | None = None
    error: Any = None
    errors: List[Any] | None = None
    status_code: int | None = Field(default=None, exclude=True)


__all__ = ["ImportSummary", "ShippingOrderSummary", "UploadOutcome"]
