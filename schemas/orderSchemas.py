from typing import List, Literal, Optional

from pydantic import Field

from schemas.validation import RequestModel, RecordId

MAX_ITEM_QUANTITY = 1000


class OrderItemRequest(RequestModel):
    product_id: RecordId
    product_variant_id: RecordId
    quantity: int = Field(strict=True, ge=1, le=MAX_ITEM_QUANTITY)
    notes: Optional[str] = Field(default=None, max_length=500)


class CreateOrderRequest(RequestModel):
    customer_name: str = Field(min_length=1, max_length=255)
    customer_whatsapp: str = Field(min_length=1, max_length=20)
    customer_address: str = Field(min_length=1, max_length=1000)
    customer_coordinates: Optional[str] = Field(default=None, max_length=100)
    shipping_method: Literal["express", "pickup"]
    delivery_day: Optional[Literal["selasa", "kamis", "sabtu"]] = None
    payment_method: Literal["transfer", "cod"]
    customer_id: Optional[RecordId] = None
    items: List[OrderItemRequest] = Field(min_length=1)
    notes: Optional[str] = Field(default=None, max_length=1000)


class UpdateOrderStatusRequest(RequestModel):
    status: Literal["pending", "confirmed", "processing", "delivered", "cancelled"]
