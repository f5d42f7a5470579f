from typing import Optional

from pydantic import Field

from schemas.validation import RequestModel, RecordId


class CreateReviewRequest(RequestModel):
    product_id: RecordId
    order_id: RecordId
    rating: int = Field(strict=True, ge=1, le=5)
    comment: str = Field(min_length=1, max_length=1000)


class UpdateReviewRequest(RequestModel):
    rating: Optional[int] = Field(default=None, strict=True, ge=1, le=5)
    comment: Optional[str] = Field(default=None, min_length=1, max_length=1000)
