from datetime import datetime
from pydantic import Field
from schemas.base import CamelModel


class ReviewCreate(CamelModel):
    user_id: int
    product_id: int
    rating: int = Field(ge=1, le=5)
    comment: str | None = None


class ReviewRead(ReviewCreate):
    id: int
    created_at: datetime
