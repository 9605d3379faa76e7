from pydantic import BaseModel, Field
from typing import List, Optional

MAX_REVIEW_IMAGES = 5


class Review(BaseModel):
    id: str
    shopper_id: str
    item_id: str
    shop_id: str
    description: str
    availability: bool
    images: List[str] = Field(default_factory=list, max_length=MAX_REVIEW_IMAGES)
    warnings: int = Field(0, ge=0)
    report_count: int = Field(0, ge=0)
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ReviewCreate(BaseModel):
    item_id: str = Field(..., alias="itemId")
    description: str = Field(..., min_length=1, max_length=2000)
    availability: bool
    images: List[str] = Field(default_factory=list, max_length=MAX_REVIEW_IMAGES)

    model_config = {"populate_by_name": True}


class ReviewUpdate(BaseModel):
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    availability: Optional[bool] = None
    images: Optional[List[str]] = Field(None, max_length=MAX_REVIEW_IMAGES)
