"""
Defines the data models and enums for report management.
"""

from pydantic import BaseModel, Field, field_validator
from enum import Enum
from typing import Literal, Optional, Union

MAX_DESCRIPTION_LENGTH = 1000
MAX_RESOLUTION_LENGTH = 500


class ReportCategory(str, Enum):
    spam = "spam"
    offensive = "offensive"
    misleading = "misleading"
    false_information = "false_information"


class ReportStatus(str, Enum):
    pending = "pending"
    reviewed = "reviewed"
    resolved = "resolved"
    dismissed = "dismissed"
    review_removed = "review_removed"


TERMINAL_STATUSES = {ReportStatus.resolved, ReportStatus.dismissed, ReportStatus.review_removed}


class ReportTargetType(str, Enum):
    review = "review"
    shop = "shop"


class ReviewTarget(BaseModel):
    type: Literal["review"] = "review"
    id: str


class ShopTarget(BaseModel):
    type: Literal["shop"] = "shop"
    id: str


ReportTarget = Union[ReviewTarget, ShopTarget]


def make_target(target_type: ReportTargetType, target_id: str) -> ReportTarget:
    if ReportTargetType(target_type) == ReportTargetType.review:
        return ReviewTarget(id=target_id)
    return ShopTarget(id=target_id)


class Report(BaseModel):
    id: str
    reporter_id: str
    target_type: ReportTargetType
    target_id: str
    category: ReportCategory
    description: str = Field(..., max_length=MAX_DESCRIPTION_LENGTH)
    status: ReportStatus = ReportStatus.pending
    timestamp: str
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[str] = None
    resolution: Optional[str] = Field(None, max_length=MAX_RESOLUTION_LENGTH)

    @property
    def target(self) -> ReportTarget:
        return make_target(self.target_type, self.target_id)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


class _ReportCreate(BaseModel):
    category: ReportCategory
    description: str

    model_config = {"populate_by_name": True}

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description is required")
        if len(v) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters")
        return v


class ReviewReportCreate(_ReportCreate):
    review_id: str = Field(..., alias="reviewId")

    @property
    def target(self) -> ReviewTarget:
        return ReviewTarget(id=self.review_id)


class ShopReportCreate(_ReportCreate):
    shop_id: str = Field(..., alias="shopId")

    @property
    def target(self) -> ShopTarget:
        return ShopTarget(id=self.shop_id)
