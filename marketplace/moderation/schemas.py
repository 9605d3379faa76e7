"""
Models for moderation decisions, the audit log and the admin dashboard views.
"""

from pydantic import BaseModel, Field
from enum import Enum
from typing import List, Optional
from marketplace.reports.schemas import MAX_RESOLUTION_LENGTH, Report


class ModerationAction(str, Enum):
    remove_review = "remove_review"
    approve_review = "approve_review"
    warn_user = "warn_user"
    remove_user = "remove_user"
    warn_shop = "warn_shop"
    approve_shop = "approve_shop"
    remove_shop = "remove_shop"


class LogTargetType(str, Enum):
    user = "user"
    shop = "shop"
    review = "review"


class Decision(str, Enum):
    approve = "approve"
    remove = "remove"


class ModerationLog(BaseModel):
    id: str
    admin_id: str
    action: ModerationAction
    target_type: LogTargetType
    target_id: str
    related_report: Optional[str] = None
    reason: str
    details: str = ""
    timestamp: str


class ModerateRequest(BaseModel):
    action: Decision
    reason: Optional[str] = Field(None, max_length=MAX_RESOLUTION_LENGTH)


class RemoveUserRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=MAX_RESOLUTION_LENGTH)


class ModerationResult(BaseModel):
    success: bool = True
    message: str


# Dashboard views (denormalized, "Unknown" where a reference is broken)
class TargetDetails(BaseModel):
    shop_name: str = "Unknown"
    owner_name: Optional[str] = None
    reviewer_name: Optional[str] = None
    item_name: Optional[str] = None
    review_description: Optional[str] = None
    images: List[str] = []


class PendingReport(Report):
    reporter_name: str = "Unknown"
    reporter_email: str = "Unknown"
    target_details: TargetDetails = TargetDetails()


class ModerationLogView(ModerationLog):
    admin_name: str = "Unknown"
    admin_email: str = "Unknown"
