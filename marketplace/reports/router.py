"""
Handles report submission by shoppers and the reporter's own report list.
Moderation of reports lives under the admin routes.
"""

from fastapi import APIRouter, Depends, status
from marketplace.reports import utils, schemas
from marketplace.authentication.security import get_current_user

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.post("/review", status_code=status.HTTP_201_CREATED)
def report_review(report: schemas.ReviewReportCreate, user=Depends(get_current_user)):
    """Report a review."""
    created = utils.submit_report(
        reporter_id=user.user_id,
        target=report.target,
        category=report.category,
        description=report.description,
    )
    return {"success": True, "data": created, "message": "Review reported successfully"}


@router.post("/shop", status_code=status.HTTP_201_CREATED)
def report_shop(report: schemas.ShopReportCreate, user=Depends(get_current_user)):
    """Report a shop."""
    created = utils.submit_report(
        reporter_id=user.user_id,
        target=report.target,
        category=report.category,
        description=report.description,
    )
    return {"success": True, "data": created, "message": "Shop reported successfully"}


@router.get("/my-reports")
def get_my_reports(user=Depends(get_current_user)):
    """Reports filed by the current user."""
    return {"success": True, "data": utils.get_user_reports(user.user_id)}
