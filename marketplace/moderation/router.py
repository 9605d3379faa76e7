"""
Admin routes: pending report queues, moderation decisions, user removal
and the moderation log. Every route requires the admin role.
"""

from fastapi import APIRouter, Body, Depends, Query
from typing import Optional
from marketplace.authentication.security import require_admin
from marketplace.config import settings
from marketplace.moderation import schemas
from marketplace.moderation.engine import ModerationEngine
from marketplace.moderation.thresholds import ModerationThresholds
from marketplace.reports.schemas import ReportTargetType

router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


def get_moderation_engine() -> ModerationEngine:
    return ModerationEngine(
        ModerationThresholds.from_settings(settings),
        pending_limit=settings.pending_reports_limit,
    )


# ────────────────────────────────
# Report queues
# ────────────────────────────────
@router.get("/reports")
def get_all_reports(
    target_type: Optional[ReportTargetType] = Query(None, alias="type"),
    engine: ModerationEngine = Depends(get_moderation_engine),
):
    """All pending reports, optionally narrowed to reviews or shops."""
    return {"success": True, "data": engine.get_pending_reports(target_type)}


@router.get("/reports/reviews")
def get_reported_reviews(engine: ModerationEngine = Depends(get_moderation_engine)):
    return {"success": True, "data": engine.get_pending_reports(ReportTargetType.review)}


@router.get("/reports/shops")
def get_reported_shops(engine: ModerationEngine = Depends(get_moderation_engine)):
    return {"success": True, "data": engine.get_pending_reports(ReportTargetType.shop)}


# ────────────────────────────────
# Decisions
# ────────────────────────────────
@router.post("/moderate/review/{report_id}", response_model=schemas.ModerationResult)
def moderate_review(
    report_id: str,
    decision: schemas.ModerateRequest,
    admin=Depends(require_admin),
    engine: ModerationEngine = Depends(get_moderation_engine),
):
    return engine.moderate_review(admin.user_id, report_id, decision.action, decision.reason)


@router.post("/moderate/shop/{report_id}", response_model=schemas.ModerationResult)
def moderate_shop(
    report_id: str,
    decision: schemas.ModerateRequest,
    admin=Depends(require_admin),
    engine: ModerationEngine = Depends(get_moderation_engine),
):
    return engine.moderate_shop(admin.user_id, report_id, decision.action, decision.reason)


# ────────────────────────────────
# Users & logs
# ────────────────────────────────
@router.delete("/users/{user_id}", response_model=schemas.ModerationResult)
def remove_user(
    user_id: str,
    body: Optional[schemas.RemoveUserRequest] = Body(None),
    admin=Depends(require_admin),
    engine: ModerationEngine = Depends(get_moderation_engine),
):
    """Remove a user whose warnings/reports reached the configured threshold."""
    reason = body.reason if body else None
    return engine.remove_user(admin.user_id, user_id, reason)


@router.get("/users")
def get_users_with_warnings(
    min_warnings: int = Query(1, ge=1, alias="minWarnings"),
    engine: ModerationEngine = Depends(get_moderation_engine),
):
    return {"success": True, "data": engine.get_users_with_warnings(min_warnings)}


@router.get("/logs")
def get_moderation_logs(
    limit: int = Query(100, ge=1, le=500),
    engine: ModerationEngine = Depends(get_moderation_engine),
):
    return {"success": True, "data": engine.get_moderation_logs(limit)}
