"""
Report persistence and submission rules.

A reporter may report a given review or shop once. The target's
report counter is bumped after the report is stored; if that bump fails
the report stands and the failure is only logged.
"""

import logging
from typing import List, Optional, Tuple
from marketplace import storage
from marketplace.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from marketplace.reports import schemas
from marketplace.reviews import utils as review_utils
from marketplace.shops import utils as shop_utils

logger = logging.getLogger(__name__)

REPORTS_FILE = storage.collection_path("reports")
MY_REPORTS_LIMIT = 50


def load_reports() -> List[dict]:
    return storage.load_collection(REPORTS_FILE)


def get_report(report_id: str) -> Optional[schemas.Report]:
    """Fetch specific report by ID."""
    report = storage.find_by_id(load_reports(), report_id)
    return schemas.Report(**report) if report else None


def save_report(report: schemas.Report) -> schemas.Report:
    """Replace the stored copy of `report`."""
    with storage.locked_collection(REPORTS_FILE) as reports:
        for i, stored in enumerate(reports):
            if stored["id"] == report.id:
                reports[i] = report.model_dump(mode="json")
                break
        else:
            raise NotFoundError("Report not found")
    return report


def find_existing_report(
    reporter_id: str,
    target: schemas.ReportTarget,
    reports: Optional[List[dict]] = None,
) -> Optional[schemas.Report]:
    for r in load_reports() if reports is None else reports:
        if r["reporter_id"] == reporter_id and r["target_type"] == target.type and r["target_id"] == target.id:
            return schemas.Report(**r)
    return None


def _resolve_author(target: schemas.ReportTarget) -> Tuple[str, str]:
    """Return (author id, label) for the reported entity or raise NotFound."""
    if isinstance(target, schemas.ReviewTarget):
        review = review_utils.get_review(target.id)
        if not review or not review.is_active:
            raise NotFoundError("Review not found")
        return review.shopper_id, "review"
    shop = shop_utils.get_shop(target.id)
    if not shop or not shop.is_active:
        raise NotFoundError("Shop not found")
    return shop.owner_id, "shop"


def _clean_description(description: Optional[str]) -> str:
    description = (description or "").strip()
    if not description:
        raise BadRequestError("Description is required")
    if len(description) > schemas.MAX_DESCRIPTION_LENGTH:
        raise BadRequestError(f"Description cannot exceed {schemas.MAX_DESCRIPTION_LENGTH} characters")
    return description


def _increment_target_count(target: schemas.ReportTarget) -> None:
    try:
        if isinstance(target, schemas.ReviewTarget):
            updated = review_utils.increment_report_count(target.id)
        else:
            updated = shop_utils.increment_report_count(target.id)
    except (OSError, ValueError):
        logger.warning("Failed to increment report count on %s %s", target.type, target.id, exc_info=True)
        return
    if updated is None:
        logger.warning("Report count not incremented: %s %s disappeared", target.type, target.id)


def submit_report(
    reporter_id: str,
    target: schemas.ReportTarget,
    category: schemas.ReportCategory,
    description: str,
) -> schemas.Report:
    """Create and persist a pending report against a review or shop."""
    description = _clean_description(description)
    author_id, label = _resolve_author(target)
    if author_id == reporter_id:
        raise ForbiddenError(f"You cannot report your own {label}")

    new_report = schemas.Report(
        id=storage.new_id(),
        reporter_id=reporter_id,
        target_type=target.type,
        target_id=target.id,
        category=category,
        description=description,
        status=schemas.ReportStatus.pending,
        timestamp=storage.utcnow(),
    )
    # Duplicate check and insert share one critical section
    with storage.locked_collection(REPORTS_FILE) as reports:
        if find_existing_report(reporter_id, target, reports):
            raise ConflictError(f"You have already reported this {label}")
        reports.append(new_report.model_dump(mode="json"))

    _increment_target_count(target)
    logger.info("%s %s reported by user %s", label.capitalize(), target.id, reporter_id)
    return new_report


def get_user_reports(user_id: str) -> List[schemas.Report]:
    """Reports filed by a user, newest first."""
    reports = [schemas.Report(**r) for r in load_reports() if r["reporter_id"] == user_id]
    reports.sort(key=lambda r: r.timestamp, reverse=True)
    return reports[:MY_REPORTS_LIMIT]


def filter_reports_by_status(
    status: schemas.ReportStatus,
    target_type: Optional[schemas.ReportTargetType] = None,
) -> List[schemas.Report]:
    """Reports in a given status (optionally one target type), newest first."""
    reports = [
        schemas.Report(**r) for r in load_reports()
        if r["status"] == status.value and (target_type is None or r["target_type"] == target_type.value)
    ]
    reports.sort(key=lambda r: r.timestamp, reverse=True)
    return reports
