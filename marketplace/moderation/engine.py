"""
Moderation engine: applies admin decisions to reported reviews and shops,
accrues warnings, removes users who crossed a threshold, and serves the
admin dashboard queries.

A decision touches several collections in sequence (target, warned user,
audit log, report). The sequence is not transactional: a failure part way
leaves the earlier steps applied.
"""

import logging
from typing import Dict, List, Optional

from marketplace import storage
from marketplace.authentication.schemas import UserRole
from marketplace.errors import BadRequestError, ConflictError, NotFoundError
from marketplace.moderation import schemas, thresholds, utils as log_utils
from marketplace.moderation.schemas import Decision, LogTargetType, ModerationAction
from marketplace.reports import schemas as report_schemas, utils as report_utils
from marketplace.reviews import utils as review_utils
from marketplace.shops import utils as shop_utils
from marketplace.users import schemas as user_schemas, utils as user_utils

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

DEFAULT_RESOLUTIONS = {
    (LogTargetType.review, Decision.remove): "Review removed after investigation",
    (LogTargetType.review, Decision.approve): "Review approved after investigation",
    (LogTargetType.shop, Decision.remove): "Shop removed after investigation",
    (LogTargetType.shop, Decision.approve): "Shop approved after investigation",
}
DEFAULT_REMOVAL_REASON = "Removed due to repeated violations"


class ModerationEngine:
    def __init__(self, policy: thresholds.ModerationThresholds, pending_limit: int = 50):
        self.policy = policy
        self.pending_limit = pending_limit

    # ────────────────────────────────
    # Decisions
    # ────────────────────────────────
    def moderate_review(
        self, admin_id: str, report_id: str, action: Decision, reason: Optional[str] = None
    ) -> schemas.ModerationResult:
        action = Decision(action)
        report = self._load_report(report_id, report_schemas.ReportTargetType.review)
        review = review_utils.get_review(report.target_id)
        if not review:
            raise NotFoundError("Review not found")

        resolution = self._resolution(reason, LogTargetType.review, action)

        if action == Decision.remove:
            item = shop_utils.get_item(review.item_id)
            item_name = item.name if item else UNKNOWN

            review_utils.remove_review(review.id)
            author = self._warn(
                review.shopper_id, admin_id, report.id, f'Review on "{item_name}" removed: {resolution}'
            )
            if author and thresholds.shopper_reached_threshold(author.warning_count, self.policy):
                logger.warning(
                    "Shopper %s has reached warning threshold (%d/%d)",
                    author.email, author.warning_count, self.policy.shopper_warnings,
                )

            log_utils.record_action(
                admin_id, ModerationAction.remove_review, LogTargetType.review, review.id,
                reason=resolution, details=f'Review removed from item "{item_name}"', related_report=report.id,
            )
            report.status = report_schemas.ReportStatus.review_removed
        else:
            log_utils.record_action(
                admin_id, ModerationAction.approve_review, LogTargetType.review, review.id,
                reason=resolution, details="Review approved after investigation", related_report=report.id,
            )
            report.status = report_schemas.ReportStatus.resolved

        self._close_report(report, admin_id, resolution)
        logger.info("Review %s moderated by admin %s: %s", review.id, admin_id, action.value)
        return schemas.ModerationResult(message=f"Review {action.value}d successfully")

    def moderate_shop(
        self, admin_id: str, report_id: str, action: Decision, reason: Optional[str] = None
    ) -> schemas.ModerationResult:
        action = Decision(action)
        report = self._load_report(report_id, report_schemas.ReportTargetType.shop)
        shop = shop_utils.get_shop(report.target_id)
        if not shop:
            raise NotFoundError("Shop not found")

        resolution = self._resolution(reason, LogTargetType.shop, action)

        if action == Decision.remove:
            shop_utils.remove_shop(shop.id)
            self._warn(shop.owner_id, admin_id, report.id, f'Shop "{shop.name}" removed: {resolution}')

            total_reports = shop_utils.total_report_count(shop.owner_id)
            if thresholds.owner_reached_threshold(total_reports, self.policy):
                logger.warning(
                    "Owner %s has reached report threshold (%d/%d)",
                    shop.owner_id, total_reports, self.policy.owner_reports,
                )

            log_utils.record_action(
                admin_id, ModerationAction.remove_shop, LogTargetType.shop, shop.id,
                reason=resolution, details=f'Shop "{shop.name}" removed', related_report=report.id,
            )
        else:
            log_utils.record_action(
                admin_id, ModerationAction.approve_shop, LogTargetType.shop, shop.id,
                reason=resolution, details="Shop approved after investigation", related_report=report.id,
            )
        report.status = report_schemas.ReportStatus.resolved

        self._close_report(report, admin_id, resolution)
        logger.info("Shop %s moderated by admin %s: %s", shop.id, admin_id, action.value)
        return schemas.ModerationResult(message=f"Shop {action.value}d successfully")

    def remove_user(self, admin_id: str, user_id: str, reason: Optional[str] = None) -> schemas.ModerationResult:
        """Deactivate a user who crossed their role's threshold."""
        user = user_utils.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.role == UserRole.ADMIN:
            raise BadRequestError("Admin accounts cannot be removed")
        if not user.is_active:
            raise ConflictError("User is already inactive")

        total_reports = shop_utils.total_report_count(user.id) if user.role == UserRole.OWNER else 0
        eligibility = thresholds.removal_eligibility(
            user.role, warning_count=user.warning_count, total_reports=total_reports, thresholds=self.policy,
        )
        if not eligibility.eligible:
            who = "Owner" if user.role == UserRole.OWNER else "User"
            basis = "report" if eligibility.basis == "reports" else "warning"
            raise BadRequestError(
                f"{who} has not reached {basis} threshold ({eligibility.current}/{eligibility.required})"
            )

        user_utils.deactivate_user(user.id)
        details = f"User {user.email} removed due to violations"
        if user.role == UserRole.OWNER:
            closed = shop_utils.deactivate_shops_for_owner(user.id)
            details += f"; {closed} shop(s) deactivated"

        log_utils.record_action(
            admin_id, ModerationAction.remove_user, LogTargetType.user, user.id,
            reason=self._check_length(reason) or DEFAULT_REMOVAL_REASON, details=details,
        )
        logger.info("User %s removed by admin %s", user.id, admin_id)
        return schemas.ModerationResult(message="User removed successfully")

    # ────────────────────────────────
    # Dashboard queries
    # ────────────────────────────────
    def get_pending_reports(
        self, target_type: Optional[report_schemas.ReportTargetType] = None
    ) -> List[schemas.PendingReport]:
        reports = report_utils.filter_reports_by_status(report_schemas.ReportStatus.pending, target_type)
        reports = reports[: self.pending_limit]

        users = _index(user_utils.load_users)
        shops = _index(shop_utils.load_shops)
        items = _index(shop_utils.load_items)
        reviews = _index(review_utils.load_reviews)

        enriched = []
        for report in reports:
            reporter = users.get(report.reporter_id, {})
            enriched.append(
                schemas.PendingReport(
                    **report.model_dump(),
                    reporter_name=reporter.get("name", UNKNOWN),
                    reporter_email=reporter.get("email", UNKNOWN),
                    target_details=_describe_target(report.target, users, shops, items, reviews),
                )
            )
        return enriched

    def get_users_with_warnings(self, min_warnings: int = 1) -> List[user_schemas.User]:
        users = user_utils.find_active_users_with_warnings()
        return [u for u in users if u.warning_count >= min_warnings]

    def get_moderation_logs(self, limit: int = 100) -> List[schemas.ModerationLogView]:
        users = _index(user_utils.load_users)
        views = []
        for entry in log_utils.get_logs(limit):
            admin = users.get(entry.admin_id, {})
            views.append(
                schemas.ModerationLogView(
                    **entry.model_dump(),
                    admin_name=admin.get("name", UNKNOWN),
                    admin_email=admin.get("email", UNKNOWN),
                )
            )
        return views

    # ────────────────────────────────
    # Helpers
    # ────────────────────────────────
    @staticmethod
    def _load_report(report_id: str, expected: report_schemas.ReportTargetType) -> report_schemas.Report:
        report = report_utils.get_report(report_id)
        if not report:
            raise NotFoundError("Report not found")
        if report.target_type != expected:
            raise BadRequestError(f"Report is not for a {expected.value}")
        return report

    @staticmethod
    def _check_length(reason: Optional[str]) -> Optional[str]:
        reason = reason.strip() if reason else None
        if reason and len(reason) > report_schemas.MAX_RESOLUTION_LENGTH:
            raise BadRequestError(
                f"Reason must not exceed {report_schemas.MAX_RESOLUTION_LENGTH} characters"
            )
        return reason

    def _resolution(self, reason: Optional[str], target_type: LogTargetType, action: Decision) -> str:
        return self._check_length(reason) or DEFAULT_RESOLUTIONS[(target_type, action)]

    @staticmethod
    def _warn(user_id: str, admin_id: str, report_id: str, reason: str) -> Optional[user_schemas.User]:
        warning = user_schemas.WarningEntry(
            reason=reason, issued_by=admin_id, issued_at=storage.utcnow(), related_report=report_id,
        )
        user = user_utils.append_warning(user_id, warning)
        if user is None:
            logger.warning("Could not issue warning: user %s not found", user_id)
        return user

    @staticmethod
    def _close_report(report: report_schemas.Report, admin_id: str, resolution: str) -> None:
        report.reviewed_by = admin_id
        report.reviewed_at = storage.utcnow()
        report.resolution = resolution
        report_utils.save_report(report)


def _index(loader) -> Dict[str, dict]:
    """Map documents by id; an unreadable collection yields an empty map."""
    try:
        return {doc["id"]: doc for doc in loader()}
    except (OSError, ValueError, KeyError):
        logger.warning("Lookup collection unavailable while enriching reports", exc_info=True)
        return {}


def _describe_target(target, users, shops, items, reviews) -> schemas.TargetDetails:
    if isinstance(target, report_schemas.ReviewTarget):
        review = reviews.get(target.id, {})
        reviewer = users.get(review.get("shopper_id"), {})
        item = items.get(review.get("item_id"), {})
        shop = shops.get(review.get("shop_id"), {})
        return schemas.TargetDetails(
            shop_name=shop.get("name", UNKNOWN),
            reviewer_name=reviewer.get("name", UNKNOWN),
            item_name=item.get("name", UNKNOWN),
            review_description=review.get("description", UNKNOWN),
            images=review.get("images", []),
        )

    shop = shops.get(target.id, {})
    owner = users.get(shop.get("owner_id"), {})
    return schemas.TargetDetails(
        shop_name=shop.get("name", UNKNOWN),
        owner_name=owner.get("name", UNKNOWN),
    )
