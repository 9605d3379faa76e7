"""Threshold policy deciding when an account may be removed.

Crossing a threshold never removes anyone by itself; it only makes the
account eligible for an explicit admin removal.
"""

from __future__ import annotations

from dataclasses import dataclass

from marketplace.authentication.schemas import UserRole


@dataclass(frozen=True)
class ModerationThresholds:
    shopper_warnings: int = 3
    owner_reports: int = 5

    @staticmethod
    def from_settings(settings) -> "ModerationThresholds":
        return ModerationThresholds(
            shopper_warnings=settings.shopper_warning_threshold,
            owner_reports=settings.owner_report_threshold,
        )


@dataclass(frozen=True)
class RemovalEligibility:
    eligible: bool
    current: int
    required: int
    basis: str  # "warnings" or "reports"


def shopper_reached_threshold(warning_count: int, thresholds: ModerationThresholds) -> bool:
    return warning_count >= thresholds.shopper_warnings


def owner_reached_threshold(total_reports: int, thresholds: ModerationThresholds) -> bool:
    return total_reports >= thresholds.owner_reports


def removal_eligibility(
    role: UserRole,
    *,
    warning_count: int,
    total_reports: int,
    thresholds: ModerationThresholds,
) -> RemovalEligibility:
    if role == UserRole.OWNER:
        return RemovalEligibility(
            eligible=owner_reached_threshold(total_reports, thresholds),
            current=total_reports,
            required=thresholds.owner_reports,
            basis="reports",
        )
    if role == UserRole.SHOPPER:
        return RemovalEligibility(
            eligible=shopper_reached_threshold(warning_count, thresholds),
            current=warning_count,
            required=thresholds.shopper_warnings,
            basis="warnings",
        )
    raise ValueError(f"No removal threshold defined for role {role!r}")
