import pytest
from marketplace.authentication.schemas import UserRole
from marketplace.config import Settings
from marketplace.moderation import thresholds
from marketplace.moderation.thresholds import ModerationThresholds


def test_defaults():
    policy = ModerationThresholds()
    assert policy.shopper_warnings == 3
    assert policy.owner_reports == 5


def test_from_settings(monkeypatch):
    monkeypatch.setenv("SHOPPER_WARNING_THRESHOLD", "4")
    monkeypatch.setenv("OWNER_REPORT_THRESHOLD", "10")
    policy = ModerationThresholds.from_settings(Settings())
    assert policy == ModerationThresholds(shopper_warnings=4, owner_reports=10)


@pytest.mark.parametrize("count, expected", [(0, False), (2, False), (3, True), (7, True)])
def test_shopper_threshold(count, expected):
    assert thresholds.shopper_reached_threshold(count, ModerationThresholds()) is expected


@pytest.mark.parametrize("count, expected", [(4, False), (5, True)])
def test_owner_threshold(count, expected):
    assert thresholds.owner_reached_threshold(count, ModerationThresholds()) is expected


def test_eligibility_uses_role_basis():
    policy = ModerationThresholds()

    shopper = thresholds.removal_eligibility(UserRole.SHOPPER, warning_count=1, total_reports=99, thresholds=policy)
    owner = thresholds.removal_eligibility(UserRole.OWNER, warning_count=99, total_reports=5, thresholds=policy)

    assert (shopper.eligible, shopper.current, shopper.required, shopper.basis) == (False, 1, 3, "warnings")
    assert (owner.eligible, owner.current, owner.required, owner.basis) == (True, 5, 5, "reports")


def test_eligibility_undefined_for_admin():
    with pytest.raises(ValueError):
        thresholds.removal_eligibility(UserRole.ADMIN, warning_count=10, total_reports=10, thresholds=ModerationThresholds())
