"""
Tests for the Reports module:
- Submitting review and shop reports (201, pending, counters bumped).
- Duplicate, self-report and missing-target rejections.
- Request validation and the reporter's own report list.
"""

import pytest
from fastapi.testclient import TestClient
from marketplace.main import app
from marketplace.errors import BadRequestError, ConflictError, ForbiddenError
from marketplace.reports import schemas, utils
from marketplace.reviews import utils as review_utils
from marketplace.shops import utils as shop_utils

client = TestClient(app)


# --- Submission ---

def test_report_review_success(auth_user, world):
    """POST /api/reports/review → 201 with a pending report."""
    auth_user(world["reporter"])
    payload = {"reviewId": world["review"].id, "category": "spam", "description": "Advertising a rival shop"}

    response = client.post("/api/reports/review", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "pending"
    assert body["data"]["target_type"] == "review"
    assert body["data"]["reporter_id"] == world["reporter"].id
    assert review_utils.get_review(world["review"].id).report_count == 1


def test_report_shop_scenario(auth_user, world):
    """POST /api/reports/shop → 201, pending, shop report_count +1."""
    auth_user(world["reporter"])
    response = client.post(
        "/api/reports/shop",
        json={"shopId": world["shop"].id, "category": "spam", "description": "test"},
    )

    assert response.status_code == 201
    assert response.json()["data"]["status"] == "pending"
    assert shop_utils.get_shop(world["shop"].id).report_count == 1


def test_duplicate_report_conflict(auth_user, world):
    """Reporting the same review twice → 409."""
    auth_user(world["reporter"])
    payload = {"reviewId": world["review"].id, "category": "offensive", "description": "Rude"}

    assert client.post("/api/reports/review", json=payload).status_code == 201
    response = client.post("/api/reports/review", json=payload)

    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "You have already reported this review"}
    assert len(utils.load_reports()) == 1
    assert review_utils.get_review(world["review"].id).report_count == 1


def test_same_target_by_other_users_allowed(world, make_user):
    """Uniqueness is per reporter: two different users may report one shop."""
    other = make_user(name="Another Shopper")
    target = schemas.ShopTarget(id=world["shop"].id)

    utils.submit_report(world["reporter"].id, target, schemas.ReportCategory.misleading, "Wrong hours")
    utils.submit_report(other.id, target, schemas.ReportCategory.misleading, "Wrong hours")

    assert shop_utils.get_shop(world["shop"].id).report_count == 2


def test_self_report_forbidden(auth_user, world):
    """A shopper cannot report their own review."""
    auth_user(world["shopper"])
    response = client.post(
        "/api/reports/review",
        json={"reviewId": world["review"].id, "category": "spam", "description": "Me"},
    )
    assert response.status_code == 403
    assert response.json()["success"] is False
    assert utils.load_reports() == []


def test_owner_cannot_report_own_shop(world):
    with pytest.raises(ForbiddenError):
        utils.submit_report(
            world["owner"].id, schemas.ShopTarget(id=world["shop"].id), schemas.ReportCategory.spam, "x"
        )


def test_report_missing_review_not_found(auth_user, world):
    auth_user(world["reporter"])
    response = client.post(
        "/api/reports/review",
        json={"reviewId": "does-not-exist", "category": "spam", "description": "Gone"},
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Review not found"


def test_duplicate_raises_conflict_at_service_level(world):
    target = schemas.ReviewTarget(id=world["review"].id)
    utils.submit_report(world["reporter"].id, target, schemas.ReportCategory.spam, "Spam")
    with pytest.raises(ConflictError):
        utils.submit_report(world["reporter"].id, target, schemas.ReportCategory.offensive, "Again")


# --- Validation ---

@pytest.mark.parametrize(
    "payload",
    [
        {"category": "boring", "description": "Not a category"},
        {"category": "spam", "description": "   "},
        {"category": "spam", "description": "x" * 1001},
        {"category": "spam"},
    ],
)
def test_invalid_payload_rejected(auth_user, world, payload):
    auth_user(world["reporter"])
    response = client.post("/api/reports/review", json={"reviewId": world["review"].id, **payload})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation Error"


def test_snake_case_body_accepted(auth_user, world):
    auth_user(world["reporter"])
    response = client.post(
        "/api/reports/shop",
        json={"shop_id": world["shop"].id, "category": "false_information", "description": "Closed down"},
    )
    assert response.status_code == 201


def test_padded_description_trimmed_before_length_check(auth_user, world):
    auth_user(world["reporter"])
    description = "  " + "x" * 1000 + "  "
    response = client.post(
        "/api/reports/review",
        json={"reviewId": world["review"].id, "category": "spam", "description": description},
    )
    assert response.status_code == 201
    assert response.json()["data"]["description"] == "x" * 1000


@pytest.mark.parametrize(
    "description, message",
    [
        ("   ", "Description is required"),
        ("x" * 1001, "Description cannot exceed 1000 characters"),
    ],
)
def test_service_validates_description(world, description, message):
    target = schemas.ReviewTarget(id=world["review"].id)
    with pytest.raises(BadRequestError, match=message):
        utils.submit_report(world["reporter"].id, target, schemas.ReportCategory.spam, description)
    assert utils.load_reports() == []
    assert review_utils.get_review(world["review"].id).report_count == 0


def test_service_stores_trimmed_description(world):
    report = utils.submit_report(
        world["reporter"].id, schemas.ShopTarget(id=world["shop"].id), schemas.ReportCategory.misleading, "  Wrong hours  "
    )
    assert utils.get_report(report.id).description == "Wrong hours"


# --- Counter failure is swallowed ---

def test_count_increment_failure_keeps_report(monkeypatch, world, caplog):
    """If bumping report_count fails the report still stands."""
    def broken(review_id):
        raise OSError("disk full")

    monkeypatch.setattr("marketplace.reviews.utils.increment_report_count", broken)

    report = utils.submit_report(
        world["reporter"].id, schemas.ReviewTarget(id=world["review"].id), schemas.ReportCategory.spam, "Spam"
    )

    assert utils.get_report(report.id).status == schemas.ReportStatus.pending
    assert review_utils.get_review(world["review"].id).report_count == 0
    assert "Failed to increment report count" in caplog.text


# --- My reports ---

def test_my_reports_newest_first(auth_user, world):
    auth_user(world["reporter"])
    client.post("/api/reports/review", json={"reviewId": world["review"].id, "category": "spam", "description": "a"})
    client.post("/api/reports/shop", json={"shopId": world["shop"].id, "category": "spam", "description": "b"})

    response = client.get("/api/reports/my-reports")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [r["target_type"] for r in data] == ["shop", "review"]


def test_my_reports_only_own(auth_user, world):
    utils.submit_report(
        world["reporter"].id, schemas.ShopTarget(id=world["shop"].id), schemas.ReportCategory.spam, "x"
    )
    auth_user(world["shopper"])
    assert client.get("/api/reports/my-reports").json()["data"] == []


def test_report_target_union():
    report = schemas.Report(
        id="r1", reporter_id="u1", target_type="shop", target_id="s1",
        category="spam", description="d", timestamp="2025-01-01T00:00:00+00:00",
    )
    assert isinstance(report.target, schemas.ShopTarget)
    assert report.target.id == "s1"
    assert not report.is_terminal
