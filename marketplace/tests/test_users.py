"""
Tests for /api/users and the bearer-token boundary:
- Own profile with warning history
- Real token decoding (no dependency override)
- Deactivated accounts locked out
"""

from fastapi.testclient import TestClient
from marketplace.main import app
from marketplace.authentication import security
from marketplace.users import schemas, utils

client = TestClient(app)


def _bearer(user):
    token = security.create_access_token({"sub": user.id, "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


def test_get_my_profile_with_token(world):
    utils.append_warning(
        world["shopper"].id,
        schemas.WarningEntry(reason="Spam review", issued_by=world["admin"].id, issued_at="2025-01-01"),
    )

    response = client.get("/api/users/me", headers=_bearer(world["shopper"]))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == world["shopper"].id
    assert data["warning_count"] == 1
    assert data["warnings"][0]["reason"] == "Spam review"


def test_missing_token():
    response = client.get("/api/users/me")
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Missing or invalid authorization header"}


def test_invalid_token():
    response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_expired_token(world):
    token = security.create_access_token({"sub": world["shopper"].id}, expires_minutes=-1)
    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_deactivated_user_locked_out(world):
    headers = _bearer(world["shopper"])
    utils.deactivate_user(world["shopper"].id)

    response = client.get("/api/users/me", headers=headers)

    assert response.status_code == 403
    assert response.json()["message"] == "Account is deactivated"


def test_warnings_are_append_only(world):
    for i in range(2):
        utils.append_warning(
            world["owner"].id,
            schemas.WarningEntry(reason=f"w{i}", issued_by=world["admin"].id, issued_at=f"2025-01-0{i + 1}"),
        )
    user = utils.get_user_by_id(world["owner"].id)
    assert [w.reason for w in user.warnings] == ["w0", "w1"]


def test_append_warning_unknown_user():
    warning = schemas.WarningEntry(reason="x", issued_by="a", issued_at="2025-01-01")
    assert utils.append_warning("ghost", warning) is None
