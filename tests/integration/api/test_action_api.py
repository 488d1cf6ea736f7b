"""
Integration tests for the action API endpoint.
"""

import re

import pytest

from api.state import service_state
from support.infrastructure.models import SupportGrant as SupportGrantModel

ADMIN = "root-admin"


@pytest.fixture
def app_api_key(call_action):
    """Create application "Foo" owned by U1 and return its API key."""
    response = call_action("create_app", app_name="Foo", user_id="U1")
    assert response.json()["success"] is True
    return response.json()["api_key"]


@pytest.fixture
def issued_key(call_action, app_api_key):
    """Issue a 30-day, two-device PRO key on application Foo."""
    response = call_action(
        "create_key", api=app_api_key, prefix="PRO", days=30, user_id="U1", device_limit="2"
    )
    assert response.json()["success"] is True
    return response.json()["key"]


@pytest.mark.django_db
@pytest.mark.integration
class TestTransport:
    """Tests for the non-action surface of the endpoint."""

    def test_banner(self, api_client):
        response = api_client.get("/api/")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "License key service running"
        assert "timestamp" in data

    def test_preflight(self, api_client):
        """Test OPTIONS answers 200 with CORS headers and no body."""
        response = api_client.options("/api/")

        assert response.status_code == 200
        assert response.content == b""
        assert response["Access-Control-Allow-Origin"] == "*"
        assert response["Access-Control-Allow-Methods"] == "GET, POST, OPTIONS"
        assert response["Access-Control-Allow-Headers"] == "Content-Type, Authorization"

    def test_ping(self, call_action):
        response = call_action("test")

        assert response.status_code == 200
        assert response.json()["message"] == "API working"
        assert response["X-Correlation-ID"]
        # No Origin header was sent
        assert response["Access-Control-Allow-Origin"] == "*"

    def test_unknown_action(self, call_action):
        response = call_action("launch_rockets")

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["code"] == "INVALID_ACTION"

    def test_missing_action(self, api_client):
        response = api_client.post("/api/", {}, format="json")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid action: none"

    def test_invalid_json(self, api_client):
        response = api_client.post("/api/", data="{not json", content_type="application/json")

        assert response.status_code == 400
        assert response.json()["code"] == "PARSE_ERROR"
        assert response.json()["message"] == "Invalid JSON"

    def test_missing_fields(self, call_action):
        """Test each action reports its own missing-fields message."""
        response = call_action("validate_key", api="api_x")

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert data["message"] == "API, Key, HWID required"
        assert "hwid" in data["errors"]

    def test_first_request_seeds_super_admin(self, call_action):
        call_action("test")

        assert service_state.initialized is True
        assert SupportGrantModel.objects.filter(user_id=ADMIN, added_by="system").exists()

    def test_health(self, api_client):
        assert api_client.get("/health/").json()["status"] == "healthy"
        assert api_client.get("/ready/").status_code == 200


@pytest.mark.django_db
@pytest.mark.integration
class TestRedemptionScenario:
    """End-to-end issuance and redemption."""

    def test_two_device_key(self, call_action, app_api_key, issued_key):
        """Test H1 and H2 bind, H3 is refused and a ban locks everyone out."""
        assert re.fullmatch(r"PRO-[A-Z0-9]{6}", issued_key)

        for hwid in ("H1", "H2"):
            response = call_action("validate_key", api=app_api_key, key=issued_key, hwid=hwid)
            assert response.json()["success"] is True
            assert response.json()["reason"] == "VALID"

        response = call_action("validate_key", api=app_api_key, key=issued_key, hwid="H3")
        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["reason"] == "DEVICE_LIMIT_REACHED"
        assert response.json()["message"] == "Device limit reached"

        response = call_action("validate_key", api=app_api_key, key=issued_key, hwid="H1")
        assert response.json()["success"] is True

        response = call_action("ban_key", api=app_api_key, key=issued_key, user_id="U1")
        assert response.json()["message"] == "Key banned"

        response = call_action("ban_key", api=app_api_key, key=issued_key, user_id="U1")
        assert response.json()["success"] is True
        assert response.json()["message"] == "Key banned"

        response = call_action("validate_key", api=app_api_key, key=issued_key, hwid="H1")
        assert response.json()["success"] is False
        assert response.json()["reason"] == "KEY_BANNED"

    def test_first_use_recorded_once(self, call_action, app_api_key, issued_key):
        call_action(
            "validate_key", api=app_api_key, key=issued_key, hwid="H1", system_info="Win 11"
        )
        first = call_action("check_key", api=app_api_key, key=issued_key, user_id="U1").json()["key"]

        call_action("validate_key", api=app_api_key, key=issued_key, hwid="H2")
        second = call_action("check_key", api=app_api_key, key=issued_key, user_id="U1").json()["key"]

        assert first["used"] is True
        assert first["first_used"] is not None
        assert second["first_used"] == first["first_used"]
        assert second["system_info"] == "Win 11"
        assert second["hwid"] == ["H1", "H2"]
        assert second["device_count"] == 2

    def test_reset_behaves_like_fresh_key(self, call_action, app_api_key, issued_key):
        """Test a reset frees every device slot."""
        for hwid in ("H1", "H2"):
            call_action("validate_key", api=app_api_key, key=issued_key, hwid=hwid)

        response = call_action("reset_hwid", api=app_api_key, key=issued_key, user_id="U1")
        assert response.json()["message"] == "HWID reset"

        key = call_action("check_key", api=app_api_key, key=issued_key, user_id="U1").json()["key"]
        assert key["hwid"] == []
        assert key["used"] is False
        assert key["first_used"] is None

        for hwid in ("H3", "H4"):
            response = call_action("validate_key", api=app_api_key, key=issued_key, hwid=hwid)
            assert response.json()["success"] is True

    def test_unknown_application_and_key(self, call_action, app_api_key):
        response = call_action("validate_key", api="api_nope", key="PRO-AAAAAA", hwid="H1")
        assert response.json()["reason"] == "INVALID_APPLICATION"

        response = call_action("validate_key", api=app_api_key, key="PRO-AAAAAA", hwid="H1")
        assert response.json()["reason"] == "INVALID_KEY"


@pytest.mark.django_db
@pytest.mark.integration
class TestApplicationActions:
    """Tests for application and key administration actions."""

    def test_duplicate_application(self, call_action, app_api_key):
        response = call_action("create_app", app_name="Foo", user_id="U2")

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["code"] == "DUPLICATE_NAME"

    def test_quota(self, call_action, settings):
        settings.LICENSE_SERVICE = {**settings.LICENSE_SERVICE, "MAX_APPS_PER_OWNER": 1}
        service_state.reset()
        call_action("create_app", app_name="First", user_id="U1")

        response = call_action("create_app", app_name="Second", user_id="U1")

        assert response.json()["code"] == "QUOTA_EXCEEDED"
        assert response.json()["message"] == "Limit 1 apps reached"

    def test_stranger_denied(self, call_action, app_api_key):
        response = call_action(
            "create_key", api=app_api_key, prefix="PRO", days=30, user_id="U2"
        )

        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"
        assert response.json()["message"] == "No permission"

    def test_days_must_be_positive(self, call_action, app_api_key):
        response = call_action("create_key", api=app_api_key, prefix="PRO", days=0, user_id="U1")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert response.json()["message"] == "Invalid fields"
        assert "days" in response.json()["errors"]

    def test_missing_days(self, call_action, app_api_key):
        response = call_action("create_key", api=app_api_key, prefix="PRO", user_id="U1")

        assert response.status_code == 400
        assert response.json()["message"] == "Missing fields"

    def test_days_beyond_datetime_range(self, call_action, app_api_key):
        response = call_action(
            "create_key", api=app_api_key, prefix="PRO", days=5000000, user_id="U1"
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert response.json()["message"] == "Invalid fields"

    def test_device_limit_beyond_column_range(self, call_action, app_api_key):
        response = call_action(
            "create_key",
            api=app_api_key,
            prefix="PRO",
            days=1,
            user_id="U1",
            device_limit="99999999999",
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid fields"
        assert "device_limit" in response.json()["errors"]

    def test_infinite_device_limit_defaults_to_one(self, call_action, app_api_key):
        response = call_action(
            "create_key", api=app_api_key, prefix="PRO", days=1, user_id="U1", device_limit="1e999"
        )

        assert response.status_code == 200
        listing = call_action("list_keys", api=app_api_key, user_id="U1").json()
        assert listing["keys"][0]["device_limit"] == 1

    def test_device_limit_defaults_to_one(self, call_action, app_api_key):
        key = call_action(
            "create_key", api=app_api_key, prefix="PRO", days=1, user_id="U1", device_limit="lots"
        ).json()["key"]

        listing = call_action("list_keys", api=app_api_key, user_id="U1").json()
        assert [(k["key"], k["device_limit"]) for k in listing["keys"]] == [(key, 1)]

    def test_listing_visibility(self, call_action, app_api_key, issued_key):
        """Test owners see their apps and the admin sees every app."""
        call_action("create_app", app_name="Bar", user_id="U2")

        own = call_action("get_apps", user_id="U1").json()
        assert [app["name"] for app in own["applications"]] == ["Foo"]
        assert own["applications"][0]["key_count"] == 1
        assert own["is_admin"] is False

        everything = call_action("get_apps", user_id=ADMIN).json()
        assert {app["name"] for app in everything["applications"]} == {"Foo", "Bar"}
        assert everything["is_admin"] is True

        mine = call_action("get_my_apps", user_id="U2").json()
        assert [app["name"] for app in mine["applications"]] == ["Bar"]

    def test_listings_newest_first(self, call_action, app_api_key, issued_key):
        call_action("create_app", app_name="Bar", user_id="U1")
        newer = call_action(
            "create_key", api=app_api_key, prefix="NEW", days=1, user_id="U1"
        ).json()["key"]

        listing = call_action("list_keys", api=app_api_key, user_id="U1").json()
        assert [k["key"] for k in listing["keys"]] == [newer, issued_key]

        apps = call_action("get_apps", user_id="U1").json()
        assert [app["name"] for app in apps["applications"]] == ["Bar", "Foo"]

    def test_delete_application_cascades(self, call_action, app_api_key, issued_key):
        call_action("validate_key", api=app_api_key, key=issued_key, hwid="H1")

        response = call_action("delete_app", app_name="Foo", user_id="U1")
        assert response.json()["message"] == "App deleted"

        response = call_action("check_key", api=app_api_key, key=issued_key, user_id=ADMIN)
        assert response.json()["code"] == "KEY_NOT_FOUND"
        listing = call_action("get_keys", api=app_api_key, user_id=ADMIN).json()
        assert listing["success"] is True
        assert listing["keys"] == []
        assert call_action("get_keys", api=app_api_key, user_id="U1").status_code == 403

        response = call_action("delete_app", app_name="Foo", user_id="U1")
        assert response.json()["code"] == "APPLICATION_NOT_FOUND"

    def test_delete_key(self, call_action, app_api_key, issued_key):
        response = call_action("delete_key", api=app_api_key, key=issued_key, user_id="U1")
        assert response.json()["message"] == "Key deleted"

        response = call_action("delete_key", api=app_api_key, key=issued_key, user_id="U1")
        assert response.status_code == 200
        assert response.json()["code"] == "KEY_NOT_FOUND"

    def test_check_permission(self, call_action, app_api_key):
        data = call_action("check_permission", user_id="U1", api=app_api_key).json()

        assert data["has_permission"] is True
        assert data["is_admin"] is False
        assert data["app_count"] == 1
        assert data["max_apps"] == 10


@pytest.mark.django_db
@pytest.mark.integration
class TestSupportActions:
    """Tests for support staff actions."""

    def test_support_lifecycle(self, call_action, app_api_key):
        """Test a granted support user may act on any application."""
        response = call_action("add_support", user_id="helper", admin_id=ADMIN)
        assert response.json()["message"] == "Support helper added"

        status = call_action("check_support", user_id="helper").json()
        assert status["is_support"] is True
        assert status["user"]["added_by"] == ADMIN

        response = call_action(
            "create_key", api=app_api_key, prefix="SUP", days=1, user_id="helper"
        )
        assert response.json()["success"] is True

        supports = call_action("get_supports").json()["supports"]
        assert {grant["user_id"] for grant in supports} == {ADMIN, "helper"}

        response = call_action("delete_support", user_id="helper", admin_id=ADMIN)
        assert response.json()["message"] == "Support deleted"

        response = call_action(
            "create_key", api=app_api_key, prefix="SUP", days=1, user_id="helper"
        )
        assert response.status_code == 403

    def test_not_support(self, call_action):
        data = call_action("check_support", user_id="nobody").json()

        assert data["success"] is False
        assert data["is_support"] is False
        assert data["message"] == "No permission"

    def test_duplicate_support(self, call_action):
        call_action("add_support", user_id="helper", admin_id=ADMIN)

        response = call_action("add_support", user_id="helper", admin_id=ADMIN)

        assert response.json()["code"] == "DUPLICATE_SUPPORT"

    def test_only_admin_grants(self, call_action):
        response = call_action("add_support", user_id="helper", admin_id="U1")

        assert response.status_code == 403
        assert response.json()["message"] == "Only admin can add"

    def test_super_admin_cannot_be_removed(self, call_action):
        response = call_action("delete_support", user_id=ADMIN, admin_id=ADMIN)

        assert response.status_code == 400
        assert response.json()["code"] == "PROTECTED_ADMIN"
        assert response.json()["message"] == "Cannot delete main admin"
        assert SupportGrantModel.objects.filter(user_id=ADMIN).exists()

    def test_delete_unknown_support(self, call_action):
        response = call_action("delete_support", user_id="ghost", admin_id=ADMIN)

        assert response.status_code == 200
        assert response.json()["code"] == "SUPPORT_NOT_FOUND"
