# sm_core/common/tests/test_api_surface.py
import pytest
from django.urls import resolve

pytestmark = pytest.mark.django_db


def test_health_reports_app_and_database(api_client, settings):
    r = api_client.get("/v1/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["checks"] == {"database": "ok"}
    assert body["app"]["name"] == settings.APP_NAME
    assert body["app"]["version"] == settings.APP_VERSION
    assert {"description", "url", "timezone", "server_time"} <= set(body["app"])


def test_unknown_route_is_a_json_404(api_client):
    r = api_client.get("/v1/nowhere")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Not found", "error": "route not found"}


def test_routes_have_no_trailing_slash_and_fee_types_win():
    assert resolve("/v1/students").url_name == "students-list"
    assert resolve("/v1/students/3f1c").url_name == "students-detail"
    assert resolve("/v1/students/class/3f1c").url_name == "students-by-class"
    assert resolve("/v1/students/parent/3f1c").url_name == "students-by-parent"
    assert resolve("/v1/fees/types").url_name == "fee-types-list"
    assert resolve("/v1/fees/types/3f1c").url_name == "fee-types-detail"
    assert resolve("/v1/fees/3f1c").url_name == "fees-detail"


def test_protected_endpoint_without_header_is_401(api_client):
    r = api_client.get("/v1/auth/tenants")
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Unauthorized", "error": "authorization header required"}


@pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer  two-spaces", "abc"])
def test_malformed_authorization_header_is_401(api_client, header):
    r = api_client.get("/v1/auth/tenants", HTTP_AUTHORIZATION=header)
    assert r.status_code == 401
    assert r.json()["error"] == "invalid authorization header format"


def test_garbage_token_is_401(api_client):
    r = api_client.get("/v1/auth/tenants", HTTP_AUTHORIZATION="Bearer not.a.jwt")
    assert r.status_code == 401
    assert r.json()["message"] == "Unauthorized"


def test_malformed_json_is_400(admin_client):
    r = admin_client.generic("POST", "/v1/subjects", "{not json", content_type="application/json")
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert r.json()["message"] == "Invalid request body"


def test_bad_id_format_is_400(admin_client):
    r = admin_client.get("/v1/subjects/not-a-uuid")
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid subject ID format"


def test_schema_is_public(api_client):
    r = api_client.get("/v1/schema")
    assert r.status_code == 200
