"""
Tests for the error envelope, request middleware and service endpoints.

Every failure answers ``{"success": false, "error": {...}, "timestamp": ...}``
whatever raised it: request validation, routing, the service layer or an
unexpected exception.
"""

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from main import app
from test_fixtures import API, client, create_user, auth_headers
from api.middleware import make_serializable
from app.config import settings
from app.exceptions import (
    ConflictError,
    ExternalServiceError,
    ForbiddenError,
    GoneError,
    KitchenSathiError,
    NotFoundError,
    ServiceUnavailableError,
    ServiceValidationError,
    UnauthorizedError,
)
from services.analytics_service import AnalyticsService


def assert_envelope(body, code):
    assert body["success"] is False
    assert body["error"]["code"] == code
    assert body["error"]["message"]
    datetime.fromisoformat(body["timestamp"])


# =============================================================================
# SERVICE EXCEPTIONS
# =============================================================================


@pytest.mark.parametrize(
    "exc_class, http_status, code",
    [
        (ServiceValidationError, 400, "SERVICE_VALIDATION_ERROR"),
        (UnauthorizedError, 401, "UNAUTHORIZED"),
        (ForbiddenError, 403, "FORBIDDEN"),
        (NotFoundError, 404, "NOT_FOUND"),
        (ConflictError, 409, "CONFLICT"),
        (GoneError, 410, "GONE"),
        (ExternalServiceError, 502, "EXTERNAL_SERVICE_ERROR"),
        (ServiceUnavailableError, 503, "SERVICE_UNAVAILABLE"),
    ],
)
def test_exception_defaults(exc_class, http_status, code):
    exc = exc_class("Something happened")
    assert isinstance(exc, KitchenSathiError)
    assert exc.http_status == http_status
    assert exc.to_dict() == {"code": code, "message": "Something happened"}
    assert str(exc) == "Something happened"


def test_exception_custom_code_and_details():
    exc = ConflictError("Recipe already saved", details={"recipe_id": "abc"}, code="ALREADY_SAVED")
    assert exc.to_dict() == {
        "code": "ALREADY_SAVED",
        "message": "Recipe already saved",
        "details": {"recipe_id": "abc"},
    }
    assert NotFoundError().message == "Not found"


def test_service_error_envelope():
    user = create_user()
    missing = client.delete(f"{API}/meal-plans/2026-04-06", headers=auth_headers(user))
    assert missing.status_code == 404
    assert_envelope(missing.json(), "NOT_FOUND")


# =============================================================================
# REQUEST VALIDATION AND ROUTING
# =============================================================================


def test_validation_error_envelope():
    user = create_user()
    r = client.post(
        f"{API}/user-recipes",
        json={"name": "   ", "ingredients": [{"name": "rice"}], "instructions": ["Cook"]},
        headers=auth_headers(user),
    )
    assert r.status_code == 422
    body = r.json()
    assert_envelope(body, "VALIDATION_ERROR")
    assert body["error"]["message"] == "Request validation failed"
    [detail] = body["error"]["details"]
    assert detail["loc"] == ["body", "name"]
    assert "name must not be blank" in detail["msg"]


def test_unknown_route():
    r = client.get(f"{API}/does-not-exist")
    assert r.status_code == 404
    assert_envelope(r.json(), "HTTP_404")
    assert r.json()["error"]["message"] == "Not Found"


def test_method_not_allowed():
    r = client.delete(f"{API}/health")
    assert r.status_code == 405
    assert_envelope(r.json(), "HTTP_405")


def test_unexpected_error_is_hidden(monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(AnalyticsService, "summary", staticmethod(boom))
    quiet_client = TestClient(app, raise_server_exceptions=False)

    r = quiet_client.get(f"{API}/analytics/summary", headers=auth_headers(create_user()))
    assert r.status_code == 500
    assert_envelope(r.json(), "INTERNAL_SERVER_ERROR")
    assert "exploded" not in r.text


# =============================================================================
# MIDDLEWARE AND HELPERS
# =============================================================================


def test_request_headers():
    r = client.get(f"{API}/health")
    assert len(r.headers["X-Request-ID"]) == 36
    assert float(r.headers["X-Process-Time"]) >= 0

    other = client.get(f"{API}/health")
    assert other.headers["X-Request-ID"] != r.headers["X-Request-ID"]


def test_make_serializable():
    value = {
        "price": Decimal("12.50"),
        "items": (Decimal("1"), {"error": ValueError("bad quantity")}),
        "name": "Milk",
    }
    assert make_serializable(value) == {
        "price": 12.5,
        "items": [1.0, {"error": "bad quantity"}],
        "name": "Milk",
    }


# =============================================================================
# SERVICE ENDPOINTS
# =============================================================================


def test_api_info():
    r = client.get(API)
    assert r.status_code == 200
    assert r.json() == {"message": f"{settings.app_name} API - AI Meal Planning"}


def test_health():
    r = client.get(f"{API}/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["service"] == settings.app_name
    assert body["version"] == settings.app_version
    datetime.fromisoformat(body["time"])
