#sm_core/common/api/exceptions.py

from __future__ import annotations

import logging
from typing import Any

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    ParseError,
    PermissionDenied,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def build_error_envelope(*, message: str, error: Any = None) -> dict[str, Any]:
    """
    Canonical error envelope:
      {"success": false, "message": "...", "error": "..."}
    Reused by Django middleware (JsonResponse) and DRF (Response).
    """
    body: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = str(error)
    return body


class SchoolAPIException(APIException):
    """
    Base for the error taxonomy.

    `title` becomes the envelope `message`, `detail` the envelope `error`.
    Both can be overridden per raise:

        raise Conflict(title="Failed to create student", detail="student number already exists")
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_title = "Bad request"
    default_detail = "bad request"
    default_code = "bad_request"

    def __init__(self, detail: Any = None, *, title: str | None = None, code: str | None = None):
        super().__init__(detail=detail if detail is not None else self.default_detail, code=code)
        self.title = title or self.default_title


class InvalidInput(SchoolAPIException):
    default_title = "Invalid request body"
    default_detail = "invalid request body"
    default_code = "invalid_input"


class ValidationFailed(SchoolAPIException):
    default_title = "Validation failed"
    default_detail = "validation failed"
    default_code = "validation_failed"


class TenantRequired(SchoolAPIException):
    default_title = "Tenant ID required"
    default_detail = "tenant context is required for this endpoint"
    default_code = "tenant_required"


class InvalidTenant(SchoolAPIException):
    default_title = "Invalid tenant ID"
    default_detail = "tenant ID must be a valid UUID"
    default_code = "invalid_tenant"


class Unauthorized(SchoolAPIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_title = "Unauthorized"
    default_detail = "unauthorized"
    default_code = "unauthorized"


class MissingAuth(Unauthorized):
    default_detail = "authorization header required"
    default_code = "missing_auth"


class MalformedAuth(Unauthorized):
    default_detail = "invalid authorization header format"
    default_code = "malformed_auth"


class InvalidToken(Unauthorized):
    default_detail = "invalid or expired token"
    default_code = "invalid_token"


class InvalidCredentials(Unauthorized):
    default_title = "Login failed"
    default_detail = "invalid email or password"
    default_code = "invalid_credentials"


class Forbidden(SchoolAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_title = "Forbidden"
    default_detail = "Insufficient permissions"
    default_code = "forbidden"


class TenantMismatch(SchoolAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_title = "Tenant mismatch"
    default_detail = "token tenant does not match the requested tenant"
    default_code = "tenant_mismatch"


class NotFound(SchoolAPIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_title = "Not found"
    default_detail = "resource not found"
    default_code = "not_found"


class Conflict(SchoolAPIException):
    """
    409 Conflict. Uniqueness violations (username, email, business keys)
    surface here rather than as 400.
    """
    status_code = status.HTTP_409_CONFLICT
    default_title = "Conflict"
    default_detail = "resource already exists"
    default_code = "conflict"


class Internal(SchoolAPIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_title = "Internal server error"
    default_detail = "internal server error"
    default_code = "internal"


def flatten_validation_errors(data: Any, prefix: str = "") -> str:
    """
    DRF error dict -> "field: message; other: message".
    Nested serializers are joined with dots; non_field_errors drop the prefix.
    """
    parts: list[str] = []

    if isinstance(data, dict):
        for key, value in data.items():
            if key in ("non_field_errors", "detail"):
                name = prefix
            else:
                name = f"{prefix}.{key}" if prefix else str(key)
            flat = flatten_validation_errors(value, name)
            if flat:
                parts.append(flat)
        return "; ".join(parts)

    if isinstance(data, (list, tuple)):
        for i, item in enumerate(data):
            if isinstance(item, (dict, list, tuple)):
                flat = flatten_validation_errors(item, f"{prefix}[{i}]" if prefix else f"[{i}]")
            else:
                flat = f"{prefix}: {item}" if prefix else str(item)
            if flat:
                parts.append(flat)
        return "; ".join(parts)

    return f"{prefix}: {data}" if prefix else str(data)


def _message_and_error(exc: Exception, response: Response) -> tuple[str, str]:
    if isinstance(exc, SchoolAPIException):
        return exc.title, str(exc.detail)

    if isinstance(exc, ValidationError):
        return ValidationFailed.default_title, flatten_validation_errors(response.data)

    if isinstance(exc, ParseError):
        return InvalidInput.default_title, str(exc.detail)

    if isinstance(exc, NotAuthenticated):
        return Unauthorized.default_title, MissingAuth.default_detail

    if isinstance(exc, AuthenticationFailed):
        return Unauthorized.default_title, InvalidToken.default_detail

    if isinstance(exc, PermissionDenied):
        return Forbidden.default_title, Forbidden.default_detail

    if isinstance(exc, Http404):
        return NotFound.default_title, NotFound.default_detail

    if isinstance(exc, (MethodNotAllowed, UnsupportedMediaType)):
        return "Request failed", str(exc.detail)

    detail = response.data.get("detail") if isinstance(response.data, dict) else response.data
    return "Request failed", str(detail)


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    # rest_framework.views loads DEFAULT_AUTHENTICATION_CLASSES, which import this module
    from rest_framework.views import exception_handler as drf_exception_handler

    response = drf_exception_handler(exc, context)

    # Truly unhandled error
    if response is None:
        view = context.get("view")
        logger.error(
            "unhandled exception in %s",
            view.__class__.__name__ if view is not None else "view",
            exc_info=exc,
        )
        return Response(
            build_error_envelope(
                message=Internal.default_title,
                error=Internal.default_detail,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    message, error = _message_and_error(exc, response)

    if response.status_code >= 500:
        logger.error("request failed: %s", error, exc_info=exc)

    # DRF turns NotAuthenticated into 403 when the auth class has no
    # WWW-Authenticate header; bearer auth always answers 401.
    http_status = response.status_code
    if isinstance(exc, NotAuthenticated):
        http_status = status.HTTP_401_UNAUTHORIZED

    return Response(
        build_error_envelope(message=message, error=error),
        status=http_status,
        headers=response.headers,
    )
