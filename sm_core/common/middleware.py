# sm_core/common/middleware.py
from __future__ import annotations

import ipaddress
import logging
import re
import time
import uuid
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import connections

from sm_core.common import context
from sm_core.common.api.exceptions import Internal, InvalidTenant, TenantMismatch
from sm_core.common.tenant_context import TenantContext, TenantContextError

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("sm_core.access")

REQUEST_ID_HEADER = "X-Request-ID"
TENANT_HEADER = "X-Tenant-ID"
TENANT_QUERY_PARAM = "tenant_id"

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,128}$")

TENANT_SCOPED_PREFIXES = (
    "/v1/users",
    "/v1/students",
    "/v1/parents",
    "/v1/teachers",
    "/v1/classes",
    "/v1/subjects",
    "/v1/attendance",
    "/v1/grades",
    "/v1/fees",
)

RESERVED_SUBDOMAINS = frozenset({"www", "api"})


def is_tenant_scoped_path(path: str) -> bool:
    return any(path == p or path.startswith(p + "/") for p in TENANT_SCOPED_PREFIXES)


class RequestContextMiddleware:
    """
    Outermost middleware:
      - accepts a well-formed inbound X-Request-ID or generates a uuid4
      - binds the RequestContext for the life of the request
      - echoes X-Request-ID and writes one access log line per request
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        inbound = request.headers.get(REQUEST_ID_HEADER, "")
        request_id = inbound if _REQUEST_ID_RE.match(inbound or "") else str(uuid.uuid4())
        request.request_id = request_id

        token = context.bind(context.RequestContext(request_id=request_id))
        started = time.monotonic()
        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            self._log_access(request, response, started)
            return response
        finally:
            context.reset(token)

    @staticmethod
    def _remote_ip(request) -> str:
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR", "")

    def _log_access(self, request, response, started: float) -> None:
        try:
            bytes_in = int(request.META.get("CONTENT_LENGTH") or 0)
        except ValueError:
            bytes_in = 0
        bytes_out = 0 if response.streaming else len(response.content)

        status_code = response.status_code
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        access_logger.log(
            level,
            "%s %s %s",
            request.method,
            request.get_full_path(),
            status_code,
            extra={
                "method": request.method,
                "uri": request.get_full_path(),
                "remote_ip": self._remote_ip(request),
                "user_agent": request.META.get("HTTP_USER_AGENT", ""),
                "status": status_code,
                "bytes_in": bytes_in,
                "bytes_out": bytes_out,
                "latency_ms": round((time.monotonic() - started) * 1000, 2),
            },
        )


class PreflightNoContentMiddleware:
    """
    Sits outside corsheaders.CorsMiddleware; its preflight answer is an
    empty 200, which we report as 204.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        is_preflight = (
            request.method == "OPTIONS"
            and "access-control-request-method" in request.headers
        )
        if is_preflight and response.status_code == 200 and not response.content:
            response.status_code = 204
        return response


class TenantResolutionMiddleware:
    """
    Collects the tenant candidate for tenant-scoped paths, in order:
      1) X-Tenant-ID header
      2) ?tenant_id= query parameter
      3) first label of a 3+ label Host (not an IP, not www/api)

    The candidate is only recorded here (request.tenant_candidate).
    Bearer authentication validates and applies it with `resolve_tenant`,
    so an unauthenticated request is answered 401 before its tenant is
    looked at and never touches the session variable.

    The app.current_tenant variable is cleared when the response leaves
    whenever a tenant was bound for the request.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.tenant_id = None
        request.tenant_candidate = None

        if not is_tenant_scoped_path(request.path):
            return self.get_response(request)

        request.tenant_candidate = self._candidate(request)
        try:
            return self.get_response(request)
        finally:
            if request.tenant_id is not None:
                self._release()

    def _candidate(self, request) -> Optional[str]:
        header = request.headers.get(TENANT_HEADER, "").strip()
        if header:
            return header

        query = request.GET.get(TENANT_QUERY_PARAM, "").strip()
        if query:
            return query

        if getattr(settings, "TENANT_SUBDOMAIN_RESOLUTION", True):
            return subdomain_of(request.META.get("HTTP_HOST", ""))
        return None

    @staticmethod
    def _release() -> None:
        try:
            TenantContext.clear()
        except TenantContextError:
            # a connection still holding this tenant must not serve another request
            logger.error("failed to clear tenant session variable; closing connections")
            connections.close_all()


def parse_tenant_candidate(raw: Optional[str]) -> Optional[UUID]:
    if not raw:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        logger.warning("invalid tenant id", extra={"candidate": str(raw)[:64]})
        raise InvalidTenant()


def bind_tenant(request, tenant_id: UUID) -> None:
    """Set app.current_tenant and expose the tenant on the request and log context."""
    try:
        TenantContext.set(tenant_id)
    except TenantContextError:
        raise Internal()
    request.tenant_id = tenant_id
    context.update(tenant_id=tenant_id)


def resolve_tenant(request, token_tenant_id: Optional[UUID]) -> None:
    """
    Runs once the bearer token is validated, for tenant-scoped paths.

    - non-UUID candidate -> InvalidTenant (400)
    - candidate differs from the token's tenant -> TenantMismatch (403)
    - no candidate -> the token's tenant is adopted

    `request` is the Django HttpRequest the middleware annotated.
    """
    resolved = parse_tenant_candidate(getattr(request, "tenant_candidate", None))

    if resolved is not None and token_tenant_id is not None and resolved != token_tenant_id:
        logger.warning(
            "tenant mismatch",
            extra={"token_tenant": str(token_tenant_id), "request_tenant": str(resolved)},
        )
        raise TenantMismatch()

    tenant_id = resolved or token_tenant_id
    if tenant_id is not None:
        bind_tenant(request, tenant_id)


def subdomain_of(host: str) -> Optional[str]:
    host = (host or "").strip().lower()
    if not host:
        return None

    if host.startswith("["):
        # bracketed IPv6 literal
        return None
    host = host.rsplit(":", 1)[0] if ":" in host else host

    try:
        ipaddress.ip_address(host)
        return None
    except ValueError:
        pass

    labels = [label for label in host.split(".") if label]
    if len(labels) < 3:
        return None

    first = labels[0]
    if first in RESERVED_SUBDOMAINS:
        return None
    return first
