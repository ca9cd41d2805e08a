# sm_core/common/context.py
"""
Per-request context (request id, user, tenant, role).

Stored in a contextvars.ContextVar so it is safe under sync views,
threads and async code alike. RequestContextMiddleware binds it; auth and
tenant resolution fill in the rest as the request progresses.
"""
from __future__ import annotations

import contextvars
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    user_id: Optional[str] = None
    tenant_id: Optional[str] = None
    role: Optional[str] = None


_current: contextvars.ContextVar[Optional[RequestContext]] = contextvars.ContextVar(
    "sm_request_context", default=None
)


def get_context() -> Optional[RequestContext]:
    return _current.get()


def bind(ctx: RequestContext) -> contextvars.Token:
    return _current.set(ctx)


def reset(token: contextvars.Token) -> None:
    _current.reset(token)


def update(**fields) -> Optional[RequestContext]:
    """Replace fields on the bound context. No-op outside a request."""
    ctx = _current.get()
    if ctx is None:
        return None
    clean = {k: (str(v) if v is not None else None) for k, v in fields.items()}
    new_ctx = replace(ctx, **clean)
    _current.set(new_ctx)
    return new_ctx
