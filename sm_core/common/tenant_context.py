# sm_core/common/tenant_context.py
"""
Drives PostgreSQL row-level isolation through the `app.current_tenant`
session variable.

Django keeps one connection per thread per alias, so setting the variable
once per request (bearer authentication, via `resolve_tenant`) and
clearing it when the response leaves TenantResolutionMiddleware keeps
every statement of that request on the right tenant.
Code running outside a request uses `TenantContext.within(...)`.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

from django.db import DatabaseError, connections

logger = logging.getLogger(__name__)

SESSION_VARIABLE = "app.current_tenant"
WRITE_ALIAS = "default"
READ_ALIAS = "replica"

_IDENTITY_KEYS = ("HOST", "PORT", "NAME", "USER")


class TenantContextError(Exception):
    """The session variable could not be set; the request must not proceed."""


def _aliases() -> list[str]:
    aliases = [WRITE_ALIAS]
    if READ_ALIAS in connections.settings:
        write = connections.settings[WRITE_ALIAS]
        read = connections.settings[READ_ALIAS]
        same_db = all(str(write.get(k, "")) == str(read.get(k, "")) for k in _IDENTITY_KEYS)
        if not same_db:
            aliases.append(READ_ALIAS)
    return aliases


def _apply(value: str) -> None:
    for alias in _aliases():
        conn = connections[alias]
        if conn.vendor != "postgresql":
            logger.debug("skipping %s on %s backend (alias=%s)", SESSION_VARIABLE, conn.vendor, alias)
            continue
        try:
            with conn.cursor() as cursor:
                cursor.execute("SELECT set_config(%s, %s, false)", [SESSION_VARIABLE, value])
        except DatabaseError as exc:
            logger.error(
                "failed to set tenant session variable",
                extra={"alias": alias, "value": value},
            )
            raise TenantContextError(f"failed to set {SESSION_VARIABLE} on {alias}") from exc


class TenantContext:
    @staticmethod
    def set(tenant_id: UUID | str) -> None:
        _apply(str(tenant_id))

    @staticmethod
    def clear() -> None:
        _apply("")

    @staticmethod
    @contextmanager
    def within(tenant_id: UUID | str) -> Iterator[None]:
        TenantContext.set(tenant_id)
        try:
            yield
        finally:
            TenantContext.clear()
