# sm_core/common/tests/test_tenant_context.py
import uuid
from unittest import mock

import pytest
from django.db import DatabaseError

from sm_core.common import tenant_context
from sm_core.common.tenant_context import SESSION_VARIABLE, TenantContext, TenantContextError


class FakeCursor:
    def __init__(self, calls, fail=False):
        self.calls = calls
        self.fail = fail

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params):
        if self.fail:
            raise DatabaseError("connection reset")
        self.calls.append((sql, params))


class FakeConnection:
    vendor = "postgresql"

    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def cursor(self):
        return FakeCursor(self.calls, fail=self.fail)


class FakeConnections:
    def __init__(self, aliases):
        self._aliases = aliases
        self.settings = {name: {"HOST": name} for name in aliases}

    def __getitem__(self, alias):
        return self._aliases[alias]


def _patch(**aliases):
    return mock.patch.object(tenant_context, "connections", FakeConnections(aliases))


def test_set_issues_set_config_on_the_write_connection():
    conn = FakeConnection()
    tid = uuid.uuid4()
    with _patch(default=conn):
        TenantContext.set(tid)

    assert conn.calls == [("SELECT set_config(%s, %s, false)", [SESSION_VARIABLE, str(tid)])]


def test_set_covers_a_distinct_read_replica():
    write, read = FakeConnection(), FakeConnection()
    tid = uuid.uuid4()
    with _patch(default=write, replica=read):
        TenantContext.set(tid)

    assert write.calls and read.calls
    assert read.calls[0][1] == [SESSION_VARIABLE, str(tid)]


def test_replica_pointing_at_the_same_database_is_skipped():
    write, read = FakeConnection(), FakeConnection()
    fake = FakeConnections({"default": write, "replica": read})
    fake.settings = {"default": {"HOST": "db"}, "replica": {"HOST": "db"}}
    with mock.patch.object(tenant_context, "connections", fake):
        TenantContext.set(uuid.uuid4())

    assert write.calls and not read.calls


def test_clear_resets_to_empty_string():
    conn = FakeConnection()
    with _patch(default=conn):
        TenantContext.clear()
    assert conn.calls[0][1] == [SESSION_VARIABLE, ""]


def test_database_error_becomes_tenant_context_error():
    with _patch(default=FakeConnection(fail=True)):
        with pytest.raises(TenantContextError):
            TenantContext.set(uuid.uuid4())


def test_within_clears_even_when_the_block_raises():
    conn = FakeConnection()
    tid = uuid.uuid4()
    with _patch(default=conn):
        with pytest.raises(RuntimeError):
            with TenantContext.within(tid):
                raise RuntimeError("boom")

    assert [params[1] for _, params in conn.calls] == [str(tid), ""]


@pytest.mark.django_db
def test_non_postgres_backend_is_a_no_op():
    # the test database is sqlite
    TenantContext.set(uuid.uuid4())
    TenantContext.clear()


@pytest.mark.django_db
def test_failed_tenant_binding_is_500(admin_client):
    with mock.patch.object(TenantContext, "set", side_effect=TenantContextError("down")):
        r = admin_client.get("/v1/students")
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Internal server error", "error": "internal server error"}
