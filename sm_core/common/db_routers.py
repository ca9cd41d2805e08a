# sm_core/common/db_routers.py
from __future__ import annotations

from django.conf import settings
from django.db import connections

from sm_core.common.tenant_context import READ_ALIAS, WRITE_ALIAS


class ReadWriteRouter:
    """
    Reads go to the replica when one is configured, except inside an open
    transaction on the write alias (read-your-writes for service code).
    """

    def db_for_read(self, model, **hints):
        if READ_ALIAS not in settings.DATABASES:
            return WRITE_ALIAS
        if connections[WRITE_ALIAS].in_atomic_block:
            return WRITE_ALIAS
        return READ_ALIAS

    def db_for_write(self, model, **hints):
        return WRITE_ALIAS

    def allow_relation(self, obj1, obj2, **hints):
        # same physical database behind both aliases
        return True

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        return db == WRITE_ALIAS
