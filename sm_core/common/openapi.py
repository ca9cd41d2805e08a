# sm_core/common/openapi.py
from __future__ import annotations

from drf_spectacular.openapi import AutoSchema
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter

from sm_core.common.middleware import is_tenant_scoped_path


class SchoolAutoSchema(AutoSchema):
    """
    Adds the optional X-Tenant-ID header to tenant-scoped operations.
    Auth, health and schema endpoints are left alone.
    """

    TENANT_HEADER = OpenApiParameter(
        name="X-Tenant-ID",
        type=OpenApiTypes.UUID,
        location=OpenApiParameter.HEADER,
        required=False,
        description=(
            "Tenant UUID. Optional: falls back to ?tenant_id=, the Host subdomain, "
            "then the tenant of the bearer token. Must match the token's tenant."
        ),
    )

    def _is_tenant_scoped(self) -> bool:
        path = getattr(self, "path", "") or ""
        return is_tenant_scoped_path(path)

    def get_override_parameters(self):
        params = list(super().get_override_parameters() or [])

        if self._is_tenant_scoped():
            existing = {p.name.lower() for p in params if isinstance(p, OpenApiParameter)}
            if self.TENANT_HEADER.name.lower() not in existing:
                params.append(self.TENANT_HEADER)

        return params
