# sm_core/common/management/commands/ensure_roles.py
from uuid import UUID

from django.core.management.base import BaseCommand, CommandError

from sm_core.common.permissions import DEFAULT_ROLES
from sm_core.iam.services.roles import ensure_default_roles
from sm_core.tenants.models import Tenant
from sm_core.tenants.selectors import get_tenant_or_none


class Command(BaseCommand):
    help = f"Ensure the default roles ({', '.join(DEFAULT_ROLES)}) exist in every tenant (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--tenant", help="Only this tenant (UUID)")

    def handle(self, *args, **options):
        if options.get("tenant"):
            try:
                tenant_id = UUID(options["tenant"])
            except ValueError:
                raise CommandError(f"invalid tenant ID: {options['tenant']}")
            tenant = get_tenant_or_none(tenant_id=tenant_id)
            if tenant is None:
                raise CommandError(f"tenant {tenant_id} not found")
            tenants = [tenant]
        else:
            tenants = Tenant.objects.order_by("created_at")

        created = 0
        for tenant in tenants:
            created += ensure_default_roles(tenant_id=tenant.id)

        self.stdout.write(self.style.SUCCESS(f"Roles ensured. Newly created: {created}"))
