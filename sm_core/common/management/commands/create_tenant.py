# sm_core/common/management/commands/create_tenant.py

from django.core.management.base import BaseCommand, CommandError

from sm_core.common.api.exceptions import SchoolAPIException
from sm_core.common.permissions import ROLE_ADMIN
from sm_core.iam.models import User
from sm_core.iam.services.roles import ensure_default_roles, grant_role
from sm_core.tenants.models import SubscriptionStatus
from sm_core.tenants.services import TenantService


class Command(BaseCommand):
    help = "Create a tenant with the default roles, optionally making an existing user its Admin."

    def add_arguments(self, parser):
        parser.add_argument("name")
        parser.add_argument("--domain")
        parser.add_argument("--status", default=SubscriptionStatus.ACTIVE, choices=SubscriptionStatus.values)
        parser.add_argument("--admin-email", help="Registered user to attach with the Admin role")

    def handle(self, *args, **options):
        admin = None
        if options.get("admin_email"):
            admin = User.objects.filter(email__iexact=options["admin_email"]).first()
            if admin is None:
                raise CommandError(f"no user with email {options['admin_email']}")

        try:
            tenant = TenantService.create(
                name=options["name"],
                domain=options.get("domain"),
                subscription_status=options["status"],
                created_by_id=admin.id if admin else None,
            )
        except SchoolAPIException as exc:
            raise CommandError(str(exc.detail))

        ensure_default_roles(tenant_id=tenant.id)
        if admin is not None:
            grant_role(tenant_id=tenant.id, user_id=admin.id, role_name=ROLE_ADMIN)

        self.stdout.write(self.style.SUCCESS(f"Tenant created: {tenant.id} ({tenant.name})"))
