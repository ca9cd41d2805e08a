# sm_core/iam/models.py
import re
import uuid

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models

from sm_core.common.models import TimeStampedModel
from sm_core.tenants.models import Tenant


def canonical_role_name(name: str) -> str:
    """'  school   admin ' -> 'School Admin'"""
    return re.sub(r"\s+", " ", (name or "").strip()).title()


class Gender(models.TextChoices):
    MALE = "Male", "Male"
    FEMALE = "Female", "Female"


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, *, username: str, email: str, password: str | None = None, **extra):
        if not username:
            raise ValueError("username is required")
        if not email:
            raise ValueError("email is required")
        user = self.model(username=username, email=self.normalize_email(email), **extra)
        user.set_password(password)
        user.save(using=self._db)
        return user


class User(AbstractBaseUser, TimeStampedModel):
    """
    Global identity. Belongs to tenants through TenantUser.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    username = models.CharField(max_length=50, unique=True)
    email = models.EmailField(max_length=100, unique=True)
    full_name = models.CharField(max_length=100)

    gender = models.CharField(max_length=10, choices=Gender.choices, null=True, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    phone = models.CharField(max_length=20, null=True, blank=True)
    address = models.TextField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["username", "full_name"]

    class Meta:
        db_table = "users"

    def __str__(self) -> str:
        return self.username


class TenantUser(models.Model):
    """
    Membership of a User in a Tenant. Domain records (Student, Teacher)
    hang off this row, so deleting either side cascades to them.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name="tenant_users")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="tenant_users")

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "tenant_users"
        constraints = [
            models.UniqueConstraint(fields=["tenant", "user"], name="uq_tenant_user"),
        ]
        indexes = [
            models.Index(fields=["tenant", "is_active"]),
        ]


class Role(models.Model):
    """
    Role is tenant-scoped (each school defines its own). Names are stored
    canonicalised so 'teacher' and 'Teacher' cannot coexist.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name="roles")

    name = models.CharField(max_length=50)
    description = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "roles"
        constraints = [
            models.UniqueConstraint(fields=["tenant", "name"], name="uq_role_tenant_name"),
        ]

    def save(self, *args, **kwargs):
        self.name = canonical_role_name(self.name)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name


class TenantUserRole(models.Model):
    tenant_user = models.ForeignKey(TenantUser, on_delete=models.CASCADE, related_name="role_assignments")
    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name="assignments")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "tenant_user_roles"
        constraints = [
            models.UniqueConstraint(fields=["tenant_user", "role"], name="uq_tenant_user_role"),
        ]
