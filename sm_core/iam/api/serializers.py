# sm_core/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from sm_core.iam.models import Gender, User


class LoginRequestSerializer(serializers.Serializer):
    # any string; non-addresses fail as invalid credentials
    email = serializers.CharField(max_length=254)
    password = serializers.CharField(write_only=True)


class RegisterRequestSerializer(serializers.Serializer):
    email = serializers.CharField(max_length=100)
    username = serializers.CharField(min_length=3, max_length=50)
    password = serializers.CharField(min_length=6, write_only=True)
    full_name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)

    def validate_email(self, value: str) -> str:
        value = value.strip()
        local, sep, domain = value.partition("@")
        if not sep or not local or not domain or "@" in domain or " " in value:
            raise serializers.ValidationError("Enter a valid email address.")
        return value


class ChangePasswordRequestSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(min_length=6, write_only=True)


class SelectTenantRequestSerializer(serializers.Serializer):
    tenant_id = serializers.UUIDField()


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email", "full_name"]
        read_only_fields = fields


class RegisteredUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email", "full_name", "phone", "is_active", "created_at"]
        read_only_fields = fields


class TokenResponseSerializer(serializers.Serializer):
    """Documentation-only shapes for drf-spectacular."""
    token = serializers.CharField()
    expires_at = serializers.DateTimeField()
    user = UserSummarySerializer(required=False)


class TenantSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    domain = serializers.CharField(allow_null=True)
    subscription_status = serializers.CharField()


class UserTenantSerializer(serializers.Serializer):
    tenant_user_id = serializers.UUIDField()
    tenant = TenantSummarySerializer()
    roles = serializers.ListField(child=serializers.CharField())


# -----------------------------
# tenant member management (/v1/users)
# -----------------------------

class MemberSerializer(serializers.ModelSerializer):
    """A User as seen from one tenant: its membership flag and roles there."""

    tenant_id = serializers.SerializerMethodField()
    tenant_user_id = serializers.SerializerMethodField()
    membership_active = serializers.SerializerMethodField()
    roles = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "full_name",
            "phone",
            "gender",
            "date_of_birth",
            "address",
            "is_active",
            "tenant_id",
            "tenant_user_id",
            "membership_active",
            "roles",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    @staticmethod
    def _membership(obj):
        memberships = getattr(obj, "memberships", None) or []
        return memberships[0] if memberships else None

    def get_tenant_id(self, obj):
        m = self._membership(obj)
        return str(m.tenant_id) if m else None

    def get_tenant_user_id(self, obj):
        m = self._membership(obj)
        return str(m.id) if m else None

    def get_membership_active(self, obj):
        m = self._membership(obj)
        return m.is_active if m else None

    def get_roles(self, obj):
        m = self._membership(obj)
        if m is None:
            return []
        assignments = sorted(m.role_assignments.all(), key=lambda a: (a.created_at, a.role.name))
        return [{"id": str(a.role_id), "name": a.role.name} for a in assignments]


class MemberCreateSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=3, max_length=50)
    email = serializers.EmailField(max_length=100)
    password = serializers.CharField(min_length=6, write_only=True)
    full_name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_null=True)
    date_of_birth = serializers.DateField(required=False, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    role_id = serializers.UUIDField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False, default=True)


class MemberUpdateSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=3, max_length=50, required=False)
    email = serializers.EmailField(max_length=100, required=False)
    full_name = serializers.CharField(max_length=100, required=False)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_null=True)
    date_of_birth = serializers.DateField(required=False, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    role_id = serializers.UUIDField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False)
