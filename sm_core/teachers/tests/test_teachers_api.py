# sm_core/teachers/tests/test_teachers_api.py
import pytest

from sm_core.teachers.models import Teacher
from sm_core.tests.helpers import make_member, make_user

pytestmark = pytest.mark.django_db


@pytest.fixture
def teacher_member(tenant):
    return make_member(tenant, make_user("mrsmith", full_name="John Smith"), "Teacher")


def test_create_and_get(admin_client, tenant, teacher_member):
    r = admin_client.post(
        "/v1/teachers",
        {
            "tenant_user_id": str(teacher_member.id),
            "employee_number": "T-100",
            "hire_date": "2020-08-15",
            "qualification": "MSc Mathematics",
            "position": "Head of Maths",
        },
        format="json",
    )
    assert r.status_code == 201, r.content
    data = r.json()["data"]
    assert data["full_name"] == "John Smith"
    assert data["user_id"] == str(teacher_member.user_id)

    r = admin_client.get(f"/v1/teachers/{data['id']}")
    assert r.json()["message"] == "Teacher retrieved successfully"
    assert r.json()["data"]["employee_number"] == "T-100"


def test_blank_employee_numbers_do_not_collide(admin_client, tenant, teacher_member):
    other = make_member(tenant, make_user("msjones"), "Teacher")
    for member in (teacher_member, other):
        r = admin_client.post(
            "/v1/teachers",
            {"tenant_user_id": str(member.id), "employee_number": ""},
            format="json",
        )
        assert r.status_code == 201, r.content
    assert Teacher.objects.filter(employee_number__isnull=True).count() == 2


def test_duplicate_employee_number_is_409(admin_client, tenant, teacher_member):
    Teacher.objects.create(tenant_id=tenant.id, tenant_user=teacher_member, employee_number="T-1")
    r = admin_client.post(
        "/v1/teachers",
        {"tenant_user_id": str(teacher_member.id), "employee_number": "T-1"},
        format="json",
    )
    assert r.status_code == 409
    assert r.json()["error"] == "employee number already exists"


def test_update_rejects_foreign_tenant_user(admin_client, tenant, other_tenant, teacher_member):
    teacher = Teacher.objects.create(tenant_id=tenant.id, tenant_user=teacher_member, employee_number="T-2")
    foreign = make_member(other_tenant, make_user("outsider"), "Teacher")

    r = admin_client.put(f"/v1/teachers/{teacher.id}", {"tenant_user_id": str(foreign.id)}, format="json")
    assert r.status_code == 400
    assert r.json()["message"] == "Failed to update teacher"
    teacher.refresh_from_db()
    assert teacher.tenant_user_id == teacher_member.id


def test_only_admins_manage_teachers(client_for):
    assert client_for("Teacher").get("/v1/teachers").status_code == 403
    assert client_for("Developer").get("/v1/teachers").status_code == 200
