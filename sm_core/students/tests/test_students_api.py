# sm_core/students/tests/test_students_api.py
import uuid
from datetime import date

import pytest

from sm_core.academics.models import SchoolClass
from sm_core.audit.selectors import list_audit_logs
from sm_core.students.models import Parent, Student
from sm_core.tests.helpers import make_member, make_user

pytestmark = pytest.mark.django_db


def _seed_students(tenant, n, **fields):
    out = []
    for i in range(n):
        member = make_member(tenant, make_user(f"kid{uuid.uuid4().hex[:8]}"), "Student")
        out.append(
            Student.objects.create(
                tenant_id=tenant.id,
                tenant_user=member,
                student_number=f"S-{i:03d}-{uuid.uuid4().hex[:4]}",
                admission_date=date(2024, 9, 1),
                **fields,
            )
        )
    return out


def test_pagination_past_the_end(admin_client, tenant):
    _seed_students(tenant, 25)

    r = admin_client.get("/v1/students?page=3&limit=10")
    assert r.status_code == 200, r.content
    body = r.json()
    assert len(body["data"]) == 5
    assert body["meta"] == {"page": 3, "limit": 10, "total_rows": 25, "total_pages": 3}

    r = admin_client.get("/v1/students?page=4&limit=10")
    assert r.json()["data"] == []
    assert r.json()["meta"] == {"page": 4, "limit": 10, "total_rows": 25, "total_pages": 3}


def test_limit_over_max_is_400(admin_client):
    r = admin_client.get("/v1/students?limit=500")
    assert r.status_code == 400
    assert r.json()["message"] == "Validation failed"


def test_create_then_get_returns_the_payload(admin_client, tenant, student_member):
    cls = SchoolClass.objects.create(tenant_id=tenant.id, name="7A", grade_level=7)
    parent = Parent.objects.create(tenant_id=tenant.id, full_name="Pat Parent")
    payload = {
        "tenant_user_id": str(student_member.id),
        "student_number": "S-001",
        "admission_date": "2024-09-01",
        "class_id": str(cls.id),
        "parent_id": str(parent.id),
    }

    r = admin_client.post("/v1/students", payload, format="json")
    assert r.status_code == 201, r.content
    assert r.json()["message"] == "Student created successfully"
    sid = r.json()["data"]["id"]

    r = admin_client.get(f"/v1/students/{sid}")
    assert r.status_code == 200
    data = r.json()["data"]
    assert {k: data[k] for k in payload} == payload
    assert data["tenant_id"] == str(tenant.id)
    assert data["user_id"] == str(student_member.user_id)


def test_duplicate_student_number_is_409(admin_client, tenant, student_member):
    _seed_students(tenant, 1)
    number = Student.objects.get().student_number

    r = admin_client.post(
        "/v1/students",
        {"tenant_user_id": str(student_member.id), "student_number": number, "admission_date": "2024-09-01"},
        format="json",
    )
    assert r.status_code == 409
    assert r.json() == {
        "success": False,
        "message": "Failed to create student",
        "error": "student number already exists",
    }


def test_same_student_number_in_another_tenant_is_fine(admin_client, other_tenant, student_member):
    _seed_students(other_tenant, 1)
    number = Student.objects.get().student_number

    r = admin_client.post(
        "/v1/students",
        {"tenant_user_id": str(student_member.id), "student_number": number, "admission_date": "2024-09-01"},
        format="json",
    )
    assert r.status_code == 201, r.content


def test_tenant_user_must_exist_and_belong_here(admin_client, other_tenant):
    r = admin_client.post(
        "/v1/students",
        {"tenant_user_id": str(uuid.uuid4()), "student_number": "S-9", "admission_date": "2024-09-01"},
        format="json",
    )
    assert r.status_code == 400
    assert r.json()["error"] == "tenant user not found"

    foreign = make_member(other_tenant, make_user("elsewhere"), "Student")
    r = admin_client.post(
        "/v1/students",
        {"tenant_user_id": str(foreign.id), "student_number": "S-9", "admission_date": "2024-09-01"},
        format="json",
    )
    assert r.status_code == 400
    assert r.json()["error"] == "tenant user does not belong to this tenant"
    assert not Student.objects.exists()


def test_class_of_another_tenant_is_rejected(admin_client, other_tenant, student_member):
    foreign_class = SchoolClass.objects.create(tenant_id=other_tenant.id, name="9Z")
    r = admin_client.post(
        "/v1/students",
        {
            "tenant_user_id": str(student_member.id),
            "student_number": "S-10",
            "admission_date": "2024-09-01",
            "class_id": str(foreign_class.id),
        },
        format="json",
    )
    assert r.status_code == 400
    assert r.json()["error"] == "class not found"


def test_update_and_audit_trail(admin_client, tenant):
    student = _seed_students(tenant, 1)[0]

    r = admin_client.put(f"/v1/students/{student.id}", {"student_number": "S-NEW"}, format="json")
    assert r.status_code == 200, r.content
    assert r.json()["message"] == "Student updated successfully"
    assert r.json()["data"]["student_number"] == "S-NEW"

    r = admin_client.delete(f"/v1/students/{student.id}")
    assert r.json() == {"success": True, "message": "Student deleted successfully"}
    assert admin_client.get(f"/v1/students/{student.id}").status_code == 404

    actions = [a.action for a in list_audit_logs(tenant_id=tenant.id, table_name="students", record_id=student.id)]
    assert sorted(actions) == ["DELETE", "UPDATE"]
    update = list_audit_logs(tenant_id=tenant.id, record_id=student.id, action="UPDATE").get()
    assert update.old_data["student_number"] == student.student_number
    assert update.new_data["student_number"] == "S-NEW"


def test_students_of_another_tenant_are_invisible(admin_client, other_tenant):
    foreign = _seed_students(other_tenant, 1)[0]
    assert admin_client.get(f"/v1/students/{foreign.id}").status_code == 404
    assert admin_client.get("/v1/students").json()["meta"]["total_rows"] == 0
    assert admin_client.put(f"/v1/students/{foreign.id}", {"student_number": "X"}, format="json").status_code == 404
    assert admin_client.delete(f"/v1/students/{foreign.id}").status_code == 404


def test_list_by_class_and_parent(admin_client, tenant):
    cls = SchoolClass.objects.create(tenant_id=tenant.id, name="8B")
    parent = Parent.objects.create(tenant_id=tenant.id, full_name="Guardian")
    in_class = _seed_students(tenant, 2, school_class=cls)
    with_parent = _seed_students(tenant, 1, parent=parent)
    _seed_students(tenant, 3)

    r = admin_client.get(f"/v1/students/class/{cls.id}")
    assert r.status_code == 200, r.content
    assert {row["id"] for row in r.json()["data"]} == {str(s.id) for s in in_class}

    r = admin_client.get(f"/v1/students/parent/{parent.id}")
    assert [row["id"] for row in r.json()["data"]] == [str(with_parent[0].id)]

    # same results through query filters
    r = admin_client.get(f"/v1/students?class_id={cls.id}")
    assert r.json()["meta"]["total_rows"] == 2


def test_list_by_unknown_class_is_404(admin_client):
    r = admin_client.get(f"/v1/students/class/{uuid.uuid4()}")
    assert r.status_code == 404
    assert r.json()["error"] == "class not found"


def test_bulk_delete(admin_client, tenant, other_tenant):
    mine = _seed_students(tenant, 3)
    foreign = _seed_students(other_tenant, 1)

    ids = [str(s.id) for s in mine[:2]] + [str(foreign[0].id)]
    r = admin_client.delete("/v1/students", {"ids": ids}, format="json")
    assert r.status_code == 200, r.content
    assert r.json()["message"] == "Students deleted successfully"
    assert r.json()["data"] == {"deleted": 2, "invalid_ids": [str(foreign[0].id)]}
    assert Student.objects.filter(tenant_id=tenant.id).count() == 1
    assert Student.objects.filter(pk=foreign[0].pk).exists()


def test_bulk_delete_with_empty_ids_is_400(admin_client):
    r = admin_client.delete("/v1/students", {"ids": []}, format="json")
    assert r.status_code == 400
    assert r.json() == {
        "success": False,
        "message": "Failed to delete students",
        "error": "no student IDs provided for bulk delete",
    }


def test_teacher_role_may_manage_students_but_staff_may_not(client_for):
    assert client_for("Teacher").get("/v1/students").status_code == 200
    assert client_for("Staff").get("/v1/students").status_code == 403


def test_parents_collection(admin_client):
    r = admin_client.post(
        "/v1/parents",
        {"full_name": "Morgan Lee", "phone": "555-0100", "relationship": "mother"},
        format="json",
    )
    assert r.status_code == 201, r.content
    pid = r.json()["data"]["id"]

    r = admin_client.get("/v1/parents?search=morgan")
    assert [row["id"] for row in r.json()["data"]] == [pid]
