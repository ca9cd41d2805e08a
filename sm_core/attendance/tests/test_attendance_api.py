# sm_core/attendance/tests/test_attendance_api.py
from datetime import date

import pytest

from sm_core.attendance.models import Attendance, AttendanceStatus
from sm_core.tests.helpers import make_student

pytestmark = pytest.mark.django_db


@pytest.fixture
def student(tenant):
    return make_student(tenant, "A-1")


def test_record_attendance(admin_client, student):
    r = admin_client.post(
        "/v1/attendance",
        {"student_id": str(student.id), "attendance_date": "2024-10-01", "status": "late", "remarks": "bus"},
        format="json",
    )
    assert r.status_code == 201, r.content
    assert r.json()["message"] == "Attendance record created successfully"
    assert r.json()["data"]["status"] == "late"


def test_one_record_per_student_and_day(admin_client, tenant, student):
    Attendance.objects.create(
        tenant_id=tenant.id, student=student, attendance_date=date(2024, 10, 1), status=AttendanceStatus.PRESENT
    )
    r = admin_client.post(
        "/v1/attendance",
        {"student_id": str(student.id), "attendance_date": "2024-10-01", "status": "absent"},
        format="json",
    )
    assert r.status_code == 409
    assert r.json() == {
        "success": False,
        "message": "Failed to create attendance record",
        "error": "attendance already recorded for this student on this date",
    }


def test_unknown_status_is_400(admin_client, student):
    r = admin_client.post(
        "/v1/attendance",
        {"student_id": str(student.id), "attendance_date": "2024-10-01", "status": "asleep"},
        format="json",
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Validation failed"


def test_student_of_another_tenant_is_rejected(admin_client, other_tenant):
    foreign = make_student(other_tenant, "Z-9")
    r = admin_client.post(
        "/v1/attendance",
        {"student_id": str(foreign.id), "attendance_date": "2024-10-01", "status": "present"},
        format="json",
    )
    assert r.status_code == 400
    assert r.json()["error"] == "student not found"


def test_date_range_and_status_filters(admin_client, tenant, student):
    for day, st in ((1, "present"), (2, "absent"), (3, "present"), (4, "excused")):
        Attendance.objects.create(tenant_id=tenant.id, student=student, attendance_date=date(2024, 10, day), status=st)

    r = admin_client.get("/v1/attendance?date_from=2024-10-02&date_to=2024-10-03&sort_by=attendance_date&sort_dir=asc")
    assert r.status_code == 200, r.content
    assert [row["attendance_date"] for row in r.json()["data"]] == ["2024-10-02", "2024-10-03"]

    r = admin_client.get(f"/v1/attendance?status=present&student_id={student.id}")
    assert r.json()["meta"]["total_rows"] == 2

    r = admin_client.get("/v1/attendance?date_from=not-a-date")
    assert r.status_code == 400


def test_moving_a_record_onto_a_taken_day_is_409(admin_client, tenant, student):
    Attendance.objects.create(tenant_id=tenant.id, student=student, attendance_date=date(2024, 10, 1), status="present")
    second = Attendance.objects.create(
        tenant_id=tenant.id, student=student, attendance_date=date(2024, 10, 2), status="present"
    )

    r = admin_client.put(f"/v1/attendance/{second.id}", {"attendance_date": "2024-10-01"}, format="json")
    assert r.status_code == 409

    r = admin_client.put(f"/v1/attendance/{second.id}", {"status": "late"}, format="json")
    assert r.status_code == 200, r.content
    assert r.json()["data"]["status"] == "late"
