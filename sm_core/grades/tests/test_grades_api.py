# sm_core/grades/tests/test_grades_api.py
from decimal import Decimal

import pytest

from sm_core.academics.models import Subject
from sm_core.grades.models import Grade
from sm_core.tests.helpers import make_student

pytestmark = pytest.mark.django_db


@pytest.fixture
def student(tenant):
    return make_student(tenant, "G-1")


@pytest.fixture
def subject(tenant):
    return Subject.objects.create(tenant_id=tenant.id, name="History", code="HIS")


def _payload(student, subject, **overrides):
    body = {"student_id": str(student.id), "subject_id": str(subject.id), "grade_type": "midterm", "score": "87.50"}
    body.update(overrides)
    return body


def test_record_grade(admin_client, student, subject):
    r = admin_client.post("/v1/grades", _payload(student, subject), format="json")
    assert r.status_code == 201, r.content
    assert r.json()["data"]["score"] == 87.5
    assert Grade.objects.get().score == Decimal("87.50")


@pytest.mark.parametrize("score", ["100.01", "-1"])
def test_score_outside_range_is_400(admin_client, student, subject, score):
    r = admin_client.post("/v1/grades", _payload(student, subject, score=score), format="json")
    assert r.status_code == 400
    assert r.json()["message"] == "Validation failed"
    assert not Grade.objects.exists()


def test_subject_of_another_tenant_is_rejected(admin_client, other_tenant, student):
    foreign = Subject.objects.create(tenant_id=other_tenant.id, name="Art", code="ART")
    r = admin_client.post("/v1/grades", _payload(student, foreign), format="json")
    assert r.status_code == 400
    assert r.json()["error"] == "subject not found"


def test_filter_by_subject_and_type(admin_client, tenant, student, subject):
    other = Subject.objects.create(tenant_id=tenant.id, name="Geography", code="GEO")
    Grade.objects.create(tenant_id=tenant.id, student=student, subject=subject, grade_type="final", score=70)
    Grade.objects.create(tenant_id=tenant.id, student=student, subject=subject, grade_type="midterm", score=60)
    Grade.objects.create(tenant_id=tenant.id, student=student, subject=other, grade_type="final", score=90)

    r = admin_client.get(f"/v1/grades?subject_id={subject.id}&grade_type=final")
    assert r.status_code == 200, r.content
    assert [row["score"] for row in r.json()["data"]] == [70]


def test_teacher_may_grade(client_for, student, subject):
    r = client_for("Teacher").post("/v1/grades", _payload(student, subject), format="json")
    assert r.status_code == 201, r.content
