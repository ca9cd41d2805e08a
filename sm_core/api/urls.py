# sm_core/api/urls.py
from __future__ import annotations

from django.urls import path

from sm_core.academics.api.views import SchoolClassViewSet, SubjectViewSet
from sm_core.attendance.api.views import AttendanceViewSet
from sm_core.common.api.routers import SchoolRouter
from sm_core.common.views import HealthView
from sm_core.fees.api.views import FeeTypeViewSet, StudentFeeViewSet
from sm_core.grades.api.views import GradeViewSet
from sm_core.iam.api.auth import ChangePasswordView, LoginView, RegisterView, SelectTenantView, UserTenantsView
from sm_core.iam.api.users import UserViewSet
from sm_core.students.api.views import ParentViewSet, StudentViewSet
from sm_core.teachers.api.views import TeacherViewSet

router = SchoolRouter()

router.register(r"users", UserViewSet, basename="users")
router.register(r"students", StudentViewSet, basename="students")
router.register(r"parents", ParentViewSet, basename="parents")
router.register(r"teachers", TeacherViewSet, basename="teachers")
router.register(r"classes", SchoolClassViewSet, basename="classes")
router.register(r"subjects", SubjectViewSet, basename="subjects")
router.register(r"attendance", AttendanceViewSet, basename="attendance")
router.register(r"grades", GradeViewSet, basename="grades")

# fees/types must precede fees so /fees/types is not read as a fee id
router.register(r"fees/types", FeeTypeViewSet, basename="fee-types")
router.register(r"fees", StudentFeeViewSet, basename="fees")

urlpatterns = [
    path("health", HealthView.as_view(), name="health"),

    # Auth (no tenant)
    path("auth/login", LoginView.as_view(), name="login"),
    path("auth/register", RegisterView.as_view(), name="register"),
    path("auth/change-password", ChangePasswordView.as_view(), name="change-password"),
    path("auth/tenants", UserTenantsView.as_view(), name="user-tenants"),
    path("auth/select-tenant", SelectTenantView.as_view(), name="select-tenant"),
]

urlpatterns += router.urls
