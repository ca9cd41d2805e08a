# config/urls.py
from django.urls import include, path

from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    # OpenAPI
    path("v1/schema", SpectacularAPIView.as_view(), name="schema"),
    path("v1/docs", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),

    path("v1/", include("sm_core.api.urls")),
]

handler404 = "sm_core.common.views.handler404"
handler500 = "sm_core.common.views.handler500"
