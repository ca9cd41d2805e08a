# sm_core/common/api/routers.py
from __future__ import annotations

from rest_framework.routers import DynamicRoute, Route, SimpleRouter


class SchoolRouter(SimpleRouter):
    """
    SimpleRouter without trailing slashes, plus collection-level DELETE
    (bulk delete) and PUT-only updates:

      GET/POST/DELETE  /{prefix}
      GET/PUT/DELETE   /{prefix}/{id}
    """

    routes = [
        Route(
            url=r"^{prefix}{trailing_slash}$",
            mapping={"get": "list", "post": "create", "delete": "bulk_destroy"},
            name="{basename}-list",
            detail=False,
            initkwargs={"suffix": "List"},
        ),
        DynamicRoute(
            url=r"^{prefix}/{url_path}{trailing_slash}$",
            name="{basename}-{url_name}",
            detail=False,
            initkwargs={},
        ),
        Route(
            url=r"^{prefix}/{lookup}{trailing_slash}$",
            mapping={"get": "retrieve", "put": "update", "delete": "destroy"},
            name="{basename}-detail",
            detail=True,
            initkwargs={"suffix": "Instance"},
        ),
        DynamicRoute(
            url=r"^{prefix}/{lookup}/{url_path}{trailing_slash}$",
            name="{basename}-{url_name}",
            detail=True,
            initkwargs={},
        ),
    ]

    def __init__(self):
        super().__init__(trailing_slash=False)
