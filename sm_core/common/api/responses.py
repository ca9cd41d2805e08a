# sm_core/common/api/responses.py
from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.response import Response

from sm_core.common.api.pagination import PageMeta


def success(message: str, data: Any = None, *, status_code: int = status.HTTP_200_OK) -> Response:
    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return Response(body, status=status_code)


def created(message: str, data: Any = None) -> Response:
    return success(message, data, status_code=status.HTTP_201_CREATED)


def paginated(message: str, data: list, meta: PageMeta) -> Response:
    return Response(
        {
            "success": True,
            "message": message,
            "data": data,
            "meta": meta.as_dict(),
        },
        status=status.HTTP_200_OK,
    )
