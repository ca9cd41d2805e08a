# sm_core/common/api/pagination.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from django.conf import settings

from sm_core.common.api.exceptions import ValidationFailed

T = TypeVar("T")

SORT_ASC = "asc"
SORT_DESC = "desc"
DEFAULT_SORT_FIELD = "created_at"


def _int_param(raw: str | None, name: str) -> int | None:
    if raw is None or str(raw).strip() == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationFailed(f"{name}: must be an integer")


@dataclass(frozen=True)
class PageParams:
    """
    Shared list contract: page, limit, search, sort_by, sort_dir.

    page < 1 is coerced to 1, limit < 1 to the configured default;
    limit above the configured max is rejected.
    """
    page: int = 1
    limit: int = 10
    search: str = ""
    sort_by: str = DEFAULT_SORT_FIELD
    sort_dir: str = SORT_DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def ordering(self) -> str:
        return f"-{self.sort_by}" if self.sort_dir == SORT_DESC else self.sort_by

    @classmethod
    def from_query(cls, query, *, sort_fields: Sequence[str] = ()) -> "PageParams":
        default_limit = int(getattr(settings, "PAGINATION_DEFAULT_LIMIT", 10))
        max_limit = int(getattr(settings, "PAGINATION_MAX_LIMIT", 100))

        page = _int_param(query.get("page"), "page") or 1
        if page < 1:
            page = 1

        limit = _int_param(query.get("limit"), "limit")
        if limit is None or limit < 1:
            limit = default_limit
        if limit > max_limit:
            raise ValidationFailed(f"limit: must be at most {max_limit}")

        sort_by = (query.get("sort_by") or "").strip() or DEFAULT_SORT_FIELD
        allowed = set(sort_fields) | {DEFAULT_SORT_FIELD}
        if sort_by not in allowed:
            raise ValidationFailed(f"sort_by: must be one of {', '.join(sorted(allowed))}")

        sort_dir = (query.get("sort_dir") or SORT_DESC).strip().lower()
        if sort_dir not in (SORT_ASC, SORT_DESC):
            raise ValidationFailed("sort_dir: must be asc or desc")

        return cls(
            page=page,
            limit=limit,
            search=(query.get("search") or "").strip(),
            sort_by=sort_by,
            sort_dir=sort_dir,
        )


@dataclass(frozen=True)
class PageMeta:
    page: int
    limit: int
    total_rows: int
    total_pages: int

    @classmethod
    def build(cls, params: PageParams, total_rows: int) -> "PageMeta":
        return cls(
            page=params.page,
            limit=params.limit,
            total_rows=total_rows,
            total_pages=math.ceil(total_rows / params.limit) if params.limit else 0,
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total_rows": self.total_rows,
            "total_pages": self.total_pages,
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    meta: PageMeta
