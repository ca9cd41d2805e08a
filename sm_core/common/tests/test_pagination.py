# sm_core/common/tests/test_pagination.py
import pytest
from django.test import override_settings

from sm_core.common.api.exceptions import ValidationFailed
from sm_core.common.api.pagination import PageMeta, PageParams

SORT_FIELDS = ("student_number", "admission_date")


def test_defaults_when_query_is_empty():
    p = PageParams.from_query({}, sort_fields=SORT_FIELDS)
    assert (p.page, p.limit, p.search, p.sort_by, p.sort_dir) == (1, 10, "", "created_at", "desc")
    assert p.ordering == "-created_at"
    assert p.offset == 0


@pytest.mark.parametrize("raw_page", ["0", "-4"])
def test_page_below_one_is_coerced(raw_page):
    assert PageParams.from_query({"page": raw_page}).page == 1


@pytest.mark.parametrize("raw_limit", ["0", "-1", ""])
def test_limit_below_one_falls_back_to_default(raw_limit):
    assert PageParams.from_query({"limit": raw_limit}).limit == 10


@override_settings(PAGINATION_MAX_LIMIT=100)
def test_limit_above_max_is_rejected():
    with pytest.raises(ValidationFailed) as exc:
        PageParams.from_query({"limit": "101"})
    assert "limit" in str(exc.value.detail)


def test_non_integer_page_is_rejected():
    with pytest.raises(ValidationFailed):
        PageParams.from_query({"page": "two"})


def test_sort_by_must_be_whitelisted():
    with pytest.raises(ValidationFailed):
        PageParams.from_query({"sort_by": "password"}, sort_fields=SORT_FIELDS)


def test_sort_dir_asc_and_invalid():
    p = PageParams.from_query({"sort_by": "student_number", "sort_dir": "ASC"}, sort_fields=SORT_FIELDS)
    assert p.ordering == "student_number"

    with pytest.raises(ValidationFailed):
        PageParams.from_query({"sort_dir": "sideways"})


@pytest.mark.parametrize(
    "total_rows, limit, expected_pages",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (25, 10, 3), (101, 20, 6)],
)
def test_total_pages_is_ceiling(total_rows, limit, expected_pages):
    meta = PageMeta.build(PageParams(page=1, limit=limit), total_rows)
    assert meta.total_pages == expected_pages
    assert meta.as_dict() == {"page": 1, "limit": limit, "total_rows": total_rows, "total_pages": expected_pages}


def test_offset_follows_page_and_limit():
    assert PageParams(page=3, limit=10).offset == 20
