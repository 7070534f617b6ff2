"""Unit tests for employee value objects."""

from datetime import UTC, datetime, timedelta

import pytest

from employees.domain.value_objects import (
    EmployeeId,
    EmployeeUpdate,
    ListFilter,
    normalize_emails,
)


class TestEmployeeId:
    """Tests for EmployeeId value object."""

    def test_generate_creates_valid_ulid(self):
        employee_id = EmployeeId.generate()

        assert len(employee_id.value) == 26
        assert str(employee_id) == employee_id.value

    def test_generate_creates_unique_ids(self):
        assert EmployeeId.generate() != EmployeeId.generate()

    def test_from_string_accepts_lowercase(self):
        original = EmployeeId.generate()

        parsed = EmployeeId.from_string(original.value.lower())

        assert parsed == original

    @pytest.mark.parametrize("value", ["", "not-a-ulid", "123"])
    def test_from_string_rejects_invalid_values(self, value):
        with pytest.raises(ValueError, match="Invalid EmployeeId"):
            EmployeeId.from_string(value)


class TestNormalizeEmails:
    """Tests for email set normalization."""

    def test_preserves_first_seen_order(self):
        assert normalize_emails(["b@x.io", "a@x.io", "b@x.io"]) == (
            "b@x.io",
            "a@x.io",
        )

    def test_drops_blank_entries(self):
        assert normalize_emails(["", "  ", "a@x.io"]) == ("a@x.io",)

    def test_empty_input(self):
        assert normalize_emails([]) == ()


class TestEmployeeUpdate:
    """Tests for partial updates."""

    def test_defaults_leave_everything_unchanged(self):
        update = EmployeeUpdate()

        assert (update.emails, update.first_name, update.last_name) == ((), "", "")

    def test_normalizes_on_construction(self):
        update = EmployeeUpdate(emails=[" a@x.io", "a@x.io"], first_name=" J ")

        assert update.emails == ("a@x.io",)
        assert update.first_name == "J"

    def test_blank_values_mean_unchanged(self):
        update = EmployeeUpdate(emails=["  "], first_name=" ", last_name="")

        assert (update.emails, update.first_name, update.last_name) == ((), "", "")


class TestListFilter:
    """Tests for pagination clamping and date range checks."""

    def test_zero_values_get_defaults(self):
        effective = ListFilter(page=0, page_size=0).clamped()

        assert effective.page == 1
        assert effective.page_size == 20

    def test_negative_values_get_defaults(self):
        effective = ListFilter(page=-3, page_size=-1).clamped()

        assert (effective.page, effective.page_size) == (1, 20)

    def test_large_page_size_is_capped(self):
        assert ListFilter(page_size=500).clamped().page_size == 100

    def test_valid_values_are_kept(self):
        effective = ListFilter(page=3, page_size=50).clamped()

        assert (effective.page, effective.page_size) == (3, 50)
        assert effective.offset == 100

    def test_clamping_keeps_date_bounds(self):
        after = datetime(2024, 1, 1, tzinfo=UTC)
        before = datetime(2024, 2, 1, tzinfo=UTC)

        effective = ListFilter(
            page=0, created_after=after, created_before=before
        ).clamped()

        assert effective.created_after == after
        assert effective.created_before == before

    def test_inverted_range_detected(self):
        now = datetime.now(UTC)

        list_filter = ListFilter(
            created_after=now, created_before=now - timedelta(seconds=1)
        )

        assert list_filter.has_inverted_range

    def test_equal_bounds_are_valid(self):
        now = datetime.now(UTC)

        assert not ListFilter(created_after=now, created_before=now).has_inverted_range

    def test_single_bound_is_never_inverted(self):
        now = datetime.now(UTC)

        assert not ListFilter(created_after=now).has_inverted_range
        assert not ListFilter(created_before=now).has_inverted_range
