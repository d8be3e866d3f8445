"""Tests for the staff roster"""
import pytest

from dashboard.staff import StaffNotFoundError


class TestStaffRoster:
    def test_lists_sample_staff_in_order(self, roster):
        names = [member.name for member in roster.list_staff()]
        assert names == ["Lisa Marie", "Thomas James", "Emma Grace"]

    def test_get_member(self, roster):
        member = roster.get("5")
        assert member.role == "Bartender"
        assert member.shift_end == "24:00"

    def test_get_unknown_member(self, roster):
        with pytest.raises(StaffNotFoundError) as exc_info:
            roster.get("99")
        assert exc_info.value.staff_id == "99"

    def test_update_shift_time(self, roster):
        updated = roster.update_shift_time("4", "09:00", "17:30")

        assert updated.shift_start == "09:00"
        assert updated.shift_end == "17:30"
        assert roster.get("4") == updated
        assert updated.name == "Lisa Marie"

    def test_update_allows_shift_past_midnight(self, roster):
        updated = roster.update_shift_time("6", "22:00", "02:00")
        assert (updated.shift_start, updated.shift_end) == ("22:00", "02:00")

    def test_update_unknown_member(self, roster):
        with pytest.raises(StaffNotFoundError):
            roster.update_shift_time("99", "09:00", "17:00")

    def test_update_keeps_other_members(self, roster):
        roster.update_shift_time("4", "10:00", "18:00")
        assert roster.get("5").shift_start == "16:00"
