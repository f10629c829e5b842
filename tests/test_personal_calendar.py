"""
Unit tests for the personal month view.
"""

from datetime import date
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import ScheduleEntry, ShiftSlot, WorkAssignment
from domain.holiday_resolver import HolidayResolver
from domain.personal_calendar import build_personal_month
from domain.staff_roster import StaffRoster


class TestBuildPersonalMonth:
    """Tests for build_personal_month."""

    def setup_method(self):
        self.roster = StaffRoster()
        self.holidays = HolidayResolver().resolve(2025, 7, [])

    def test_one_day_per_date(self):
        days = build_personal_month(
            self.roster.get_staff_by_id("n3"), 2025, 7, [], [], self.holidays
        )

        assert len(days) == 31
        assert days[0].day_name == "อังคาร"
        assert days[4].is_weekend
        assert days[10].holiday_name == "วันอาสาฬหบูชา"
        assert days[10].is_day_off
        assert not days[0].is_day_off

    def test_full_time_slots(self):
        entries = [
            ScheduleEntry("n3", date(2025, 7, 1), "morning", ShiftSlot.MORNING),
            ScheduleEntry("n3", date(2025, 7, 1), "night", ShiftSlot.NIGHT),
            ScheduleEntry("n3", date(2025, 7, 1), "other", ShiftSlot.AFTERNOON, "ประชุม"),
            ScheduleEntry("n4", date(2025, 7, 1), "afternoon", ShiftSlot.AFTERNOON),
        ]
        days = build_personal_month(
            self.roster.get_staff_by_id("n3"), 2025, 7, entries, [], self.holidays
        )

        shifts = days[0].shifts
        assert [s.slot for s in shifts] == [ShiftSlot.MORNING, ShiftSlot.AFTERNOON, ShiftSlot.NIGHT]
        assert [s.text for s in shifts] == ["ช", "ประชุม", "ด"]

    def test_part_time_slotless(self):
        entries = [
            ScheduleEntry("a7", date(2025, 7, 2), "afternoon", None),
            ScheduleEntry("a7", date(2025, 7, 2), "morning", ShiftSlot.MORNING),
        ]
        days = build_personal_month(
            self.roster.get_staff_by_id("a7"), 2025, 7, entries, [], self.holidays
        )

        assert [s.text for s in days[1].shifts] == ["บ"]

    def test_unknown_shift_left_out(self):
        entries = [ScheduleEntry("n3", date(2025, 7, 1), "bogus", ShiftSlot.MORNING)]
        days = build_personal_month(
            self.roster.get_staff_by_id("n3"), 2025, 7, entries, [], self.holidays
        )

        assert days[0].shifts == []

    def test_assignments_attached(self):
        assignments = [
            WorkAssignment("1", date(2025, 7, 3), ShiftSlot.MORNING, "n3", bed_area="B1-B3"),
            WorkAssignment("2", date(2025, 7, 3), ShiftSlot.MORNING, "n4"),
        ]
        days = build_personal_month(
            self.roster.get_staff_by_id("n3"), 2025, 7, [], assignments, self.holidays
        )

        assert [a.id for a in days[2].assignments] == ["1"]
        assert days[3].assignments == []
