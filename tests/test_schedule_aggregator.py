"""
Unit tests for ScheduleAggregator: day counts, daily headcounts and
per-staff totals.
"""

import pytest
from datetime import date
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config.config_manager import AggregationRules
from domain.entities import CellFormatting, CustomHoliday, ScheduleEntry, ShiftSlot
from domain.holiday_resolver import HolidayResolver
from domain.schedule_aggregator import ScheduleAggregator, ScheduleIndex
from domain.staff_roster import StaffRoster

DAY = date(2025, 7, 1)  # Tuesday


def entry(staff_id, shift_id, slot=ShiftSlot.MORNING, d=DAY, text_color=None, custom_text=None):
    formatting = CellFormatting(text_color=text_color) if text_color else None
    return ScheduleEntry(staff_id, d, shift_id, slot, custom_text, formatting)


@pytest.fixture
def roster():
    return StaffRoster()


@pytest.fixture
def aggregator(roster):
    return ScheduleAggregator(roster)


class TestMonthlyDayCounts:
    """Tests for monthly_day_counts."""

    def test_july_2025(self, aggregator):
        calendar = HolidayResolver().resolve(2025, 7, [])
        counts = aggregator.monthly_day_counts(2025, 7, calendar)

        assert counts.total_days == 31
        assert counts.weekend_days == 8
        assert counts.public_holiday_days == 2
        assert counts.working_days == 21
        assert counts.holiday_days == 10

    def test_weekend_holiday_counted_once(self, aggregator):
        """A holiday on a Saturday stays a weekend day."""
        custom = [CustomHoliday("1", date(2025, 7, 5), "วันหยุดพิเศษ")]
        calendar = HolidayResolver().resolve(2025, 7, custom)
        counts = aggregator.monthly_day_counts(2025, 7, calendar)

        assert counts.weekend_days == 8
        assert counts.public_holiday_days == 2

    def test_counts_add_up(self, aggregator):
        resolver = HolidayResolver()
        for month in range(1, 13):
            counts = aggregator.monthly_day_counts(2024, month, resolver.resolve(2024, month))
            assert counts.working_days + counts.holiday_days == counts.total_days
            assert counts.holiday_days == counts.weekend_days + counts.public_holiday_days


class TestPerDayShiftCounts:
    """Tests for the daily headcount."""

    def test_excluded_nurse_morning_not_counted(self, aggregator, roster):
        entries = [entry("n1", "morning")]
        counts = aggregator.per_day_shift_counts(entries, roster.nurses, DAY)

        assert counts.morning_count == 0

    def test_excluded_nurse_still_counted_in_totals(self, aggregator):
        entries = [entry("n1", "morning")]
        assert aggregator.total_shifts_for_staff(entries, "n1", 2025, 7) == 1

    def test_other_nurse_morning_counted(self, aggregator, roster):
        entries = [entry("n3", "morning"), entry("n4", "morning_special")]
        counts = aggregator.per_day_shift_counts(entries, roster.nurses, DAY)

        assert counts.morning_count == 2

    def test_combined_shift_counts_both(self, aggregator, roster):
        entries = [entry("n3", "morning_afternoon")]
        counts = aggregator.per_day_shift_counts(entries, roster.nurses, DAY)

        assert counts.morning_count == 1
        assert counts.afternoon_count == 1

    def test_excluded_nurse_combined_shift_afternoon_only(self, aggregator, roster):
        entries = [entry("n2", "morning_afternoon")]
        counts = aggregator.per_day_shift_counts(entries, roster.nurses, DAY)

        assert counts.morning_count == 0
        assert counts.afternoon_count == 1

    def test_night_afternoon(self, aggregator, roster):
        entries = [entry("n5", "night_afternoon", ShiftSlot.AFTERNOON)]
        counts = aggregator.per_day_shift_counts(entries, roster.nurses, DAY)

        assert counts.night_count == 1
        assert counts.afternoon_count == 1
        assert counts.morning_count == 0

    def test_slots_contribute_independently(self, aggregator, roster):
        entries = [
            entry("n3", "morning", ShiftSlot.MORNING),
            entry("n3", "afternoon", ShiftSlot.AFTERNOON),
        ]
        counts = aggregator.per_day_shift_counts(entries, roster.nurses, DAY)

        assert counts.morning_count == 1
        assert counts.afternoon_count == 1

    def test_night_slot_not_examined(self, aggregator, roster):
        entries = [entry("n3", "night", ShiftSlot.NIGHT)]
        counts = aggregator.per_day_shift_counts(entries, roster.nurses, DAY)

        assert counts.night_count == 0

    def test_part_time_uses_slotless_entry(self, aggregator, roster):
        entries = [
            entry("a7", "afternoon", None),
            entry("a8", "afternoon", ShiftSlot.MORNING),
        ]
        counts = aggregator.per_day_shift_counts(entries, roster.assistants, DAY)

        assert counts.afternoon_count == 1

    def test_uncounted_shifts(self, aggregator, roster):
        entries = [
            entry("a1", "housekeeping"),
            entry("a2", "training"),
            entry("a3", "off"),
            entry("a4", "housekeeping_afternoon", ShiftSlot.AFTERNOON),
        ]
        counts = aggregator.per_day_shift_counts(entries, roster.assistants, DAY)

        assert (counts.night_count, counts.morning_count, counts.afternoon_count) == (0, 0, 1)

    def test_unknown_ids_are_skipped(self, aggregator, roster):
        entries = [entry("n3", "bogus"), entry("zz", "morning")]
        counts = aggregator.per_day_shift_counts(entries, roster.nurses, DAY)

        assert counts.morning_count == 0

    def test_shift_id_outside_class_catalog_skipped(self, aggregator, roster):
        """housekeeping_afternoon exists only in the assistant catalog."""
        entries = [entry("n3", "housekeeping_afternoon", ShiftSlot.AFTERNOON)]
        counts = aggregator.per_day_shift_counts(entries, roster.nurses, DAY)

        assert counts.afternoon_count == 0

    def test_daily_shift_counts_covers_month(self, aggregator, roster):
        entries = [entry("n3", "night")]
        daily = aggregator.daily_shift_counts(entries, roster.nurses, 2025, 7)

        assert len(daily) == 31
        assert daily[DAY].night_count == 1
        assert daily[date(2025, 7, 2)].night_count == 0

    def test_custom_exclusions(self, roster):
        aggregator = ScheduleAggregator(roster, rules=AggregationRules(morning_count_exclusions=["n3"]))
        entries = [entry("n1", "morning"), entry("n3", "morning")]
        counts = aggregator.per_day_shift_counts(entries, roster.nurses, DAY)

        assert counts.morning_count == 1


class TestStaffTotals:
    """Tests for total, overtime and shift-pay counts."""

    def test_off_not_counted(self, aggregator):
        entries = [entry("n3", "off")]
        assert aggregator.total_shifts_for_staff(entries, "n3", 2025, 7) == 0

    def test_custom_text_o_not_counted(self, aggregator):
        entries = [entry("n3", "other", custom_text="O")]
        assert aggregator.total_shifts_for_staff(entries, "n3", 2025, 7) == 0

    def test_vacation_and_training_counted(self, aggregator):
        entries = [
            entry("n3", "vacation", d=date(2025, 7, 1)),
            entry("n3", "training", d=date(2025, 7, 2)),
            entry("n3", "afternoon", ShiftSlot.AFTERNOON, d=date(2025, 7, 2)),
        ]
        assert aggregator.total_shifts_for_staff(entries, "n3", 2025, 7) == 3

    def test_other_month_ignored(self, aggregator):
        entries = [entry("n3", "morning", d=date(2025, 8, 1))]
        assert aggregator.total_shifts_for_staff(entries, "n3", 2025, 7) == 0

    def test_unknown_staff_is_zero(self, aggregator):
        entries = [entry("zz", "morning")]
        assert aggregator.total_shifts_for_staff(entries, "zz", 2025, 7) == 0

    def test_overtime_colors(self, aggregator):
        entries = [
            entry("n3", "morning", d=date(2025, 7, 1), text_color="#ff0000"),
            entry("n3", "afternoon", ShiftSlot.AFTERNOON, d=date(2025, 7, 1), text_color="#d32f2f"),
            entry("n3", "morning", d=date(2025, 7, 2)),
        ]
        assert aggregator.overtime_shifts_for_staff(entries, "n3", 2025, 7) == 2

    def test_red_off_is_not_overtime(self, aggregator):
        entries = [entry("n3", "off", text_color="#ff0000")]
        assert aggregator.overtime_shifts_for_staff(entries, "n3", 2025, 7) == 0

    def test_shift_pay(self, aggregator):
        entries = [
            entry("n3", "afternoon", ShiftSlot.AFTERNOON, d=date(2025, 7, 1)),
            entry("n3", "night", d=date(2025, 7, 2)),
            entry("n3", "morning", d=date(2025, 7, 3)),
            entry("n3", "afternoon", ShiftSlot.AFTERNOON, d=date(2025, 7, 4), text_color="#ff0000"),
        ]
        assert aggregator.shift_pay_shifts_for_staff(entries, "n3", 2025, 7) == 2

    def test_monthly_totals(self, aggregator, roster):
        entries = ScheduleIndex([
            entry("n3", "afternoon", ShiftSlot.AFTERNOON, text_color="#ff0000"),
            entry("n3", "night"),
        ])
        totals = aggregator.monthly_totals(entries, roster.nurses[:3], 2025, 7)

        assert [t.staff.id for t in totals] == ["n1", "n2", "n3"]
        n3 = totals[2]
        assert (n3.total_shifts, n3.overtime_shifts, n3.shift_pay_shifts) == (2, 1, 1)

    def test_first_entry_wins_for_duplicate_key(self):
        index = ScheduleIndex([entry("n3", "morning"), entry("n3", "night")])
        assert index.get("n3", DAY, ShiftSlot.MORNING).shift_id == "morning"
