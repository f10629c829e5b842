"""
Schedule Aggregator Module

Computes month statistics from the schedule: working-day counts, per-day
headcounts per shift category, and per-staff totals (shifts, overtime,
shift pay).
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .entities import (
    MonthlyDayCounts, ScheduleEntry, ShiftCounts, ShiftDefinition, ShiftSlot,
    Staff, StaffMonthlyTotals
)
from .holiday_resolver import HolidayCalendar, is_weekend, month_dates
from .shift_catalog import ShiftCatalog
from .staff_roster import StaffRoster
from config.config_manager import AggregationRules


# Shift id -> categories it adds to in the daily headcount. Ids not listed
# (training, night_training, housekeeping, off, vacation, other) are not counted.
SHIFT_CATEGORY_CONTRIBUTIONS: Dict[str, Tuple[str, ...]] = {
    "night": ("night",),
    "morning": ("morning",),
    "morning_special": ("morning",),
    "afternoon": ("afternoon",),
    "morning_afternoon": ("morning", "afternoon"),
    "night_afternoon": ("night", "afternoon"),
    "housekeeping_afternoon": ("afternoon",),
}

# Shift ids whose morning leg is skipped for staff on the exclusion list
EXCLUDABLE_MORNING_SHIFTS = {"morning", "morning_afternoon"}

# Slots examined for full-time staff. Part-time staff use the slotless entry.
FULL_TIME_SLOTS = (ShiftSlot.MORNING, ShiftSlot.AFTERNOON)


class ScheduleIndex:
    """Schedule entries keyed by (staff_id, date, slot) for O(1) lookup."""

    def __init__(self, entries: Iterable[ScheduleEntry]):
        self._entries: Dict[tuple, ScheduleEntry] = {}
        for entry in entries:
            # first entry wins if a key was stored twice
            self._entries.setdefault(entry.key, entry)

    @classmethod
    def of(cls, entries: Union["ScheduleIndex", Iterable[ScheduleEntry]]) -> "ScheduleIndex":
        if isinstance(entries, ScheduleIndex):
            return entries
        return cls(entries)

    def get(self, staff_id: str, d: date, slot: Optional[ShiftSlot] = None) -> Optional[ScheduleEntry]:
        return self._entries.get((staff_id, d, slot))

    def examined_entries(self, staff: Staff, d: date) -> List[ScheduleEntry]:
        """
        Entries looked at for one staff member on one day.

        Part-time staff are evaluated only via the slotless entry, full-time
        staff only via the morning and afternoon slots.
        """
        if staff.is_part_time:
            slots: Tuple[Optional[ShiftSlot], ...] = (None,)
        else:
            slots = FULL_TIME_SLOTS
        found = []
        for slot in slots:
            entry = self.get(staff.id, d, slot)
            if entry is not None:
                found.append(entry)
        return found


class ScheduleAggregator:
    """
    Aggregates schedule entries for a month.

    All computations re-scan the given entries; nothing is cached between
    calls. Unknown staff ids and shift ids are skipped.
    """

    def __init__(
        self,
        roster: Optional[StaffRoster] = None,
        catalog: Optional[ShiftCatalog] = None,
        rules: Optional[AggregationRules] = None
    ):
        """
        Initialize aggregator.

        Args:
            roster: Staff roster (default: built-in roster)
            catalog: Shift catalog (default: built-in catalog)
            rules: Counting rules (exclusions, OT colors, shift pay color)
        """
        self.roster = roster or StaffRoster()
        self.catalog = catalog or ShiftCatalog()
        self.rules = rules or AggregationRules()

    # ------------------------------------------------------------------
    # Month day counts
    # ------------------------------------------------------------------
    def monthly_day_counts(self, year: int, month: int, holidays: HolidayCalendar) -> MonthlyDayCounts:
        """
        Count working, weekend and holiday days of a month.

        A holiday falling on a weekend is counted once, as a weekend day.

        Args:
            year: Year
            month: Month (1-12)
            holidays: Resolved holidays of the month

        Returns:
            MonthlyDayCounts
        """
        days = month_dates(year, month)
        weekend_days = 0
        public_holiday_days = 0

        for d in days:
            if is_weekend(d):
                weekend_days += 1
            elif holidays.is_holiday(d):
                public_holiday_days += 1

        total_days = len(days)
        return MonthlyDayCounts(
            total_days=total_days,
            working_days=total_days - weekend_days - public_holiday_days,
            holiday_days=weekend_days + public_holiday_days,
            weekend_days=weekend_days,
            public_holiday_days=public_holiday_days,
        )

    # ------------------------------------------------------------------
    # Daily headcount
    # ------------------------------------------------------------------
    def _lookup_shift(self, staff: Staff, entry: ScheduleEntry) -> Optional[ShiftDefinition]:
        return self.catalog.get_shift(staff.staff_class, entry.shift_id)

    def per_day_shift_counts(
        self,
        entries: Union[ScheduleIndex, Iterable[ScheduleEntry]],
        staff_subset: Iterable[Staff],
        d: date
    ) -> ShiftCounts:
        """
        Headcount per shift category for one day.

        Each examined slot contributes independently, and a combined shift
        id adds to both of its categories.
        """
        index = ScheduleIndex.of(entries)
        exclusions = set(self.rules.morning_count_exclusions)
        counts = ShiftCounts()

        for staff in staff_subset:
            for entry in index.examined_entries(staff, d):
                shift = self._lookup_shift(staff, entry)
                if shift is None:
                    continue
                for category in SHIFT_CATEGORY_CONTRIBUTIONS.get(shift.id, ()):
                    if category == "night":
                        counts.night_count += 1
                    elif category == "afternoon":
                        counts.afternoon_count += 1
                    elif category == "morning":
                        if shift.id in EXCLUDABLE_MORNING_SHIFTS and staff.id in exclusions:
                            continue
                        counts.morning_count += 1

        return counts

    def daily_shift_counts(
        self,
        entries: Union[ScheduleIndex, Iterable[ScheduleEntry]],
        staff_subset: Iterable[Staff],
        year: int,
        month: int
    ) -> Dict[date, ShiftCounts]:
        """Headcount per shift category for every day of a month."""
        index = ScheduleIndex.of(entries)
        staff_list = list(staff_subset)
        return {
            d: self.per_day_shift_counts(index, staff_list, d)
            for d in month_dates(year, month)
        }

    # ------------------------------------------------------------------
    # Per-staff totals
    # ------------------------------------------------------------------
    def _iter_staff_shifts(
        self,
        index: ScheduleIndex,
        staff_id: str,
        year: int,
        month: int
    ):
        """Yield (entry, shift) for every examined slot of a staff member's month."""
        staff = self.roster.get_staff_by_id(staff_id)
        if staff is None:
            return
        for d in month_dates(year, month):
            for entry in index.examined_entries(staff, d):
                shift = self._lookup_shift(staff, entry)
                if shift is not None:
                    yield entry, shift

    def total_shifts_for_staff(
        self,
        entries: Union[ScheduleIndex, Iterable[ScheduleEntry]],
        staff_id: str,
        year: int,
        month: int
    ) -> int:
        """
        Count slots holding any shift whose rendered text is not the Off code.

        Vacation and training entries count; only the literal Off code does not.
        """
        index = ScheduleIndex.of(entries)
        return sum(
            1 for entry, shift in self._iter_staff_shifts(index, staff_id, year, month)
            if self.catalog.display_text(entry, shift) != self.rules.off_code
        )

    def overtime_shifts_for_staff(
        self,
        entries: Union[ScheduleIndex, Iterable[ScheduleEntry]],
        staff_id: str,
        year: int,
        month: int
    ) -> int:
        """Count slots whose effective text color is an overtime color."""
        index = ScheduleIndex.of(entries)
        overtime_colors = set(self.rules.overtime_colors)
        return sum(
            1 for entry, shift in self._iter_staff_shifts(index, staff_id, year, month)
            if self.catalog.text_color(entry, shift) in overtime_colors
            and self.catalog.display_text(entry, shift) != self.rules.off_code
        )

    def shift_pay_shifts_for_staff(
        self,
        entries: Union[ScheduleIndex, Iterable[ScheduleEntry]],
        staff_id: str,
        year: int,
        month: int
    ) -> int:
        """Count afternoon/night slots whose effective text color is black."""
        index = ScheduleIndex.of(entries)
        pay_ids = set(self.rules.shift_pay_shift_ids)
        return sum(
            1 for entry, shift in self._iter_staff_shifts(index, staff_id, year, month)
            if shift.id in pay_ids
            and self.catalog.text_color(entry, shift) == self.rules.shift_pay_color
        )

    def monthly_totals(
        self,
        entries: Union[ScheduleIndex, Iterable[ScheduleEntry]],
        staff_subset: Iterable[Staff],
        year: int,
        month: int
    ) -> List[StaffMonthlyTotals]:
        """Totals for every staff member of a subset, in subset order."""
        index = ScheduleIndex.of(entries)
        return [
            StaffMonthlyTotals(
                staff=staff,
                total_shifts=self.total_shifts_for_staff(index, staff.id, year, month),
                overtime_shifts=self.overtime_shifts_for_staff(index, staff.id, year, month),
                shift_pay_shifts=self.shift_pay_shifts_for_staff(index, staff.id, year, month),
            )
            for staff in staff_subset
        ]
