"""
Personal Calendar Module

Builds the month view a staff member sees for their own schedule.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

from .entities import ScheduleEntry, ShiftSlot, Staff, WorkAssignment
from .holiday_resolver import HolidayCalendar, is_weekend, month_dates
from .schedule_aggregator import ScheduleIndex
from .shift_catalog import ShiftCatalog

THAI_DAY_NAMES = ['จันทร์', 'อังคาร', 'พุธ', 'พฤหัสบดี', 'ศุกร์', 'เสาร์', 'อาทิตย์']


@dataclass
class PersonalShift:
    """A rendered cell of the personal calendar."""
    slot: Optional[ShiftSlot]
    shift_id: str
    text: str
    name: str
    text_color: str
    background_color: Optional[str] = None


@dataclass
class PersonalDay:
    """One day of a staff member's month."""
    date: date
    day_name: str
    is_weekend: bool
    holiday_name: str = ""
    shifts: List[PersonalShift] = field(default_factory=list)
    assignments: List[WorkAssignment] = field(default_factory=list)

    @property
    def is_day_off(self) -> bool:
        return self.is_weekend or bool(self.holiday_name)


def build_personal_month(
    staff: Staff,
    year: int,
    month: int,
    entries: Iterable[ScheduleEntry],
    assignments: Iterable[WorkAssignment],
    holidays: HolidayCalendar,
    catalog: Optional[ShiftCatalog] = None
) -> List[PersonalDay]:
    """
    One PersonalDay per date of the month.

    Full-time staff show their morning, afternoon and night slots, part-time
    staff their slotless entry. Entries with a shift id missing from the
    catalog are left out.
    """
    catalog = catalog or ShiftCatalog()
    index = ScheduleIndex.of(entries)

    by_date: Dict[date, List[WorkAssignment]] = {}
    for assignment in assignments:
        if assignment.staff_id == staff.id:
            by_date.setdefault(assignment.date, []).append(assignment)

    if staff.is_part_time:
        slots = [None]
    else:
        slots = [ShiftSlot.MORNING, ShiftSlot.AFTERNOON, ShiftSlot.NIGHT]

    days = []
    for d in month_dates(year, month):
        day = PersonalDay(
            date=d,
            day_name=THAI_DAY_NAMES[d.weekday()],
            is_weekend=is_weekend(d),
            holiday_name=holidays.name_for(d),
            assignments=by_date.get(d, []),
        )
        for slot in slots:
            entry = index.get(staff.id, d, slot)
            if entry is None:
                continue
            shift = catalog.get_shift(staff.staff_class, entry.shift_id)
            if shift is None:
                continue
            day.shifts.append(PersonalShift(
                slot=slot,
                shift_id=shift.id,
                text=catalog.display_text(entry, shift),
                name=shift.name,
                text_color=catalog.text_color(entry, shift),
                background_color=catalog.background_color(entry, shift),
            ))
        days.append(day)
    return days
