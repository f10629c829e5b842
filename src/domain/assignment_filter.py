"""
Assignment Filter Module

Derives which staff are on a shift for a day, and edits the duty
assignments of one (date, shift) pair as a batch.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

from .entities import ScheduleEntry, ShiftSlot, Staff, StaffClass, WorkAssignment
from .errors import ValidationError
from .schedule_aggregator import ScheduleIndex
from .staff_roster import StaffRoster
from config.config_manager import AggregationRules


# Shift ids that put a staff member on each requested shift category
SHIFT_MEMBERSHIP: Dict[ShiftSlot, frozenset] = {
    ShiftSlot.MORNING: frozenset({"morning", "morning_special", "morning_afternoon"}),
    ShiftSlot.AFTERNOON: frozenset({"afternoon", "morning_afternoon", "night_afternoon"}),
    ShiftSlot.NIGHT: frozenset({"night", "night_afternoon"}),
}

# Reference option lists for the assignment form
BED_AREAS = ['B1-B3', 'B4-Y2', 'B5-B7', 'Y3-Y4', 'B1-B2', 'B3-B4', 'Y1-Y2']
DUTIES = [
    'Productivity',
    'ลงทะเบียน / จองเตียง',
    'Pipe line',
    'Check Delfib',
    'ยา Stock',
    'รถ Emergency',
]
ERT_ROLES = ['หัวหน้าแผน', 'เคลื่อนย้ายกู้ชีพ', 'เช็คชีวิตติดต่อ', 'ดับเพลิง', 'ช่างและเส้นทาง']
TEAMS = ['ทีม A', 'ทีม B']


@dataclass
class AssignmentDraft:
    """Editable assignment fields of one staff member in a shift batch."""
    staff_id: str
    bed_area: Optional[str] = None
    duties: List[str] = field(default_factory=list)
    drug_supervision: bool = False
    ert: Optional[str] = None
    team: Optional[str] = None
    notes: Optional[str] = None


def _qualifies(staff: Staff, shift_id: str, category: ShiftSlot, exclusions: set) -> bool:
    if shift_id not in SHIFT_MEMBERSHIP[category]:
        return False
    # a plain morning shift does not put excluded staff on the morning list
    if category == ShiftSlot.MORNING and shift_id == "morning" and staff.id in exclusions:
        return False
    return True


def staff_on_shift(
    d: date,
    category: ShiftSlot,
    entries: Union[ScheduleIndex, Iterable[ScheduleEntry]],
    roster: StaffRoster,
    exclusions: Optional[Iterable[str]] = None
) -> List[Staff]:
    """
    Staff working a shift category on a date, in roster order.

    A staff member qualifies when any examined slot (morning and afternoon,
    or the slotless entry for part-time staff) holds a qualifying shift id.
    Shift ids are compared as stored; no catalog lookup is needed.
    """
    index = ScheduleIndex.of(entries)
    if exclusions is None:
        exclusions = AggregationRules().morning_count_exclusions
    excluded = set(exclusions)
    on_shift = []
    for staff in roster:
        if any(
            _qualifies(staff, entry.shift_id, category, excluded)
            for entry in index.examined_entries(staff, d)
        ):
            on_shift.append(staff)
    return on_shift


def assignments_for_date(assignments: List[WorkAssignment], d: date) -> List[WorkAssignment]:
    return [a for a in assignments if a.date == d]


def assignments_for_staff(
    assignments: List[WorkAssignment],
    staff_id: str,
    d: Optional[date] = None
) -> List[WorkAssignment]:
    return [
        a for a in assignments
        if a.staff_id == staff_id and (d is None or a.date == d)
    ]


def initial_shift_batch(
    d: date,
    shift: ShiftSlot,
    assignments: List[WorkAssignment],
    on_shift: List[Staff]
) -> Dict[str, AssignmentDraft]:
    """
    Pre-fill the batch editor of a (date, shift) pair.

    Staff with an existing record start from it; the others start blank.
    """
    existing = {
        a.staff_id: a for a in assignments
        if a.date == d and a.shift == shift
    }
    batch: Dict[str, AssignmentDraft] = {}
    for staff in on_shift:
        record = existing.get(staff.id)
        if record is None:
            batch[staff.id] = AssignmentDraft(staff_id=staff.id)
        else:
            batch[staff.id] = AssignmentDraft(
                staff_id=staff.id,
                bed_area=record.bed_area,
                duties=list(record.duties or []),
                drug_supervision=bool(record.drug_supervision),
                ert=record.ert,
                team=record.team,
                notes=record.notes,
            )
    return batch


def _build_assignment(
    d: date,
    shift: ShiftSlot,
    draft: AssignmentDraft,
    roster: StaffRoster
) -> WorkAssignment:
    staff = roster.get_staff_by_id(draft.staff_id)
    staff_class = staff.staff_class if staff else None

    assignment = WorkAssignment(
        id=uuid.uuid4().hex,
        date=d,
        shift=shift,
        staff_id=draft.staff_id,
        ert=draft.ert or None,
        notes=draft.notes or None,
    )
    if staff_class == StaffClass.NURSE:
        assignment.bed_area = draft.bed_area or None
        assignment.duties = list(draft.duties)
        assignment.drug_supervision = draft.drug_supervision
    elif staff_class == StaffClass.ASSISTANT:
        assignment.team = draft.team or None
    return assignment


def save_shift_assignments(
    assignments: List[WorkAssignment],
    d: Optional[date],
    shift: Optional[ShiftSlot],
    batch: Dict[str, AssignmentDraft],
    roster: StaffRoster
) -> List[WorkAssignment]:
    """
    Replace every record of a (date, shift) pair with the batch contents.

    One record is written per staff member in the batch, even when no field
    is set. Fields that do not apply to the staff member's class are dropped.

    Raises:
        ValidationError: If date or shift is missing
    """
    if d is None or shift is None:
        raise ValidationError("กรุณาเลือกวันที่และเวร")

    kept = [a for a in assignments if not (a.date == d and a.shift == shift)]
    for draft in batch.values():
        kept.append(_build_assignment(d, shift, draft, roster))
    return kept


def delete_assignment(assignments: List[WorkAssignment], assignment_id: str) -> List[WorkAssignment]:
    return [a for a in assignments if a.id != assignment_id]
