"""
Schedule Editor Module

Cell-level edits of the schedule grid. Every function returns a new entry
list; the input list is never modified.
"""

from dataclasses import replace
from datetime import date
from typing import Any, Iterable, List, Optional, Tuple

from .entities import CellFormatting, ScheduleEntry, ShiftSlot, Staff
from .shift_catalog import AUTO_FORMATTING, ShiftCatalog

# (staff_id, date, slot)
CellKey = Tuple[str, date, Optional[ShiftSlot]]

BOOLEAN_FORMATS = {"bold", "italic", "underline"}


def find_entry(entries: Iterable[ScheduleEntry], key: CellKey) -> Optional[ScheduleEntry]:
    for entry in entries:
        if entry.key == key:
            return entry
    return None


def edit_text_for(
    entries: Iterable[ScheduleEntry],
    staff: Staff,
    d: date,
    slot: Optional[ShiftSlot],
    catalog: ShiftCatalog
) -> str:
    """Text placed in the editor when a cell is opened: custom text or code."""
    entry = find_entry(entries, (staff.id, d, slot))
    if entry is None:
        return ""
    if entry.custom_text:
        return entry.custom_text
    shift = catalog.get_shift(staff.staff_class, entry.shift_id)
    return shift.code if shift else ""


def commit_cell(
    entries: List[ScheduleEntry],
    staff: Staff,
    d: date,
    slot: Optional[ShiftSlot],
    text: str,
    catalog: ShiftCatalog
) -> List[ScheduleEntry]:
    """
    Commit typed text into a cell.

    The previous entry of the cell is dropped. Empty text leaves the cell
    empty; otherwise the text is resolved against the staff member's class
    catalog and the special codes get their automatic formatting.
    """
    key = (staff.id, d, slot)
    updated = [e for e in entries if e.key != key]

    text = (text or "").strip()
    if not text:
        return updated

    shift_id, custom_text = catalog.resolve_text(staff.staff_class, text)
    auto = AUTO_FORMATTING.get(text.upper())
    updated.append(ScheduleEntry(
        staff_id=staff.id,
        date=d,
        shift_id=shift_id,
        slot=slot,
        custom_text=custom_text,
        formatting=replace(auto) if auto else None,
    ))
    return updated


def apply_formatting(
    entries: List[ScheduleEntry],
    cells: Iterable[CellKey],
    format_type: str,
    value: Any
) -> List[ScheduleEntry]:
    """
    Apply one formatting field to the selected cells.

    Boolean fields toggle when the cell already has a value for them; other
    fields are overwritten. Selected cells without an entry are ignored.
    """
    if format_type not in CellFormatting.FIELD_NAMES:
        raise ValueError(f"Unknown formatting field: {format_type}")

    selected = set(cells)
    updated = []
    for entry in entries:
        if entry.key not in selected:
            updated.append(entry)
            continue

        formatting = replace(entry.formatting) if entry.formatting else CellFormatting()
        current = getattr(formatting, format_type)
        if format_type in BOOLEAN_FORMATS and isinstance(value, bool) and isinstance(current, bool):
            setattr(formatting, format_type, not current)
        else:
            setattr(formatting, format_type, value)
        updated.append(replace(entry, formatting=formatting))
    return updated


def clear_formatting(entries: List[ScheduleEntry], cells: Iterable[CellKey]) -> List[ScheduleEntry]:
    """Drop the formatting of the selected cells."""
    selected = set(cells)
    return [
        replace(entry, formatting=None) if entry.key in selected else entry
        for entry in entries
    ]


def reset_schedule() -> List[ScheduleEntry]:
    """Clear the whole table."""
    return []
