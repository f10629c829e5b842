"""
Shift Catalog Module

Static shift tables for nurses and assistants, plus the lookups used to
render a schedule cell.
"""

from typing import Dict, List, Optional

from .entities import CellFormatting, ScheduleEntry, ShiftDefinition, StaffClass


OTHER_SHIFT_ID = "other"
DEFAULT_TEXT_COLOR = "#000000"

NURSE_SHIFTS: List[ShiftDefinition] = [
    ShiftDefinition("morning", "ช", "เวรเช้า", "#000000"),
    ShiftDefinition("morning_special", "ช*", "เวรเช้า*", "#000000", "#e3f2fd"),
    ShiftDefinition("afternoon", "บ", "เวรบ่าย", "#000000"),
    ShiftDefinition("night", "ด", "เวรดึก", "#000000"),
    ShiftDefinition("morning_afternoon", "ชบ", "เวรเช้าบ่าย", "#000000"),
    ShiftDefinition("night_afternoon", "ดบ", "เวรดึกบ่าย", "#000000"),
    ShiftDefinition("training", "อ", "อบรม", "#000000"),
    ShiftDefinition("night_training", "ดอ", "ดึกอบรม", "#000000"),
    ShiftDefinition("off", "O", "Off", "#ffffff", "#f44336"),
    ShiftDefinition("vacation", "va", "Vacation", "#ffffff", "#d32f2f"),
    ShiftDefinition(OTHER_SHIFT_ID, "อื่นๆ", "อื่นๆ", "#000000", "#ffeb3b"),
]

ASSISTANT_SHIFTS: List[ShiftDefinition] = [
    ShiftDefinition("morning", "ช", "เวรเช้า", "#000000"),
    ShiftDefinition("afternoon", "บ", "เวรบ่าย", "#000000"),
    ShiftDefinition("night", "ด", "เวรดึก", "#000000"),
    ShiftDefinition("morning_afternoon", "ชบ", "เวรเช้าบ่าย", "#000000"),
    ShiftDefinition("night_afternoon", "ดบ", "เวรดึกบ่าย", "#000000"),
    ShiftDefinition("housekeeping", "MB", "แม่บ้าน", "#000000"),
    ShiftDefinition("housekeeping_afternoon", "MBบ", "แม่บ้านบ่าย", "#000000"),
    ShiftDefinition("training", "อ", "อบรม", "#000000"),
    ShiftDefinition("night_training", "ดอ", "ดึกอบรม", "#000000"),
    ShiftDefinition("off", "O", "Off", "#ffffff", "#f44336"),
    ShiftDefinition("vacation", "va", "Vacation", "#ffffff", "#d32f2f"),
    ShiftDefinition(OTHER_SHIFT_ID, "อื่นๆ", "อื่นๆ", "#000000", "#ffeb3b"),
]

# Automatic formatting applied when these codes are typed (compared upper-cased)
AUTO_FORMATTING: Dict[str, CellFormatting] = {
    "O": CellFormatting(text_color="#ff0000", background_color="#ffffff"),
    "VA": CellFormatting(background_color="#ff0000", text_color="#ffffff"),
    "MB": CellFormatting(background_color="#00ff00", text_color="#000000"),
}


class ShiftCatalog:
    """
    Lookup tables mapping shift ids and codes to definitions, per staff class.
    """

    def __init__(
        self,
        nurse_shifts: Optional[List[ShiftDefinition]] = None,
        assistant_shifts: Optional[List[ShiftDefinition]] = None
    ):
        self._shifts = {
            StaffClass.NURSE: list(nurse_shifts or NURSE_SHIFTS),
            StaffClass.ASSISTANT: list(assistant_shifts or ASSISTANT_SHIFTS),
        }
        self._by_id = {
            staff_class: {s.id: s for s in shifts}
            for staff_class, shifts in self._shifts.items()
        }

    def shifts_for(self, staff_class: StaffClass) -> List[ShiftDefinition]:
        """Get the shift list for a staff class, in display order."""
        return list(self._shifts[staff_class])

    def get_shift(self, staff_class: StaffClass, shift_id: str) -> Optional[ShiftDefinition]:
        """Find a shift by id in the class catalog. None if unknown."""
        return self._by_id[staff_class].get(shift_id)

    def find_by_code(self, staff_class: StaffClass, code: str) -> Optional[ShiftDefinition]:
        """Find a shift by its display code in the class catalog."""
        for shift in self._shifts[staff_class]:
            if shift.code == code:
                return shift
        return None

    def resolve_text(self, staff_class: StaffClass, text: str) -> tuple:
        """
        Resolve typed cell text to (shift_id, custom_text).

        Looks the text up by catalog code first; when nothing matches the
        entry becomes an "other" shift carrying the literal text.
        """
        text = text.strip()
        shift = self.find_by_code(staff_class, text)
        if shift is not None:
            return (shift.id, None)
        return (OTHER_SHIFT_ID, text)

    def display_text(self, entry: ScheduleEntry, shift: ShiftDefinition) -> str:
        """Rendered text of a cell: custom text if present, else the catalog code."""
        if entry.custom_text:
            return entry.custom_text
        return shift.code

    def text_color(self, entry: ScheduleEntry, shift: ShiftDefinition) -> str:
        """Effective text color: entry override, else catalog color."""
        if entry.formatting and entry.formatting.text_color:
            return entry.formatting.text_color
        return shift.color or DEFAULT_TEXT_COLOR

    def background_color(self, entry: ScheduleEntry, shift: ShiftDefinition) -> Optional[str]:
        """Effective background color, or None for no fill."""
        if entry.formatting and entry.formatting.background_color:
            return entry.formatting.background_color
        return shift.background_color
