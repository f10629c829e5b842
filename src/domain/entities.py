"""
Domain Entities Module

Core domain entities using dataclasses for the shift scheduling system.
These entities represent the core business concepts independent of storage.
Serialization helpers use the field names of the stored documents.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional


class StaffClass(Enum):
    """Class of staff member. Drives the shift catalog and assignment fields."""
    NURSE = "nurse"          # พยาบาล
    ASSISTANT = "assistant"  # ผู้ช่วยพยาบาล / ผู้ช่วยเหลือคนไข้


class ShiftSlot(Enum):
    """Slot of a full-time staff member's day."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


class HolidayCategory(Enum):
    """Source of a resolved holiday."""
    PUBLIC = "public"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Staff:
    """
    Represents a staff member on the roster.

    Attributes:
        id: Unique staff identifier (e.g. "n1", "a7")
        name: Display name
        staff_class: Nurse or Assistant
        is_part_time: Part-time staff have one slotless entry per date
    """
    id: str
    name: str
    staff_class: StaffClass
    is_part_time: bool = False


@dataclass(frozen=True)
class ShiftDefinition:
    """A catalog shift: id, display code and colors."""
    id: str
    code: str
    name: str
    color: str
    background_color: Optional[str] = None


@dataclass
class CellFormatting:
    """Per-cell formatting overrides. None means "not set"."""
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    font_size: Optional[int] = None

    FIELD_NAMES = {
        "bold": "bold",
        "italic": "italic",
        "underline": "underline",
        "background_color": "backgroundColor",
        "text_color": "textColor",
        "font_size": "fontSize",
    }

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in self.FIELD_NAMES.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CellFormatting":
        return cls(**{attr: data.get(key) for attr, key in cls.FIELD_NAMES.items()})


@dataclass
class ScheduleEntry:
    """
    One staff member's shift for one date and, for full-time staff, one slot.

    Attributes:
        staff_id: Roster id of the staff member
        date: The scheduled date
        shift_id: Catalog shift id, or "other" for free text
        slot: Morning/afternoon/night slot, None for part-time staff
        custom_text: Free text shown instead of the catalog code
        formatting: Optional cell formatting overrides
    """
    staff_id: str
    date: date
    shift_id: str
    slot: Optional[ShiftSlot] = None
    custom_text: Optional[str] = None
    formatting: Optional[CellFormatting] = None

    @property
    def key(self) -> tuple:
        return (self.staff_id, self.date, self.slot)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "nurseId": self.staff_id,
            "shiftId": self.shift_id,
            "customText": self.custom_text,
            "shiftType": self.slot.value if self.slot else None,
            "formatting": self.formatting.to_dict() if self.formatting else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScheduleEntry":
        slot = data.get("shiftType")
        formatting = data.get("formatting")
        return cls(
            staff_id=data["nurseId"],
            date=date.fromisoformat(data["date"]),
            shift_id=data["shiftId"],
            slot=ShiftSlot(slot) if slot else None,
            custom_text=data.get("customText"),
            formatting=CellFormatting.from_dict(formatting) if formatting else None,
        )


@dataclass
class CustomHoliday:
    """
    Admin-managed holiday record.

    A name starting with the hidden prefix ("ซ่อน: ") is a tombstone that
    suppresses the public holiday on the same date; it is never displayed.
    """
    id: str
    date: date
    name: str
    type: str = "custom"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "name": self.name,
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomHoliday":
        return cls(
            id=str(data["id"]),
            date=date.fromisoformat(data["date"]),
            name=data["name"],
            type=data.get("type", "custom"),
        )


@dataclass
class WorkAssignment:
    """
    Duty assignment of one staff member for one date and shift.

    bed_area, duties and drug_supervision apply to nurses, team to
    assistants, ert to everyone.
    """
    id: str
    date: date
    shift: ShiftSlot
    staff_id: str
    bed_area: Optional[str] = None
    duties: Optional[List[str]] = None
    drug_supervision: Optional[bool] = None
    ert: Optional[str] = None
    team: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "shift": self.shift.value,
            "nurseId": self.staff_id,
            "bedArea": self.bed_area,
            "duties": list(self.duties) if self.duties is not None else None,
            "drugSupervision": self.drug_supervision,
            "ert": self.ert,
            "team": self.team,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkAssignment":
        duties = data.get("duties")
        return cls(
            id=str(data["id"]),
            date=date.fromisoformat(data["date"]),
            shift=ShiftSlot(data["shift"]),
            staff_id=data["nurseId"],
            bed_area=data.get("bedArea"),
            duties=list(duties) if duties is not None else None,
            drug_supervision=data.get("drugSupervision"),
            ert=data.get("ert"),
            team=data.get("team"),
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class ResolvedHoliday:
    """A holiday visible for a month after tombstones are applied."""
    date: date
    name: str
    category: HolidayCategory
    holiday_id: Optional[str] = None  # set for custom holidays


@dataclass
class MonthlyDayCounts:
    """
    Day statistics for a month.

    Attributes:
        total_days: Calendar days in the month
        working_days: total - weekend days - public holiday days
        holiday_days: weekend days + public holiday days
        weekend_days: Saturdays and Sundays
        public_holiday_days: Holiday dates that do not fall on a weekend
    """
    total_days: int = 0
    working_days: int = 0
    holiday_days: int = 0
    weekend_days: int = 0
    public_holiday_days: int = 0


@dataclass
class ShiftCounts:
    """Headcount per shift category for one day."""
    night_count: int = 0
    morning_count: int = 0
    afternoon_count: int = 0


@dataclass
class StaffMonthlyTotals:
    """Monthly totals for one staff member."""
    staff: Staff
    total_shifts: int = 0
    overtime_shifts: int = 0
    shift_pay_shifts: int = 0


@dataclass
class RenderedCell:
    """Text and styling of one schedule cell as it is printed."""
    text: str
    text_color: str
    background_color: Optional[str] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False


@dataclass
class ScheduleRow:
    """
    One printed row of the schedule table.

    Full-time staff get a morning and an afternoon row, part-time staff a
    single row with no slot.
    """
    staff: Staff
    slot: Optional[ShiftSlot]
    cells: Dict[date, RenderedCell] = field(default_factory=dict)


@dataclass
class ScheduleSection:
    """Schedule table and totals of one staff class."""
    staff_class: StaffClass
    title: str
    rows: List[ScheduleRow] = field(default_factory=list)
    totals: List[StaffMonthlyTotals] = field(default_factory=list)
    daily_counts: Dict[date, ShiftCounts] = field(default_factory=dict)


@dataclass
class MonthlyScheduleReport:
    """Everything needed to print one month."""
    year: int
    month: int
    day_counts: MonthlyDayCounts
    holidays: List[ResolvedHoliday] = field(default_factory=list)
    sections: List[ScheduleSection] = field(default_factory=list)
    published_at: Optional[str] = None

    @property
    def holiday_dates(self) -> set:
        return {h.date for h in self.holidays}
