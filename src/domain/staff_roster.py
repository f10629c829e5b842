"""
Staff Roster Module

Holds the fixed staff roster and loads alternative rosters from CSV files.
"""

import csv
from pathlib import Path
from typing import Dict, List, Optional

from .entities import Staff, StaffClass


DEFAULT_ROSTER: List[Staff] = [
    # พยาบาล
    Staff("n1", "น.ส.ประนอม", StaffClass.NURSE),
    Staff("n2", "นางสาวศิรินทรา", StaffClass.NURSE),
    Staff("n3", "นางหทัยชนก", StaffClass.NURSE),
    Staff("n4", "นางสาวโยธกา", StaffClass.NURSE),
    Staff("n5", "นางสาวปาณิสรา", StaffClass.NURSE),
    Staff("n6", "นางสาวขวัญเรือน", StaffClass.NURSE),
    Staff("n7", "นางสาวสุวรรณา", StaffClass.NURSE),
    Staff("n8", "นางสาวนฤมล", StaffClass.NURSE),
    Staff("n9", "นางสาวอมลกานต์", StaffClass.NURSE),
    Staff("n10", "นางสาวนนทิยา", StaffClass.NURSE),
    Staff("n11", "นางสาวกรกนก", StaffClass.NURSE),
    Staff("n12", "นางสาวสุรีรัตน์", StaffClass.NURSE),
    Staff("n13", "นางสาวสุธิตรา", StaffClass.NURSE),
    Staff("n14", "นางสาววิภาวี", StaffClass.NURSE),
    Staff("n15", "นางสาวพณิดา", StaffClass.NURSE),
    # ผู้ช่วยพยาบาลและผู้ช่วยเหลือคนไข้
    Staff("a1", "ภาณุวัฒน์", StaffClass.ASSISTANT),
    Staff("a2", "สุกัญญา", StaffClass.ASSISTANT),
    Staff("a3", "ณัทชกา", StaffClass.ASSISTANT),
    Staff("a4", "ดวงแก้ว", StaffClass.ASSISTANT),
    Staff("a5", "อรอุษา", StaffClass.ASSISTANT),
    Staff("a6", "อัมพร", StaffClass.ASSISTANT),
    # Part-time
    Staff("a7", "ดวงพร", StaffClass.ASSISTANT, is_part_time=True),
    Staff("a8", "กาญจนา", StaffClass.ASSISTANT, is_part_time=True),
    Staff("a9", "สาริสา", StaffClass.ASSISTANT, is_part_time=True),
    Staff("a10", "รุ้งจินดา", StaffClass.ASSISTANT, is_part_time=True),
]


class StaffRoster:
    """
    Ordered, immutable-per-session list of staff.

    The CSV should have columns: id, name, class, part_time
    where class is "nurse"/"พยาบาล" or "assistant"/"ผู้ช่วย".
    """

    CLASS_MAPPING = {
        "nurse": StaffClass.NURSE,
        "พยาบาล": StaffClass.NURSE,
        "assistant": StaffClass.ASSISTANT,
        "ผู้ช่วย": StaffClass.ASSISTANT,
    }

    TRUE_VALUES = {"1", "true", "yes", "y", "parttime", "part-time"}

    def __init__(self, staff: Optional[List[Staff]] = None):
        self._staff_list: List[Staff] = list(DEFAULT_ROSTER if staff is None else staff)
        self._by_id: Dict[str, Staff] = {s.id: s for s in self._staff_list}

    @classmethod
    def load_from_csv(cls, csv_path: Path) -> "StaffRoster":
        """
        Load a roster from a CSV file.

        Rows without an id or name are skipped. A missing file yields an
        empty roster.
        """
        staff: List[Staff] = []
        if not csv_path.exists():
            return cls([])

        with open(csv_path, 'r', encoding='utf-8-sig') as f:
            reader = csv.DictReader(f)
            for row in reader:
                staff_id = (row.get('id') or '').strip()
                name = (row.get('name') or '').strip()
                if not staff_id or not name:
                    continue

                class_str = (row.get('class') or '').strip()
                staff_class = cls.CLASS_MAPPING.get(
                    class_str, cls.CLASS_MAPPING.get(class_str.lower(), StaffClass.NURSE)
                )
                part_time = (row.get('part_time') or '').strip().lower() in cls.TRUE_VALUES
                staff.append(Staff(staff_id, name, staff_class, part_time))

        return cls(staff)

    @property
    def all_staff(self) -> List[Staff]:
        """Get all staff in roster order."""
        return list(self._staff_list)

    @property
    def nurses(self) -> List[Staff]:
        return [s for s in self._staff_list if s.staff_class == StaffClass.NURSE]

    @property
    def assistants(self) -> List[Staff]:
        return [s for s in self._staff_list if s.staff_class == StaffClass.ASSISTANT]

    def by_class(self, staff_class: StaffClass) -> List[Staff]:
        return [s for s in self._staff_list if s.staff_class == staff_class]

    def get_staff_by_id(self, staff_id: str) -> Optional[Staff]:
        """Find staff by id. None for ids not on the roster."""
        return self._by_id.get(staff_id)

    def __iter__(self):
        return iter(self._staff_list)

    def __len__(self) -> int:
        return len(self._staff_list)
