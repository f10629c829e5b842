"""
Holiday Resolver Module

Builds the effective holiday calendar for a month: fixed-date public
holidays, Buddhist observances from a per-year table, admin-added custom
holidays, minus public holidays the admin has hidden.
"""

from calendar import monthrange
from datetime import date, datetime
from typing import Dict, List, Optional, Union

from .entities import CustomHoliday, HolidayCategory, ResolvedHoliday
from .errors import ValidationError
from infrastructure.logger import get_logger

logger = get_logger("HolidayResolver")


HIDDEN_PREFIX = "ซ่อน: "

# MM-DD -> name
FIXED_PUBLIC_HOLIDAYS: Dict[str, str] = {
    "01-01": "วันขึ้นปีใหม่",
    "04-06": "วันจักรี",
    "04-13": "วันสงกรานต์",
    "04-14": "วันสงกรานต์",
    "04-15": "วันสงกรานต์",
    "05-01": "วันแรงงานแห่งชาติ",
    "05-05": "วันฉัตรมงคล",
    "07-28": "วันเฉลิมพระชนมพรรษาพระบาทสมเด็จพระเจ้าอยู่หัว",
    "08-12": "วันแม่แห่งชาติ",
    "10-23": "วันปิยมหาราช",
    "12-05": "วันพ่อแห่งชาติ",
    "12-10": "วันรัฐธรรมนูญ",
}

# Lunar observances are listed per year, not computed. Dates falling on a
# weekend are left out of the table.
LUNAR_HOLIDAYS: Dict[int, Dict[str, str]] = {
    2024: {
        # มาฆบูชา 02-24, อาสาฬหบูชา 07-20, เข้าพรรษา 07-21: weekend
        "05-22": "วันวิสาขบูชา",
        "10-18": "วันออกพรรษา",
    },
    2025: {
        # เข้าพรรษา 07-12: weekend
        "02-13": "วันมาฆบูชา",
        "05-13": "วันวิสาขบูชา",
        "07-11": "วันอาสาฬหบูชา",
        "10-09": "วันออกพรรษา",
    },
}


def is_weekend(d: date) -> bool:
    """Saturday or Sunday."""
    return d.weekday() >= 5


def month_dates(year: int, month: int) -> List[date]:
    """Every calendar date of a month."""
    _, num_days = monthrange(year, month)
    return [date(year, month, day) for day in range(1, num_days + 1)]


class HolidayCalendar:
    """
    Resolved holidays of one month with O(1) date lookup.

    A date may carry more than one name; the last one added is used for
    display.
    """

    def __init__(self, year: int, month: int, holidays: List[ResolvedHoliday]):
        self.year = year
        self.month = month
        self.holidays = list(holidays)
        self._by_date: Dict[date, List[ResolvedHoliday]] = {}
        for holiday in self.holidays:
            self._by_date.setdefault(holiday.date, []).append(holiday)

    def is_holiday(self, d: date) -> bool:
        return d in self._by_date

    def name_for(self, d: date) -> str:
        entries = self._by_date.get(d)
        return entries[-1].name if entries else ""

    def holidays_on(self, d: date) -> List[ResolvedHoliday]:
        return list(self._by_date.get(d, []))

    @property
    def dates(self) -> List[date]:
        return sorted(self._by_date)

    def __contains__(self, d: date) -> bool:
        return self.is_holiday(d)

    def __len__(self) -> int:
        return len(self.holidays)


class HolidayResolver:
    """
    Resolves the holiday calendar of a month.

    Args:
        hidden_prefix: Name prefix that marks a custom holiday as a tombstone
        extra_lunar_holidays: Additional per-year lunar tables, merged over
            the built-in one
    """

    def __init__(
        self,
        hidden_prefix: str = HIDDEN_PREFIX,
        extra_lunar_holidays: Optional[Dict[int, Dict[str, str]]] = None
    ):
        self.hidden_prefix = hidden_prefix
        self.lunar_holidays: Dict[int, Dict[str, str]] = {
            year: dict(table) for year, table in LUNAR_HOLIDAYS.items()
        }
        for year, table in (extra_lunar_holidays or {}).items():
            self._merge_lunar_table(year, table)

    def _merge_lunar_table(self, year, table: Dict[str, str]) -> None:
        """Merge one configured year table, skipping entries that are not real dates."""
        try:
            year = int(year)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring lunar holidays for invalid year {year!r}")
            return

        merged = self.lunar_holidays.setdefault(year, {})
        for month_day, name in table.items():
            try:
                month, day = (int(part) for part in str(month_day).split("-"))
                date(year, month, day)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring lunar holiday {year}-{month_day} ({name}): not a valid date")
                continue
            merged[f"{month:02d}-{day:02d}"] = name

    def is_tombstone(self, holiday: CustomHoliday) -> bool:
        """True when the custom holiday hides a public holiday. An empty prefix hides nothing."""
        prefix = self.hidden_prefix.rstrip()
        if not prefix:
            return False
        return holiday.name.startswith(prefix)

    def public_holidays(self, year: int, month: int) -> List[ResolvedHoliday]:
        """
        Fixed-date and lunar holidays of a month, before tombstones.

        A lunar entry replaces a fixed one on the same day.
        """
        table = dict(FIXED_PUBLIC_HOLIDAYS)
        table.update(self.lunar_holidays.get(year, {}))

        month_prefix = f"{month:02d}-"
        holidays = []
        for month_day, name in sorted(table.items()):
            if month_day.startswith(month_prefix):
                day = int(month_day[3:])
                holidays.append(ResolvedHoliday(date(year, month, day), name, HolidayCategory.PUBLIC))
        return holidays

    def _custom_in_month(
        self,
        year: int,
        month: int,
        custom_holidays: List[CustomHoliday]
    ) -> List[CustomHoliday]:
        return [h for h in custom_holidays if h.date.year == year and h.date.month == month]

    def resolve(
        self,
        year: int,
        month: int,
        custom_holidays: Optional[List[CustomHoliday]] = None
    ) -> HolidayCalendar:
        """
        Resolve the visible holidays of a month.

        Args:
            year: Year
            month: Month (1-12)
            custom_holidays: Admin-managed records, tombstones included

        Returns:
            HolidayCalendar de-duplicated by (date, name)
        """
        in_month = self._custom_in_month(year, month, custom_holidays or [])
        hidden_dates = {h.date for h in in_month if self.is_tombstone(h)}

        merged: List[ResolvedHoliday] = [
            h for h in self.public_holidays(year, month) if h.date not in hidden_dates
        ]
        merged.extend(
            ResolvedHoliday(h.date, h.name, HolidayCategory.CUSTOM, holiday_id=h.id)
            for h in in_month
            if not self.is_tombstone(h)
        )

        seen = set()
        unique = []
        for holiday in merged:
            pair = (holiday.date, holiday.name)
            if pair in seen:
                continue
            seen.add(pair)
            unique.append(holiday)

        return HolidayCalendar(year, month, unique)

    def visible_holidays(
        self,
        year: int,
        month: int,
        custom_holidays: Optional[List[CustomHoliday]] = None
    ) -> List[ResolvedHoliday]:
        """Holidays to display for a month, sorted by date."""
        calendar = self.resolve(year, month, custom_holidays)
        return sorted(calendar.holidays, key=lambda h: h.date)

    # ------------------------------------------------------------------
    # Admin holiday management
    # ------------------------------------------------------------------
    def add_custom_holiday(
        self,
        custom_holidays: List[CustomHoliday],
        holiday_date: Optional[date],
        name: str,
        now: Optional[datetime] = None
    ) -> List[CustomHoliday]:
        """
        Return a new list with an admin-added holiday appended.

        Raises:
            ValidationError: If the date is missing or the name is blank
        """
        name = (name or "").strip()
        if holiday_date is None or not name:
            raise ValidationError("กรุณาระบุวันที่และชื่อวันหยุด")

        now = now or datetime.now()
        holiday = CustomHoliday(
            id=str(int(now.timestamp() * 1000)),
            date=holiday_date,
            name=name,
        )
        return list(custom_holidays) + [holiday]

    def delete_holiday(
        self,
        custom_holidays: List[CustomHoliday],
        holiday: Union[CustomHoliday, ResolvedHoliday],
        now: Optional[datetime] = None
    ) -> List[CustomHoliday]:
        """
        Return a new list with a holiday removed from display.

        Custom holidays are dropped by id. Public holidays cannot be
        removed from the fixed table, so a tombstone is added instead.
        """
        if isinstance(holiday, CustomHoliday):
            return [h for h in custom_holidays if h.id != holiday.id]
        if holiday.category == HolidayCategory.CUSTOM:
            return [h for h in custom_holidays if h.id != holiday.holiday_id]

        now = now or datetime.now()
        tombstone = CustomHoliday(
            id=f"hidden_{holiday.date.isoformat()}_{int(now.timestamp() * 1000)}",
            date=holiday.date,
            name=f"{self.hidden_prefix}{holiday.name}",
        )
        return list(custom_holidays) + [tombstone]
