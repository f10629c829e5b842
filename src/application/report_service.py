"""
Report Service Module

Application layer service that assembles the monthly schedule report and
exports it to Excel. Keeps the counting rules in the domain layer and the
workbook layout in the infrastructure layer.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional

from config.config_manager import AppConfig
from domain.entities import (
    CustomHoliday, MonthlyScheduleReport, RenderedCell, ScheduleEntry,
    ScheduleRow, ScheduleSection, Staff, StaffClass
)
from domain.holiday_resolver import HolidayResolver, month_dates
from domain.schedule_aggregator import FULL_TIME_SLOTS, ScheduleAggregator, ScheduleIndex
from domain.shift_catalog import ShiftCatalog
from domain.staff_roster import StaffRoster
from infrastructure.excel_writer import ScheduleExcelWriter, format_filename
from infrastructure.logger import get_logger

logger = get_logger("ReportService")

SECTION_TITLES = {
    StaffClass.NURSE: "พยาบาล",
    StaffClass.ASSISTANT: "ผู้ช่วย",
}


@dataclass
class ExportResult:
    """Result of an Excel export."""
    success: bool
    output_path: Optional[Path] = None
    error_message: str = ""


class ScheduleReportService:
    """
    Builds MonthlyScheduleReport objects and writes them to workbooks.

    Args:
        roster: Staff roster
        catalog: Shift catalog
        resolver: Holiday resolver
        aggregator: Schedule aggregator; built from roster and catalog if omitted
    """

    def __init__(
        self,
        roster: Optional[StaffRoster] = None,
        catalog: Optional[ShiftCatalog] = None,
        resolver: Optional[HolidayResolver] = None,
        aggregator: Optional[ScheduleAggregator] = None
    ):
        self.roster = roster or StaffRoster()
        self.catalog = catalog or ShiftCatalog()
        self.resolver = resolver or HolidayResolver()
        self.aggregator = aggregator or ScheduleAggregator(self.roster, self.catalog)

    @classmethod
    def from_config(cls, config: AppConfig, roster: Optional[StaffRoster] = None) -> "ScheduleReportService":
        """Create a service wired with the configured rules and holiday settings."""
        roster = roster or StaffRoster()
        catalog = ShiftCatalog()
        resolver = HolidayResolver(
            hidden_prefix=config.holidays.hidden_prefix,
            extra_lunar_holidays=config.holidays.extra_lunar_holidays,
        )
        aggregator = ScheduleAggregator(roster, catalog, config.rules)
        return cls(roster, catalog, resolver, aggregator)

    def _render_cell(self, staff: Staff, entry: ScheduleEntry) -> Optional[RenderedCell]:
        shift = self.catalog.get_shift(staff.staff_class, entry.shift_id)
        if shift is None:
            return None
        formatting = entry.formatting
        return RenderedCell(
            text=self.catalog.display_text(entry, shift),
            text_color=self.catalog.text_color(entry, shift),
            background_color=self.catalog.background_color(entry, shift),
            bold=bool(formatting and formatting.bold),
            italic=bool(formatting and formatting.italic),
            underline=bool(formatting and formatting.underline),
        )

    def _build_rows(
        self,
        staff_list: List[Staff],
        index: ScheduleIndex,
        days: List[date]
    ) -> List[ScheduleRow]:
        rows = []
        for staff in staff_list:
            slots = [None] if staff.is_part_time else list(FULL_TIME_SLOTS)
            for slot in slots:
                row = ScheduleRow(staff=staff, slot=slot)
                for d in days:
                    entry = index.get(staff.id, d, slot)
                    if entry is None:
                        continue
                    cell = self._render_cell(staff, entry)
                    if cell is not None:
                        row.cells[d] = cell
                rows.append(row)
        return rows

    def build_monthly_report(
        self,
        year: int,
        month: int,
        entries: List[ScheduleEntry],
        custom_holidays: Optional[List[CustomHoliday]] = None,
        published_at: Optional[str] = None
    ) -> MonthlyScheduleReport:
        """
        Assemble the report of a month.

        Args:
            year: Year
            month: Month (1-12)
            entries: Schedule entries (any month; other months are ignored)
            custom_holidays: Custom holiday records, tombstones included
            published_at: Timestamp printed on the report, if any

        Returns:
            MonthlyScheduleReport with one section per staff class
        """
        calendar = self.resolver.resolve(year, month, custom_holidays)
        index = ScheduleIndex(entries)
        days = month_dates(year, month)

        sections = []
        for staff_class in (StaffClass.NURSE, StaffClass.ASSISTANT):
            staff_list = self.roster.by_class(staff_class)
            sections.append(ScheduleSection(
                staff_class=staff_class,
                title=SECTION_TITLES[staff_class],
                rows=self._build_rows(staff_list, index, days),
                totals=self.aggregator.monthly_totals(index, staff_list, year, month),
                daily_counts=self.aggregator.daily_shift_counts(index, staff_list, year, month),
            ))

        report = MonthlyScheduleReport(
            year=year,
            month=month,
            day_counts=self.aggregator.monthly_day_counts(year, month, calendar),
            holidays=sorted(calendar.holidays, key=lambda h: h.date),
            sections=sections,
            published_at=published_at,
        )
        logger.info(
            f"Built report {year}-{month:02d}: {report.day_counts.working_days} working days, "
            f"{len(report.holidays)} holidays"
        )
        return report

    def export_excel(
        self,
        report: MonthlyScheduleReport,
        output_dir: Path,
        filename_pattern: str = "ตารางเวร_{year}_{month}.xlsx"
    ) -> ExportResult:
        """
        Write a report to <output_dir>/<filename_pattern>.

        Returns:
            ExportResult; failures are logged and reported, not raised
        """
        output_path = Path(output_dir) / format_filename(filename_pattern, report.year, report.month)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            ScheduleExcelWriter().create_report(report, output_path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to export {output_path}: {e}")
            return ExportResult(success=False, output_path=output_path, error_message=str(e))

        logger.info(f"Exported schedule to {output_path}")
        return ExportResult(success=True, output_path=output_path)

