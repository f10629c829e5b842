"""
Excel Writer Module

Generates the printable monthly schedule workbook with styling.
One sheet per staff class plus a holiday summary sheet.
"""

import re
from datetime import date
from pathlib import Path
from typing import Dict, Optional

from openpyxl import Workbook
from openpyxl.styles import (
    Font, PatternFill, Alignment, Border, Side
)
from openpyxl.utils import get_column_letter

from domain.entities import (
    MonthlyScheduleReport, RenderedCell, ScheduleSection, ShiftSlot
)
from domain.holiday_resolver import is_weekend, month_dates
from infrastructure.logger import get_logger

logger = get_logger("ExcelWriter")

THAI_WEEKDAY_ABBR = ['จ', 'อ', 'พ', 'พฤ', 'ศ', 'ส', 'อา']

SLOT_LABELS = {
    ShiftSlot.MORNING: "เช้า",
    ShiftSlot.AFTERNOON: "บ่าย",
    None: "",
}


def format_filename(pattern: str, year: int, month: int) -> str:
    """Fill {year} and {month} (zero-padded) into a filename pattern."""
    return pattern.format(year=year, month=f"{month:02d}")


_HEX_COLOR = re.compile(r'^(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$')


def _hex(color: Optional[str]) -> Optional[str]:
    """
    '#ff0000' -> 'FF0000' as openpyxl expects. Short '#f00' is expanded.

    Returns None (with a warning) for values that are not hex colors.
    """
    if not color:
        return None
    value = color.strip().lstrip('#')
    if not _HEX_COLOR.match(value):
        logger.warning(f"Ignoring invalid cell color {color!r}")
        return None
    if len(value) == 3:
        value = ''.join(ch * 2 for ch in value)
    return value.upper()


class ScheduleExcelWriter:
    """
    Writes a MonthlyScheduleReport to an xlsx workbook.

    Sheet layout per staff class:
    - Row 1: Name | Slot | day columns 1..N | รวมเวร | OT | ค่าเวร
    - Full-time staff: two rows (morning, afternoon) with merged name
    - Part-time staff: one row
    - Footer rows: daily headcount for ด (night), ช (morning), บ (afternoon)

    Weekend and holiday columns are shaded gray.
    """

    COLORS = {
        'gray': PatternFill(start_color='D3D3D3', end_color='D3D3D3', fill_type='solid'),
        'header': PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid'),
        'summary': PatternFill(start_color='FFF2CC', end_color='FFF2CC', fill_type='solid'),
    }

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    THICK_SIDE = Side(style='medium')
    THIN_SIDE = Side(style='thin')

    def __init__(self):
        self.wb: Optional[Workbook] = None

    def create_report(self, report: MonthlyScheduleReport, output_path: Path) -> Path:
        """
        Create the workbook and save it.

        Args:
            report: Report to write
            output_path: Path to save the Excel file

        Returns:
            Path to the created file
        """
        self.wb = Workbook()

        # Remove default sheet
        default_sheet = self.wb.active
        self.wb.remove(default_sheet)

        for section in report.sections:
            ws = self.wb.create_sheet(section.title)
            self._write_section(ws, section, report)

        ws = self.wb.create_sheet("วันหยุด")
        self._write_holidays(ws, report)

        self.wb.save(output_path)
        return output_path

    def _header_cell(self, ws, row: int, col: int, value, rotate: bool = False):
        cell = ws.cell(row, col, value)
        cell.font = Font(bold=True, color='FFFFFF', size=9 if rotate else 11)
        cell.fill = self.COLORS['header']
        if rotate:
            cell.alignment = Alignment(horizontal='center', text_rotation=90)
        else:
            cell.alignment = Alignment(horizontal='center', vertical='center')
        cell.border = self.BORDER
        return cell

    def _style_cell(self, cell, rendered: Optional[RenderedCell], shaded: bool):
        cell.border = self.BORDER
        cell.alignment = Alignment(horizontal='center', vertical='center')

        if rendered is None:
            if shaded:
                cell.fill = self.COLORS['gray']
            return

        cell.value = rendered.text
        cell.font = Font(
            color=_hex(rendered.text_color),
            bold=rendered.bold,
            italic=rendered.italic,
            underline='single' if rendered.underline else None,
        )
        background = _hex(rendered.background_color)
        if background:
            cell.fill = PatternFill(start_color=background, end_color=background, fill_type='solid')
        elif shaded:
            cell.fill = self.COLORS['gray']

    def _write_section(self, ws, section: ScheduleSection, report: MonthlyScheduleReport):
        """Write one staff class sheet."""
        days = month_dates(report.year, report.month)
        holiday_dates = report.holiday_dates
        shaded: Dict[date, bool] = {d: is_weekend(d) or d in holiday_dates for d in days}

        # Day columns start after name and slot
        day_to_col = {d: i + 3 for i, d in enumerate(days)}
        total_col = len(days) + 3
        ot_col = total_col + 1
        pay_col = total_col + 2

        self._header_cell(ws, 1, 1, "ชื่อ")
        self._header_cell(ws, 1, 2, "เวร")
        for d in days:
            label = f"{d.day} {THAI_WEEKDAY_ABBR[d.weekday()]}"
            cell = self._header_cell(ws, 1, day_to_col[d], label, rotate=True)
            if shaded[d]:
                cell.fill = self.COLORS['gray']
                cell.font = Font(bold=True, size=9)
        self._header_cell(ws, 1, total_col, "รวมเวร")
        self._header_cell(ws, 1, ot_col, "OT")
        self._header_cell(ws, 1, pay_col, "ค่าเวร")

        totals_by_id = {t.staff.id: t for t in section.totals}

        # Rows of one staff member are consecutive
        groups = []
        for row in section.rows:
            if groups and groups[-1][0].staff.id == row.staff.id:
                groups[-1].append(row)
            else:
                groups.append([row])

        current_row = 2
        for group in groups:
            staff = group[0].staff
            first_row = current_row
            last_row = current_row + len(group) - 1

            for offset, schedule_row in enumerate(group):
                r = first_row + offset
                ws.cell(r, 1).border = self.BORDER
                slot_cell = ws.cell(r, 2, SLOT_LABELS.get(schedule_row.slot, ""))
                slot_cell.border = self.BORDER
                slot_cell.alignment = Alignment(horizontal='center')
                for d in days:
                    self._style_cell(ws.cell(r, day_to_col[d]), schedule_row.cells.get(d), shaded[d])

            name_cell = ws.cell(first_row, 1, staff.name)
            name_cell.font = Font(bold=True)
            name_cell.alignment = Alignment(horizontal='center', vertical='center')

            totals = totals_by_id.get(staff.id)
            values = (
                (total_col, totals.total_shifts if totals else 0),
                (ot_col, totals.overtime_shifts if totals else 0),
                (pay_col, totals.shift_pay_shifts if totals else 0),
            )
            for col, value in values:
                cell = ws.cell(first_row, col, value)
                cell.alignment = Alignment(horizontal='center', vertical='center')
                cell.fill = self.COLORS['summary']
                cell.border = self.BORDER
                for r in range(first_row + 1, last_row + 1):
                    ws.cell(r, col).border = self.BORDER

            if last_row > first_row:
                ws.merge_cells(start_row=first_row, start_column=1, end_row=last_row, end_column=1)
                for col in (total_col, ot_col, pay_col):
                    ws.merge_cells(start_row=first_row, start_column=col, end_row=last_row, end_column=col)

            self._apply_person_border(ws, first_row, last_row, pay_col)
            current_row = last_row + 1

        # Daily headcount footer
        count_rows = (
            ("ด", lambda c: c.night_count),
            ("ช", lambda c: c.morning_count),
            ("บ", lambda c: c.afternoon_count),
        )
        for label, getter in count_rows:
            ws.merge_cells(start_row=current_row, start_column=1, end_row=current_row, end_column=2)
            label_cell = ws.cell(current_row, 1, label)
            label_cell.font = Font(bold=True)
            label_cell.alignment = Alignment(horizontal='center')
            label_cell.border = self.BORDER
            for d in days:
                counts = section.daily_counts.get(d)
                cell = ws.cell(current_row, day_to_col[d], getter(counts) if counts else 0)
                cell.alignment = Alignment(horizontal='center')
                cell.border = self.BORDER
                if shaded[d]:
                    cell.fill = self.COLORS['gray']
            current_row += 1

        # Adjust column widths
        ws.column_dimensions['A'].width = 20
        ws.column_dimensions['B'].width = 6
        for col in day_to_col.values():
            ws.column_dimensions[get_column_letter(col)].width = 5
        for col in (total_col, ot_col, pay_col):
            ws.column_dimensions[get_column_letter(col)].width = 8

        # Set header row height for rotated date text
        ws.row_dimensions[1].height = 40
        ws.freeze_panes = ws.cell(2, 3)

    def _write_holidays(self, ws, report: MonthlyScheduleReport):
        """Write the holiday list and the month's day counts."""
        self._header_cell(ws, 1, 1, "วันที่")
        self._header_cell(ws, 1, 2, "วันหยุด")

        row = 2
        for holiday in report.holidays:
            date_cell = ws.cell(row, 1, holiday.date.strftime('%d/%m/%Y'))
            date_cell.border = self.BORDER
            name_cell = ws.cell(row, 2, holiday.name)
            name_cell.border = self.BORDER
            row += 1

        row += 1
        counts = report.day_counts
        summary = (
            ("จำนวนวันทั้งหมด", counts.total_days),
            ("วันทำการ", counts.working_days),
            ("วันหยุด", counts.holiday_days),
            ("เสาร์-อาทิตย์", counts.weekend_days),
            ("วันหยุดนักขัตฤกษ์", counts.public_holiday_days),
        )
        for label, value in summary:
            ws.cell(row, 1, label).font = Font(bold=True)
            ws.cell(row, 2, value)
            row += 1

        if report.published_at:
            ws.cell(row + 1, 1, "เผยแพร่เมื่อ").font = Font(bold=True)
            ws.cell(row + 1, 2, report.published_at)

        ws.column_dimensions['A'].width = 20
        ws.column_dimensions['B'].width = 45

    def _apply_person_border(self, ws, first_row: int, last_row: int, last_col: int):
        """
        Draw a medium outline around one staff member's rows.

        Args:
            ws: Worksheet
            first_row: First row of the staff member
            last_row: Last row of the staff member
            last_col: Last column of the table
        """
        for r in range(first_row, last_row + 1):
            for col in range(1, last_col + 1):
                cell = ws.cell(r, col)
                cell.border = Border(
                    top=self.THICK_SIDE if r == first_row else self.THIN_SIDE,
                    bottom=self.THICK_SIDE if r == last_row else self.THIN_SIDE,
                    left=self.THICK_SIDE if col == 1 else self.THIN_SIDE,
                    right=self.THICK_SIDE if col == last_col else self.THIN_SIDE
                )
