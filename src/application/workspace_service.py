"""
Workspace Service Module

Application layer service holding one session's state: the admin's draft
schedule, assignments and custom holidays, and the published snapshot
that staff see. Every action returns an OperationResult carrying the
notification to show; a failed action leaves the state untouched.
"""

import copy
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from config.config_manager import AggregationRules
from domain.assignment_filter import (
    AssignmentDraft, initial_shift_batch, save_shift_assignments, staff_on_shift
)
from domain.entities import (
    CustomHoliday, ResolvedHoliday, ScheduleEntry, ShiftSlot, Staff, WorkAssignment
)
from domain.errors import ValidationError
from domain.holiday_resolver import HolidayResolver
from domain.personal_calendar import PersonalDay, build_personal_month
from domain import schedule_editor
from domain.shift_catalog import ShiftCatalog
from domain.staff_roster import StaffRoster
from application.auth_service import AuthService
from application.data_service import DataService, DataServiceError
from infrastructure.logger import get_logger

logger = get_logger("WorkspaceService")


@dataclass
class OperationResult:
    """Outcome of a user action."""
    success: bool
    message: str = ""


@dataclass
class WorkspaceState:
    """Draft and published collections of a session."""
    schedule: List[ScheduleEntry] = field(default_factory=list)
    assignments: List[WorkAssignment] = field(default_factory=list)
    custom_holidays: List[CustomHoliday] = field(default_factory=list)
    published_schedule: List[ScheduleEntry] = field(default_factory=list)
    published_assignments: List[WorkAssignment] = field(default_factory=list)
    published_custom_holidays: List[CustomHoliday] = field(default_factory=list)


class WorkspaceService:
    """
    Drives the draft/publish workflow of a session.

    Editing actions require an admin session; staff sessions read the
    published snapshot only.
    """

    def __init__(
        self,
        data_service: DataService,
        auth_service: AuthService,
        roster: Optional[StaffRoster] = None,
        catalog: Optional[ShiftCatalog] = None,
        resolver: Optional[HolidayResolver] = None,
        rules: Optional[AggregationRules] = None
    ):
        self.data_service = data_service
        self.auth_service = auth_service
        self.roster = roster or StaffRoster()
        self.catalog = catalog or ShiftCatalog()
        self.resolver = resolver or HolidayResolver()
        self.rules = rules or AggregationRules()

        self.state = WorkspaceState()
        self.is_admin = False
        self.current_staff_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    def load_initial(self) -> OperationResult:
        """Load the published snapshot and both drafts. Absent documents are skipped."""
        published = self.data_service.load_published()
        if published is not None:
            self.state.published_schedule = published.schedule
            self.state.published_assignments = published.assignments
            self.state.published_custom_holidays = published.custom_holidays

        schedule_draft = self.data_service.load_schedule_draft()
        if schedule_draft is not None:
            self.state.schedule = schedule_draft.schedule
            self.state.custom_holidays = schedule_draft.custom_holidays

        assignments = self.data_service.load_assignments_draft()
        if assignments is not None:
            self.state.assignments = assignments

        logger.info(
            f"Loaded workspace: {len(self.state.schedule)} draft entries, "
            f"{len(self.state.published_schedule)} published entries"
        )
        return OperationResult(True)

    def admin_login(self, username: str, password: str) -> OperationResult:
        if self.auth_service.admin_login(username, password):
            self.is_admin = True
            return OperationResult(True, "เข้าสู่ระบบสำเร็จ")
        return OperationResult(False, "ชื่อผู้ใช้หรือรหัสผ่านไม่ถูกต้อง")

    def staff_login(self, staff_id: str, password: str) -> OperationResult:
        if self.auth_service.login_staff(staff_id, password):
            self.current_staff_id = staff_id
            return OperationResult(True, "เข้าสู่ระบบสำเร็จ")
        return OperationResult(False, "รหัสเจ้าหน้าที่หรือรหัสผ่านไม่ถูกต้อง")

    def register_staff(self, staff_id: str, password: str, confirm_password: str) -> OperationResult:
        if password != confirm_password:
            return OperationResult(False, "รหัสผ่านไม่ตรงกัน")
        if self.auth_service.register_staff(staff_id, password):
            return OperationResult(True, "สมัครสมาชิกสำเร็จ กรุณาเข้าสู่ระบบ")
        return OperationResult(False, "มีบัญชีนี้อยู่แล้ว")

    def logout(self) -> OperationResult:
        self.is_admin = False
        self.current_staff_id = None
        return OperationResult(True, "ออกจากระบบสำเร็จ")

    def _require_admin(self) -> None:
        if not self.is_admin:
            raise PermissionError("Editing requires an admin session")

    # ------------------------------------------------------------------
    # Draft editing
    # ------------------------------------------------------------------
    def _staff(self, staff_id: str) -> Staff:
        staff = self.roster.get_staff_by_id(staff_id)
        if staff is None:
            raise ValidationError(f"ไม่พบเจ้าหน้าที่ {staff_id}")
        return staff

    def commit_cell(
        self,
        staff_id: str,
        d: date,
        slot: Optional[ShiftSlot],
        text: str
    ) -> None:
        """Commit typed text into a cell of the draft schedule."""
        self._require_admin()
        staff = self._staff(staff_id)
        self.state.schedule = schedule_editor.commit_cell(
            self.state.schedule, staff, d, slot, text, self.catalog
        )

    def reset_schedule(self) -> None:
        self._require_admin()
        self.state.schedule = schedule_editor.reset_schedule()

    def add_holiday(self, holiday_date: Optional[date], name: str) -> OperationResult:
        self._require_admin()
        try:
            self.state.custom_holidays = self.resolver.add_custom_holiday(
                self.state.custom_holidays, holiday_date, name
            )
        except ValidationError as e:
            return OperationResult(False, e.message)
        return OperationResult(True)

    def delete_holiday(self, holiday: ResolvedHoliday) -> None:
        self._require_admin()
        self.state.custom_holidays = self.resolver.delete_holiday(
            self.state.custom_holidays, holiday
        )

    def staff_on_shift(self, d: date, shift: ShiftSlot, published: bool = False) -> List[Staff]:
        schedule = self.state.published_schedule if published else self.state.schedule
        return staff_on_shift(
            d, shift, schedule, self.roster, self.rules.morning_count_exclusions
        )

    def shift_batch(self, d: date, shift: ShiftSlot) -> Dict[str, AssignmentDraft]:
        """Editable batch for the staff on a draft shift."""
        return initial_shift_batch(
            d, shift, self.state.assignments, self.staff_on_shift(d, shift)
        )

    def save_shift_batch(
        self,
        d: Optional[date],
        shift: Optional[ShiftSlot],
        batch: Dict[str, AssignmentDraft]
    ) -> OperationResult:
        self._require_admin()
        try:
            self.state.assignments = save_shift_assignments(
                self.state.assignments, d, shift, batch, self.roster
            )
        except ValidationError as e:
            return OperationResult(False, e.message)
        return OperationResult(True)

    # ------------------------------------------------------------------
    # Save / publish
    # ------------------------------------------------------------------
    def save_schedule_draft(self) -> OperationResult:
        self._require_admin()
        try:
            self.data_service.save_schedule_draft(self.state.schedule, self.state.custom_holidays)
        except DataServiceError:
            return OperationResult(False, "เกิดข้อผิดพลาดในการบันทึกร่างตารางเวร")
        return OperationResult(True, "บันทึกร่างตารางเวรเรียบร้อยแล้ว")

    def save_assignments_draft(self) -> OperationResult:
        self._require_admin()
        try:
            self.data_service.save_assignments_draft(self.state.assignments)
        except DataServiceError:
            return OperationResult(False, "เกิดข้อผิดพลาดในการบันทึกร่างตารางมอบหมายงาน")
        return OperationResult(True, "บันทึกร่างตารางมอบหมายงานเรียบร้อยแล้ว")

    def publish(self) -> OperationResult:
        """Publish schedule, assignments and holidays together."""
        self._require_admin()
        try:
            self.data_service.publish(
                self.state.schedule, self.state.assignments, self.state.custom_holidays
            )
        except DataServiceError:
            return OperationResult(False, "เกิดข้อผิดพลาดในการเผยแพร่ข้อมูล")

        self.state.published_schedule = copy.deepcopy(self.state.schedule)
        self.state.published_assignments = copy.deepcopy(self.state.assignments)
        self.state.published_custom_holidays = copy.deepcopy(self.state.custom_holidays)
        return OperationResult(True, "ตารางเวรและมอบหมายงานถูกเผยแพร่แล้ว")

    # ------------------------------------------------------------------
    # Staff view
    # ------------------------------------------------------------------
    def personal_month(self, year: int, month: int) -> List[PersonalDay]:
        """The logged-in staff member's published month."""
        if self.current_staff_id is None:
            raise PermissionError("No staff member is logged in")
        staff = self._staff(self.current_staff_id)
        holidays = self.resolver.resolve(year, month, self.state.published_custom_holidays)
        return build_personal_month(
            staff, year, month,
            self.state.published_schedule,
            self.state.published_assignments,
            holidays,
            self.catalog,
        )
