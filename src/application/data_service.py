"""
Data Service Module

Saves and loads the draft documents and the published snapshot.

Logical documents:
- drafts/schedule     = {schedule, customHolidays, savedAt}
- drafts/assignments  = {assignments, savedAt}
- published/current   = {publishedSchedule, publishedAssignments,
                         publishedCustomHolidays, publishedAt}
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from domain.entities import CustomHoliday, ScheduleEntry, WorkAssignment
from infrastructure.document_store import DocumentStore, StoreError
from infrastructure.logger import get_logger

logger = get_logger("DataService")

DRAFTS = "drafts"
PUBLISHED = "published"
SCHEDULE_DRAFT_KEY = "schedule"
ASSIGNMENTS_DRAFT_KEY = "assignments"
PUBLISHED_KEY = "current"


class DataServiceError(Exception):
    """
    Raised when a save or publish fails.

    The message is the notification shown to the user.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass
class ScheduleDraft:
    """Loaded schedule draft."""
    schedule: List[ScheduleEntry] = field(default_factory=list)
    custom_holidays: List[CustomHoliday] = field(default_factory=list)


@dataclass
class PublishedSnapshot:
    """Loaded published snapshot."""
    schedule: List[ScheduleEntry] = field(default_factory=list)
    assignments: List[WorkAssignment] = field(default_factory=list)
    custom_holidays: List[CustomHoliday] = field(default_factory=list)
    published_at: Optional[str] = None


def strip_absent(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Remove fields whose value is None, including inside "formatting".

    An emptied formatting object is removed as well.
    """
    cleaned = {key: value for key, value in record.items() if value is not None}
    formatting = cleaned.get("formatting")
    if isinstance(formatting, dict):
        formatting = {key: value for key, value in formatting.items() if value is not None}
        if formatting:
            cleaned["formatting"] = formatting
        else:
            del cleaned["formatting"]
    return cleaned


def _clean_records(items: Iterable[Any]) -> List[Dict[str, Any]]:
    return [strip_absent(item.to_dict()) for item in items if item is not None]


def _parse_records(raw: Any, factory: Callable, label: str) -> List[Any]:
    """Parse stored records, skipping malformed ones."""
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning(f"Field {label} is not a list, using empty collection")
        return []

    records = []
    for item in raw:
        try:
            records.append(factory(item))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping malformed {label} record {item!r}: {e}")
    return records


class DataService:
    """
    Whole-document persistence of drafts and the published snapshot.

    Saves raise DataServiceError on failure; loads return None on failure
    or when the document does not exist.
    """

    def __init__(self, store: DocumentStore, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or datetime.now

    def _timestamp(self) -> str:
        return self.clock().isoformat()

    def _get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        try:
            return self.store.get_document(collection, key)
        except StoreError as e:
            logger.error(f"Error loading {collection}/{key}: {e}")
            return None

    # ------------------------------------------------------------------
    # Drafts
    # ------------------------------------------------------------------
    def save_schedule_draft(
        self,
        schedule: List[ScheduleEntry],
        custom_holidays: List[CustomHoliday]
    ) -> None:
        """Replace the schedule draft document."""
        try:
            data = {
                "schedule": _clean_records(schedule),
                "customHolidays": _clean_records(custom_holidays),
                "savedAt": self._timestamp(),
            }
            self.store.put_document(DRAFTS, SCHEDULE_DRAFT_KEY, data)
        except StoreError as e:
            logger.error(f"Error saving schedule draft: {e}")
            raise DataServiceError("ไม่สามารถบันทึกร่างตารางเวรได้") from e
        logger.info(
            f"Saved schedule draft: {len(data['schedule'])} entries, "
            f"{len(data['customHolidays'])} custom holidays"
        )

    def save_assignments_draft(self, assignments: List[WorkAssignment]) -> None:
        """Replace the assignments draft document."""
        try:
            data = {
                "assignments": _clean_records(assignments),
                "savedAt": self._timestamp(),
            }
            self.store.put_document(DRAFTS, ASSIGNMENTS_DRAFT_KEY, data)
        except StoreError as e:
            logger.error(f"Error saving assignments draft: {e}")
            raise DataServiceError("ไม่สามารถบันทึกร่างตารางมอบหมายงานได้") from e
        logger.info(f"Saved assignments draft: {len(data['assignments'])} records")

    def load_schedule_draft(self) -> Optional[ScheduleDraft]:
        """Load the schedule draft, or None if absent or unreadable."""
        data = self._get(DRAFTS, SCHEDULE_DRAFT_KEY)
        if data is None:
            return None
        return ScheduleDraft(
            schedule=_parse_records(data.get("schedule"), ScheduleEntry.from_dict, "schedule"),
            custom_holidays=_parse_records(
                data.get("customHolidays"), CustomHoliday.from_dict, "customHolidays"
            ),
        )

    def load_assignments_draft(self) -> Optional[List[WorkAssignment]]:
        """Load the assignments draft, or None if absent or unreadable."""
        data = self._get(DRAFTS, ASSIGNMENTS_DRAFT_KEY)
        if data is None:
            return None
        return _parse_records(data.get("assignments"), WorkAssignment.from_dict, "assignments")

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(
        self,
        schedule: List[ScheduleEntry],
        assignments: List[WorkAssignment],
        custom_holidays: List[CustomHoliday]
    ) -> str:
        """
        Write schedule, assignments and holidays as one published snapshot.

        Returns:
            The publishedAt timestamp
        """
        try:
            published_at = self._timestamp()
            data = {
                "publishedSchedule": _clean_records(schedule),
                "publishedAssignments": _clean_records(assignments),
                "publishedCustomHolidays": _clean_records(custom_holidays),
                "publishedAt": published_at,
            }
            self.store.put_document(PUBLISHED, PUBLISHED_KEY, data)
        except StoreError as e:
            logger.error(f"Error publishing data: {e}")
            raise DataServiceError("ไม่สามารถเผยแพร่ข้อมูลได้") from e
        logger.info(f"Published snapshot at {published_at}")
        return published_at

    def load_published(self) -> Optional[PublishedSnapshot]:
        """Load the published snapshot, or None if absent or unreadable."""
        data = self._get(PUBLISHED, PUBLISHED_KEY)
        if data is None:
            return None
        return PublishedSnapshot(
            schedule=_parse_records(
                data.get("publishedSchedule"), ScheduleEntry.from_dict, "publishedSchedule"
            ),
            assignments=_parse_records(
                data.get("publishedAssignments"), WorkAssignment.from_dict, "publishedAssignments"
            ),
            custom_holidays=_parse_records(
                data.get("publishedCustomHolidays"), CustomHoliday.from_dict,
                "publishedCustomHolidays"
            ),
            published_at=data.get("publishedAt"),
        )
