"""
Record Store

Maps the three record collections (users, planned tasks, EOD reports)
and the current-session slot onto a KeyValueStore.

DESIGN DECISION: Every collection is stored as one JSON array under one
key, and every write is an explicit whole-collection read-modify-write:

    load full collection -> find-by-id-or-append -> persist full collection

There is no locking. If two writers interleave on the same collection,
the last one to persist wins and the other's change is lost. That is
accepted behaviour for a single-user, single-browser tool and is kept
visible here rather than hidden behind an atomic-looking API.

The store performs no business validation. Callers hand it complete
records and are responsible for one-record-per-(user, date).
"""

import json
from typing import Callable, Optional, TypeVar

import structlog
from pydantic import ValidationError

from worktrack.audit import AuditLogger
from worktrack.models.audit import AuditEventBuilder
from worktrack.models.records import (
    EndOfDayReport,
    PlannedTask,
    StoredRecord,
    User,
    UserRole,
)
from worktrack.services.storage.interface import (
    CorruptedDataError,
    KeyValueStore,
    NotFoundError,
)


USERS = "users"
PLANNED_TASKS = "planned_tasks"
EOD_REPORTS = "eod_reports"
CURRENT_USER = "current_user"

# Seeded on first run when the users collection is empty
DEFAULT_USERS = [
    {
        "id": "1",
        "email": "admin@company.com",
        "name": "System Administrator",
        "role": UserRole.ADMIN,
        "department": "IT",
        "position": "Administrator",
        "phone": "+1-555-0001",
    },
    {
        "id": "2",
        "email": "john.doe@company.com",
        "name": "John Doe",
        "role": UserRole.EMPLOYEE,
        "department": "Engineering",
        "position": "Software Developer",
        "phone": "+1-555-0002",
    },
    {
        "id": "3",
        "email": "jane.smith@company.com",
        "name": "Jane Smith",
        "role": UserRole.EMPLOYEE,
        "department": "Marketing",
        "position": "Marketing Specialist",
        "phone": "+1-555-0003",
    },
]


RecordT = TypeVar("RecordT", bound=StoredRecord)

logger = structlog.get_logger(__name__)


class RecordStore:
    """
    Whole-collection CRUD over users, planned tasks and EOD reports.

    Missing keys (and empty-string values) read as empty collections.
    Anything else that fails to decode raises CorruptedDataError rather
    than being treated as empty.
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        key_prefix: str = "worktrack_",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._kv = kv_store
        self._prefix = key_prefix
        self._audit_logger = audit_logger

    def key_for(self, slot: str) -> str:
        """Storage key for a collection or the session slot."""
        return f"{self._prefix}{slot}"

    # -------------------------------------------------------------------------
    # Collection plumbing
    # -------------------------------------------------------------------------

    def _read_collection(self, slot: str, model: type[RecordT]) -> list[RecordT]:
        key = self.key_for(slot)
        raw = self._kv.get(key)
        if not raw:
            return []

        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptedDataError(f"Collection {key!r} is not valid JSON: {e}") from e

        if not isinstance(items, list):
            raise CorruptedDataError(
                f"Collection {key!r} must be a JSON array, found {type(items).__name__}"
            )

        try:
            return [model.model_validate(item) for item in items]
        except ValidationError as e:
            raise CorruptedDataError(
                f"Collection {key!r} holds an invalid {model.__name__}: {e}"
            ) from e

    def _write_collection(self, slot: str, records: list[StoredRecord]) -> None:
        # Encode first: a serialization error must not reach the substrate
        payload = json.dumps([record.to_storage_dict() for record in records])
        self._kv.set(self.key_for(slot), payload)
        logger.debug("collection_written", slot=slot, count=len(records))

    def _upsert(self, slot: str, model: type[RecordT], record: RecordT) -> bool:
        """Replace the record with the same id, or append it. Returns True if appended."""
        records = self._read_collection(slot, model)
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                self._write_collection(slot, records)
                return False

        records.append(record)
        self._write_collection(slot, records)
        return True

    def _remove_where(
        self,
        slot: str,
        model: type[RecordT],
        predicate: Callable[[RecordT], bool],
    ) -> int:
        """Drop every matching record. Returns how many were removed."""
        records = self._read_collection(slot, model)
        kept = [record for record in records if not predicate(record)]
        removed = len(records) - len(kept)
        if removed:
            self._write_collection(slot, kept)
        return removed

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def list_users(self) -> list[User]:
        return self._read_collection(USERS, User)

    def save_user(self, user: User) -> None:
        created = self._upsert(USERS, User, user)
        if self._audit_logger:
            self._audit_logger.log(
                AuditEventBuilder.user_saved(user.id, user.email, created)
            )

    def delete_user(self, user_id: str) -> bool:
        """
        Delete a user and everything they own.

        Planned tasks and EOD reports with this user_id are removed too.
        Returns True if the user existed.
        """
        removed_user = self._remove_where(USERS, User, lambda u: u.id == user_id)
        removed_tasks = self._remove_where(
            PLANNED_TASKS, PlannedTask, lambda t: t.user_id == user_id
        )
        removed_reports = self._remove_where(
            EOD_REPORTS, EndOfDayReport, lambda r: r.user_id == user_id
        )

        if self._audit_logger and (removed_user or removed_tasks or removed_reports):
            self._audit_logger.log(
                AuditEventBuilder.user_deleted(user_id, removed_tasks, removed_reports)
            )

        return removed_user > 0

    def get_user(self, user_id: str) -> Optional[User]:
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None

    def require_user(self, user_id: str) -> User:
        user = self.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    def find_user_by_email(self, email: str) -> Optional[User]:
        """Exact, case-sensitive email match."""
        for user in self.list_users():
            if user.email == email:
                return user
        return None

    # -------------------------------------------------------------------------
    # Planned tasks
    # -------------------------------------------------------------------------

    def list_planned_tasks(self) -> list[PlannedTask]:
        return self._read_collection(PLANNED_TASKS, PlannedTask)

    def save_planned_task(self, task: PlannedTask) -> None:
        self._upsert(PLANNED_TASKS, PlannedTask, task)

    def delete_planned_task(self, task_id: str) -> bool:
        removed = self._remove_where(PLANNED_TASKS, PlannedTask, lambda t: t.id == task_id)
        if removed and self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.record_deleted("planned_task", task_id))
        return removed > 0

    def find_planned_task(self, user_id: str, date: str) -> Optional[PlannedTask]:
        for task in self.list_planned_tasks():
            if task.user_id == user_id and task.date == date:
                return task
        return None

    # -------------------------------------------------------------------------
    # End-of-day reports
    # -------------------------------------------------------------------------

    def list_eod_reports(self) -> list[EndOfDayReport]:
        return self._read_collection(EOD_REPORTS, EndOfDayReport)

    def save_eod_report(self, report: EndOfDayReport) -> None:
        self._upsert(EOD_REPORTS, EndOfDayReport, report)

    def delete_eod_report(self, report_id: str) -> bool:
        removed = self._remove_where(EOD_REPORTS, EndOfDayReport, lambda r: r.id == report_id)
        if removed and self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.record_deleted("eod_report", report_id))
        return removed > 0

    def find_eod_report(self, user_id: str, date: str) -> Optional[EndOfDayReport]:
        for report in self.list_eod_reports():
            if report.user_id == user_id and report.date == date:
                return report
        return None

    # -------------------------------------------------------------------------
    # Session slot
    # -------------------------------------------------------------------------

    def get_session(self) -> Optional[User]:
        key = self.key_for(CURRENT_USER)
        raw = self._kv.get(key)
        if not raw:
            return None

        try:
            return User.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptedDataError(f"Session slot {key!r} is invalid: {e}") from e

    def set_session(self, user: User) -> None:
        payload = json.dumps(user.to_storage_dict())
        self._kv.set(self.key_for(CURRENT_USER), payload)

    def clear_session(self) -> None:
        self._kv.remove(self.key_for(CURRENT_USER))

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------

    def initialize(self) -> bool:
        """
        Seed the default admin and employees if there are no users.

        Idempotent: a populated users collection is left untouched.
        Returns True if seeding happened.
        """
        if self.list_users():
            return False

        users = [User(**attrs) for attrs in DEFAULT_USERS]
        self._write_collection(USERS, users)

        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.store_seeded(len(users)))
        else:
            logger.info("store_seeded", user_count=len(users))

        return True
