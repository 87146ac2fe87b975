"""
Main Orchestrator for WorkTrack

This module ties together all the components and defines the
end-to-end submission flows:
1. Planned tasks (check cap → validate → find today's record → save)
2. End-of-day report (same steps, plus hours and next-day plan)

DESIGN DECISION: The orchestrator is the caller side of the edit-count
contract. The first save of a day is stored with edit_count=0, every
resubmission reuses the record's id and created_at and bumps
edit_count by exactly one. The store and governance layers never do
this themselves.

Storage faults while checking the cap or saving are reported back as a
generic failure message; prior state is left exactly as it was.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

import structlog

from worktrack.audit import AuditLogger, configure_logging
from worktrack.auth import Authenticator
from worktrack.config import Settings, StorageSettings, get_settings
from worktrack.governance import EditGovernance
from worktrack.models.audit import AuditEvent, AuditEventBuilder
from worktrack.models.records import (
    DailyRecord,
    EndOfDayReport,
    PlannedTask,
    RecordType,
    User,
    get_today_string,
    utc_now,
)
from worktrack.models.submission import SubmissionOutcome, ValidationResult
from worktrack.reports import ReportQueries
from worktrack.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    RecordStore,
    StorageError,
)
from worktrack.validation import SubmissionValidator


logger = structlog.get_logger(__name__)

SAVE_FAILED_MESSAGES = {
    RecordType.PLANNED: "Failed to save tasks. Please try again.",
    RecordType.EOD: "Failed to submit report. Please try again.",
}


class SubmissionFlow:
    """
    Orchestrates daily submissions.

    Flow:
    1. Cap → refuse if the day's record has used up its edits
    2. Validate → drop blank entries, check required fields and hours
    3. Lookup → find the existing record for (user, date)
    4. Build → complete record, reusing id/created_at, bumping edit_count
    5. Save → whole-collection write through the RecordStore
    """

    def __init__(
        self,
        store: RecordStore,
        governance: EditGovernance,
        validator: Optional[SubmissionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._governance = governance
        self._validator = validator or SubmissionValidator(governance)
        self._audit_logger = audit_logger

    def _audit(self, event: AuditEvent) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)

    def _rejected(
        self,
        record_type: RecordType,
        user: User,
        day: str,
        result: ValidationResult,
    ) -> SubmissionOutcome:
        self._audit(AuditEventBuilder.submission_rejected(
            record_type=record_type.value,
            user_id=user.id,
            date=day,
            issues=[issue.model_dump() for issue in result.issues],
        ))
        return SubmissionOutcome(
            success=False,
            record_type=record_type,
            message=result.first_error or "Submission rejected.",
            issues=result.issues,
        )

    def _save_failed(
        self,
        record_type: RecordType,
        user: User,
        error: StorageError,
    ) -> SubmissionOutcome:
        self._audit(AuditEventBuilder.save_failed(record_type.value, user.id, str(error)))
        return SubmissionOutcome(
            success=False,
            record_type=record_type,
            message=SAVE_FAILED_MESSAGES[record_type],
        )

    def _check_cap(
        self,
        record_type: RecordType,
        user: User,
        day: str,
    ) -> Optional[SubmissionOutcome]:
        cap_check = self._validator.check_edit_allowed(user.id, day, record_type)
        if cap_check.is_valid:
            return None

        self._audit(AuditEventBuilder.edit_limit_reached(
            record_type=record_type.value,
            user_id=user.id,
            date=day,
            edit_count=self._governance.get_edit_count(user.id, day, record_type),
        ))
        return SubmissionOutcome(
            success=False,
            record_type=record_type,
            message=cap_check.first_error,
            issues=cap_check.issues,
        )

    def submit_planned_tasks(
        self,
        user: User,
        tasks: Iterable[str],
        on_date: Optional[str] = None,
    ) -> SubmissionOutcome:
        """Save (or update) the user's planned tasks for a day."""
        day = on_date or get_today_string()
        record_type = RecordType.PLANNED

        try:
            blocked = self._check_cap(record_type, user, day)
        except StorageError as e:
            return self._save_failed(record_type, user, e)
        if blocked:
            return blocked

        result = self._validator.validate_planned_tasks(tasks)
        if result.has_errors:
            return self._rejected(record_type, user, day, result)

        try:
            existing = self._store.find_planned_task(user.id, day)
            now = utc_now()
            task = PlannedTask(
                user_id=user.id,
                date=day,
                tasks=result.cleaned["tasks"],
                updated_at=now,
                **self._carry_over(existing, now),
            )
            self._store.save_planned_task(task)
        except StorageError as e:
            return self._save_failed(record_type, user, e)

        created = existing is None
        self._audit(AuditEventBuilder.submission_saved(
            record_type=record_type.value,
            record_id=task.id,
            user_id=user.id,
            date=day,
            edit_count=task.edit_count,
            created=created,
        ))
        return SubmissionOutcome(
            success=True,
            record_type=record_type,
            message=f"Tasks {'saved' if created else 'updated'} successfully!",
            record=task,
            created=created,
            issues=result.issues,
        )

    def submit_eod_report(
        self,
        user: User,
        completed_tasks: Iterable[str],
        challenges: str,
        next_day_plan: Iterable[str],
        working_hours: float,
        on_date: Optional[str] = None,
    ) -> SubmissionOutcome:
        """Save (or update) the user's end-of-day report for a day."""
        day = on_date or get_today_string()
        record_type = RecordType.EOD

        try:
            blocked = self._check_cap(record_type, user, day)
        except StorageError as e:
            return self._save_failed(record_type, user, e)
        if blocked:
            return blocked

        result = self._validator.validate_eod_report(
            completed_tasks=completed_tasks,
            next_day_plan=next_day_plan,
            working_hours=working_hours,
            challenges=challenges,
        )
        if result.has_errors:
            return self._rejected(record_type, user, day, result)

        try:
            existing = self._store.find_eod_report(user.id, day)
            now = utc_now()
            report = EndOfDayReport(
                user_id=user.id,
                date=day,
                completed_tasks=result.cleaned["completed_tasks"],
                challenges=result.cleaned["challenges"],
                next_day_plan=result.cleaned["next_day_plan"],
                working_hours=result.cleaned["working_hours"],
                updated_at=now,
                **self._carry_over(existing, now),
            )
            self._store.save_eod_report(report)
        except StorageError as e:
            return self._save_failed(record_type, user, e)

        created = existing is None
        self._audit(AuditEventBuilder.submission_saved(
            record_type=record_type.value,
            record_id=report.id,
            user_id=user.id,
            date=day,
            edit_count=report.edit_count,
            created=created,
        ))
        return SubmissionOutcome(
            success=True,
            record_type=record_type,
            message=f"End-of-day report {'submitted' if created else 'updated'} successfully!",
            record=report,
            created=created,
            issues=result.issues,
        )

    @staticmethod
    def _carry_over(existing: Optional[DailyRecord], now: datetime) -> dict:
        """Identity fields for the record being written: reused on update, fresh on create."""
        if existing is None:
            return {"created_at": now, "edit_count": 0}
        return {
            "id": existing.id,
            "created_at": existing.created_at,
            "edit_count": existing.edit_count + 1,
        }


@dataclass
class WorkTrackApp:
    """Every wired component, as handed to the views."""

    store: RecordStore
    governance: EditGovernance
    authenticator: Authenticator
    submissions: SubmissionFlow
    reports: ReportQueries
    audit_logger: AuditLogger


def create_key_value_store(settings: Optional[StorageSettings] = None) -> KeyValueStore:
    """Build the configured persistence backend."""
    settings = settings or StorageSettings()
    if settings.backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(settings.data_path)


def create_app_components(
    settings: Optional[Settings] = None,
    kv_store: Optional[KeyValueStore] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> WorkTrackApp:
    """
    Factory function to create all application components.

    Args:
        settings: Defaults to the cached get_settings().
        kv_store: Persistence backend. Built from storage settings if None;
                  pass an InMemoryKeyValueStore for tests.
        audit_logger: Defaults to a local-only AuditLogger.

    The store is initialized (default users seeded) before returning.
    """
    settings = settings or get_settings()
    app_settings = settings.app
    configure_logging("DEBUG" if app_settings.debug_mode else app_settings.log_level)

    audit_logger = audit_logger or AuditLogger()
    if kv_store is None:
        kv_store = create_key_value_store(settings.storage)

    store = RecordStore(
        kv_store,
        key_prefix=settings.storage.key_prefix,
        audit_logger=audit_logger,
    )
    store.initialize()

    governance = EditGovernance(store, max_edits=app_settings.max_edits_per_day)
    validator = SubmissionValidator(governance, app_settings)

    logger.info(
        "app_components_created",
        environment=app_settings.app_environment,
        storage_backend=type(kv_store).__name__,
        max_edits=governance.max_edits,
    )

    return WorkTrackApp(
        store=store,
        governance=governance,
        authenticator=Authenticator(store, settings.auth, audit_logger),
        submissions=SubmissionFlow(store, governance, validator, audit_logger),
        reports=ReportQueries(store, app_settings),
        audit_logger=audit_logger,
    )
