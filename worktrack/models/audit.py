"""
Audit Models for WorkTrack

Every significant action in the system is logged for audit purposes.
This provides:
1. Traceability of logins and submissions
2. Debugging information when a save fails
3. A record of administrative deletions

DESIGN DECISION: Audit events are emitted to the structured log only.
They are never written into the work-tracking collections.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Session
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"

    # Seeding
    STORE_SEEDED = "store_seeded"

    # Submissions
    PLANNED_TASKS_SUBMITTED = "planned_tasks_submitted"
    PLANNED_TASKS_UPDATED = "planned_tasks_updated"
    EOD_REPORT_SUBMITTED = "eod_report_submitted"
    EOD_REPORT_UPDATED = "eod_report_updated"
    SUBMISSION_REJECTED = "submission_rejected"
    EDIT_LIMIT_REACHED = "edit_limit_reached"
    SAVE_FAILED = "save_failed"

    # Administration
    USER_SAVED = "user_saved"
    USER_DELETED = "user_deleted"
    RECORD_DELETED = "record_deleted"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what record is this about, and who did it?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'user', 'planned_task', 'eod_report')"
    )
    entity_id: Optional[str] = None
    actor_id: Optional[str] = Field(
        default=None,
        description="ID of the user who triggered the event"
    )

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "actor_id": self.actor_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.login_succeeded(user_id, email)
        event = AuditEventBuilder.user_deleted(user_id, actor_id, removed_tasks, removed_reports)
    """

    @staticmethod
    def login_succeeded(user_id: str, email: str, role: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_SUCCEEDED,
            entity_type="user",
            entity_id=user_id,
            actor_id=user_id,
            description=f"User logged in: {email}",
            details={"email": email, "role": role},
            is_user_action=True,
        )

    @staticmethod
    def login_failed(email: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            description=f"Login failed for {email}",
            details={"email": email, "reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def logout(user_id: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGOUT,
            entity_type="user",
            entity_id=user_id,
            actor_id=user_id,
            description="User logged out",
            is_user_action=True,
        )

    @staticmethod
    def store_seeded(user_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SEEDED,
            entity_type="user",
            description=f"Seeded {user_count} default users",
            details={"user_count": user_count},
        )

    @staticmethod
    def submission_saved(
        record_type: str,
        record_id: str,
        user_id: str,
        date: str,
        edit_count: int,
        created: bool,
    ) -> AuditEvent:
        if record_type == "planned":
            event_type = (
                AuditEventType.PLANNED_TASKS_SUBMITTED
                if created
                else AuditEventType.PLANNED_TASKS_UPDATED
            )
            entity_type = "planned_task"
        else:
            event_type = (
                AuditEventType.EOD_REPORT_SUBMITTED
                if created
                else AuditEventType.EOD_REPORT_UPDATED
            )
            entity_type = "eod_report"
        verb = "submitted" if created else "updated"
        return AuditEvent(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=record_id,
            actor_id=user_id,
            description=f"{entity_type.replace('_', ' ').capitalize()} {verb} for {date}",
            details={"date": date, "edit_count": edit_count},
            is_user_action=True,
        )

    @staticmethod
    def submission_rejected(
        record_type: str,
        user_id: str,
        date: str,
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBMISSION_REJECTED,
            severity=AuditSeverity.WARNING,
            actor_id=user_id,
            description=f"{record_type} submission rejected with {len(issues)} issues",
            details={"record_type": record_type, "date": date, "issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def edit_limit_reached(
        record_type: str,
        user_id: str,
        date: str,
        edit_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_LIMIT_REACHED,
            severity=AuditSeverity.WARNING,
            actor_id=user_id,
            description=f"Edit limit reached for {record_type} on {date}",
            details={"record_type": record_type, "date": date, "edit_count": edit_count},
            is_user_action=True,
        )

    @staticmethod
    def save_failed(
        record_type: str,
        user_id: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            actor_id=user_id,
            description=f"Failed to save {record_type} submission",
            error_message=error_message,
            details={"record_type": record_type},
        )

    @staticmethod
    def user_saved(user_id: str, email: str, created: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SAVED,
            entity_type="user",
            entity_id=user_id,
            description=f"User {'created' if created else 'updated'}: {email}",
            details={"email": email, "created": created},
        )

    @staticmethod
    def user_deleted(
        user_id: str,
        removed_tasks: int,
        removed_reports: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_DELETED,
            entity_type="user",
            entity_id=user_id,
            description=f"User {user_id} deleted with their records",
            details={
                "removed_planned_tasks": removed_tasks,
                "removed_eod_reports": removed_reports,
            },
        )

    @staticmethod
    def record_deleted(entity_type: str, record_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_DELETED,
            entity_type=entity_type,
            entity_id=record_id,
            description=f"Deleted {entity_type} {record_id}",
        )
