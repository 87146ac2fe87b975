"""
Data Models Package

This package contains all Pydantic models used in WorkTrack.
All data flowing through the system must conform to these schemas.
"""

from worktrack.models.records import (
    DATE_PATTERN,
    DailyRecord,
    EndOfDayReport,
    PlannedTask,
    RecordType,
    StoredRecord,
    User,
    UserRole,
    get_today_string,
    new_record_id,
    utc_now,
)
from worktrack.models.submission import (
    SubmissionOutcome,
    ValidationIssue,
    ValidationResult,
)
from worktrack.models.reports import (
    ComplianceEntry,
    ComplianceReport,
    DailyCompliance,
    DashboardStats,
    DayReport,
    EmployeeSummary,
    HistoryStats,
    ReportEntry,
    ReportFilter,
    ReportSummary,
)
from worktrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Record models
    "DATE_PATTERN",
    "DailyRecord",
    "EndOfDayReport",
    "PlannedTask",
    "RecordType",
    "StoredRecord",
    "User",
    "UserRole",
    "get_today_string",
    "new_record_id",
    "utc_now",
    # Submission models
    "SubmissionOutcome",
    "ValidationIssue",
    "ValidationResult",
    # Reporting models
    "ComplianceEntry",
    "ComplianceReport",
    "DailyCompliance",
    "DashboardStats",
    "DayReport",
    "EmployeeSummary",
    "HistoryStats",
    "ReportEntry",
    "ReportFilter",
    "ReportSummary",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
