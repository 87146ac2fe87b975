"""
Reporting Models

Read-only shapes returned by the reporting queries: compliance,
dashboard figures, report search results and per-employee history.
None of these are persisted.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from worktrack.models.records import (
    DATE_PATTERN,
    EndOfDayReport,
    PlannedTask,
    User,
)


class ComplianceEntry(BaseModel):
    """One employee's submission status for a date."""

    user: User
    has_submitted: bool
    report: Optional[EndOfDayReport] = None

    @property
    def status(self) -> str:
        return "submitted" if self.has_submitted else "missing"


class ComplianceReport(BaseModel):
    """
    EOD submission compliance for one date.

    Totals always cover every employee, even when `entries`
    has been narrowed to the missing ones.
    """

    date: str = Field(..., pattern=DATE_PATTERN)
    entries: list[ComplianceEntry] = Field(default_factory=list)
    total_employees: int = Field(ge=0)
    submitted_count: int = Field(ge=0)
    missing_count: int = Field(ge=0)
    submission_rate: float = Field(
        ge=0.0,
        description="Percentage of employees who submitted (0-100)"
    )


class DashboardStats(BaseModel):
    """Admin dashboard headline figures for one day."""

    total_employees: int = Field(ge=0)
    today_submissions: int = Field(ge=0)
    pending_reports: int
    compliance_rate: float = Field(ge=0.0)


class DailyCompliance(BaseModel):
    """One point of the compliance trend."""

    date: str = Field(..., pattern=DATE_PATTERN)
    reports: int = Field(ge=0)
    rate: float = Field(ge=0.0)


class ReportFilter(BaseModel):
    """Filters for searching across all employees' records."""

    date_from: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    date_to: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    user_id: Optional[str] = Field(
        default=None,
        description="Restrict to one employee; None means all"
    )
    report_type: str = Field(
        default="all",
        pattern="^(all|eod|planned)$"
    )
    search_term: str = Field(
        default="",
        description="Case-insensitive text matched against user and task content"
    )


class ReportEntry(BaseModel):
    """A planned-task list or EOD report joined with its owner."""

    id: str = Field(..., description="Type-prefixed id, e.g. 'eod-<id>'")
    type: str = Field(..., pattern="^(eod|planned)$")
    user_id: str
    user: User
    date: str
    data: EndOfDayReport | PlannedTask
    created_at: datetime
    updated_at: datetime


class ReportSummary(BaseModel):
    total_reports: int = 0
    eod_reports: int = 0
    planned_reports: int = 0
    unique_employees: int = 0


class DayReport(BaseModel):
    """One employee's records for a single date."""

    date: str = Field(..., pattern=DATE_PATTERN)
    planned_task: Optional[PlannedTask] = None
    eod_report: Optional[EndOfDayReport] = None

    @property
    def has_planned(self) -> bool:
        return self.planned_task is not None

    @property
    def has_eod(self) -> bool:
        return self.eod_report is not None

    @property
    def is_complete(self) -> bool:
        return self.has_planned and self.has_eod


class HistoryStats(BaseModel):
    total_days: int = 0
    complete_days: int = 0
    planned_only: int = 0
    eod_only: int = 0
    total_planned: int = 0
    total_eod: int = 0


class EmployeeSummary(BaseModel):
    """Employee dashboard figures."""

    user_id: str
    today: str = Field(..., pattern=DATE_PATTERN)
    today_planned_task: Optional[PlannedTask] = None
    today_eod_report: Optional[EndOfDayReport] = None
    week_report_count: int = Field(default=0, ge=0)
    completion_rate: float = Field(
        default=0.0,
        ge=0.0,
        description="Share of this week's reports with at least one completed task (0-100)"
    )
    average_working_hours: float = Field(default=0.0, ge=0.0)
