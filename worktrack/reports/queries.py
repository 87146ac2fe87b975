"""
Reporting Queries

DESIGN DECISION: Reporting is DETERMINISTIC and read-only.
Every figure is computed from the records currently in the store.
Nothing here writes, caches or estimates.

Only users with the employee role count towards compliance and
appear in report search; admin records are ignored.

Dates are YYYY-MM-DD strings throughout, which sort and compare the
same way the calendar dates they name do.
"""

from datetime import date, timedelta
from typing import Iterable, Optional

from worktrack.config import AppSettings
from worktrack.models.records import (
    EndOfDayReport,
    PlannedTask,
    User,
    UserRole,
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
from worktrack.services.storage import RecordStore


HISTORY_FILTERS = ("all", "planned", "eod", "complete")


class QueryError(Exception):
    """Invalid reporting query arguments."""
    pass


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise QueryError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e


def _rate(count: int, total: int) -> float:
    return (count / total) * 100 if total > 0 else 0.0


def _in_range(day: str, date_from: Optional[str], date_to: Optional[str]) -> bool:
    if date_from and day < date_from:
        return False
    if date_to and day > date_to:
        return False
    return True


def _contains(needle: str, haystacks: Iterable[str]) -> bool:
    return any(needle in text.lower() for text in haystacks if text)


class ReportQueries:
    """
    Compliance, dashboard and search queries over the RecordStore.

    GUARANTEES:
    - Only returns records that exist in storage
    - Never mutates the store
    """

    def __init__(self, store: RecordStore, settings: Optional[AppSettings] = None):
        """
        Args:
            store: Source of every figure.
            settings: Default windows for the trend and recent feed;
                      defaults to AppSettings().
        """
        self._store = store
        self._settings = settings or AppSettings()

    def _employees(self) -> list[User]:
        return [user for user in self._store.list_users() if user.role == UserRole.EMPLOYEE]

    # -------------------------------------------------------------------------
    # Compliance
    # -------------------------------------------------------------------------

    def compliance_for_date(self, day: str, only_missing: bool = False) -> ComplianceReport:
        """
        Who has (and has not) submitted an EOD report for a date.

        The only_missing flag narrows the entries; the totals always
        cover every employee.
        """
        _parse_day(day)
        employees = self._employees()
        reports_by_user = {
            report.user_id: report
            for report in self._store.list_eod_reports()
            if report.date == day
        }

        entries = [
            ComplianceEntry(
                user=user,
                has_submitted=user.id in reports_by_user,
                report=reports_by_user.get(user.id),
            )
            for user in employees
        ]
        submitted = sum(1 for entry in entries if entry.has_submitted)

        if only_missing:
            entries = [entry for entry in entries if not entry.has_submitted]

        return ComplianceReport(
            date=day,
            entries=entries,
            total_employees=len(employees),
            submitted_count=submitted,
            missing_count=len(employees) - submitted,
            submission_rate=_rate(submitted, len(employees)),
        )

    def dashboard_stats(self, today: str) -> DashboardStats:
        report = self.compliance_for_date(today)
        return DashboardStats(
            total_employees=report.total_employees,
            today_submissions=report.submitted_count,
            pending_reports=report.missing_count,
            compliance_rate=report.submission_rate,
        )

    def weekly_compliance(self, today: str, days: Optional[int] = None) -> list[DailyCompliance]:
        """Compliance for each of the last `days` dates, oldest first."""
        if days is None:
            days = self._settings.compliance_window_days
        if days < 1:
            raise QueryError("days must be at least 1")

        end = _parse_day(today)
        employee_ids = {user.id for user in self._employees()}
        reports = self._store.list_eod_reports()

        trend = []
        for offset in range(days - 1, -1, -1):
            day = (end - timedelta(days=offset)).isoformat()
            submitted = {
                report.user_id
                for report in reports
                if report.date == day and report.user_id in employee_ids
            }
            trend.append(DailyCompliance(
                date=day,
                reports=len(submitted),
                rate=_rate(len(submitted), len(employee_ids)),
            ))
        return trend

    def recent_reports(self, limit: Optional[int] = None) -> list[EndOfDayReport]:
        """Most recently updated EOD reports, newest first."""
        if limit is None:
            limit = self._settings.recent_reports_limit
        if limit < 1:
            raise QueryError("limit must be at least 1")
        reports = sorted(
            self._store.list_eod_reports(),
            key=lambda report: report.updated_at,
            reverse=True,
        )
        return reports[:limit]

    # -------------------------------------------------------------------------
    # Cross-employee search
    # -------------------------------------------------------------------------

    def search_reports(self, filters: Optional[ReportFilter] = None) -> list[ReportEntry]:
        """
        Planned-task lists and EOD reports matching the filters, newest first.

        Records owned by anyone other than an existing employee are skipped.
        """
        filters = filters or ReportFilter()
        users = {user.id: user for user in self._employees()}
        entries: list[ReportEntry] = []

        if filters.report_type in ("all", "eod"):
            for report in self._store.list_eod_reports():
                user = users.get(report.user_id)
                if user:
                    entries.append(self._entry("eod", user, report))

        if filters.report_type in ("all", "planned"):
            for task in self._store.list_planned_tasks():
                user = users.get(task.user_id)
                if user:
                    entries.append(self._entry("planned", user, task))

        needle = filters.search_term.strip().lower()
        matched = [
            entry for entry in entries
            if _in_range(entry.date, filters.date_from, filters.date_to)
            and (filters.user_id is None or entry.user_id == filters.user_id)
            and (not needle or self._entry_matches(entry, needle))
        ]
        matched.sort(key=lambda entry: entry.updated_at, reverse=True)
        return matched

    @staticmethod
    def _entry(kind: str, user: User, record: EndOfDayReport | PlannedTask) -> ReportEntry:
        return ReportEntry(
            id=f"{kind}-{record.id}",
            type=kind,
            user_id=record.user_id,
            user=user,
            date=record.date,
            data=record,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @staticmethod
    def _entry_matches(entry: ReportEntry, needle: str) -> bool:
        user = entry.user
        if _contains(needle, [user.name, user.email, user.department or ""]):
            return True

        record = entry.data
        if isinstance(record, EndOfDayReport):
            content = [*record.completed_tasks, record.challenges, *record.next_day_plan]
        else:
            content = list(record.tasks)
        return _contains(needle, content)

    @staticmethod
    def summarize_entries(entries: list[ReportEntry]) -> ReportSummary:
        return ReportSummary(
            total_reports=len(entries),
            eod_reports=sum(1 for entry in entries if entry.type == "eod"),
            planned_reports=sum(1 for entry in entries if entry.type == "planned"),
            unique_employees=len({entry.user_id for entry in entries}),
        )

    # -------------------------------------------------------------------------
    # Per-employee views
    # -------------------------------------------------------------------------

    def employee_history(
        self,
        user_id: str,
        date_from: str,
        date_to: str,
        search_term: str = "",
        filter_type: str = "all",
    ) -> list[DayReport]:
        """One employee's records grouped by date, newest date first."""
        if filter_type not in HISTORY_FILTERS:
            raise QueryError(
                f"Unknown history filter {filter_type!r}, expected one of {HISTORY_FILTERS}"
            )
        _parse_day(date_from)
        _parse_day(date_to)

        days: dict[str, DayReport] = {}
        for task in self._store.list_planned_tasks():
            if task.user_id == user_id and _in_range(task.date, date_from, date_to):
                days.setdefault(task.date, DayReport(date=task.date)).planned_task = task
        for report in self._store.list_eod_reports():
            if report.user_id == user_id and _in_range(report.date, date_from, date_to):
                days.setdefault(report.date, DayReport(date=report.date)).eod_report = report

        history = list(days.values())

        needle = search_term.strip().lower()
        if needle:
            history = [day for day in history if self._day_matches(day, needle)]

        if filter_type == "planned":
            history = [day for day in history if day.has_planned]
        elif filter_type == "eod":
            history = [day for day in history if day.has_eod]
        elif filter_type == "complete":
            history = [day for day in history if day.is_complete]

        history.sort(key=lambda day: day.date, reverse=True)
        return history

    @staticmethod
    def _day_matches(day: DayReport, needle: str) -> bool:
        content: list[str] = []
        if day.planned_task:
            content.extend(day.planned_task.tasks)
        if day.eod_report:
            content.extend(day.eod_report.completed_tasks)
            content.append(day.eod_report.challenges)
            content.extend(day.eod_report.next_day_plan)
        return _contains(needle, content)

    @staticmethod
    def history_stats(days: list[DayReport]) -> HistoryStats:
        return HistoryStats(
            total_days=len(days),
            complete_days=sum(1 for day in days if day.is_complete),
            planned_only=sum(1 for day in days if day.has_planned and not day.has_eod),
            eod_only=sum(1 for day in days if day.has_eod and not day.has_planned),
            total_planned=sum(1 for day in days if day.has_planned),
            total_eod=sum(1 for day in days if day.has_eod),
        )

    def employee_summary(self, user_id: str, today: str) -> EmployeeSummary:
        """Today's records plus the last seven days' EOD figures."""
        week_start = (_parse_day(today) - timedelta(days=7)).isoformat()

        reports = [r for r in self._store.list_eod_reports() if r.user_id == user_id]
        week = [r for r in reports if week_start <= r.date <= today]

        completion_rate = 0.0
        average_hours = 0.0
        if week:
            with_tasks = sum(1 for r in week if r.completed_tasks)
            completion_rate = _rate(with_tasks, len(week))
            average_hours = sum(r.working_hours for r in week) / len(week)

        return EmployeeSummary(
            user_id=user_id,
            today=today,
            today_planned_task=self._store.find_planned_task(user_id, today),
            today_eod_report=next((r for r in reports if r.date == today), None),
            week_report_count=len(week),
            completion_rate=completion_rate,
            average_working_hours=average_hours,
        )
