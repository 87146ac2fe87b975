"""
Submission Validation

DESIGN DECISION: The record store accepts whatever complete record it
is given. The checks a submission form must pass live here instead:

- at least one task / completed task
- working hours inside the configured range
- the daily edit cap has not been reached

IMPORTANT: Validation NEVER persists or silently fixes a submission.
It drops blank list entries and strips whitespace (the form always
did that), and reports everything else as an issue.
"""

from typing import Iterable, Optional, Union

from worktrack.config import AppSettings
from worktrack.governance import EditGovernance
from worktrack.models.records import RecordType
from worktrack.models.submission import ValidationIssue, ValidationResult


def clean_entries(entries: Iterable[str]) -> list[str]:
    """Strip every entry and drop the blank ones, keeping order."""
    return [entry.strip() for entry in entries if entry and entry.strip()]


class SubmissionValidator:
    """Form-level checks for planned tasks and EOD reports."""

    def __init__(
        self,
        governance: Optional[EditGovernance] = None,
        settings: Optional[AppSettings] = None,
    ):
        """
        Initialize validator.

        Args:
            governance: Used for the edit-cap check.
                        If None, check_edit_allowed always passes.
            settings: Working-hour bounds; defaults to AppSettings().
        """
        self._governance = governance
        self._settings = settings or AppSettings()

    def edit_limit_message(self) -> str:
        max_edits = self._governance.max_edits if self._governance else 0
        return f"You have reached the maximum number of edits ({max_edits}) for today."

    def check_edit_allowed(
        self,
        user_id: str,
        date: str,
        record_type: Union[RecordType, str],
    ) -> ValidationResult:
        if self._governance is None or self._governance.can_edit(user_id, date, record_type):
            return ValidationResult()

        return ValidationResult(issues=[
            ValidationIssue(
                field="edit_count",
                issue_type="edit_limit",
                message=self.edit_limit_message(),
            )
        ])

    def validate_planned_tasks(self, tasks: Iterable[str]) -> ValidationResult:
        cleaned = clean_entries(tasks)
        issues = []

        if not cleaned:
            issues.append(ValidationIssue(
                field="tasks",
                issue_type="missing",
                message="Please add at least one task.",
            ))

        return ValidationResult(issues=issues, cleaned={"tasks": cleaned})

    def validate_eod_report(
        self,
        completed_tasks: Iterable[str],
        next_day_plan: Iterable[str],
        working_hours: float,
        challenges: str = "",
    ) -> ValidationResult:
        completed = clean_entries(completed_tasks)
        plan = clean_entries(next_day_plan)
        issues = []

        if not completed:
            issues.append(ValidationIssue(
                field="completed_tasks",
                issue_type="missing",
                message="Please add at least one completed task.",
            ))

        low = self._settings.min_working_hours
        high = self._settings.max_working_hours
        if working_hours is None or not (low <= working_hours <= high):
            issues.append(ValidationIssue(
                field="working_hours",
                issue_type="out_of_range",
                message=f"Please enter valid working hours ({low:g}-{high:g}).",
            ))

        if not plan:
            issues.append(ValidationIssue(
                field="next_day_plan",
                issue_type="missing",
                message="No plan for tomorrow was given.",
                severity="info",
            ))

        return ValidationResult(
            issues=issues,
            cleaned={
                "completed_tasks": completed,
                "next_day_plan": plan,
                "challenges": (challenges or "").strip(),
                "working_hours": working_hours,
            },
        )
