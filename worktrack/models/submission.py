"""
Submission Models

Validation results and the outcome handed back to whichever view
submitted a planned-task list or an end-of-day report.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from worktrack.models.records import DailyRecord, RecordType


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'out_of_range', 'edit_limit')"
    )
    message: str = Field(
        ...,
        description="Human-readable message shown to the user"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
    )


class ValidationResult(BaseModel):
    """
    Result of checking one submission.

    `cleaned` holds the normalized values (blank entries dropped,
    text stripped) that the flow should persist.
    """

    issues: list[ValidationIssue] = Field(default_factory=list)
    cleaned: dict[str, Any] = Field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def first_error(self) -> Optional[str]:
        for issue in self.issues:
            if issue.severity == "error":
                return issue.message
        return None


class SubmissionOutcome(BaseModel):
    """What a submit call tells its view."""

    success: bool
    record_type: RecordType
    message: str
    record: Optional[DailyRecord] = None
    created: bool = Field(
        default=False,
        description="True when this submission created the day's record"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)
