"""
Tests for WorkTrack models

Covers the persisted record shapes, their camelCase storage form,
and the audit/validation helper models.
"""

import pytest
from datetime import datetime, timezone

from worktrack.models.records import (
    EndOfDayReport,
    PlannedTask,
    RecordType,
    User,
    UserRole,
    get_today_string,
)
from worktrack.models.submission import ValidationIssue, ValidationResult
from worktrack.models.reports import DayReport
from worktrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestRecordModels:
    """Tests for the persisted record models."""

    def test_user_creation(self):
        """Test User model creation with defaults."""
        user = User(id="7", email="a@b.com", name="Ann")
        assert user.role == UserRole.EMPLOYEE
        assert user.department is None
        assert user.created_at.tzinfo is not None
        assert user.is_admin is False

    def test_user_strips_whitespace(self):
        """Test that whitespace is stripped from names."""
        user = User(email="a@b.com", name="  Ann  ")
        assert user.name == "Ann"

    def test_user_generates_id(self):
        """Test that new users get distinct ids."""
        first = User(email="a@b.com", name="A")
        second = User(email="b@b.com", name="B")
        assert first.id and second.id
        assert first.id != second.id

    def test_storage_dict_uses_camel_case(self):
        """Test persisted field names match the stored JSON layout."""
        report = EndOfDayReport(
            id="r1",
            user_id="2",
            date="2024-03-01",
            completed_tasks=["Ship it"],
            next_day_plan=["Rest"],
            working_hours=8,
        )
        data = report.to_storage_dict()
        assert data["userId"] == "2"
        assert data["completedTasks"] == ["Ship it"]
        assert data["nextDayPlan"] == ["Rest"]
        assert data["workingHours"] == 8
        assert data["editCount"] == 0
        assert "createdAt" in data and "updatedAt" in data
        assert "user_id" not in data

    def test_records_accept_camel_case_input(self):
        """Test that stored camelCase JSON loads back."""
        task = PlannedTask.model_validate({
            "id": "t1",
            "userId": "2",
            "date": "2024-03-01",
            "tasks": ["Write docs"],
            "createdAt": "2024-03-01T09:00:00.000Z",
            "updatedAt": "2024-03-01T09:00:00.000Z",
            "editCount": 2,
        })
        assert task.user_id == "2"
        assert task.edit_count == 2
        assert task.created_at == datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    def test_naive_timestamps_read_as_utc(self):
        """Test that stored timestamps without an offset load as UTC."""
        task = PlannedTask.model_validate({
            "userId": "2",
            "date": "2024-01-15",
            "createdAt": "2024-01-15T17:00:00",
            "updatedAt": "2024-01-15T17:00:00",
        })
        assert task.created_at == datetime(2024, 1, 15, 17, 0, tzinfo=timezone.utc)

        user = User(email="a@b.com", name="A", created_at=datetime(2024, 1, 1, 8, 0))
        assert user.created_at.tzinfo is not None

    def test_optional_user_fields_omitted_when_unset(self):
        """Test that unset optional fields are left out of storage."""
        data = User(id="9", email="x@y.com", name="X").to_storage_dict()
        assert "phone" not in data
        assert data["role"] == "employee"

    def test_date_must_be_iso_day(self):
        """Test date strings must be YYYY-MM-DD."""
        with pytest.raises(ValueError):
            PlannedTask(user_id="2", date="03/01/2024")

    def test_negative_edit_count_rejected(self):
        """Test that edit counts cannot go below zero."""
        with pytest.raises(ValueError):
            PlannedTask(user_id="2", date="2024-03-01", edit_count=-1)

    def test_working_hours_bounds(self):
        """Test that working hours above a day are rejected."""
        with pytest.raises(ValueError):
            EndOfDayReport(user_id="2", date="2024-03-01", working_hours=25)

    def test_today_string_format(self):
        """Test today's date string comes from the given clock."""
        assert get_today_string(datetime(2024, 1, 5, 23, 59)) == "2024-01-05"

    def test_record_type_values(self):
        """Test record type string values."""
        assert RecordType("planned") is RecordType.PLANNED
        assert RecordType.EOD.value == "eod"
        with pytest.raises(ValueError):
            RecordType("weekly")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.LOGOUT,
            description="User logged out",
        )
        assert event.event_type == AuditEventType.LOGOUT
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.user_deleted("3", removed_tasks=2, removed_reports=1)
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "user_deleted"
        assert log_dict["entity_id"] == "3"
        assert log_dict["details"]["removed_planned_tasks"] == 2

    def test_login_failed_never_carries_password(self):
        """Test login failure events hold the email and reason only."""
        event = AuditEventBuilder.login_failed("a@b.com", "bad_password")
        assert event.severity == AuditSeverity.WARNING
        assert event.details == {"email": "a@b.com", "reason": "bad_password"}

    def test_submission_saved_event_types(self):
        """Test the builder picks created/updated event types per record kind."""
        created = AuditEventBuilder.submission_saved("planned", "t1", "2", "2024-03-01", 0, True)
        updated = AuditEventBuilder.submission_saved("eod", "r1", "2", "2024-03-01", 1, False)
        assert created.event_type == AuditEventType.PLANNED_TASKS_SUBMITTED
        assert created.entity_type == "planned_task"
        assert updated.event_type == AuditEventType.EOD_REPORT_UPDATED
        assert updated.details["edit_count"] == 1


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(issues=[
            ValidationIssue(field="tasks", issue_type="missing", message="Add a task"),
        ])
        assert result.has_errors is True
        assert result.is_valid is False
        assert result.error_count == 1
        assert result.first_error == "Add a task"

    def test_validation_result_info_only(self):
        """Test that info issues don't count as errors."""
        result = ValidationResult(issues=[
            ValidationIssue(
                field="next_day_plan",
                issue_type="missing",
                message="No plan",
                severity="info",
            ),
        ])
        assert result.has_errors is False
        assert result.first_error is None


class TestDayReport:
    def test_flags(self):
        day = DayReport(
            date="2024-03-01",
            planned_task=PlannedTask(user_id="2", date="2024-03-01", tasks=["a"]),
        )
        assert day.has_planned is True
        assert day.has_eod is False
        assert day.is_complete is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
