"""Tests for configuration loading and the audit logger."""

import pytest

from worktrack.audit import AuditLogger
from worktrack.config import AppSettings, AuthSettings, Settings, StorageSettings, validate_all_settings
from worktrack.models.audit import AuditEventBuilder


class TestSettings:
    def test_defaults(self):
        app = AppSettings(_env_file=None)
        assert app.max_edits_per_day == 3
        assert app.min_working_hours == 0.5
        assert app.max_working_hours == 24.0

        auth = AuthSettings(_env_file=None)
        assert auth.admin_password == "admin123"
        assert auth.employee_password == "emp123"
        assert auth.enforce_role_passwords is False

        assert StorageSettings(_env_file=None).key_prefix == "worktrack_"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WORKTRACK_MAX_EDITS_PER_DAY", "5")
        monkeypatch.setenv("WORKTRACK_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("WORKTRACK_AUTH_ENFORCE_ROLE_PASSWORDS", "true")

        settings = Settings(_env_file=None)
        assert settings.app.max_edits_per_day == 5
        assert settings.storage.backend == "memory"
        assert settings.auth.enforce_role_passwords is True

    def test_hours_range_must_be_ordered(self):
        with pytest.raises(ValueError):
            AppSettings(_env_file=None, min_working_hours=10, max_working_hours=8)

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("WORKTRACK_LOG_LEVEL", "LOUD")

        results = validate_all_settings(Settings(_env_file=None))
        assert results["storage"] is True
        assert results["auth"] is True
        assert results["app"] is False
        assert "app_error" in results


class TestAuditLogger:
    def test_sink_receives_events(self, audit_logger, audit_events):
        assert audit_logger.log(AuditEventBuilder.logout("2")) is True
        assert audit_events.types() == ["logout"]

    def test_failing_sink_does_not_raise(self):
        def broken(event):
            raise RuntimeError("sink down")

        assert AuditLogger(sink=broken).log(AuditEventBuilder.logout("2")) is False

    def test_without_sink(self):
        assert AuditLogger().log(AuditEventBuilder.store_seeded(3)) is True
