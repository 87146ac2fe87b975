"""Tests for the authentication stub and session slot."""

import pytest

from worktrack.auth import Authenticator
from worktrack.config import AuthSettings
from worktrack.models.audit import AuditEventType
from worktrack.models.records import UserRole
from worktrack.services.storage import InMemoryKeyValueStore, RecordStore


@pytest.fixture
def authenticator(store, auth_settings, audit_logger):
    return Authenticator(store, auth_settings, audit_logger)


class TestAuthenticate:
    def test_admin_login(self, authenticator, store):
        user = authenticator.authenticate("admin@company.com", "admin123")

        assert user is not None
        assert user.id == "1"
        assert user.role == UserRole.ADMIN
        assert store.get_session() == user

    def test_wrong_password_leaves_session_unchanged(self, authenticator, store):
        john = authenticator.authenticate("john.doe@company.com", "emp123")

        assert authenticator.authenticate("admin@company.com", "wrong") is None
        assert store.get_session() == john

    def test_wrong_password_without_session(self, authenticator, store):
        assert authenticator.authenticate("admin@company.com", "wrong") is None
        assert store.get_session() is None

    def test_employee_login(self, authenticator):
        user = authenticator.authenticate("john.doe@company.com", "emp123")
        assert user is not None
        assert user.name == "John Doe"

    def test_unknown_email(self, authenticator, store):
        assert authenticator.authenticate("nonexistent@x.com", "emp123") is None
        assert store.get_session() is None

    def test_email_match_is_exact(self, authenticator):
        assert authenticator.authenticate("Admin@Company.com", "admin123") is None

    def test_either_literal_unlocks_any_role_by_default(self, authenticator):
        """Passwords are not tied to the looked-up user's role."""
        admin = authenticator.authenticate("admin@company.com", "emp123")
        jane = authenticator.authenticate("jane.smith@company.com", "admin123")

        assert admin is not None and admin.id == "1"
        assert jane is not None and jane.id == "3"

    def test_enforced_role_passwords(self, store):
        settings = AuthSettings(_env_file=None, enforce_role_passwords=True)
        authenticator = Authenticator(store, settings)

        assert authenticator.authenticate("admin@company.com", "emp123") is None
        assert authenticator.authenticate("jane.smith@company.com", "admin123") is None
        assert authenticator.authenticate("admin@company.com", "admin123").id == "1"
        assert authenticator.authenticate("jane.smith@company.com", "emp123").id == "3"

    def test_configured_literals(self, store):
        settings = AuthSettings(
            _env_file=None,
            admin_password="s3cret",
            employee_password="staff",
        )
        authenticator = Authenticator(store, settings)

        assert authenticator.authenticate("admin@company.com", "admin123") is None
        assert authenticator.authenticate("admin@company.com", "s3cret") is not None


class TestSession:
    def test_get_current_user(self, authenticator):
        assert authenticator.get_current_user() is None
        user = authenticator.authenticate("jane.smith@company.com", "emp123")
        assert authenticator.get_current_user() == user

    def test_logout_clears_session(self, authenticator):
        authenticator.authenticate("jane.smith@company.com", "emp123")
        authenticator.logout()
        assert authenticator.get_current_user() is None

    def test_logout_without_session(self, authenticator):
        authenticator.logout()
        assert authenticator.get_current_user() is None

    def test_logout_clears_corrupted_session(self):
        kv = InMemoryKeyValueStore({"worktrack_current_user": "{broken"})
        authenticator = Authenticator(RecordStore(kv))

        authenticator.logout()
        assert kv.get("worktrack_current_user") is None


class TestAuditTrail:
    def test_login_events(self, authenticator, audit_events):
        authenticator.authenticate("admin@company.com", "admin123")
        authenticator.authenticate("admin@company.com", "nope")
        authenticator.authenticate("ghost@company.com", "admin123")
        authenticator.logout()

        assert audit_events.types()[-4:] == [
            AuditEventType.LOGIN_SUCCEEDED.value,
            AuditEventType.LOGIN_FAILED.value,
            AuditEventType.LOGIN_FAILED.value,
            AuditEventType.LOGOUT.value,
        ]

    def test_password_never_logged(self, authenticator, audit_events):
        authenticator.authenticate("admin@company.com", "hunter2")
        for event in audit_events.events:
            assert "hunter2" not in str(event.to_log_dict())
