"""
Authentication Stub

Maps (email, password) to a User and records them in the session slot.

There are no per-user credentials. One fixed password is shared by all
admin logins and one by all employee logins. By default either password
unlocks any existing email, whatever that user's role; this matches how
the tool has always behaved. Setting `enforce_role_passwords` requires
the password that belongs to the looked-up user's role instead.

No hashing, no expiry, no tokens.
"""

from typing import Optional

from worktrack.audit import AuditLogger
from worktrack.config import AuthSettings
from worktrack.models.audit import AuditEvent, AuditEventBuilder
from worktrack.models.records import User, UserRole
from worktrack.services.storage import CorruptedDataError, RecordStore


class Authenticator:
    """Login, logout and current-user lookup over the RecordStore session slot."""

    def __init__(
        self,
        store: RecordStore,
        settings: Optional[AuthSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._settings = settings or AuthSettings()
        self._audit_logger = audit_logger

    def _password_accepted(self, user: User, password: str) -> bool:
        admin_password = self._settings.admin_password
        employee_password = self._settings.employee_password

        if self._settings.enforce_role_passwords:
            expected = admin_password if user.role == UserRole.ADMIN else employee_password
            return password == expected

        return password in (admin_password, employee_password)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Log in by exact email match and a fixed password.

        On success the user is written to the session slot and returned.
        On failure returns None and leaves the session untouched.
        """
        user = self._store.find_user_by_email(email)

        if user is None:
            self._audit(AuditEventBuilder.login_failed(email, "unknown_email"))
            return None

        if not self._password_accepted(user, password):
            self._audit(AuditEventBuilder.login_failed(email, "bad_password"))
            return None

        self._store.set_session(user)
        self._audit(AuditEventBuilder.login_succeeded(user.id, user.email, user.role.value))
        return user

    def get_current_user(self) -> Optional[User]:
        return self._store.get_session()

    def logout(self) -> None:
        """Clear the session slot. A corrupted slot is cleared too."""
        try:
            current = self._store.get_session()
        except CorruptedDataError:
            current = None
        self._store.clear_session()
        self._audit(AuditEventBuilder.logout(current.id if current else None))

    def _audit(self, event: AuditEvent) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)
