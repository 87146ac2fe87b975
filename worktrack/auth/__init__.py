"""Authentication package."""

from worktrack.auth.authenticator import Authenticator

__all__ = ["Authenticator"]
