"""Edit governance package."""

from worktrack.governance.edit_policy import DEFAULT_MAX_EDITS, EditGovernance

__all__ = ["DEFAULT_MAX_EDITS", "EditGovernance"]
