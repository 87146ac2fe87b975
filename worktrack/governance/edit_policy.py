"""
Edit Governance

Limits how often an employee may resubmit a day's planned tasks or
EOD report. The first save of the day is not an edit; each later save
increments the record's edit_count, and once that count reaches the
cap no further edits are allowed.

DESIGN DECISION: Governance is advisory. It only reads records and
never mutates edit_count. The submitting flow must check can_edit()
before saving and bump edit_count itself. Two clients racing past the
check can both save; this is a cooperative cap, not a transaction.
"""

from typing import Union

from worktrack.models.records import RecordType
from worktrack.services.storage import RecordStore


DEFAULT_MAX_EDITS = 3


class EditGovernance:
    """Edit-count lookups and the per-day edit cap."""

    def __init__(self, store: RecordStore, max_edits: int = DEFAULT_MAX_EDITS):
        if max_edits < 1:
            raise ValueError("max_edits must be at least 1")
        self._store = store
        self._max_edits = max_edits

    @property
    def max_edits(self) -> int:
        return self._max_edits

    def get_edit_count(
        self,
        user_id: str,
        date: str,
        record_type: Union[RecordType, str],
    ) -> int:
        """
        Edit count of the user's record for that date, or 0 if none exists.

        Raises:
            ValueError: If record_type is not 'planned' or 'eod'
        """
        record_type = RecordType(record_type)

        if record_type == RecordType.PLANNED:
            record = self._store.find_planned_task(user_id, date)
        else:
            record = self._store.find_eod_report(user_id, date)

        return record.edit_count if record else 0

    def can_edit(
        self,
        user_id: str,
        date: str,
        record_type: Union[RecordType, str],
    ) -> bool:
        return self.get_edit_count(user_id, date, record_type) < self._max_edits

    def remaining_edits(
        self,
        user_id: str,
        date: str,
        record_type: Union[RecordType, str],
    ) -> int:
        return max(self._max_edits - self.get_edit_count(user_id, date, record_type), 0)
