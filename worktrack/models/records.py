"""
Core Record Models for WorkTrack

These models define the three persisted collections (users, planned
tasks, end-of-day reports) plus the enums shared by every layer.

DESIGN DECISION: Python attributes are snake_case, but records are
persisted with the camelCase field names the stored JSON has always
used (userId, createdAt, editCount, ...). Both spellings are accepted
on input so records written by older clients still load.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def utc_now() -> datetime:
    """Timezone-aware current time, used for createdAt/updatedAt."""
    return datetime.now(timezone.utc)


def new_record_id() -> str:
    return uuid4().hex


def get_today_string(now: Optional[datetime] = None) -> str:
    """
    Today's calendar date as YYYY-MM-DD, from the local clock.

    All per-day lookups key on this string form.
    """
    now = now or datetime.now()
    return now.date().isoformat()


# =============================================================================
# ENUMS
# =============================================================================

class UserRole(str, Enum):
    """Roles a user can hold."""
    EMPLOYEE = "employee"
    ADMIN = "admin"


class RecordType(str, Enum):
    """
    Per-day record kinds subject to the edit cap.

    Values match the strings views pass around ("planned" / "eod").
    """
    PLANNED = "planned"
    EOD = "eod"


# =============================================================================
# RECORDS
# =============================================================================

class StoredRecord(BaseModel):
    """Base for every persisted record: camelCase on disk, snake_case in code."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("created_at", "updated_at", check_fields=False)
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Timestamps without an offset are read as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def to_storage_dict(self) -> dict:
        """JSON-ready dict using the persisted (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class User(StoredRecord):
    """
    Identity record.

    The email is the login key and must be unique across users;
    uniqueness is the caller's job, the store does not check it.
    """

    id: str = Field(
        default_factory=new_record_id,
        min_length=1,
        description="Unique user ID"
    )
    email: str = Field(
        ...,
        min_length=3,
        max_length=254,
        description="Login email (exact match)"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200
    )
    role: UserRole = Field(
        default=UserRole.EMPLOYEE,
        description="Access role"
    )
    department: Optional[str] = Field(default=None, max_length=100)
    position: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class PlannedTask(StoredRecord):
    """
    An employee's planned tasks for one day.

    At most one per (user_id, date). The first save of the day carries
    edit_count=0; every resubmission bumps it by one.
    """

    id: str = Field(default_factory=new_record_id, min_length=1)
    user_id: str = Field(
        ...,
        min_length=1,
        description="Owning user"
    )
    date: str = Field(
        ...,
        pattern=DATE_PATTERN,
        description="Calendar day (YYYY-MM-DD)"
    )
    tasks: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    edit_count: int = Field(
        default=0,
        ge=0,
        description="Resubmissions after the initial save"
    )


class EndOfDayReport(StoredRecord):
    """
    An employee's end-of-day report.

    Same one-per-day lifecycle as PlannedTask.
    """

    id: str = Field(default_factory=new_record_id, min_length=1)
    user_id: str = Field(..., min_length=1)
    date: str = Field(..., pattern=DATE_PATTERN)
    completed_tasks: list[str] = Field(default_factory=list)
    challenges: str = Field(default="")
    next_day_plan: list[str] = Field(default_factory=list)
    working_hours: float = Field(
        ...,
        ge=0,
        le=24,
        description="Hours worked that day"
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    edit_count: int = Field(default=0, ge=0)


DailyRecord = Union[PlannedTask, EndOfDayReport]
