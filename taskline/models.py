"""Core models for taskline.

This module defines the core data structures for task management:
- Task: Base dataclass shared by every kind of task
- ToDo, Deadline, Event: The three concrete task variants
- DateToken: A validated date/time string attached to deadlines and events
- Status: Enum for task completion status
- TaskKind: Enum naming the task variants
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional


class Status(Enum):
    """Task completion status."""

    PENDING = "pending"
    DONE = "done"


class TaskKind(Enum):
    """Closed set of task variants."""

    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"


@dataclass(frozen=True)
class DateToken:
    """A date/time string that has passed syntactic validation.

    Attributes:
        raw: The token exactly as typed, e.g. "2024-03-01" or
            "2024-03-01 7:00 PM"
    """

    raw: str

    @property
    def date_part(self) -> str:
        """The leading YYYY-MM-DD portion."""
        return self.raw[:10]

    @property
    def time_part(self) -> Optional[str]:
        """The time-of-day portion, or None for date-only tokens."""
        rest = self.raw[10:].strip()
        return rest or None

    @property
    def has_time(self) -> bool:
        return self.time_part is not None

    def __str__(self) -> str:
        return self.raw


@dataclass
class Task:
    """Base task model.

    Construction performs no validation; callers validate the description
    and any date token first.

    Attributes:
        description: Free text describing the task
        status: Current status of the task (PENDING or DONE)
        created_at: Timestamp when the task was created
        completed_at: Timestamp of the last mark-as-done, None while pending
    """

    kind: ClassVar[TaskKind]
    type_icon: ClassVar[str]

    description: str
    status: Status = field(default=Status.PENDING, kw_only=True)
    created_at: datetime = field(default_factory=datetime.now, kw_only=True)
    completed_at: Optional[datetime] = field(default=None, kw_only=True)

    @property
    def done(self) -> bool:
        return self.status == Status.DONE

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    @property
    def date(self) -> Optional[DateToken]:
        """The date attached to this task, if its kind carries one."""
        return None

    def mark_as_done(self) -> None:
        """Mark the task as done. Repeated calls keep the first completion time."""
        if not self.done:
            self.status = Status.DONE
            self.completed_at = datetime.now()

    def unmark(self) -> None:
        """Return the task to pending."""
        self.status = Status.PENDING
        self.completed_at = None


@dataclass
class ToDo(Task):
    """A task with only a description."""

    kind: ClassVar[TaskKind] = TaskKind.TODO
    type_icon: ClassVar[str] = "T"


@dataclass
class Deadline(Task):
    """A task due by a given date/time."""

    kind: ClassVar[TaskKind] = TaskKind.DEADLINE
    type_icon: ClassVar[str] = "D"

    by: DateToken = field(kw_only=True)

    @property
    def date(self) -> Optional[DateToken]:
        return self.by


@dataclass
class Event(Task):
    """A task happening at a given date/time."""

    kind: ClassVar[TaskKind] = TaskKind.EVENT
    type_icon: ClassVar[str] = "E"

    at: DateToken = field(kw_only=True)

    @property
    def date(self) -> Optional[DateToken]:
        return self.at
