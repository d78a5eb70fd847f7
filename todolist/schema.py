"""
TODO LIST - Task Schema Definition
==================================
Entity model for the todo list: priorities, due dates, tasks and the
requests used to create and update them.

Due dates are a three-way tagged union (DueOn / DueBefore / NoDueDate).
On disk they use the tagged form {"On": "2023-12-31"}, {"Before": ...}
or the bare string "None".
"""

from enum import Enum
from typing import Optional, Dict, Union, Any
from datetime import date
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from .errors import InvalidDateError


DEFAULT_CATEGORY = "General"
DATE_FORMAT = "%Y-%m-%d"
MAX_TASK_ID = 2**32 - 1     # IDs are unsigned 32-bit


class Priority(str, Enum):
    """Task priority levels"""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, text: str) -> "Priority":
        """Case-insensitive lookup by name ("low", "High", ...)"""
        wanted = text.strip().lower()
        for priority in cls:
            if priority.value.lower() == wanted:
                return priority
        raise ValueError(f"Unknown priority: {text!r}")


# ============================================================
# CALENDAR DATES
# ============================================================

def make_date(year: int, month: int, day: int) -> date:
    """Build a calendar date, raising InvalidDateError for impossible days"""
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateError(f"Invalid date: {year:04d}-{month:02d}-{day:02d} ({e})") from e


def parse_date(text: str) -> date:
    """Parse an ISO YYYY-MM-DD string; no surrounding whitespace allowed"""
    if not isinstance(text, str):
        raise InvalidDateError(f"Invalid date {text!r}, expected YYYY-MM-DD")
    try:
        parsed = date.fromisoformat(text)
    except ValueError as e:
        raise InvalidDateError(f"Invalid date {text!r}, expected YYYY-MM-DD") from e
    # fromisoformat also takes week dates and compact forms on newer Pythons
    if parsed.isoformat() != text:
        raise InvalidDateError(f"Invalid date {text!r}, expected YYYY-MM-DD")
    return parsed


# ============================================================
# DUE DATES
# ============================================================

class DueOn(BaseModel):
    """Task is due exactly on `day`"""
    model_config = ConfigDict(frozen=True)
    day: date


class DueBefore(BaseModel):
    """Task is due no later than `day`"""
    model_config = ConfigDict(frozen=True)
    day: date


class NoDueDate(BaseModel):
    """Task has no due date"""
    model_config = ConfigDict(frozen=True)


DueDate = Union[DueOn, DueBefore, NoDueDate]

_DUE_ON_TAG = "On"
_DUE_BEFORE_TAG = "Before"
_NO_DUE_DATE_TAG = "None"


def due_date_to_json(due_date: DueDate) -> Union[str, Dict[str, str]]:
    if isinstance(due_date, DueOn):
        return {_DUE_ON_TAG: due_date.day.isoformat()}
    if isinstance(due_date, DueBefore):
        return {_DUE_BEFORE_TAG: due_date.day.isoformat()}
    if isinstance(due_date, NoDueDate):
        return _NO_DUE_DATE_TAG
    raise TypeError(f"Not a due date: {due_date!r}")


def due_date_from_json(raw: Any) -> DueDate:
    """Inverse of due_date_to_json; variant instances pass through"""
    if isinstance(raw, (DueOn, DueBefore, NoDueDate)):
        return raw
    if raw == _NO_DUE_DATE_TAG:
        return NoDueDate()
    if isinstance(raw, dict) and len(raw) == 1:
        tag, value = next(iter(raw.items()))
        day = value if isinstance(value, date) else parse_date(value)
        if tag == _DUE_ON_TAG:
            return DueOn(day=day)
        if tag == _DUE_BEFORE_TAG:
            return DueBefore(day=day)
    raise ValueError(f"Unrecognised due date: {raw!r}")


def format_due_date(due_date: DueDate) -> str:
    """Human-readable due date for task listings"""
    if isinstance(due_date, DueOn):
        return due_date.day.strftime(DATE_FORMAT)
    if isinstance(due_date, DueBefore):
        return f"before {due_date.day.strftime(DATE_FORMAT)}"
    if isinstance(due_date, NoDueDate):
        return "None"
    raise TypeError(f"Not a due date: {due_date!r}")


# ============================================================
# TASKS
# ============================================================

class _TaskFields(BaseModel):
    """Fields shared by a stored Task and a NewTask request"""
    description: str = ""
    due_date: DueDate = Field(default_factory=NoDueDate)
    category: str = DEFAULT_CATEGORY
    priority: Priority = Priority.LOW

    @field_validator("due_date", mode="before")
    @classmethod
    def _parse_due_date(cls, value: Any) -> DueDate:
        return due_date_from_json(value)

    @field_serializer("due_date")
    def _dump_due_date(self, value: DueDate) -> Union[str, Dict[str, str]]:
        return due_date_to_json(value)


class NewTask(_TaskFields):
    """Request to create a task; the store assigns the ID"""


class Task(_TaskFields):
    """A stored task. Immutable: the store swaps in updated copies."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, le=MAX_TASK_ID)


class TaskUpdate(BaseModel):
    """Partial update; a None field leaves the stored value unchanged"""
    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    due_date: Optional[date] = None     # always stored as DueOn
    category: Optional[str] = None


# ============================================================
# PERSISTED DOCUMENT
# ============================================================

class TodoListData(BaseModel):
    """On-disk form of a todo list: every task plus the ID counter"""
    tasks: Dict[int, Task] = Field(default_factory=dict)
    next_id: int = Field(default=1, ge=1, le=MAX_TASK_ID + 1)

    @model_validator(mode="after")
    def _check_ids(self) -> "TodoListData":
        for key, task in self.tasks.items():
            if key != task.id:
                raise ValueError(f"Task stored under key {key} has id {task.id}")
            if task.id >= self.next_id:
                raise ValueError(
                    f"next_id {self.next_id} would reissue existing task id {task.id}"
                )
        return self
