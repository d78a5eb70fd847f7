"""
TODO LIST - Errors
==================
Exceptions raised by the task store and the entity model.
The CLI catches TodoError, reports it and keeps the session alive.
"""

from typing import Optional


class TodoError(Exception):
    """Base class for every todolist failure"""


class TaskNotFoundError(TodoError, KeyError):
    """No task with the requested ID exists in the list"""

    def __init__(self, task_id: int):
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task not found: {self.task_id}"


class InvalidDateError(TodoError, ValueError):
    """A (year, month, day) triple or date string is not a real calendar day"""


class StorageIOError(TodoError):
    """Reading or writing a todo list file failed"""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message)
        self.filename = filename


class TodoFileNotFoundError(StorageIOError):
    """The todo list file to load does not exist"""


class SerializationError(TodoError):
    """A todo list could not be encoded, or a saved file is malformed"""
