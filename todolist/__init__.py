"""
TODO LIST - Task Management
===========================
Single-user todo list with categories, priorities, due dates and JSON
persistence, driven from an interactive command line.

Usage:
    from todolist import TodoList, NewTask, TaskUpdate

    todo_list = TodoList()
    task_id = todo_list.add_task(NewTask(description="Learn systems design"))
    todo_list.update_task(task_id, TaskUpdate(category="Study"))
    todo_list.save_to_file("todo.json")

    todo_list = TodoList.load_from_file("todo.json")
"""

from .schema import (
    Priority,
    DueOn,
    DueBefore,
    NoDueDate,
    DueDate,
    Task,
    NewTask,
    TaskUpdate,
    TodoListData,
    DEFAULT_CATEGORY,
    make_date,
    parse_date,
)

from .errors import (
    TodoError,
    TaskNotFoundError,
    InvalidDateError,
    StorageIOError,
    TodoFileNotFoundError,
    SerializationError,
)

from .manager import TodoList
from .history import FilenameTracker

__version__ = "1.0.0"
__all__ = [
    "TodoList",
    "FilenameTracker",
    "Priority",
    "DueOn",
    "DueBefore",
    "NoDueDate",
    "DueDate",
    "Task",
    "NewTask",
    "TaskUpdate",
    "TodoListData",
    "DEFAULT_CATEGORY",
    "make_date",
    "parse_date",
    "TodoError",
    "TaskNotFoundError",
    "InvalidDateError",
    "StorageIOError",
    "TodoFileNotFoundError",
    "SerializationError",
]
