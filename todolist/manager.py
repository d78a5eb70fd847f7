"""
TODO LIST - Task Store
======================
The TodoList owns every task for a session. All reads and writes go
through it; tasks handed out are frozen, so the store stays the only
place where state changes.

IDs come from a counter that is persisted with the tasks and never
reused, even after the highest task is removed.
"""

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Optional, List, Dict, Union
import logging

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .errors import (
    TaskNotFoundError,
    StorageIOError,
    TodoFileNotFoundError,
    SerializationError,
)
from .schema import (
    Task, NewTask, TaskUpdate, TodoListData, DueOn
)

logger = logging.getLogger("todolist")

PathLike = Union[str, Path]


class TodoList:
    """
    In-memory task store

    Key features:
    - Monotonic IDs starting at 1
    - Partial updates via TaskUpdate
    - JSON persistence of tasks and the ID counter
    """

    def __init__(self) -> None:
        self._tasks: Dict[int, Task] = {}
        self._next_id = 1

    @property
    def next_id(self) -> int:
        """ID the next added task will receive"""
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TodoList):
            return NotImplemented
        return self._next_id == other._next_id and self._tasks == other._tasks

    def __repr__(self) -> str:
        return f"TodoList(tasks={len(self._tasks)}, next_id={self._next_id})"

    # ========================================
    # TASK OPERATIONS
    # ========================================

    def add_task(self, new_task: NewTask) -> int:
        """Store a new task under the next free ID and return that ID"""
        task_id = self._next_id
        self._tasks[task_id] = Task(
            id=task_id,
            description=new_task.description,
            due_date=new_task.due_date,
            category=new_task.category,
            priority=new_task.priority,
        )
        self._next_id += 1

        logger.debug(f"Added task {task_id} in category {new_task.category!r}")
        return task_id

    def get_task(self, task_id: int) -> Optional[Task]:
        return self._tasks.get(task_id)

    def list_tasks(self, category: Optional[str] = None) -> List[Task]:
        """
        All tasks, or only those whose category equals `category`
        (exact, case-sensitive). Tasks come back in ID order.
        """
        return [
            task for task in self._tasks.values()
            if category is None or task.category == category
        ]

    def remove_task(self, task_id: int) -> None:
        if task_id not in self._tasks:
            raise TaskNotFoundError(task_id)
        del self._tasks[task_id]
        logger.debug(f"Removed task {task_id}")

    def update_task(self, task_id: int, task_update: TaskUpdate) -> None:
        """
        Merge `task_update` into the stored task.

        Each field of the update is applied only when it is not None. A new
        due date always becomes DueOn; an update cannot clear a due date or
        set a DueBefore.
        """
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        changes = {}
        if task_update.description is not None:
            changes["description"] = task_update.description
        if task_update.due_date is not None:
            changes["due_date"] = DueOn(day=task_update.due_date)
        if task_update.category is not None:
            changes["category"] = task_update.category

        if changes:
            self._tasks[task_id] = task.model_copy(update=changes)
        logger.debug(f"Updated task {task_id}: {sorted(changes)}")

    def get_categories(self) -> List[str]:
        """Distinct categories in use, each listed once"""
        return list(dict.fromkeys(task.category for task in self._tasks.values()))

    # ========================================
    # PERSISTENCE OPERATIONS
    # ========================================

    def to_data(self) -> TodoListData:
        return TodoListData(tasks=dict(self._tasks), next_id=self._next_id)

    @classmethod
    def from_data(cls, data: TodoListData) -> "TodoList":
        todo_list = cls()
        todo_list._tasks = dict(sorted(data.tasks.items()))
        todo_list._next_id = data.next_id
        return todo_list

    def save_to_file(self, filename: PathLike) -> None:
        """Write the list to `filename` as JSON"""
        file_path = Path(filename)

        try:
            payload = self.to_data().model_dump_json(indent=2)
        except (ValidationError, PydanticSerializationError) as e:
            raise SerializationError(f"Could not encode todo list: {e}") from e

        if file_path.name in ("", ".", ".."):
            raise StorageIOError(f"Not a file name: {str(filename)!r}", str(filename))

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=file_path.parent,
                prefix=f".{file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(payload)
            os.replace(tmp_name, file_path)
        except (OSError, ValueError) as e:
            # ValueError: embedded NUL byte in the path
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            logger.warning(f"Saving {file_path} failed: {e}")
            raise StorageIOError(f"Could not write {file_path}: {e}", str(file_path)) from e

        logger.info(f"Saved todo list to {file_path} ({len(self)} tasks, next_id={self._next_id})")

    @classmethod
    def load_from_file(cls, filename: PathLike) -> "TodoList":
        """Read a list saved by save_to_file; returns a new TodoList"""
        file_path = Path(filename)

        try:
            raw = file_path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            logger.warning(f"Todo list not found: {file_path}")
            raise TodoFileNotFoundError(f"No such file: {file_path}", str(file_path)) from e
        except OSError as e:
            logger.warning(f"Loading {file_path} failed: {e}")
            raise StorageIOError(f"Could not read {file_path}: {e}", str(file_path)) from e
        except UnicodeDecodeError as e:
            raise SerializationError(f"{file_path} is not a UTF-8 text file") from e
        except ValueError as e:
            raise StorageIOError(f"Could not read {file_path!r}: {e}", str(file_path)) from e

        try:
            data = TodoListData.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Malformed todo list {file_path}: {e.error_count()} errors")
            raise SerializationError(f"Malformed todo list in {file_path}: {e}") from e

        todo_list = cls.from_data(data)
        logger.info(f"Loaded todo list from {file_path} ({len(todo_list)} tasks)")
        return todo_list
