"""Shared fixtures for todolist tests."""

from datetime import date
from pathlib import Path

import pytest

from todolist.history import FilenameTracker
from todolist.manager import TodoList
from todolist.schema import DueBefore, DueOn, NewTask, NoDueDate, Priority


@pytest.fixture
def todo_list():
    """An empty TodoList."""
    return TodoList()


@pytest.fixture
def populated_list():
    """A TodoList covering every due date variant and priority."""
    todo_list = TodoList()
    todo_list.add_task(NewTask(
        description="Learn systems design",
        due_date=NoDueDate(),
        priority=Priority.LOW,
    ))
    todo_list.add_task(NewTask(
        description="Ship release",
        due_date=DueOn(day=date(2024, 3, 1)),
        category="Work",
        priority=Priority.HIGH,
    ))
    todo_list.add_task(NewTask(
        description="Book dentist",
        due_date=DueBefore(day=date(2024, 2, 29)),
        category="Personal",
        priority=Priority.MEDIUM,
    ))
    return todo_list


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    return tmp_path / "filenames.txt"


@pytest.fixture
def tracker(history_path: Path) -> FilenameTracker:
    return FilenameTracker(history_path)


class ScriptedInput:
    """Feeds canned answers to prompts; raises EOFError when exhausted."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def scripted():
    return ScriptedInput
