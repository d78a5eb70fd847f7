#!/usr/bin/env python3
"""
TODO LIST - CLI Interface
=========================
Interactive command loop for managing a todo list.

Usage:
    todo
    todo --track --history-file ~/.todo_filenames.txt
    todo --load work.json --log-level INFO

Commands at the prompt:
    add, remove, list, get, update, categories,
    save, load, enable_tracking, help, quit
"""

import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional

from .errors import TodoError, TaskNotFoundError, InvalidDateError
from .history import FilenameTracker, default_history_path, HISTORY_FILE_ENV
from .manager import TodoList
from .schema import (
    DEFAULT_CATEGORY,
    MAX_TASK_ID,
    DueBefore,
    DueDate,
    DueOn,
    NewTask,
    NoDueDate,
    Priority,
    Task,
    TaskUpdate,
    format_due_date,
    parse_date,
)

logger = logging.getLogger("todolist.cli")

AFFIRMATIVE_RESPONSES = (
    "y", "yes", "yeah", "yep", "ok", "sure", "true", "accept", "aff",
)

COMMANDS = (
    "add", "remove", "list", "get", "update", "categories",
    "save", "load", "enable_tracking", "help", "quit",
)

InputFunc = Callable[[str], str]


def is_affirmative(response: str) -> bool:
    return response.strip().lower() in AFFIRMATIVE_RESPONSES


def print_task_details(task: Task) -> None:
    print("Task details:")
    print(f"ID: {task.id}")
    print(f"Description: {task.description}")
    print(f"Due Date: {format_due_date(task.due_date)}")
    print(f"Category: {task.category}")
    print(f"Priority: {task.priority.value}")


class TodoCLI:
    """
    Line-oriented front end for a TodoList

    Reads answers through `input_func` (builtin input by default), so a
    session can be scripted. Holds no task state of its own beyond the
    TodoList reference, which `load` swaps out wholesale.
    """

    def __init__(
        self,
        todo_list: TodoList,
        filename_tracker: FilenameTracker,
        input_func: Optional[InputFunc] = None
    ):
        self.todo_list = todo_list
        self.filename_tracker = filename_tracker
        self._input = input_func or input
        self._handlers: Dict[str, Callable[[], None]] = {
            "add": self.add_task,
            "remove": self.remove_task,
            "list": self.list_tasks,
            "get": self.get_task,
            "update": self.update_task,
            "categories": self.list_categories,
            "save": self.save_list,
            "load": self.load_list,
            "enable_tracking": self.enable_tracking,
            "help": self.show_help,
        }

    def ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    # ========================================
    # SESSION
    # ========================================

    def prompt_tracking(self) -> None:
        response = self.ask("Would you like to enable filename tracking? (y/n): ")
        if is_affirmative(response):
            self.filename_tracker.enable_tracking()
            print("Filename tracking enabled.")
        else:
            print(
                "Filename tracking disabled. You can enable it later by "
                "using the 'enable_tracking' command."
            )

    def run(self) -> int:
        """Read and dispatch commands until quit or end of input"""
        prompt = f"Enter command ({'/'.join(COMMANDS)}): "
        while True:
            try:
                command = self.ask(prompt)
            except EOFError:
                print()
                command = "quit"

            if command == "quit":
                print("Goodbye!")
                return 0

            handler = self._handlers.get(command)
            if handler is None:
                print("Unknown command.")
                continue

            try:
                handler()
            except EOFError:
                print()
                print("Goodbye!")
                return 0

    def show_help(self) -> None:
        print("Available commands:")
        for command in COMMANDS:
            print(f"  {command}")

    # ========================================
    # INPUT HELPERS
    # ========================================

    def _ask_task_id(self) -> Optional[int]:
        text = self.ask("Enter task ID: ")
        try:
            task_id = int(text)
        except ValueError:
            task_id = -1
        if not 0 <= task_id <= MAX_TASK_ID:
            print("Invalid task ID.")
            return None
        return task_id

    def _ask_due_date(self) -> DueDate:
        text = self.ask(
            "Enter due date (YYYY-MM-DD, prefix with '<' for 'before', "
            "leave blank for no date): "
        )
        if not text:
            return NoDueDate()

        before = text.startswith("<")
        try:
            day = parse_date(text[1:] if before else text)
        except InvalidDateError:
            print("Invalid date format. Setting due date to none.")
            return NoDueDate()
        return DueBefore(day=day) if before else DueOn(day=day)

    def _ask_priority(self) -> Priority:
        text = self.ask("Enter priority (low/medium/high, leave blank for low): ")
        if not text:
            return Priority.LOW
        try:
            return Priority.parse(text)
        except ValueError:
            print("Unknown priority. Using Low.")
            return Priority.LOW

    def _choose_filename(self, select_prompt: str, entry_prompt: str) -> str:
        filenames = self.filename_tracker.list()
        if self.filename_tracker.tracking_enabled and filenames:
            selected = self.select_file(filenames, select_prompt)
            if selected is not None:
                return selected
        return self.ask(entry_prompt)

    def select_file(self, filenames: List[str], prompt: str) -> Optional[str]:
        """
        Numbered menu of known filenames. Returns the chosen name, or None
        when the user wants to type a new one.
        """
        new_choice = len(filenames) + 1
        print(prompt)
        for number, filename in enumerate(filenames, start=1):
            print(f"  {number}. {filename}")
        print(f"  {new_choice}. Enter new filename")

        while True:
            text = self.ask(f"Choose 1-{new_choice} (leave blank for a new filename): ")
            if not text:
                return None
            try:
                choice = int(text)
            except ValueError:
                choice = 0
            if 1 <= choice < new_choice:
                print(f"Selected: {filenames[choice - 1]}")
                return filenames[choice - 1]
            if choice == new_choice:
                return None
            print("Invalid choice.")

    # ========================================
    # COMMANDS
    # ========================================

    def add_task(self) -> None:
        description = self.ask("Enter task: ")
        due_date = self._ask_due_date()
        category = self.ask("Enter category (leave blank for general): ") or DEFAULT_CATEGORY
        priority = self._ask_priority()

        task_id = self.todo_list.add_task(NewTask(
            description=description,
            due_date=due_date,
            category=category,
            priority=priority,
        ))
        print(f"Task added with ID {task_id}.")

    def remove_task(self) -> None:
        task_id = self._ask_task_id()
        if task_id is None:
            return
        try:
            self.todo_list.remove_task(task_id)
        except TaskNotFoundError:
            print("Task not found.")
            return
        print("Task removed.")

    def list_tasks(self) -> None:
        category = self.ask("Enter category to list (leave blank for all): ") or None
        tasks = self.todo_list.list_tasks(category)
        if not tasks:
            print("No tasks found.")
            return
        for task in tasks:
            print_task_details(task)

    def get_task(self) -> None:
        task_id = self._ask_task_id()
        if task_id is None:
            return
        task = self.todo_list.get_task(task_id)
        if task is None:
            print("Task not found.")
            return
        print_task_details(task)

    def update_task(self) -> None:
        task_id = self._ask_task_id()
        if task_id is None:
            return
        task = self.todo_list.get_task(task_id)
        if task is None:
            print("Task not found.")
            return
        print_task_details(task)

        description = self.ask("Enter new description (leave blank to keep current): ") or None

        due_date = None
        date_text = self.ask("Enter new due date (YYYY-MM-DD, leave blank to keep current): ")
        if date_text:
            try:
                due_date = parse_date(date_text)
            except InvalidDateError:
                print("Invalid date format. Keeping the current due date.")

        category = self.ask("Enter new category (leave blank to keep current): ") or None

        try:
            self.todo_list.update_task(task_id, TaskUpdate(
                description=description,
                due_date=due_date,
                category=category,
            ))
        except TaskNotFoundError:
            print("Task not found.")
            return
        print(f"Task id {task_id} updated.")

    def list_categories(self) -> None:
        categories = self.todo_list.get_categories()
        if not categories:
            print("No categories found.")
            return
        for category in categories:
            print(category)

    def save_list(self) -> None:
        filename = self._choose_filename("Select a file to save to:", "Enter filename to save: ")
        if not filename:
            print("No filename given.")
            return

        try:
            self.todo_list.save_to_file(filename)
        except TodoError as e:
            print(f"Failed to save todo list: {e}")
            return
        print(f"Todo list saved successfully to {filename}.")

        try:
            self.filename_tracker.add(filename)
        except TodoError as e:
            logger.warning(f"Could not remember filename {filename}: {e}")

    def load_list(self) -> None:
        filename = self._choose_filename("Select a file to load:", "Enter filename to load: ")
        if not filename:
            print("No filename given.")
            return

        try:
            loaded = TodoList.load_from_file(filename)
        except TodoError as e:
            print(f"Error loading list: {e}. Continuing with current list.")
            return

        self.todo_list = loaded
        print(f"Todo list loaded from {filename} ({len(loaded)} tasks).")

    def enable_tracking(self) -> None:
        self.filename_tracker.enable_tracking()
        print("Filename tracking enabled.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo",
        description="Interactive todo list manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  todo                               Start an empty list, ask about tracking
  todo --track                       Offer previously used files on save/load
  todo --load work.json              Start from a saved list
  todo --history-file ~/.todo_files  Use another filename history
                                     (or set {HISTORY_FILE_ENV})
        """
    )
    parser.add_argument(
        "--history-file",
        help=f"Filename history file (default: ${HISTORY_FILE_ENV} or .todo_filenames.txt)"
    )
    tracking = parser.add_mutually_exclusive_group()
    tracking.add_argument(
        "--track", dest="track", action="store_true", default=None,
        help="Enable filename tracking without asking"
    )
    tracking.add_argument(
        "--no-track", dest="track", action="store_false",
        help="Disable filename tracking without asking"
    )
    parser.add_argument("--load", metavar="FILE", help="Todo list file to start from")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        tracker = FilenameTracker(args.history_file or default_history_path())
    except TodoError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    todo_list = TodoList()
    if args.load:
        try:
            todo_list = TodoList.load_from_file(args.load)
        except TodoError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1

    cli = TodoCLI(todo_list, tracker)
    print("Welcome to the Todo List CLI!")

    try:
        if args.track is None:
            cli.prompt_tracking()
        elif args.track:
            tracker.enable_tracking()
        return cli.run()
    except (EOFError, KeyboardInterrupt):
        print()
        print("Goodbye!")
        return 0


if __name__ == "__main__":
    sys.exit(main())
