"""Storage layer for taskline.

This module provides an abstract storage interface and a JSON file
implementation for persisting the task list. The whole list is rewritten on
every save; JsonStorage holds an fcntl lock while reading or writing.
"""

import fcntl
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from taskline.config import get_settings
from taskline.errors import PersistenceError, WrongDateFormatError
from taskline.models import Deadline, Event, Status, Task, TaskKind, ToDo
from taskline.parser import validate_date_token

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for task storage implementations."""

    @abstractmethod
    def save(self, tasks: Iterable[Task]) -> None:
        """Save tasks to storage, replacing what was there.

        Args:
            tasks: Tasks in display order

        Raises:
            PersistenceError: If the tasks could not be written
        """
        pass

    @abstractmethod
    def load(self) -> List[Task]:
        """Load tasks from storage.

        Returns:
            Tasks in display order

        Raises:
            PersistenceError: If the stored tasks could not be read
        """
        pass


def task_to_dict(task: Task) -> Dict[str, Any]:
    """Convert a task to its JSON-serializable form."""
    date = task.date
    return {
        "kind": task.kind.value,
        "description": task.description,
        "status": task.status.value,
        "date": date.raw if date is not None else None,
        "created_at": task.created_at.isoformat(),
        "completed_at": task.completed_at.isoformat() if task.completed_at else None,
    }


def task_from_dict(data: Dict[str, Any]) -> Task:
    """Rebuild a task from its JSON form.

    Dates of deadlines and events go through the same validation as typed
    input, so a loaded task is never in a state a command could not create.

    Raises:
        KeyError, ValueError, TypeError: If the entry is malformed
        WrongDateFormatError: If a stored date fails validation
    """
    kind = TaskKind(data["kind"])
    common = {
        "status": Status(data["status"]),
        "created_at": datetime.fromisoformat(data["created_at"]),
        "completed_at": (
            datetime.fromisoformat(data["completed_at"]) if data.get("completed_at") else None
        ),
    }
    description = data["description"]
    if not isinstance(description, str) or not description.strip():
        raise ValueError(f"{kind.value} has no description")

    if kind == TaskKind.TODO:
        return ToDo(description, **common)

    raw_date = data.get("date")
    if not isinstance(raw_date, str):
        raise ValueError(f"{kind.value} '{description}' has no date")
    token = validate_date_token(raw_date)

    if kind == TaskKind.DEADLINE:
        return Deadline(description, by=token, **common)
    return Event(description, at=token, **common)


class JsonStorage(Storage):
    """JSON file-based storage implementation with file locking.

    Attributes:
        file_path: Path to the JSON storage file
    """

    def __init__(self, file_path: Optional[Union[str, Path]] = None):
        """Initialize JsonStorage with a file path.

        Args:
            file_path: Path to the JSON file for storage. If None, uses
                      the db_path setting (TASKLINE_DB_PATH or tasks.json)
        """
        if file_path is None:
            file_path = get_settings().db_path
        self.file_path = Path(file_path)

    def save(self, tasks: Iterable[Task]) -> None:
        """Save tasks to JSON file with file locking.

        Args:
            tasks: Tasks in display order
        """
        serializable_tasks = [task_to_dict(task) for task in tasks]

        try:
            # Ensure parent directory exists
            self.file_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.file_path, "w", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                try:
                    json.dump(serializable_tasks, f, indent=2)
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except OSError as e:
            raise PersistenceError(f"Could not save tasks to {self.file_path}: {e}") from e

        logger.debug("Saved %d tasks to %s", len(serializable_tasks), self.file_path)

    def load(self) -> List[Task]:
        """Load tasks from JSON file with file locking.

        Returns:
            Tasks in display order. Returns an empty list if the file
            doesn't exist or is empty.
        """
        if not self.file_path.exists():
            logger.debug("No task file at %s, starting empty", self.file_path)
            return []

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                try:
                    content = f.read().strip()
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Could not read tasks from {self.file_path}: {e}") from e

        if not content:
            return []

        try:
            data = json.loads(content)
            if not isinstance(data, list):
                raise ValueError("expected a JSON list of tasks")
            tasks = [task_from_dict(entry) for entry in data]
        except (ValueError, KeyError, TypeError, WrongDateFormatError) as e:
            raise PersistenceError(f"Task file {self.file_path} is corrupted: {e}") from e

        logger.debug("Loaded %d tasks from %s", len(tasks), self.file_path)
        return tasks
