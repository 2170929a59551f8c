"""Ordered in-memory task list.

TaskStore keeps tasks in insertion order and exposes them through 1-based
positions, matching the numbers users see in the rendered list. Deleting a
task shifts every later task down by one.
"""

from typing import Iterable, Iterator, List, Optional

from taskline.errors import IndexOutOfRangeError
from taskline.models import Task


class TaskStore:
    """Ordered, 1-indexed collection of tasks for one session.

    Attributes:
        _tasks: Backing list; position ``i`` holds task number ``i + 1``
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        """Initialize the store, optionally hydrated from loaded tasks.

        Args:
            tasks: Tasks in display order. If None, the store starts empty.
        """
        self._tasks: List[Task] = list(tasks) if tasks is not None else []

    def append(self, task: Task) -> int:
        """Add a task to the end of the list.

        Returns:
            The new number of tasks
        """
        self._tasks.append(task)
        return len(self._tasks)

    def find_task(self, index: int) -> Task:
        """Get the task at a 1-based position.

        Raises:
            IndexOutOfRangeError: If index is not within 1..len(self)
        """
        if not 1 <= index <= len(self._tasks):
            raise IndexOutOfRangeError(index, len(self._tasks))
        return self._tasks[index - 1]

    def mark_done(self, index: int) -> Task:
        task = self.find_task(index)
        task.mark_as_done()
        return task

    def mark_undone(self, index: int) -> Task:
        task = self.find_task(index)
        task.unmark()
        return task

    def delete(self, index: int) -> Task:
        """Remove the task at a 1-based position.

        Returns:
            The removed task, so callers can report what was deleted
        """
        self.find_task(index)
        return self._tasks.pop(index - 1)

    def find_by_keyword(self, keyword: str) -> "TaskStore":
        """Collect tasks whose description contains keyword.

        Matching is a case-sensitive substring test. The result is a new
        store in the original relative order; this store is not modified.
        """
        return TaskStore(task for task in self._tasks if keyword in task.description)

    def tasks(self) -> List[Task]:
        """Return a shallow copy of the tasks in order."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))
