"""Completed-task report.

Reads the task store without modifying it and summarizes the tasks that were
marked done on or after an enquiry date.
"""

from datetime import date
from typing import List

from taskline.models import Task
from taskline.store import TaskStore


def completed_since(store: TaskStore, since: date) -> List[Task]:
    """Done tasks whose completion date is on or after ``since``, in list order."""
    return [
        task
        for task in store
        if task.done and task.completed_at is not None and task.completed_at.date() >= since
    ]


def completed_report(store: TaskStore, since: date) -> str:
    """Summarize the tasks completed since a date as plain text."""
    tasks = completed_since(store, since)
    if not tasks:
        return f"No tasks completed since {since.isoformat()}."

    noun = "task" if len(tasks) == 1 else "tasks"
    lines = [f"You completed {len(tasks)} {noun} since {since.isoformat()}:"]
    for i, task in enumerate(tasks, start=1):
        lines.append(f"{i}. {task.description} (done {task.completed_at:%Y-%m-%d})")
    return "\n".join(lines)
