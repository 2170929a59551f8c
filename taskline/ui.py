"""Text rendering for taskline.

The only place that turns tasks and CommandResults into user-facing text.
"""

from typing import Iterable

from taskline.dispatcher import CommandResult, ResultKind
from taskline.errors import TaskError
from taskline.models import Task, TaskKind


def greeting() -> str:
    return "Hello! I'm taskline.\nWhat can I do for you?"


def farewell() -> str:
    return "Bye. Hope to see you again soon!"


def format_task(task: Task) -> str:
    """Render one task, e.g. "[D][ ] submit report (by: 2024-03-01)"."""
    text = f"[{task.type_icon}][{task.status_icon}] {task.description}"
    date = task.date
    if date is not None:
        label = "by" if task.kind == TaskKind.DEADLINE else "at"
        text += f" ({label}: {date})"
    return text


def format_task_list(tasks: Iterable[Task]) -> str:
    return "\n".join(f"{i}. {format_task(task)}" for i, task in enumerate(tasks, start=1))


def _count_line(count: int) -> str:
    noun = "task" if count == 1 else "tasks"
    return f"Now you have {count} {noun} in the list."


def render(result: CommandResult) -> str:
    """Render a dispatcher result as text.

    Args:
        result: Outcome of CommandDispatcher.dispatch

    Returns:
        Message for the user, including any save warning
    """
    kind = result.kind

    if kind == ResultKind.ADDED:
        text = (
            "Got it. I've added this task:\n"
            f"  {format_task(result.task)}\n"
            f"{_count_line(result.count)}"
        )
    elif kind == ResultKind.EMPTY_LIST:
        text = "Your list is empty."
    elif kind == ResultKind.LIST:
        text = "Here are the tasks in your list:\n" + format_task_list(result.tasks)
    elif kind == ResultKind.FOUND:
        if result.tasks:
            text = "Here are the matching tasks in your list:\n" + format_task_list(result.tasks)
        else:
            text = "No matching tasks found."
    elif kind == ResultKind.MARKED:
        text = f"Nice! I've marked this task as done:\n  {format_task(result.task)}"
    elif kind == ResultKind.UNMARKED:
        text = f"OK, I've marked this task as not done yet:\n  {format_task(result.task)}"
    elif kind == ResultKind.DELETED:
        text = (
            "Noted. I've removed this task:\n"
            f"  {format_task(result.task)}\n"
            f"{_count_line(result.count)}"
        )
    elif kind == ResultKind.STATS:
        text = result.report or ""
    elif kind == ResultKind.FAREWELL:
        text = farewell()
    else:
        raise ValueError(f"Unknown result kind: {kind}")

    if result.warning:
        text += f"\nWarning: changes were not saved ({result.warning})"
    return text


def render_error(error: TaskError) -> str:
    return f"OOPS!!! {error}"
