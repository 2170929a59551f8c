"""Command dispatcher for taskline.

Maps the keyword at the start of a line to a handler, applies the task rules,
updates the TaskStore and saves it after every mutating command. Handlers
return a CommandResult describing what happened; rendering it to text is the
job of taskline.ui.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Dict, List, Optional

from taskline.errors import (
    EmptyDescriptionError,
    PersistenceError,
    UnrecognizedCommandError,
    WrongDateFormatError,
)
from taskline.models import Deadline, Event, Task, ToDo
from taskline.parser import (
    DEADLINE_SEPARATOR,
    EVENT_SEPARATOR,
    parse_command_and_description,
    parse_enquiry_period,
    parse_task_index,
    split_deadline_date_time,
    split_event_date_time,
    validate_date_token,
)
from taskline.statistics import completed_report
from taskline.storage import Storage
from taskline.store import TaskStore

logger = logging.getLogger(__name__)


class ResultKind(Enum):
    """What a dispatched command did."""

    ADDED = "added"
    LIST = "list"
    EMPTY_LIST = "empty_list"
    FOUND = "found"
    MARKED = "marked"
    UNMARKED = "unmarked"
    DELETED = "deleted"
    STATS = "stats"
    FAREWELL = "farewell"


@dataclass
class CommandResult:
    """Outcome of one command.

    Attributes:
        kind: Which command ran
        task: The task that was added, marked, unmarked or deleted
        tasks: Tasks to show for list and find
        count: Number of tasks in the store after the command
        index: 1-based position the command acted on
        report: Text of a statistics report
        warning: Set when the command succeeded but saving failed
    """

    kind: ResultKind
    task: Optional[Task] = None
    tasks: List[Task] = field(default_factory=list)
    count: int = 0
    index: Optional[int] = None
    report: Optional[str] = None
    warning: Optional[str] = None


Handler = Callable[[str, str], CommandResult]


class CommandDispatcher:
    """Runs command lines against one task store.

    Attributes:
        store: The session's task list
        storage: Where the list is saved after each change
        terminated: True once 'bye' has been handled
    """

    def __init__(self, store: TaskStore, storage: Storage, today: Optional[Callable[[], date]] = None):
        """Initialize the dispatcher.

        Args:
            store: Task list owned by this session
            storage: Persistence backend used after mutating commands
            today: Callable returning the current date, used by stats
        """
        self.store = store
        self.storage = storage
        self.terminated = False
        self._today = today or date.today
        self._handlers: Dict[str, Handler] = {
            "bye": self._cmd_bye,
            "todo": self._cmd_todo,
            "deadline": self._cmd_deadline,
            "event": self._cmd_event,
            "list": self._cmd_list,
            "find": self._cmd_find,
            "mark": self._cmd_mark,
            "unmark": self._cmd_unmark,
            "delete": self._cmd_delete,
            "stats": self._cmd_stats,
        }

    @property
    def commands(self) -> List[str]:
        """Keywords this dispatcher understands."""
        return list(self._handlers)

    def dispatch(self, line: str) -> CommandResult:
        """Run one command line.

        Args:
            line: Raw input line

        Returns:
            CommandResult for the presentation layer

        Raises:
            CommandError: If the line is invalid; the store is left unchanged
        """
        keyword, description = parse_command_and_description(line)
        handler = self._handlers.get(keyword)
        if handler is None:
            raise UnrecognizedCommandError(line.strip())

        logger.debug("Dispatching %r", keyword)
        return handler(line, description)

    def _save(self, result: CommandResult) -> CommandResult:
        """Write the full store; a failure is logged and reported, not raised."""
        try:
            self.storage.save(self.store.tasks())
        except PersistenceError as e:
            logger.error("Save failed: %s", e)
            result.warning = str(e)
        return result

    def _add(self, task: Task) -> CommandResult:
        count = self.store.append(task)
        logger.info("Added %s task #%d", task.kind.value, count)
        return self._save(CommandResult(ResultKind.ADDED, task=task, count=count, index=count))

    def _cmd_bye(self, line: str, description: str) -> CommandResult:
        if description:
            raise UnrecognizedCommandError(line.strip())
        self.terminated = True
        return self._save(CommandResult(ResultKind.FAREWELL, count=len(self.store)))

    def _cmd_todo(self, line: str, description: str) -> CommandResult:
        if not description:
            raise EmptyDescriptionError("todo")
        return self._add(ToDo(description))

    def _cmd_deadline(self, line: str, description: str) -> CommandResult:
        if not description:
            raise EmptyDescriptionError("deadline")
        text, token = split_deadline_date_time(description)
        if not text:
            raise EmptyDescriptionError("deadline")
        if token is None:
            raise WrongDateFormatError(
                f"A deadline needs a date: deadline <description> {DEADLINE_SEPARATOR} YYYY-MM-DD",
                rule="separator",
            )
        return self._add(Deadline(text, by=validate_date_token(token)))

    def _cmd_event(self, line: str, description: str) -> CommandResult:
        if not description:
            raise EmptyDescriptionError("event")
        text, token = split_event_date_time(description)
        if not text:
            raise EmptyDescriptionError("event")
        if token is None:
            raise WrongDateFormatError(
                f"An event needs a date: event <description> {EVENT_SEPARATOR} YYYY-MM-DD",
                rule="separator",
            )
        return self._add(Event(text, at=validate_date_token(token)))

    def _cmd_list(self, line: str, description: str) -> CommandResult:
        if description:
            raise UnrecognizedCommandError(line.strip())
        if len(self.store) == 0:
            return CommandResult(ResultKind.EMPTY_LIST)
        return CommandResult(ResultKind.LIST, tasks=self.store.tasks(), count=len(self.store))

    def _cmd_find(self, line: str, description: str) -> CommandResult:
        if not description:
            raise EmptyDescriptionError("find")
        matches = self.store.find_by_keyword(description)
        return CommandResult(ResultKind.FOUND, tasks=matches.tasks(), count=len(self.store))

    def _cmd_mark(self, line: str, description: str) -> CommandResult:
        index = parse_task_index(line)
        task = self.store.mark_done(index)
        return self._save(
            CommandResult(ResultKind.MARKED, task=task, index=index, count=len(self.store))
        )

    def _cmd_unmark(self, line: str, description: str) -> CommandResult:
        index = parse_task_index(line)
        task = self.store.mark_undone(index)
        return self._save(
            CommandResult(ResultKind.UNMARKED, task=task, index=index, count=len(self.store))
        )

    def _cmd_delete(self, line: str, description: str) -> CommandResult:
        index = parse_task_index(line)
        task = self.store.delete(index)
        logger.info("Deleted task #%d", index)
        return self._save(
            CommandResult(ResultKind.DELETED, task=task, index=index, count=len(self.store))
        )

    def _cmd_stats(self, line: str, description: str) -> CommandResult:
        since = parse_enquiry_period(description, self._today())
        return CommandResult(
            ResultKind.STATS, report=completed_report(self.store, since), count=len(self.store)
        )
