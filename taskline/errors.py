"""Exception hierarchy for taskline.

CommandError subclasses describe bad user input. The session loop renders
them and keeps running. PersistenceError describes a failed load or save and
never discards the in-memory task list.
"""

from typing import Optional


class TaskError(Exception):
    """Base class for every taskline error."""


class CommandError(TaskError):
    """A command line could not be carried out."""


class EmptyDescriptionError(CommandError):
    """A command that needs free text was given none."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"The description of a {command} cannot be empty.")


class WrongDateFormatError(CommandError):
    """A date/time token failed validation.

    Attributes:
        token: The offending token, None when the separator was missing
        rule: Name of the first rule the token broke
    """

    def __init__(self, message: str, token: Optional[str] = None, rule: str = "format"):
        self.token = token
        self.rule = rule
        super().__init__(message)


class UnrecognizedCommandError(CommandError):
    """No known command matched the input line."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"I don't know what '{line}' means.")


class InvalidIndexError(CommandError):
    """The task number at the end of the line is missing or not a number."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Expected a task number at the end of '{line}'.")


class IndexOutOfRangeError(CommandError):
    """A task number outside 1..len(store) was used."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        if length == 0:
            message = f"Task {index} does not exist: the list is empty."
        else:
            message = f"Task {index} does not exist: choose a number from 1 to {length}."
        super().__init__(message)


class MissingEnquiryDateError(CommandError):
    """The stats command was given no period."""

    def __init__(self):
        super().__init__(
            "Missing enquiry period. Use 'today', 'this week', 'this month' or a number of days."
        )


class InvalidEnquiryPeriodError(CommandError):
    """The stats period is neither a keyword nor a day count."""

    def __init__(self, period: str):
        self.period = period
        super().__init__(
            f"Unknown enquiry period '{period}'. "
            "Use 'today', 'this week', 'this month' or a number of days."
        )


class PersistenceError(TaskError):
    """Reading or writing the task file failed."""
