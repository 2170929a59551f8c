"""Tests for text rendering."""

from taskline.dispatcher import CommandResult, ResultKind
from taskline.errors import EmptyDescriptionError
from taskline.models import DateToken, Deadline, Event, ToDo
from taskline import ui


class TestFormatTask:
    """Tests for format_task."""

    def test_todo(self):
        assert ui.format_task(ToDo("read book")) == "[T][ ] read book"

    def test_done_deadline(self):
        task = Deadline("submit report", by=DateToken("2024-03-01"))
        task.mark_as_done()
        assert ui.format_task(task) == "[D][X] submit report (by: 2024-03-01)"

    def test_event(self):
        task = Event("team dinner", at=DateToken("2024-03-01 7:00 PM"))
        assert ui.format_task(task) == "[E][ ] team dinner (at: 2024-03-01 7:00 PM)"


class TestRender:
    """Tests for render and render_error."""

    def test_added(self):
        text = ui.render(CommandResult(ResultKind.ADDED, task=ToDo("read book"), count=1))
        assert "[T][ ] read book" in text
        assert "Now you have 1 task in the list." in text

    def test_list_is_numbered(self):
        result = CommandResult(ResultKind.LIST, tasks=[ToDo("a"), ToDo("b")], count=2)
        lines = ui.render(result).splitlines()
        assert lines[1:] == ["1. [T][ ] a", "2. [T][ ] b"]

    def test_empty_list(self):
        assert ui.render(CommandResult(ResultKind.EMPTY_LIST)) == "Your list is empty."

    def test_found_nothing(self):
        assert ui.render(CommandResult(ResultKind.FOUND)) == "No matching tasks found."

    def test_deleted_shows_removed_task_and_count(self):
        result = CommandResult(ResultKind.DELETED, task=ToDo("gone"), count=0, index=1)
        text = ui.render(result)
        assert "[T][ ] gone" in text
        assert "Now you have 0 tasks in the list." in text

    def test_marked(self):
        task = ToDo("read book")
        task.mark_as_done()
        text = ui.render(CommandResult(ResultKind.MARKED, task=task, index=1))
        assert "[T][X] read book" in text

    def test_farewell(self):
        assert ui.render(CommandResult(ResultKind.FAREWELL)) == ui.farewell()

    def test_warning_appended(self):
        result = CommandResult(ResultKind.ADDED, task=ToDo("x"), count=1, warning="disk full")
        assert ui.render(result).endswith("Warning: changes were not saved (disk full)")

    def test_render_error(self):
        text = ui.render_error(EmptyDescriptionError("todo"))
        assert text == "OOPS!!! The description of a todo cannot be empty."
