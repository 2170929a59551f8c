"""Tests for CommandDispatcher."""

from datetime import date, datetime

import pytest

from taskline.dispatcher import CommandDispatcher, ResultKind
from taskline.errors import (
    EmptyDescriptionError,
    IndexOutOfRangeError,
    InvalidIndexError,
    MissingEnquiryDateError,
    UnrecognizedCommandError,
    WrongDateFormatError,
)
from taskline.models import DateToken, Deadline, Event, TaskKind, ToDo
from taskline.store import TaskStore

from .fakes import RecordingStorage


class TestAddCommands:
    """todo, deadline and event."""

    def test_todo(self, dispatcher, store, storage):
        result = dispatcher.dispatch("todo read book")

        assert result.kind == ResultKind.ADDED
        assert result.count == 1
        assert isinstance(result.task, ToDo)
        assert store.find_task(1).description == "read book"
        assert store.find_task(1).done is False
        assert len(storage.saved) == 1

    def test_deadline_date_only(self, dispatcher, store):
        result = dispatcher.dispatch("deadline submit report /by 2024-03-01")

        task = store.find_task(1)
        assert result.kind == ResultKind.ADDED
        assert isinstance(task, Deadline)
        assert task.description == "submit report"
        assert task.by == DateToken("2024-03-01")

    def test_event_with_time(self, dispatcher, store):
        dispatcher.dispatch("event team dinner /at 2024-03-01 7:00 PM")

        task = store.find_task(1)
        assert isinstance(task, Event)
        assert task.kind == TaskKind.EVENT
        assert task.at.time_part == "7:00 PM"

    def test_keyword_is_case_insensitive(self, dispatcher, store):
        dispatcher.dispatch("TODO read book")
        assert len(store) == 1

    @pytest.mark.parametrize("line", ["todo", "todo   ", "deadline", "event ", "find"])
    def test_empty_description(self, dispatcher, store, storage, line):
        with pytest.raises(EmptyDescriptionError):
            dispatcher.dispatch(line)
        assert len(store) == 0
        assert storage.saved == []

    def test_deadline_text_missing_before_separator(self, dispatcher, store):
        with pytest.raises(EmptyDescriptionError):
            dispatcher.dispatch("deadline /by 2024-03-01")
        assert len(store) == 0

    def test_deadline_short_year(self, dispatcher, store, storage):
        with pytest.raises(WrongDateFormatError) as exc_info:
            dispatcher.dispatch("deadline submit report /by 24-03-01")
        assert exc_info.value.rule == "length"
        assert len(store) == 0
        assert storage.saved == []

    def test_deadline_two_digit_year_full_length(self, dispatcher):
        with pytest.raises(WrongDateFormatError) as exc_info:
            dispatcher.dispatch("deadline submit report /by 24-03-2001")
        assert exc_info.value.rule == "year"

    def test_deadline_missing_separator(self, dispatcher, store):
        with pytest.raises(WrongDateFormatError) as exc_info:
            dispatcher.dispatch("deadline submit report")
        assert exc_info.value.rule == "separator"
        assert len(store) == 0

    def test_event_bad_time(self, dispatcher, store):
        with pytest.raises(WrongDateFormatError, match="time"):
            dispatcher.dispatch("event party /at 2024-03-01 7:00 pm")
        assert len(store) == 0

    def test_empty_description_checked_before_date(self, dispatcher):
        with pytest.raises(EmptyDescriptionError):
            dispatcher.dispatch("event")


class TestQueryCommands:
    """list, find and stats."""

    def test_list_empty(self, dispatcher):
        assert dispatcher.dispatch("list").kind == ResultKind.EMPTY_LIST

    def test_list(self, dispatcher):
        dispatcher.dispatch("todo a")
        dispatcher.dispatch("todo b")

        result = dispatcher.dispatch("list")
        assert result.kind == ResultKind.LIST
        assert [t.description for t in result.tasks] == ["a", "b"]

    def test_queries_do_not_save(self, dispatcher, storage):
        dispatcher.dispatch("todo a")
        dispatcher.dispatch("list")
        dispatcher.dispatch("find a")
        dispatcher.dispatch("stats today")
        assert len(storage.saved) == 1

    def test_find(self, dispatcher, store):
        dispatcher.dispatch("todo read book")
        dispatcher.dispatch("todo walk dog")
        dispatcher.dispatch("todo return book")

        result = dispatcher.dispatch("find book")
        assert result.kind == ResultKind.FOUND
        assert [t.description for t in result.tasks] == ["read book", "return book"]
        assert len(store) == 3

    def test_find_nothing(self, dispatcher):
        dispatcher.dispatch("todo read book")
        result = dispatcher.dispatch("find cake")
        assert result.tasks == []

    def test_stats(self, storage):
        done = ToDo("read book")
        done.mark_as_done()
        done.completed_at = datetime(2024, 3, 30, 9, 0)
        dispatcher = CommandDispatcher(
            TaskStore([done, ToDo("walk dog")]), storage, today=lambda: date(2024, 3, 31)
        )

        result = dispatcher.dispatch("stats this week")
        assert result.kind == ResultKind.STATS
        assert "read book" in result.report
        assert "walk dog" not in result.report

    def test_stats_missing_period(self, dispatcher):
        with pytest.raises(MissingEnquiryDateError):
            dispatcher.dispatch("stats")


class TestIndexCommands:
    """mark, unmark and delete."""

    @pytest.fixture
    def filled(self, dispatcher):
        for i in range(1, 13):
            dispatcher.dispatch(f"todo task {i}")
        return dispatcher

    def test_mark_and_unmark(self, filled, store, storage):
        saves = len(storage.saved)

        result = filled.dispatch("mark 2")
        assert result.kind == ResultKind.MARKED
        assert result.index == 2
        assert store.find_task(2).done

        result = filled.dispatch("unmark 2")
        assert result.kind == ResultKind.UNMARKED
        assert not store.find_task(2).done
        assert len(storage.saved) == saves + 2

    def test_mark_twice_is_harmless(self, filled, store):
        filled.dispatch("mark 1")
        filled.dispatch("mark 1")
        assert store.find_task(1).done

    def test_two_digit_index(self, filled, store):
        filled.dispatch("mark 12")
        assert store.find_task(12).done
        assert not store.find_task(2).done

    def test_delete(self, filled, store):
        result = filled.dispatch("delete 3")

        assert result.kind == ResultKind.DELETED
        assert result.task.description == "task 3"
        assert result.count == 11
        assert store.find_task(3).description == "task 4"

    def test_out_of_range(self, filled, store, storage):
        saves = len(storage.saved)
        with pytest.raises(IndexOutOfRangeError):
            filled.dispatch("delete 13")
        assert len(store) == 12
        assert len(storage.saved) == saves

    @pytest.mark.parametrize("line", ["mark", "unmark two", "delete 1a"])
    def test_non_numeric_index(self, filled, line):
        with pytest.raises(InvalidIndexError):
            filled.dispatch(line)


class TestSession:
    """bye, unknown commands and save failures."""

    def test_unrecognized(self, dispatcher):
        with pytest.raises(UnrecognizedCommandError):
            dispatcher.dispatch("blah blah")

    def test_keyword_must_be_first_word(self, dispatcher):
        with pytest.raises(UnrecognizedCommandError):
            dispatcher.dispatch("please todo this")

    @pytest.mark.parametrize("line", ["bye now", "list foo"])
    def test_bye_and_list_take_no_arguments(self, dispatcher, storage, line):
        with pytest.raises(UnrecognizedCommandError):
            dispatcher.dispatch(line)
        assert not dispatcher.terminated
        assert storage.saved == []

    def test_deadline_text_may_contain_separator_prefix(self, dispatcher, store):
        dispatcher.dispatch("deadline fix /bypass /by 2024-03-01")
        assert store.find_task(1).description == "fix /bypass"
        assert store.find_task(1).by == DateToken("2024-03-01")

    def test_bye_terminates_and_saves(self, dispatcher, storage):
        assert not dispatcher.terminated
        result = dispatcher.dispatch("bye")
        assert result.kind == ResultKind.FAREWELL
        assert dispatcher.terminated
        assert len(storage.saved) == 1

    def test_save_failure_keeps_mutation(self, store):
        dispatcher = CommandDispatcher(store, RecordingStorage(fail=True))

        result = dispatcher.dispatch("todo read book")
        assert result.warning == "disk full"
        assert len(store) == 1

    def test_saved_snapshot_matches_store(self, dispatcher, store, storage):
        dispatcher.dispatch("todo a")
        dispatcher.dispatch("todo b")
        dispatcher.dispatch("delete 1")
        assert [t.description for t in storage.saved[-1]] == ["b"]

    def test_commands(self, dispatcher):
        assert set(dispatcher.commands) == {
            "bye", "todo", "deadline", "event", "list", "find",
            "mark", "unmark", "delete", "stats",
        }
