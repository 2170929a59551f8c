"""Shared fixtures."""

import pytest

from taskline.dispatcher import CommandDispatcher
from taskline.store import TaskStore

from .fakes import RecordingStorage


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def store():
    return TaskStore()


@pytest.fixture
def dispatcher(store, storage):
    return CommandDispatcher(store, storage)
