"""Fixtures for infrastructure event system tests."""

import threading
from datetime import datetime
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from infrastructure.events.dispatcher import EventDispatcher
from infrastructure.events.models import Event
from infrastructure.events.pool import Task, WorkerPool
from infrastructure.events.registry import ExecutionMode, ListenerRegistry


@pytest.fixture
def event_factory():
    """Factory for creating test events."""

    def _factory(
        event_type: str = "test.event",
        payload: dict = None,
        timestamp: datetime = None,
        correlation_id=None,
        source: str = "tests",
    ):
        return Event(
            event_type=event_type,
            payload=payload or {},
            timestamp=timestamp or datetime.now(),
            correlation_id=correlation_id or uuid4(),
            source=source,
        )

    return _factory


@pytest.fixture
def mock_event_handler():
    """Mock event handler function."""
    return MagicMock(__qualname__="mock_event_handler")


@pytest.fixture
def registry():
    return ListenerRegistry()


@pytest.fixture
def pool_factory():
    """Factory for worker pools that are shut down after the test."""
    pools = []

    def _factory(**kwargs):
        kwargs.setdefault("core_pool_size", 2)
        kwargs.setdefault("max_pool_size", 4)
        kwargs.setdefault("queue_capacity", 10)
        kwargs.setdefault("await_termination_seconds", 5)
        pool = WorkerPool(**kwargs)
        pools.append(pool)
        return pool

    yield _factory

    for pool in pools:
        pool.shutdown(timeout=2)


@pytest.fixture
def pool(pool_factory):
    return pool_factory()


@pytest.fixture
def dispatcher(registry, pool):
    return EventDispatcher(registry, pool)


@pytest.fixture
def task_factory(registry, event_factory):
    """Factory wrapping a callable into a pool task."""

    def _factory(callback, event=None, name=None):
        registration = registry.register(
            "task.event",
            callback,
            mode=ExecutionMode.ASYNC,
            name=name or getattr(callback, "__name__", "task"),
        )
        return Task(listener=registration, event=event or event_factory("task.event"))

    return _factory


@pytest.fixture
def gate():
    """Release-able barrier for tasks that must block until told otherwise."""
    release = threading.Event()
    yield release
    release.set()
