import os
from datetime import datetime, timedelta

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from quote_keeper.storage import MemoryStorage, PersistenceError  # noqa: E402
from quote_keeper.store import LibraryStore  # noqa: E402


class FakeClock:
    """Deterministic replacement for the store's wall clock."""

    def __init__(self, start=None):
        self.current = start or datetime(2026, 10, 18, 12, 0).astimezone()

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current = self.current + timedelta(**kwargs)
        return self.current


class RecordingStorage(MemoryStorage):
    """In-memory storage that counts writes and can be told to fail them."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_writes = False
        self.write_count = 0

    def set(self, key, data):
        if self.fail_writes:
            raise PersistenceError(f"Simulated write failure for key {key!r}")
        super().set(key, data)
        self.write_count += 1


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def make_store(qapp, storage, clock):
    def _make(backend=None, **kwargs):
        kwargs.setdefault("defer_load", False)
        kwargs.setdefault("clock", clock)
        return LibraryStore(backend if backend is not None else storage, **kwargs)

    return _make


@pytest.fixture
def store(make_store):
    return make_store()
