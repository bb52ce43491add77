# mcphub/repository.py
"""
Record storage for the hub resources.

Handlers talk to a :class:`Repository` rather than to module level lists,
so each application instance (and each test) owns its own records. The
only implementation shipped here keeps records in memory; nothing is
persisted and a restart resets every resource to its seed data.
"""

from __future__ import annotations

import abc
import threading
import uuid
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def new_id() -> str:
    """Return a fresh random record identifier."""
    return uuid.uuid4().hex


class Repository(abc.ABC, Generic[T]):
    """Ordered collection of records keyed by their ``id`` attribute."""

    @abc.abstractmethod
    def all(self) -> List[T]:
        """Return a snapshot of every record in store order."""

    @abc.abstractmethod
    def get(self, key: str) -> Optional[T]:
        ...

    @abc.abstractmethod
    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """Return the first record matching ``predicate``."""

    @abc.abstractmethod
    def add(self, record: T) -> T:
        ...

    @abc.abstractmethod
    def add_if(self, record: T, conflicts: Callable[[T], bool]) -> bool:
        """Add ``record`` unless a stored record matches ``conflicts``.

        The check and the insert are atomic.
        """

    @abc.abstractmethod
    def replace(self, record: T) -> T:
        """Swap the stored record sharing ``record.id`` for ``record``."""

    @abc.abstractmethod
    def remove(self, key: str) -> bool:
        """Delete a record; ``False`` when the key is unknown."""

    @abc.abstractmethod
    def __len__(self) -> int:
        ...


class InMemoryRepository(Repository[T]):
    # FastAPI runs sync endpoints in a thread pool, so mutations are
    # serialised with a lock.
    def __init__(self, records: Iterable[T] = ()) -> None:
        self._records: List[T] = list(records)
        self._lock = threading.Lock()

    def all(self) -> List[T]:
        with self._lock:
            return list(self._records)

    def get(self, key: str) -> Optional[T]:
        return self.find(lambda r: str(r.id) == str(key))

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        with self._lock:
            return next((r for r in self._records if predicate(r)), None)

    def add(self, record: T) -> T:
        with self._lock:
            self._records.append(record)
        return record

    def add_if(self, record: T, conflicts: Callable[[T], bool]) -> bool:
        with self._lock:
            if any(conflicts(r) for r in self._records):
                return False
            self._records.append(record)
        return True

    def replace(self, record: T) -> T:
        with self._lock:
            for index, current in enumerate(self._records):
                if current.id == record.id:
                    self._records[index] = record
                    return record
        raise KeyError(record.id)

    def remove(self, key: str) -> bool:
        with self._lock:
            for index, current in enumerate(self._records):
                if str(current.id) == str(key):
                    del self._records[index]
                    return True
        return False

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
