# 📄 File: plantpal/shared/infrastructure/memory/collection.py
#
# 🧭 Purpose (Layman Explanation):
# A small in-process "table" used when PlantPal runs without a database. It keeps
# records in memory and makes sure two requests never half-update the same record.
#
# 🧪 Purpose (Technical Summary):
# Insertion-ordered dict of pydantic entities guarded by a lock. Reads and writes
# exchange deep copies so callers can never mutate stored state in place.
#
# 🔗 Dependencies:
# - threading (lock), pydantic BaseModel (model_copy)
#
# 🔄 Connected Modules / Calls From:
# - Memory repository implementations of every module

import threading
from contextlib import contextmanager
from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class InMemoryCollection(Generic[T]):
    """
    Keyed, insertion-ordered entity store.

    Mutations happen inside ``mutate`` under a lock, so each read-modify-write
    is atomic with respect to every other operation on the collection.
    """

    def __init__(self) -> None:
        self._items: Dict[str, T] = {}
        self._lock = threading.Lock()

    @contextmanager
    def locked(self) -> Iterator[Dict[str, T]]:
        """Yield the raw mapping while holding the lock."""
        with self._lock:
            yield self._items

    def put(self, key: str, item: T) -> T:
        with self._lock:
            self._items[key] = item.model_copy(deep=True)
            return item.model_copy(deep=True)

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            item = self._items.get(key)
            return item.model_copy(deep=True) if item is not None else None

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        with self._lock:
            for item in self._items.values():
                if predicate(item):
                    return item.model_copy(deep=True)
        return None

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock:
            return [item.model_copy(deep=True) for item in self._items.values() if predicate(item)]

    def all(self) -> List[T]:
        return self.filter(lambda _: True)

    def mutate(self, key: str, change: Callable[[T], Optional[bool]]) -> Optional[T]:
        """
        Apply ``change`` to a working copy of the stored item and store the result.

        ``change`` may return False to abandon the mutation (the stored item is
        left untouched and None is returned).
        """
        with self._lock:
            current = self._items.get(key)
            if current is None:
                return None
            working = current.model_copy(deep=True)
            if change(working) is False:
                return None
            self._items[key] = working
            return working.model_copy(deep=True)

    def pop(self, key: str, predicate: Optional[Callable[[T], bool]] = None) -> Optional[T]:
        with self._lock:
            current = self._items.get(key)
            if current is None or (predicate is not None and not predicate(current)):
                return None
            del self._items[key]
            return current

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
