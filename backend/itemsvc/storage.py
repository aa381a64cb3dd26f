from __future__ import annotations

import threading
import time
from typing import Callable, Dict, List

from itemsvc.errors import ItemNotFoundError
from itemsvc.schemas import Item


class ItemStore:
    """Thread-safe in-memory item store with one coarse-grained lock.

    Items are frozen models, so the snapshot returned by ``list`` can be
    handed out without copying each item.
    """

    def __init__(self):
        self._items: Dict[str, Item] = {}
        self._lock = threading.Lock()

    def list(self) -> List[Item]:
        with self._lock:
            return list(self._items.values())

    def get(self, key: str) -> Item:
        with self._lock:
            item = self._items.get(key)
        if item is None:
            raise ItemNotFoundError(key)
        return item

    def put(self, item: Item) -> None:
        with self._lock:
            self._items[item.key] = item

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class NanosecondKeys:
    """Issues keys as decimal nanosecond timestamps, strictly increasing.

    Two calls landing on the same clock tick get consecutive values instead
    of the same key.
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            self._last = max(self._clock(), self._last + 1)
            return str(self._last)
