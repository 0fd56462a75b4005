from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Hashable

from .chain import Entry, find_entry, new_entry, prepend, unlink, walk
from .shared import format_value, printf_err


_debug_trace_table = False


def set_debug_trace_table(b: bool):
    global _debug_trace_table
    _debug_trace_table = b


def trace(format: str, *args: Any):
    if _debug_trace_table:
        printf_err("[table] " + format + "\n", *args)


class ChainTableError(Exception):
    pass


class InvalidArgumentError(ChainTableError, ValueError):
    pass


class ZeroCapacityError(ChainTableError, ZeroDivisionError):
    pass


@dataclass(frozen=True)
class NotFound:
    pass


EMPTY_SLOT = "None"


class ChainedHashTable:
    """Fixed-capacity hash table using separate chaining.

    Every key maps to a list of values kept in insertion order. The number of
    slots never changes on its own; callers watch `load()` and call
    `resize()` themselves.
    """

    slots: list[Entry | None]
    num_keys: int

    def __init__(self, capacity: int) -> None:
        check_capacity(capacity, allow_zero=True)
        self.slots = [None for _ in range(capacity)]
        self.num_keys = 0

    @property
    def capacity(self) -> int:
        return len(self.slots)

    def __len__(self) -> int:
        return self.num_keys

    def __contains__(self, key: Hashable) -> bool:
        check_key(key)
        return find_entry(self.slots[self.hash_index(key)], key) is not None

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ChainedHashTable(capacity={self.capacity}, num_keys={self.num_keys})"

    def hash_index(self, key: Hashable) -> int:
        capacity = len(self.slots)
        if capacity == 0:
            raise ZeroCapacityError("cannot hash into a table with no slots")

        index = hash(key) % capacity
        if index < 0:
            index += capacity
        return index

    def insert(self, key: Hashable, value: Any) -> bool:
        """Add `value` under `key`. Returns True if `key` was new."""
        check_key(key)
        i = self.hash_index(key)

        entry = find_entry(self.slots[i], key)
        if entry is not None:
            entry.values.append(value)
            trace("insert {0!r} -> slot {1:d}: appended", key, i)
            return False

        self.slots[i] = prepend(self.slots[i], new_entry(key, [value]))
        self.num_keys += 1
        trace("insert {0!r} -> slot {1:d}: new key", key, i)
        return True

    def search(self, key: Hashable) -> list[Any] | NotFound:
        check_key(key)
        i = self.hash_index(key)

        entry = find_entry(self.slots[i], key)
        if entry is None:
            trace("search {0!r} -> slot {1:d}: not found", key, i)
            return NotFound()

        trace("search {0!r} -> slot {1:d}: {2:s}", key, i, format_value(entry.values))
        return entry.values

    def remove(self, key: Hashable) -> list[Any] | NotFound:
        check_key(key)
        i = self.hash_index(key)

        head, removed = unlink(self.slots[i], key)
        if removed is None:
            trace("remove {0!r} -> slot {1:d}: not found", key, i)
            return NotFound()

        self.slots[i] = head
        self.num_keys -= 1
        trace("remove {0!r} -> slot {1:d}: removed", key, i)
        return removed.values

    def load(self) -> float:
        if len(self.slots) == 0:
            raise ZeroCapacityError("load of a table with no slots")
        return self.num_keys / len(self.slots)

    def all_keys(self) -> tuple[Hashable, ...]:
        return tuple(entry.key for entry in self.entries())

    def entries(self) -> Iterator[Entry]:
        for head in self.slots:
            yield from walk(head)

    def resize(self, capacity: int):
        check_capacity(capacity, allow_zero=False)

        old_slots = self.slots
        self.slots = [None for _ in range(capacity)]
        self.num_keys = 0

        # old slot order, then chain order
        for head in old_slots:
            for entry in walk(head):
                self._link(entry.key, entry.values)

        trace("resize {0:d} -> {1:d}", len(old_slots), capacity)

    def _link(self, key: Hashable, values: list[Any]):
        # keys are already distinct, no lookup needed
        i = self.hash_index(key)
        self.slots[i] = prepend(self.slots[i], new_entry(key, values))
        self.num_keys += 1

    def render(self) -> str:
        rendered = []
        for head in self.slots:
            if head is None:
                rendered.append(EMPTY_SLOT)
            else:
                keys = "; ".join(format_value(entry.key) for entry in walk(head))
                rendered.append("{" + keys + "}")
        return "[" + ", ".join(rendered) + "]"


def new_table(capacity: int) -> ChainedHashTable:
    return ChainedHashTable(capacity)


def check_key(key: Hashable):
    if key is None:
        raise InvalidArgumentError("key must not be None")


def check_capacity(capacity: int, allow_zero: bool):
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidArgumentError("capacity must be an integer", capacity)
    if capacity < 0 or (capacity == 0 and not allow_zero):
        raise InvalidArgumentError("capacity out of range", capacity)
