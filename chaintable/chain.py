from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Hashable


@dataclass(eq=False)
class Entry:
    key: Hashable
    values: list[Any]
    next: "Entry | None" = field(default=None, repr=False)


def new_entry(key: Hashable, values: list[Any]) -> Entry:
    return Entry(key=key, values=values, next=None)


def walk(head: Entry | None) -> Iterator[Entry]:
    entry = head
    while entry is not None:
        yield entry
        entry = entry.next


def find_entry(head: Entry | None, key: Hashable) -> Entry | None:
    for entry in walk(head):
        if entry.key == key:
            return entry
    return None


def prepend(head: Entry | None, entry: Entry) -> Entry:
    entry.next = head
    return entry


def unlink(head: Entry | None, key: Hashable) -> tuple[Entry | None, Entry | None]:
    """Detach the entry holding `key`.

    Returns the new chain head and the detached entry (None if the key is
    not in the chain). Entries before and after the detached one stay linked.
    """
    prev_entry = None
    entry = head

    while entry is not None and entry.key != key:
        prev_entry = entry
        entry = entry.next

    if entry is None:
        return head, None

    if prev_entry is None:
        head = entry.next
    else:
        prev_entry.next = entry.next

    entry.next = None
    return head, entry


def chain_length(head: Entry | None) -> int:
    return sum(1 for _ in walk(head))
