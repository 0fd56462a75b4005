from .chain import Entry, chain_length, walk
from .shared import format_value, printf
from .table import ChainedHashTable


def dump_table(table: ChainedHashTable, name: str):
    printf("== {0:s} ==\n", name)
    printf(
        "capacity {0:d}, keys {1:d}\n",
        table.capacity,
        table.num_keys,
    )

    for index, head in enumerate(table.slots):
        dump_slot(index, head)


def dump_slot(index: int, head: Entry | None):
    printf("{0:04d} ", index)
    if head is None:
        printf("   |\n")
        return

    printf("{0:4d} ", chain_length(head))
    for entry in walk(head):
        printf("-> {0:s} {1:s} ", format_value(entry.key), format_value(entry.values))
    printf("\n")
