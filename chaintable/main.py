from dataclasses import dataclass
import sys

from .debug import dump_table
from .shared import format_value, printf, printf_err
from .table import (
    ChainedHashTable,
    ChainTableError,
    NotFound,
    new_table,
    set_debug_trace_table,
)


DEFAULT_CAPACITY = 5


@dataclass
class Session:
    table: ChainedHashTable


@dataclass(frozen=True)
class CommandOk:
    pass


@dataclass(frozen=True)
class CommandError:
    pass


CommandResult = CommandOk | CommandError


session: Session


def init_session(capacity: int = DEFAULT_CAPACITY):
    global session
    session = Session(table=new_table(capacity))


def parse_atom(text: str) -> int | str:
    digits = text[1:] if text.startswith("-") else text
    if digits.isdigit():
        return int(text)
    return text


def command_error(format: str, *args) -> CommandError:
    printf_err(format + "\n", *args)
    return CommandError()


def execute(line: str) -> CommandResult:
    words = line.split()
    if not words or words[0].startswith("#"):
        return CommandOk()

    table = session.table
    command, args = words[0], [parse_atom(w) for w in words[1:]]

    try:
        match command, args:
            case "new", [int(capacity)]:
                session.table = new_table(capacity)
            case "insert", [key, value]:
                is_new = table.insert(key, value)
                printf("{0:s}\n", "new key" if is_new else "appended")
            case "search", [key]:
                print_lookup(table.search(key))
            case "remove", [key]:
                print_lookup(table.remove(key))
            case "resize", [int(capacity)]:
                table.resize(capacity)
            case "load", []:
                printf("{0}\n", table.load())
            case "count", []:
                printf("{0:d}\n", table.num_keys)
            case "keys", []:
                printf("{0:s}\n", format_value(list(table.all_keys())))
            case "show", []:
                printf("{0:s}\n", table.render())
            case "dump", []:
                dump_table(table, "table")
            case "trace", ["on" | "off" as flag]:
                set_debug_trace_table(flag == "on")
            case _:
                return command_error("Unknown command '{0:s}'.", line.strip())
    except ChainTableError as e:
        return command_error("Error: {0:s}", str(e.args[0]))

    return CommandOk()


def print_lookup(values: list | NotFound):
    if isinstance(values, NotFound):
        printf("not found\n")
    else:
        printf("{0:s}\n", format_value(values))


def run_demo():
    table = new_table(5)
    table.insert("howdy", 15)
    table.insert("goodbye", 10)
    printf("{0}\n", table.insert("apple", 5))
    printf("{0:s}\n", str(table))

    table2 = new_table(5)
    table2.insert("howdy", 15)
    table2.insert("goodbye", 10)
    table2.insert("apple", 5)
    printf("{0:d}\n", table2.num_keys)
    table2.insert("howdy", 25)  # duplicate
    printf("{0:d}\n", table2.num_keys)

    table3 = new_table(5)
    table3.insert("howdy", 15)
    table3.insert("goodbye", 10)
    table3.insert("apple", 5)
    printf("{0}\n", table3.load())
    table3.insert("pear", 6)
    printf("{0}\n", table3.load())

    table4 = new_table(5)
    table4.insert("howdy", 15)
    table4.insert("goodbye", 10)
    table4.insert("apple", 5)
    table4.insert("howdy", 25)  # duplicate
    printf("{0:s}\n", format_value(list(table4.all_keys())))

    table5 = new_table(5)
    table5.insert("howdy", 15)
    table5.insert("goodbye", 10)
    table5.insert("apple", 5)
    printf("{0:s}\n", str(table5))
    table5.resize(7)
    printf("{0:s}\n", str(table5))


def repl():
    while True:
        try:
            inpt = input("> ")
        except EOFError:
            printf("\n")
            return
        execute(inpt)


def run_file(filepath: str):
    with open(filepath) as fp:
        for line in fp:
            result = execute(line)
            if isinstance(result, CommandError):
                sys.exit(65)


def main():
    init_session()

    if len(sys.argv) == 1:
        run_demo()
    elif len(sys.argv) == 2 and sys.argv[1] == "-i":
        repl()
    elif len(sys.argv) == 2:
        run_file(sys.argv[1])
    else:
        printf("Usage: chaintable [-i | path]\n")
        sys.exit(64)


if __name__ == "__main__":
    main()
