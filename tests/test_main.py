import sys

import pytest

from chaintable import main as driver
from chaintable.main import CommandError, CommandOk, execute, init_session, parse_atom


def test_parse_atom():
    assert parse_atom("12") == 12
    assert parse_atom("-3") == -3
    assert parse_atom("howdy") == "howdy"
    assert parse_atom("-") == "-"


def test_commands(capsys):
    init_session()

    assert execute("insert 1 a") == CommandOk()
    assert execute("insert 6 b") == CommandOk()
    assert execute("insert 1 c") == CommandOk()
    assert execute("search 1") == CommandOk()
    assert execute("search 2") == CommandOk()
    assert execute("count") == CommandOk()
    assert execute("load") == CommandOk()
    assert execute("keys") == CommandOk()
    assert execute("show") == CommandOk()
    assert execute("remove 1") == CommandOk()
    assert execute("show") == CommandOk()

    assert capsys.readouterr().out.splitlines() == [
        "new key",
        "new key",
        "appended",
        "[a, c]",
        "not found",
        "2",
        "0.4",
        "[6, 1]",
        "[None, {6; 1}, None, None, None]",
        "[a, c]",
        "[None, {6}, None, None, None]",
    ]


def test_new_and_resize(capsys):
    init_session()

    assert execute("new 2") == CommandOk()
    assert execute("insert 1 x") == CommandOk()
    assert execute("resize 3") == CommandOk()
    assert execute("show") == CommandOk()

    assert capsys.readouterr().out.splitlines()[-1] == "[None, {1}, None]"


def test_blank_and_comment_lines():
    init_session()

    assert execute("") == CommandOk()
    assert execute("   ") == CommandOk()
    assert execute("# insert 1 2") == CommandOk()
    assert driver.session.table.num_keys == 0


def test_command_errors(capfd):
    init_session()

    assert execute("frobnicate") == CommandError()
    assert execute("insert 1") == CommandError()
    assert execute("resize 0") == CommandError()
    assert execute("new -1") == CommandError()

    err = capfd.readouterr().err.splitlines()
    assert err[0] == "Unknown command 'frobnicate'."
    assert err[1] == "Unknown command 'insert 1'."
    assert err[2].startswith("Error: ")
    assert err[3].startswith("Error: ")

    init_session(0)
    assert execute("insert a 1") == CommandError()
    assert execute("load") == CommandError()


def test_trace_command(capfd):
    init_session()

    assert execute("trace on") == CommandOk()
    assert execute("insert 2 z") == CommandOk()
    assert execute("trace off") == CommandOk()
    assert execute("insert 3 z") == CommandOk()

    err = capfd.readouterr().err
    assert "[table] insert 2 -> slot 2: new key" in err
    assert "insert 3" not in err


def test_run_demo(capsys):
    driver.run_demo()

    out = capsys.readouterr().out.splitlines()
    assert len(out) == 9
    assert out[0] == "True"
    assert out[2] == "3"
    assert out[3] == "3"
    assert out[4] == "0.6"
    assert out[5] == "0.8"
    assert sorted(out[6].strip("[]").split(", ")) == ["apple", "goodbye", "howdy"]
    assert out[7].count("None") == 5 - out[7].count("{")
    assert out[8].count(",") == 6


def test_main_without_arguments(capsys, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["chaintable"])

    driver.main()

    assert capsys.readouterr().out.startswith("True\n")


def test_main_runs_file(tmp_path, capsys, monkeypatch):
    script = tmp_path / "script.txt"
    script.write_text("new 5\ninsert 1 one\ninsert 1 uno\nsearch 1\n")
    monkeypatch.setattr(sys, "argv", ["chaintable", str(script)])

    driver.main()

    assert capsys.readouterr().out.splitlines() == ["new key", "appended", "[one, uno]"]


def test_main_file_error_exit_code(tmp_path, monkeypatch):
    script = tmp_path / "script.txt"
    script.write_text("insert 1 one\nbogus\ninsert 2 two\n")
    monkeypatch.setattr(sys, "argv", ["chaintable", str(script)])

    with pytest.raises(SystemExit) as exc:
        driver.main()
    assert exc.value.code == 65
    assert driver.session.table.num_keys == 1


def test_main_usage(capsys, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["chaintable", "a", "b"])

    with pytest.raises(SystemExit) as exc:
        driver.main()
    assert exc.value.code == 64
    assert "Usage" in capsys.readouterr().out


def test_repl(capsys, monkeypatch):
    lines = iter(["insert 4 four", "search 4"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    monkeypatch.setattr(sys, "argv", ["chaintable", "-i"])

    driver.main()

    assert capsys.readouterr().out.splitlines() == ["new key", "[four]", ""]
