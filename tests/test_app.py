"""Tests for the command layer and the command-line entry point."""

import io

import pytest
from rich.console import Console

import main
from hostile.app import Hostile, HostileError, normalize_address
from hostile.config import Config


@pytest.fixture
def hosts_path(tmp_path):
    path = tmp_path / "hosts"
    path.write_text("127.0.0.1 localhost\n10.0.0.5 foo.test # dev box\n::1 foo.test\n\n")
    return path


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def app(hosts_path, output):
    config = Config(hosts_file_path=str(hosts_path), eol_style="lf")
    console = Console(file=output, color_system=None, width=200, highlight=False)
    return Hostile(config, console=console)


def test_normalize_address():
    assert normalize_address("local") == "127.0.0.1"
    assert normalize_address("localhost") == "127.0.0.1"
    assert normalize_address("fe80::1") == "fe80::1"
    with pytest.raises(HostileError, match="Invalid IP address"):
        normalize_address("not-an-ip")


def test_set_reports_added_and_updated(app, hosts_path, output):
    assert app.set("1.2.3.4", "example.com") == 1
    assert app.set("local", "example.com") == 0
    assert "Added: example.com" in output.getvalue()
    assert "Updated: example.com" in output.getvalue()
    assert hosts_path.read_text().endswith("\n\n127.0.0.1 example.com\n")


def test_set_requires_ip_and_host(app):
    with pytest.raises(HostileError, match="Invalid syntax"):
        app.set("1.2.3.4", None)


@pytest.mark.parametrize("host", ["my_host!", "a#b", "caf\u00e9.test", "two\nlines"])
def test_set_rejects_unreadable_host(app, hosts_path, host):
    before = hosts_path.read_bytes()
    for _ in range(2):
        with pytest.raises(HostileError, match="Invalid host name"):
            app.set("1.2.3.4", host)
    assert hosts_path.read_bytes() == before


def test_set_twice_keeps_single_line(app, hosts_path):
    assert app.set("1.2.3.4", "my_host", "first") == 1
    assert app.set("1.2.3.4", "my_host", "first") == 0
    assert hosts_path.read_text().count("my_host") == 1


def test_remove_drops_every_address_of_host(app, hosts_path, output):
    assert app.remove("foo.test") == 2
    assert hosts_path.read_text() == "127.0.0.1 localhost\n\n"
    assert output.getvalue().count("Removed: foo.test") == 2


def test_remove_unknown_host(app, hosts_path, output):
    before = hosts_path.read_bytes()
    assert app.remove("nope.test") == 0
    assert "Not found: nope.test" in output.getvalue()
    assert hosts_path.read_bytes() == before


def test_list_entries_and_all_lines(app, output):
    assert app.list() == 3
    assert "10.0.0.5 foo.test # dev box" in output.getvalue()
    assert app.list(show_all=True) == 5


def test_load_and_unload(app, tmp_path, hosts_path, output):
    source = tmp_path / "extra-hosts"
    source.write_text("# extra\n1.1.1.1 one.test\n2.2.2.2 two.test\n10.0.0.9 foo.test\n")

    assert app.load(source) == 2
    assert "Added 2 hosts!" in output.getvalue()
    assert "10.0.0.9 foo.test # dev box" in hosts_path.read_text()

    assert app.unload(source) == 4
    assert hosts_path.read_text() == "127.0.0.1 localhost\n\n"


@pytest.fixture
def no_signals(monkeypatch):
    monkeypatch.setattr(main.signal, "signal", lambda *args: None)


def test_main_set_and_list(hosts_path, capsys, no_signals):
    assert main.main(["--file", str(hosts_path), "set", "1.2.3.4", "example.com", "web"]) == 0
    assert main.main(["--file", str(hosts_path), "list"]) == 0
    out = capsys.readouterr().out
    assert "Added: example.com" in out
    assert "1.2.3.4 example.com # web" in out


def test_main_reports_invalid_ip(hosts_path, capsys, no_signals):
    assert main.main(["--file", str(hosts_path), "set", "bogus", "example.com"]) == 1
    assert "Invalid IP address" in capsys.readouterr().err


def test_main_reports_missing_file(tmp_path, capsys, no_signals):
    assert main.main(["--file", str(tmp_path / "absent"), "list"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_main_reports_permission_error(hosts_path, capsys, no_signals, monkeypatch):
    from hostile import writer

    def deny(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(writer.tempfile, "mkstemp", deny)
    assert main.main(["--file", str(hosts_path), "set", "1.2.3.4", "example.com"]) == 1
    assert "Are you running as root?" in capsys.readouterr().err


def test_main_without_command_prints_help(capsys):
    assert main.main([]) == 0
    assert "usage: hostile" in capsys.readouterr().out
