"""Tests for the shell module.

The shell is the command interpreter — it parses user input, dispatches
to one file system operation per command, and returns string output.
It operates on a mounted volume.
"""

from pathlib import Path

import pytest

from slot_vfs.mount import Mounter, Volume, VolumeConfig, VolumeState
from slot_vfs.shell import Shell


def _mounted_shell(root: Path) -> tuple[Volume, Shell]:
    """Mount a volume in *root* and create a shell for testing."""
    volume = Mounter(VolumeConfig(root=root)).mount()
    return volume, Shell(volume=volume)


class TestShellCreation:
    """Verify shell initialisation."""

    def test_shell_requires_mounted_volume(self, tmp_path: Path) -> None:
        """The shell should reject an unmounted volume."""
        volume, _shell = _mounted_shell(tmp_path)
        volume.unmount()
        with pytest.raises(RuntimeError, match="not mounted"):
            Shell(volume=volume)

    def test_command_names_sorted(self, tmp_path: Path) -> None:
        """Command names are reported in sorted order."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.command_names == sorted(shell.command_names)


class TestShellExecute:
    """Verify command parsing and dispatch."""

    def test_empty_command_returns_empty(self, tmp_path: Path) -> None:
        """An empty command should produce no output."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("") == ""
        assert shell.execute("   ") == ""

    def test_unknown_command_returns_error(self, tmp_path: Path) -> None:
        """An unknown command should produce an error message."""
        _volume, shell = _mounted_shell(tmp_path)
        result = shell.execute("format")
        assert result == "Unknown command: format"

    def test_help_lists_commands(self, tmp_path: Path) -> None:
        """Help should list every command."""
        _volume, shell = _mounted_shell(tmp_path)
        result = shell.execute("help")
        for name in ("index", "sector", "ls", "exists", "delete", "create", "write", "read"):
            assert name in result


class TestFileCommands:
    """Verify the commands that map onto file system operations."""

    def test_create_prints_slot(self, tmp_path: Path) -> None:
        """create reports the allocated slot."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("create /log.txt") == "0"

    def test_create_existing_is_error(self, tmp_path: Path) -> None:
        """create without -f refuses to replace a file."""
        _volume, shell = _mounted_shell(tmp_path)
        shell.execute("create /a")
        result = shell.execute("create /a")
        assert result.startswith("Error:")
        assert "already exists" in result

    def test_create_force_replaces(self, tmp_path: Path) -> None:
        """create -f replaces an existing file."""
        _volume, shell = _mounted_shell(tmp_path)
        shell.execute("write /a data")
        assert shell.execute("create -f /a") == "0"
        assert shell.execute("read /a") == ""

    def test_create_usage(self, tmp_path: Path) -> None:
        """create without a path prints usage."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("create").startswith("Usage:")

    def test_write_and_read(self, tmp_path: Path) -> None:
        """write joins its words; read shows the text."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("write /a hello world") == "0"
        assert shell.execute("read /a") == "hello world"

    def test_write_line_breaks(self, tmp_path: Path) -> None:
        r"""A literal \n in the text starts a new line."""
        volume, shell = _mounted_shell(tmp_path)
        shell.execute(r"write /a one\ntwo")
        assert volume.vfs.read("/a") == "one\ntwo\n"

    def test_write_usage(self, tmp_path: Path) -> None:
        """write needs a path and some content."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("write /a").startswith("Usage:")

    def test_read_missing(self, tmp_path: Path) -> None:
        """Reading a missing file is an error, not an exception."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("read /missing") == "Error: File /missing not found"

    def test_read_not_utf8(self, tmp_path: Path) -> None:
        """A slot holding bytes that are not UTF-8 is an error, not a crash."""
        _volume, shell = _mounted_shell(tmp_path)
        shell.execute("create /a")
        (tmp_path / "0").write_bytes(b"\xff\xfe\n")
        assert shell.execute("read /a").startswith("Error: Cannot open slot")

    def test_exists(self, tmp_path: Path) -> None:
        """exists prints true or false."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("exists /a") == "false"
        shell.execute("create /a")
        assert shell.execute("exists a") == "true"

    def test_delete(self, tmp_path: Path) -> None:
        """delete removes a file and errors the second time."""
        _volume, shell = _mounted_shell(tmp_path)
        shell.execute("create /a")
        assert shell.execute("delete /a") == ""
        assert shell.execute("exists /a") == "false"
        assert shell.execute("delete /a").startswith("Error:")

    def test_sector(self, tmp_path: Path) -> None:
        """sector shows the slot for a path."""
        _volume, shell = _mounted_shell(tmp_path)
        shell.execute("create /a")
        shell.execute("create /b")
        assert shell.execute("sector /b") == "1"
        assert shell.execute("sector /zzz").startswith("Error:")

    def test_index(self, tmp_path: Path) -> None:
        """index shows the raw records in stored order."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("index") == "Index is empty."
        shell.execute("create /b")
        shell.execute("create /a/x")
        assert shell.execute("index") == "/b/0\n/a/x/1"


class TestLsCommand:
    """Verify directory listings from the shell."""

    def test_ls_default_root(self, tmp_path: Path) -> None:
        """ls without arguments lists the root."""
        _volume, shell = _mounted_shell(tmp_path)
        shell.execute("create /a/b")
        shell.execute("create /c")
        assert shell.execute("ls") == "a/\nc"

    def test_ls_directory(self, tmp_path: Path) -> None:
        """ls collapses nested paths."""
        _volume, shell = _mounted_shell(tmp_path)
        for path in ("/a/b", "/a/c", "/a/d/e"):
            shell.execute(f"create {path}")
        assert shell.execute("ls /a") == "b\nc\nd/"

    def test_ls_recursive(self, tmp_path: Path) -> None:
        """ls -r shows full remainders."""
        _volume, shell = _mounted_shell(tmp_path)
        for path in ("/a/b", "/a/d/e"):
            shell.execute(f"create {path}")
        assert shell.execute("ls -r /a") == "b\nd/e"

    def test_ls_empty(self, tmp_path: Path) -> None:
        """An empty directory produces no output."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("ls /nothing") == ""


class TestSessionCommands:
    """Verify log and exit."""

    def test_log_shows_events(self, tmp_path: Path) -> None:
        """log shows mount and file events."""
        _volume, shell = _mounted_shell(tmp_path)
        shell.execute("create /a")
        result = shell.execute("log")
        assert "[INFO] mount:" in result
        assert "Created /a" in result

    def test_log_empty(self, tmp_path: Path) -> None:
        """An empty log says so."""
        volume, shell = _mounted_shell(tmp_path)
        volume.logger.clear()
        assert shell.execute("log") == "No log entries."

    def test_log_min_level(self, tmp_path: Path) -> None:
        """log <level> shows only entries at or above that level."""
        _volume, shell = _mounted_shell(tmp_path)
        shell.execute("create /a")
        shell.execute("sector /missing")
        result = shell.execute("log warning")
        assert result == "[WARNING] vfs: File /missing not found"

    def test_log_level_case_insensitive(self, tmp_path: Path) -> None:
        """Level names are matched without regard to case."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("log ERROR") == "No log entries."

    def test_log_clear(self, tmp_path: Path) -> None:
        """log clear empties the event log."""
        volume, shell = _mounted_shell(tmp_path)
        shell.execute("create /a")
        assert shell.execute("log clear") == ""
        assert volume.logger.entries == []
        assert shell.execute("log") == "No log entries."

    def test_log_unknown_level(self, tmp_path: Path) -> None:
        """An unknown level prints usage."""
        _volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("log loud").startswith("Usage: log")

    def test_exit_returns_sentinel(self, tmp_path: Path) -> None:
        """exit unmounts the volume and returns the sentinel."""
        volume, shell = _mounted_shell(tmp_path)
        assert shell.execute("exit") == Shell.EXIT_SENTINEL
        assert volume.state is VolumeState.UNMOUNTED
