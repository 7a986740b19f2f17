"""The shell — command interpreter for a mounted volume.

The shell reads a command string, splits it into a command name and
arguments, dispatches to the matching handler, and returns a string
result.  Each command maps onto exactly one file system operation.

Design choices:
    - **Returns strings, not prints.**  This keeps the shell fully
      testable and separates concerns (the caller decides how to
      display output).
    - **Command dispatch via a dict.**  Adding a new command means
      writing a method and adding one dict entry.
    - **Errors become text.**  A ``VfsError`` is rendered as
      ``Error: <message>``; the session carries on.
"""

from collections.abc import Callable
from typing import TypeAlias

from slot_vfs.errors import VfsError
from slot_vfs.index import format_record
from slot_vfs.logging import LogLevel
from slot_vfs.mount import Volume, VolumeState

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

_RECURSIVE_FLAG = "-r"
_OVERWRITE_FLAG = "-f"
_CLEAR_ARG = "clear"
_LOG_USAGE = "Usage: log [debug|info|warning|error|clear]"


class Shell:
    """Command interpreter that operates on a mounted volume.

    The constructor rejects an unmounted volume — there is nothing to
    interpret commands against.
    """

    EXIT_SENTINEL = "__EXIT__"

    def __init__(self, *, volume: Volume) -> None:
        """Create a shell attached to a mounted volume.

        Args:
            volume: A mounted volume.

        Raises:
            RuntimeError: If the volume is not mounted.

        """
        if volume.state is not VolumeState.MOUNTED:
            msg = f"Shell requires a mounted volume (state: {volume.state}, not mounted)"
            raise RuntimeError(msg)

        self._volume = volume
        self._vfs = volume.vfs

        # Command dispatch table — maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "index": self._cmd_index,
            "sector": self._cmd_sector,
            "ls": self._cmd_ls,
            "exists": self._cmd_exists,
            "delete": self._cmd_delete,
            "create": self._cmd_create,
            "write": self._cmd_write,
            "read": self._cmd_read,
            "log": self._cmd_log,
            "exit": self._cmd_exit,
        }

    @property
    def volume(self) -> Volume:
        """Return the volume this shell operates on."""
        return self._volume

    @property
    def command_names(self) -> list[str]:
        """Return the sorted list of command names."""
        return sorted(self._commands)

    def execute(self, command: str) -> str:
        """Parse and execute a single command.

        Args:
            command: The raw command string (e.g. "read /log.txt").

        Returns:
            The command output as a string, or an error message.

        """
        parts = command.strip().split()
        if not parts:
            return ""

        name = parts[0]
        args = parts[1:]

        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"

        try:
            return handler(args)
        except VfsError as e:
            return f"Error: {e}"

    # -- Command handlers ------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "Available commands: " + ", ".join(self.command_names)

    def _cmd_index(self, _args: list[str]) -> str:
        """Show the raw index records in stored order."""
        entries = self._vfs.entries()
        if not entries:
            return "Index is empty."
        return "\n".join(format_record(entry) for entry in entries)

    def _cmd_sector(self, args: list[str]) -> str:
        """Show which slot holds a file."""
        if not args:
            return "Usage: sector <path>"
        slot = self._vfs.get_slot(args[0])
        if slot is None:
            return f"Error: File {args[0]} not found"
        return slot

    def _cmd_ls(self, args: list[str]) -> str:
        """List a directory (``-r`` for every file below it)."""
        recursive = _RECURSIVE_FLAG in args
        rest = [a for a in args if a != _RECURSIVE_FLAG]
        path = rest[0] if rest else "/"
        names = self._vfs.list_dir(path, recursive=recursive)
        return "\n".join(names)

    def _cmd_exists(self, args: list[str]) -> str:
        """Report whether a file exists."""
        if not args:
            return "Usage: exists <path>"
        return "true" if self._vfs.exists(args[0]) else "false"

    def _cmd_delete(self, args: list[str]) -> str:
        """Delete a file."""
        if not args:
            return "Usage: delete <path>"
        self._vfs.delete(args[0])
        return ""

    def _cmd_create(self, args: list[str]) -> str:
        """Create an empty file (``-f`` replaces an existing one)."""
        overwrite = _OVERWRITE_FLAG in args
        rest = [a for a in args if a != _OVERWRITE_FLAG]
        if not rest:
            return "Usage: create [-f] <path>"
        return self._vfs.create(rest[0], overwrite=overwrite)

    def _cmd_write(self, args: list[str]) -> str:
        r"""Write text to a file; a literal ``\n`` starts a new line."""
        if len(args) < 2:  # noqa: PLR2004
            return "Usage: write <path> <content...>"

        content = " ".join(args[1:]).replace("\\n", "\n")
        return self._vfs.write(args[0], content)

    def _cmd_read(self, args: list[str]) -> str:
        """Print a file's contents."""
        if not args:
            return "Usage: read <path>"
        return self._vfs.read(args[0]).removesuffix("\n")

    def _cmd_log(self, args: list[str]) -> str:
        """Show the event log, optionally from a minimum level up; ``clear`` empties it."""
        logger = self._volume.logger
        if not args:
            entries = logger.entries
        elif args[0] == _CLEAR_ARG:
            logger.clear()
            return ""
        else:
            try:
                level = LogLevel[args[0].upper()]
            except KeyError:
                return _LOG_USAGE
            entries = logger.filter(min_level=level)
        return "\n".join(str(e) for e in entries) if entries else "No log entries."

    def _cmd_exit(self, _args: list[str]) -> str:
        """Unmount the volume and signal the REPL to stop."""
        self._volume.unmount()
        return self.EXIT_SENTINEL
