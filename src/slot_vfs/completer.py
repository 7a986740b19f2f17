"""Context-aware tab completer for the volume shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which analyses the input
context and returns a list of candidate strings.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from slot_vfs.errors import VfsError
from slot_vfs.paths import SEPARATOR

if TYPE_CHECKING:
    from slot_vfs.shell import Shell
    from slot_vfs.vfs import VirtualFileSystem

# Commands whose argument is a virtual path.
_PATH_COMMANDS: frozenset[str] = frozenset(
    ["sector", "ls", "exists", "delete", "create", "write", "read"]
)


class Completer:
    """Context-aware tab completer for the volume shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The shell whose commands and volume are used to
                   generate completion candidates.

        """
        self._shell = shell
        self._vfs: VirtualFileSystem = shell.volume.vfs

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return [cmd for cmd in self._shell.command_names if cmd.startswith(text)]

        if text.startswith(SEPARATOR) or words[0] in _PATH_COMMANDS:
            return self._complete_paths(text)

        return []

    def _complete_paths(self, text: str) -> list[str]:
        """Complete virtual paths one segment at a time.

        Split the partial path into a directory and a name prefix, list
        the directory non-recursively, and filter by prefix.  Synthesized
        directories already carry their trailing ``/``.
        """
        if SEPARATOR not in text:
            return []

        last = text.rfind(SEPARATOR)
        directory = text[: last + 1]
        prefix = text[last + 1 :]

        try:
            names = self._vfs.list_dir(directory)
        except VfsError:
            return []
        return sorted(directory + name for name in names if name.startswith(prefix))
