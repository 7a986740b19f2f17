r"""Slot store — line-oriented text storage keyed by slot number.

The host medium offers a handful of numbered storage units (the firmware
calls them *sectors*).  Each one holds a sequence of text lines and is
addressed by the decimal form of a non-negative integer: ``"0"``, ``"1"``,
``"2"`` and so on.  The store has no idea which virtual path owns a slot;
that mapping lives in the index.

Operations:
    - ``read_slot(slot)`` — every line, without line terminators.
    - ``write_slot(slot, lines, mode=...)`` — truncate-and-write, or append.
    - ``truncate(slot)`` — empty the slot (creating it if needed).

Every operation opens and closes its file inside a ``with`` block, so no
handle outlives the call, even when it fails.

Only ``\n`` ends a line.  Files are opened with newline translation
switched off, so a ``\r`` in the data is an ordinary character.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, TypeAlias

from slot_vfs.errors import CannotOpenFile

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

SlotId: TypeAlias = str
"""Decimal text of a non-negative integer, e.g. ``"0"``."""

LINE_BREAK = "\n"


def split_lines(text: str) -> list[str]:
    r"""Split file text into lines at ``\n`` only, dropping the terminators.

    Examples::

        ""          → []
        "a\n"       → ["a"]
        "a\n\n"     → ["a", ""]
        "a\rb\nc"   → ["a\rb", "c"]

    """
    if not text:
        return []
    lines = text.split(LINE_BREAK)
    if text.endswith(LINE_BREAK):
        lines.pop()
    return lines


class WriteMode(StrEnum):
    """How ``write_slot`` treats existing slot content.

    - TRUNCATE — discard existing lines first.
    - APPEND — add the new lines after the existing ones.
    """

    TRUNCATE = "w"
    APPEND = "a"


class SlotStore(Protocol):
    """Protocol for slot storage backends."""

    def read_slot(self, slot: SlotId) -> list[str]:
        """Return every line stored in *slot*.

        Raises:
            CannotOpenFile: If the slot cannot be opened for reading.

        """
        ...

    def write_slot(
        self,
        slot: SlotId,
        lines: Iterable[str],
        *,
        mode: WriteMode = WriteMode.TRUNCATE,
    ) -> None:
        """Write *lines* to *slot*, one record per line.

        Raises:
            CannotOpenFile: If the slot cannot be opened for writing.

        """
        ...

    def truncate(self, slot: SlotId) -> None:
        """Empty *slot*, creating it if it does not exist yet."""
        ...


class DirectorySlotStore:
    """Slot store backed by one text file per slot inside a directory.

    The slot id is used verbatim as the file name, matching the layout the
    firmware writes to the SD card (``0``, ``1``, ``2`` next to the index).
    """

    def __init__(self, root: Path) -> None:
        """Create a store rooted at *root* (which must already exist)."""
        self._root = root

    @property
    def root(self) -> Path:
        """Return the directory holding the slot files."""
        return self._root

    def slot_path(self, slot: SlotId) -> Path:
        """Return the host path of the file backing *slot*."""
        return self._root / slot

    def read_slot(self, slot: SlotId) -> list[str]:
        """Return every line stored in *slot*, without line terminators.

        Raises:
            CannotOpenFile: If the slot file cannot be opened or is not UTF-8.

        """
        try:
            with self.slot_path(slot).open(encoding="utf-8", newline="") as handle:
                return split_lines(handle.read())
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot open slot {slot!r} for reading: {e}"
            raise CannotOpenFile(msg, path=str(self.slot_path(slot))) from e

    def write_slot(
        self,
        slot: SlotId,
        lines: Iterable[str],
        *,
        mode: WriteMode = WriteMode.TRUNCATE,
    ) -> None:
        """Write *lines* to *slot*, each followed by a line break.

        Raises:
            CannotOpenFile: If the slot file cannot be opened.

        """
        try:
            with self.slot_path(slot).open(mode.value, encoding="utf-8", newline="") as handle:
                handle.writelines(f"{line}{LINE_BREAK}" for line in lines)
        except OSError as e:
            msg = f"Cannot open slot {slot!r} for writing: {e}"
            raise CannotOpenFile(msg, path=str(self.slot_path(slot))) from e

    def truncate(self, slot: SlotId) -> None:
        """Empty *slot*, creating its file if needed.

        Raises:
            CannotOpenFile: If the slot file cannot be opened.

        """
        self.write_slot(slot, [], mode=WriteMode.TRUNCATE)
