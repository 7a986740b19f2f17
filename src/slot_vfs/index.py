"""The index — the authoritative map from virtual path to slot.

The index is a single text file on the medium with one record per live
file::

    /log.txt/0
    /runs/2024/a.csv/1
    /runs/2024/b.csv/3

Each record is ``<path>/<slot>``.  Paths contain separators themselves,
so a record is split at its **last** separator: everything before it is
the path, everything after it is the slot.

The index is always handled whole:

- ``IndexFile.load()`` reads every record into a list of ``Entry``.
- ``IndexFile.save(entries)`` truncates the file and writes every record
  again.  There is no append log and no rename-swap, so a crash half-way
  through ``save`` can leave a short or empty index.

Lookups (``find_by_path``, ``find_by_slot``) are linear scans — the
medium holds tens of files, not millions, and no secondary structure has
to be kept in step with the file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from slot_vfs.errors import CannotOpenFile, VfsInitFailed
from slot_vfs.paths import SEPARATOR
from slot_vfs.storage.slots import LINE_BREAK, split_lines

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from slot_vfs.storage.slots import SlotId


@dataclass(frozen=True)
class Entry:
    """One index record: a normalized path and the slot holding its data."""

    path: str
    slot: SlotId

    def __str__(self) -> str:
        """Format as the on-disk record."""
        return format_record(self)


def parse_record(line: str) -> Entry:
    """Split an index record at its last separator.

    A record without any separator is kept as a path with an empty slot
    rather than rejected.

    Examples::

        "/a/b/3"  → Entry("/a/b", "3")
        "/log/0"  → Entry("/log", "0")
        "garbage" → Entry("garbage", "")

    """
    record = line.removesuffix(LINE_BREAK)
    path, sep, slot = record.rpartition(SEPARATOR)
    if not sep:
        return Entry(path=record, slot="")
    return Entry(path=path, slot=slot)


def format_record(entry: Entry) -> str:
    """Return the on-disk record for *entry* (no line terminator)."""
    return f"{entry.path}{SEPARATOR}{entry.slot}"


def find_by_path(entries: Iterable[Entry], path: str) -> Entry | None:
    """Return the first entry whose path equals *path*, or None."""
    for entry in entries:
        if entry.path == path:
            return entry
    return None


def find_by_slot(entries: Iterable[Entry], slot: SlotId) -> Entry | None:
    """Return the first entry stored in *slot*, or None."""
    for entry in entries:
        if entry.slot == slot:
            return entry
    return None


class IndexFile:
    """The record store holding the index on the host medium."""

    def __init__(self, path: Path) -> None:
        """Create a handle for the index file at *path* (not opened yet)."""
        self._path = path

    @property
    def path(self) -> Path:
        """Return the host path of the index file."""
        return self._path

    def exists(self) -> bool:
        """Return True if the index file is present on the medium."""
        return self._path.is_file()

    def ensure_exists(self) -> None:
        """Create an empty index file if there is none.

        Raises:
            VfsInitFailed: If the index is absent and cannot be created.

        """
        if self.exists():
            return
        try:
            self._path.touch()
        except OSError as e:
            msg = f"Cannot create index file {self._path}: {e}"
            raise VfsInitFailed(msg, path=str(self._path)) from e

    def load(self) -> list[Entry]:
        """Read every record in stored order.

        Records end at ``\n`` only; blank lines are skipped.

        Raises:
            CannotOpenFile: If the index cannot be opened for reading or
                is not UTF-8.

        """
        try:
            with self._path.open(encoding="utf-8", newline="") as handle:
                lines = split_lines(handle.read())
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot open index file {self._path} for reading: {e}"
            raise CannotOpenFile(msg, path=str(self._path)) from e
        return [parse_record(line) for line in lines if line]

    def save(self, entries: Iterable[Entry]) -> None:
        """Replace the whole index with *entries*, one record per line.

        Raises:
            CannotOpenFile: If the index cannot be opened for writing.

        """
        try:
            with self._path.open("w", encoding="utf-8", newline="") as handle:
                handle.writelines(f"{format_record(entry)}{LINE_BREAK}" for entry in entries)
        except OSError as e:
            msg = f"Cannot open index file {self._path} for writing: {e}"
            raise CannotOpenFile(msg, path=str(self._path)) from e
