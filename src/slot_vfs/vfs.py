"""Index-backed virtual file system.

``VirtualFileSystem`` gives callers a hierarchical namespace (``/a/b/c``)
on top of two very plain storage facilities:

- an **index file** mapping each path to a slot number, and
- a **slot store** holding the text of each file in its numbered slot.

Every operation follows the same cycle:

    1. Normalize the path (add a leading ``/`` if missing).
    2. Load the whole index from the medium.
    3. Look up or modify entries in memory.
    4. Mutating operations write the whole index back.

Nothing is cached between calls, and nothing is held open between calls.

Mutations touch two independent stores, in this order:

    - ``create`` — save index, then empty the new slot.
    - ``delete`` — empty the slot, then save index without the entry.
    - ``write``  — (create if absent), then rewrite the slot.

Neither pair is atomic.  If the second step fails, the first step stays
applied: an entry can be listed with a stale slot, or a slot can be
emptied while its entry is still listed.  The failure is raised to the
caller and nothing tries to repair it.

Directories are never stored.  ``list_dir`` synthesizes them from the
stored paths, and ``is_directory`` is a pure string test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from slot_vfs import paths
from slot_vfs.allocator import allocate
from slot_vfs.errors import FileAlreadyExists, FileNotFound
from slot_vfs.index import Entry, find_by_path
from slot_vfs.logging import LogLevel
from slot_vfs.paths import MatchMode
from slot_vfs.storage.slots import WriteMode

if TYPE_CHECKING:
    from slot_vfs.index import IndexFile
    from slot_vfs.logging import Logger
    from slot_vfs.storage.slots import SlotId, SlotStore

_SOURCE = "vfs"
_LINE_BREAK = "\n"


class VirtualFileSystem:
    """Path-addressed files stored in numbered slots via an index."""

    def __init__(
        self,
        *,
        index: IndexFile,
        slots: SlotStore,
        match_mode: MatchMode = MatchMode.PREFIX,
        logger: Logger | None = None,
    ) -> None:
        """Create a file system over an index file and a slot store.

        Args:
            index: The record store holding the path-to-slot index.
            slots: The store holding file contents.
            match_mode: How ``list_dir`` matches stored paths to a directory.
            logger: Optional event log for mutations and lookup misses.

        """
        self._index = index
        self._slots = slots
        self._match_mode = match_mode
        self._logger = logger

    @property
    def index(self) -> IndexFile:
        """Return the index record store."""
        return self._index

    @property
    def slots(self) -> SlotStore:
        """Return the slot store."""
        return self._slots

    @property
    def match_mode(self) -> MatchMode:
        """Return the listing match mode."""
        return self._match_mode

    def _log(self, level: LogLevel, message: str, *, path: str | None = None) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source=_SOURCE, path=path)

    # -- Queries -----------------------------------------------------------

    def entries(self) -> list[Entry]:
        """Return every index entry in stored order."""
        return self._index.load()

    def exists(self, path: str) -> bool:
        """Return True if *path* has a live entry."""
        path = paths.normalize(path)
        return find_by_path(self._index.load(), path) is not None

    def get_slot(self, path: str) -> SlotId | None:
        """Return the slot holding *path*, or None if there is no entry."""
        path = paths.normalize(path)
        entry = find_by_path(self._index.load(), path)
        if entry is None:
            self._log(LogLevel.WARNING, f"File {path} not found", path=path)
            return None
        return entry.slot

    def list_dir(self, path: str = "/", *, recursive: bool = False) -> list[str]:
        """List the names below a directory.

        Each stored path under the directory is reduced to its remainder
        relative to the directory.  Without *recursive*, a remainder that
        still contains a separator collapses to its first segment plus a
        trailing ``/`` — a synthesized subdirectory.  Duplicates are
        dropped, keeping first-seen order.

        Example, with ``/a/b``, ``/a/c`` and ``/a/d/e`` stored::

            list_dir("/a")                 → ["b", "c", "d/"]
            list_dir("/a", recursive=True) → ["b", "c", "d/e"]

        A directory with nothing under it lists as ``[]``.
        """
        prefix = paths.directory_prefix(path)
        names: dict[str, None] = {}
        for entry in self._index.load():
            remainder = paths.child_remainder(entry.path, prefix, self._match_mode)
            if not remainder:
                continue
            if not recursive:
                remainder = paths.first_segment(remainder)
            names.setdefault(remainder)
        return list(names)

    @staticmethod
    def is_directory(path: str) -> bool:
        """Return True if *path* (normalized) ends with a separator."""
        return paths.is_directory(path)

    # -- Mutations ---------------------------------------------------------

    def create(self, path: str, *, overwrite: bool = True) -> SlotId:
        """Create an empty file and return its slot.

        Args:
            path: Virtual path for the new file.
            overwrite: If True, an existing file at *path* is deleted first.

        Raises:
            FileAlreadyExists: If *path* exists and *overwrite* is False.
            CannotOpenFile: If the index or the new slot cannot be opened.

        """
        path = paths.normalize(path)
        entries = self._index.load()
        if find_by_path(entries, path) is not None:
            if not overwrite:
                msg = f"File {path} already exists"
                raise FileAlreadyExists(msg, path=path)
            self.delete(path)
            entries = self._index.load()

        slot = allocate(entries)
        entries.append(Entry(path=path, slot=slot))
        self._index.save(entries)
        self._slots.truncate(slot)
        self._log(LogLevel.INFO, f"Created {path} in slot {slot}", path=path)
        return slot

    def delete(self, path: str) -> None:
        """Delete a file: empty its slot, then drop it from the index.

        Raises:
            FileNotFound: If *path* has no live entry.
            CannotOpenFile: If the slot or the index cannot be opened.

        """
        path = paths.normalize(path)
        entries = self._index.load()
        entry = find_by_path(entries, path)
        if entry is None:
            msg = f"File {path} not found"
            raise FileNotFound(msg, path=path)

        self._slots.truncate(entry.slot)
        self._index.save(e for e in entries if e.path != path)
        self._log(LogLevel.INFO, f"Deleted {path} from slot {entry.slot}", path=path)

    def write(self, path: str, data: str) -> SlotId:
        r"""Replace the contents of a file, creating it if needed.

        *data* is split on ``\n`` and stored one line per record, so a
        trailing line break in *data* becomes an extra empty line.

        Returns:
            The slot holding the file (newly allocated if it was created).

        Raises:
            CannotOpenFile: If the index or the slot cannot be opened.

        """
        path = paths.normalize(path)
        entry = find_by_path(self._index.load(), path)
        slot = self.create(path, overwrite=True) if entry is None else entry.slot

        self._slots.write_slot(slot, data.split(_LINE_BREAK), mode=WriteMode.TRUNCATE)
        self._log(LogLevel.INFO, f"Wrote {len(data)} chars to {path}", path=path)
        return slot

    def read(self, path: str) -> str:
        r"""Return the contents of a file, every line ending in ``\n``.

        Raises:
            FileNotFound: If *path* has no live entry.
            CannotOpenFile: If the index or the slot cannot be opened.

        """
        path = paths.normalize(path)
        entry = find_by_path(self._index.load(), path)
        if entry is None:
            msg = f"File {path} not found"
            raise FileNotFound(msg, path=path)

        lines = self._slots.read_slot(entry.slot)
        return "".join(line + _LINE_BREAK for line in lines)
