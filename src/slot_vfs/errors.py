"""Error kinds raised by the virtual file system.

Every failure the core can produce is one of four kinds.  Each kind is a
member of ``VfsErrorKind`` (the tag) and has its own exception class so
callers can either catch a specific failure or catch ``VfsError`` and
branch on ``error.kind``:

- ``VfsInitFailed`` — the medium is missing or the index cannot be created.
- ``CannotOpenFile`` — the index or a slot could not be opened.
- ``FileNotFound`` — no live entry exists for the path.
- ``FileAlreadyExists`` — ``create`` without overwrite hit a live entry.

The core never retries and never repairs.  A failure between the two
steps of a mutating operation (slot write, index rewrite) is surfaced
as-is and may leave the index and the slots out of step.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class VfsErrorKind(StrEnum):
    """Tag identifying which kind of failure a ``VfsError`` represents."""

    INIT_FAILED = "init_failed"
    CANNOT_OPEN_FILE = "cannot_open_file"
    FILE_NOT_FOUND = "file_not_found"
    FILE_ALREADY_EXISTS = "file_already_exists"


class VfsError(Exception):
    """Base class for every failure surfaced by the virtual file system.

    Attributes:
        kind: The error tag for this failure.
        path: The virtual path or storage location involved, if known.

    """

    kind: ClassVar[VfsErrorKind]

    def __init__(self, message: str, *, path: str | None = None) -> None:
        """Create an error with a human-readable message and optional path."""
        super().__init__(message)
        self.path = path


class VfsInitFailed(VfsError):
    """Raise when the volume cannot be initialised."""

    kind = VfsErrorKind.INIT_FAILED


class CannotOpenFile(VfsError):
    """Raise when the index or a slot cannot be opened for reading or writing."""

    kind = VfsErrorKind.CANNOT_OPEN_FILE


class FileNotFound(VfsError):
    """Raise when an operation addresses a path with no live entry."""

    kind = VfsErrorKind.FILE_NOT_FOUND


class FileAlreadyExists(VfsError):
    """Raise when ``create`` without overwrite addresses a live entry."""

    kind = VfsErrorKind.FILE_ALREADY_EXISTS
