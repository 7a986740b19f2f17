"""Path normalization and the string rules behind directory listings.

There are no directory objects in this file system.  A path such as
``/logs/2024/run.txt`` is just a key in the index; the directories
``/logs/`` and ``/logs/2024/`` exist only because some key contains them.
Everything in this module is therefore plain string manipulation:

- ``normalize`` — guarantee a single leading separator.  Nothing else is
  cleaned up: trailing and repeated separators, ``.`` and ``..``, and empty
  strings all pass through.  The caller is trusted to supply sane paths.
- ``is_directory`` — a path names a directory iff it ends with a separator.
- ``directory_prefix`` / ``child_remainder`` — the matching rule used by
  listings to turn a stored path into a name relative to a directory.
"""

from enum import StrEnum

SEPARATOR = "/"


class MatchMode(StrEnum):
    """How a listing decides whether a stored path lies under a directory.

    - PREFIX — the path must start with the directory.
    - SUBSTRING — the directory may occur anywhere in the path; the name
      is whatever follows its first occurrence.  Kept for compatibility
      with indexes written by the original firmware shell, where
      listing ``/a`` also reported ``/x/a/b``.
    """

    PREFIX = "prefix"
    SUBSTRING = "substring"


def normalize(path: str) -> str:
    """Return *path* with exactly one leading separator added if missing.

    Examples::

        "x"      → "/x"
        "/x"     → "/x"
        ""       → "/"
        "/a//b/" → "/a//b/"

    """
    if path.startswith(SEPARATOR):
        return path
    return SEPARATOR + path


def is_directory(path: str) -> bool:
    """Return True if the normalized *path* ends with a separator."""
    return normalize(path).endswith(SEPARATOR)


def directory_prefix(path: str) -> str:
    """Return the normalized directory *path* ending in one separator.

    ``/a`` and ``/a/`` both list the children of ``/a/``, so the stored
    paths ``/a/b`` and ``/a/d/e`` reduce to ``b`` and ``d/e``.
    """
    normalized = normalize(path)
    if normalized.endswith(SEPARATOR):
        return normalized
    return normalized + SEPARATOR


def child_remainder(path: str, prefix: str, mode: MatchMode = MatchMode.PREFIX) -> str | None:
    """Return the part of *path* below *prefix*, or None if it is not below it.

    Args:
        path: A stored (normalized) path.
        prefix: A directory prefix from ``directory_prefix``.
        mode: The matching rule to apply.

    """
    if mode is MatchMode.PREFIX:
        if not path.startswith(prefix):
            return None
        return path[len(prefix) :]

    position = path.find(prefix)
    if position < 0:
        return None
    return path[position + len(prefix) :]


def first_segment(remainder: str) -> str:
    """Collapse ``seg/rest`` to ``seg/``; leave a single segment untouched.

    Examples::

        "d/e"   → "d/"
        "d/e/f" → "d/"
        "b"     → "b"

    """
    head, sep, _tail = remainder.partition(SEPARATOR)
    return head + sep
