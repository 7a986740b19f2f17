"""Slot allocation — pick a slot for a newly created path.

The rule is the same one Unix uses for file descriptors: take the
**lowest** number not currently in use.  Freed slots are therefore
reused before the store grows::

    live slots {0, 1, 3}  → allocate "2"
    live slots {0, 1, 2, 3} → allocate "4"
    delete the entry in 2 → allocate "2" again

Allocation is a pure function of the index contents — no counter is
carried between calls, so reloading the same index always yields the
same answer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from slot_vfs.index import Entry
    from slot_vfs.storage.slots import SlotId


def allocate(entries: Iterable[Entry]) -> SlotId:
    """Return the lowest free slot id given the live *entries*.

    Slots are compared by their decimal text, so a stored slot such as
    ``"03"`` does not reserve slot ``"3"``.
    """
    used = {entry.slot for entry in entries}
    slot = 0
    while str(slot) in used:
        slot += 1
    return str(slot)
