"""Slot storage — the numbered units that hold file contents.

Re-exports public symbols so callers can write::

    from slot_vfs.storage import DirectorySlotStore, WriteMode
"""

from slot_vfs.storage.slots import DirectorySlotStore, SlotId, SlotStore, WriteMode

__all__ = [
    "DirectorySlotStore",
    "SlotId",
    "SlotStore",
    "WriteMode",
]
