"""slot-vfs — a path-addressed virtual file system on numbered storage slots.

The medium offers numbered slots plus one index file.  The index maps each
virtual path (``/logs/run.txt``) to the slot holding its text; directories
are implied by the paths and never stored.

Re-exports public symbols so callers can write::

    from slot_vfs import Mounter, VolumeConfig, VirtualFileSystem
"""

from slot_vfs.errors import (
    CannotOpenFile,
    FileAlreadyExists,
    FileNotFound,
    VfsError,
    VfsErrorKind,
    VfsInitFailed,
)
from slot_vfs.index import Entry, IndexFile
from slot_vfs.mount import Mounter, Volume, VolumeConfig, load_volume_config
from slot_vfs.paths import MatchMode, normalize
from slot_vfs.vfs import VirtualFileSystem

__all__ = [
    "CannotOpenFile",
    "Entry",
    "FileAlreadyExists",
    "FileNotFound",
    "IndexFile",
    "MatchMode",
    "Mounter",
    "VfsError",
    "VfsErrorKind",
    "VfsInitFailed",
    "VirtualFileSystem",
    "Volume",
    "VolumeConfig",
    "load_volume_config",
    "normalize",
]
