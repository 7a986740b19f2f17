"""Volume configuration and mounting.

Before any file can be opened, the storage medium has to be present and
carry an index.  Mounting walks a short chain of checks, much like a
firmware POST before boot:

1. **MEDIUM** — the configured root directory must exist.  On the robot
   brain this is "is the SD card inserted?"; here it is a directory.
2. **INDEX** — the index file is created empty if it is missing, and the
   slot directory is created if one is configured.
3. **READY** — a ``VirtualFileSystem`` is wired up and handed back inside
   a mounted ``Volume``.

Each stage appends a line to the mount log, which the REPL prints as its
banner.  Any failure raises ``VfsInitFailed`` and nothing is mounted.

The volume layout comes from ``VolumeConfig``, either built in code or
loaded from a JSON file::

    {
        "root": "/media/sd",
        "index_name": "index.txt",
        "slot_dir": "",
        "match_mode": "prefix"
    }

A relative ``root`` is resolved against the directory holding the JSON
file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from slot_vfs.errors import VfsInitFailed
from slot_vfs.index import IndexFile
from slot_vfs.logging import Logger, LogLevel
from slot_vfs.paths import MatchMode
from slot_vfs.storage.slots import DirectorySlotStore
from slot_vfs.vfs import VirtualFileSystem

_SOURCE = "mount"
DEFAULT_INDEX_NAME = "index.txt"


class MountStage(StrEnum):
    """Represent the current phase of the mount chain."""

    MEDIUM = "medium"
    INDEX = "index"
    READY = "ready"


class VolumeState(StrEnum):
    """Whether a volume is usable."""

    MOUNTED = "mounted"
    UNMOUNTED = "unmounted"


@dataclass(frozen=True)
class VolumeConfig:
    """Where the index and the slots live on the host medium.

    Attributes:
        root: Directory standing in for the storage medium.
        index_name: File name of the index, relative to *root*.
        slot_dir: Directory holding slot files, relative to *root*.
            Empty means the slots sit next to the index.
        match_mode: How directory listings match stored paths.

    """

    root: Path
    index_name: str = DEFAULT_INDEX_NAME
    slot_dir: str = ""
    match_mode: MatchMode = MatchMode.PREFIX

    @property
    def index_path(self) -> Path:
        """Return the host path of the index file."""
        return self.root / self.index_name

    @property
    def slot_path(self) -> Path:
        """Return the host directory holding the slot files."""
        return self.root / self.slot_dir if self.slot_dir else self.root


def _string_field(data: dict[str, object], key: str, default: str) -> str:
    """Return the string stored under *key*, or *default* when it is absent."""
    value = data.get(key, default)
    if not isinstance(value, str):
        msg = f"{key!r} must be a string, got {type(value).__name__}"
        raise TypeError(msg)
    return value


def load_volume_config(path: Path) -> VolumeConfig:
    """Load a ``VolumeConfig`` from a JSON file.

    Missing keys take their defaults; ``root`` defaults to the directory
    holding the file.

    Raises:
        VfsInitFailed: If the file cannot be read or is not valid.

    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            msg = f"expected a JSON object, got {type(data).__name__}"
            raise TypeError(msg)
        root = Path(_string_field(data, "root", "."))
        if not root.is_absolute():
            root = path.parent / root
        return VolumeConfig(
            root=root,
            index_name=_string_field(data, "index_name", DEFAULT_INDEX_NAME),
            slot_dir=_string_field(data, "slot_dir", ""),
            match_mode=MatchMode(data.get("match_mode", MatchMode.PREFIX)),
        )
    except (OSError, TypeError, ValueError) as e:
        msg = f"Cannot load volume config {path}: {e}"
        raise VfsInitFailed(msg, path=str(path)) from e


class Volume:
    """A mounted medium: its config, its file system, and its event log."""

    def __init__(
        self,
        *,
        config: VolumeConfig,
        vfs: VirtualFileSystem,
        logger: Logger,
        mount_log: list[str],
    ) -> None:
        """Create a mounted volume (use ``Mounter.mount`` rather than this)."""
        self._config = config
        self._vfs = vfs
        self._logger = logger
        self._mount_log = list(mount_log)
        self._state = VolumeState.MOUNTED

    @property
    def config(self) -> VolumeConfig:
        """Return the volume configuration."""
        return self._config

    @property
    def vfs(self) -> VirtualFileSystem:
        """Return the file system on this volume."""
        return self._vfs

    @property
    def logger(self) -> Logger:
        """Return the volume's event log."""
        return self._logger

    @property
    def state(self) -> VolumeState:
        """Return whether the volume is mounted."""
        return self._state

    @property
    def mount_log(self) -> list[str]:
        """Return the messages recorded while mounting."""
        return list(self._mount_log)

    def unmount(self) -> None:
        """Mark the volume unmounted.

        Nothing is buffered, so there is nothing to flush.
        """
        if self._state is VolumeState.UNMOUNTED:
            return
        self._state = VolumeState.UNMOUNTED
        self._logger.log(LogLevel.INFO, "Volume unmounted", source=_SOURCE)


class Mounter:
    """Run the mount chain for one volume.

    Usage::

        volume = Mounter(VolumeConfig(root=Path("/media/sd"))).mount()

    """

    def __init__(self, config: VolumeConfig, *, logger: Logger | None = None) -> None:
        """Create a mounter for *config*, logging to *logger* if given."""
        self._config = config
        self._logger = logger if logger is not None else Logger()
        self._stage = MountStage.MEDIUM
        self._mount_log: list[str] = []

    @property
    def stage(self) -> MountStage:
        """Return the current mount stage."""
        return self._stage

    @property
    def mount_log(self) -> list[str]:
        """Return the accumulated mount messages."""
        return list(self._mount_log)

    def mount(self) -> Volume:
        """Run every mount stage and return the mounted volume.

        Raises:
            VfsInitFailed: If the medium is missing or the index or slot
                directory cannot be created.

        """
        # Stage 1: storage medium present
        self._stage = MountStage.MEDIUM
        root = self._config.root
        if not root.is_dir():
            msg = f"Storage medium not present: {root}"
            self._logger.log(LogLevel.ERROR, msg, source=_SOURCE)
            raise VfsInitFailed(msg, path=str(root))
        self._record(f"Medium: {root} ... OK")

        # Stage 2: index and slot directory
        self._stage = MountStage.INDEX
        index = IndexFile(self._config.index_path)
        created = not index.exists()
        try:
            index.ensure_exists()
        except VfsInitFailed as e:
            self._logger.log(LogLevel.ERROR, str(e), source=_SOURCE)
            raise
        self._record(f"Index: {index.path.name} ({'created' if created else 'found'}) ... OK")

        slot_root = self._config.slot_path
        try:
            slot_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create slot directory {slot_root}: {e}"
            self._logger.log(LogLevel.ERROR, msg, source=_SOURCE)
            raise VfsInitFailed(msg, path=str(slot_root)) from e
        self._record(f"Slots: {slot_root} ... OK")

        # Stage 3: wire up the file system
        self._stage = MountStage.READY
        vfs = VirtualFileSystem(
            index=index,
            slots=DirectorySlotStore(slot_root),
            match_mode=self._config.match_mode,
            logger=self._logger,
        )
        self._record(f"Mounted ({len(vfs.entries())} files, {self._config.match_mode} listing)")
        return Volume(
            config=self._config,
            vfs=vfs,
            logger=self._logger,
            mount_log=self._mount_log,
        )

    def _record(self, message: str) -> None:
        self._mount_log.append(f"[MOUNT] {message}")
        self._logger.log(LogLevel.INFO, message, source=_SOURCE)
