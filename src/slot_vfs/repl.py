"""Interactive REPL (Read-Eval-Print Loop) for a slot volume.

The REPL mounts the volume, creates a shell, and enters the classic loop:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the command to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell returns the exit sentinel.

This module keeps the I/O loop separate from the shell logic.  The
shell is fully testable (returns strings, no I/O); the REPL is the
thin I/O wrapper that connects it to ``stdin``/``stdout``.

The volume config is read from the JSON file named by the
``SLOT_VFS_CONFIG`` environment variable.  Without it, the current
directory is used as the medium root.
"""

import os
import readline
from collections.abc import Mapping
from pathlib import Path

from slot_vfs.completer import Completer
from slot_vfs.errors import VfsInitFailed
from slot_vfs.mount import Mounter, Volume, VolumeConfig, VolumeState, load_volume_config
from slot_vfs.shell import Shell

CONFIG_ENV_VAR = "SLOT_VFS_CONFIG"
_BANNER_WIDTH = 38


def format_mount_log(mount_log: list[str]) -> str:
    """Format the mount log into a displayable banner string.

    Args:
        mount_log: List of messages recorded while mounting.

    Returns:
        A formatted string suitable for printing to the console.

    """
    border = "=" * _BANNER_WIDTH
    header = (
        f"\n  {border}\n            slot-vfs v0.1.0\n     A slot-backed file system\n  {border}\n\n"
    )
    body = "\n".join(f"  {msg}" for msg in mount_log)
    footer = "\nVolume mounted. Type 'help' for commands, 'exit' to quit.\n"
    return header + body + footer


def build_prompt(volume: Volume) -> str:
    """Build the prompt string showing the medium root.

    Returns:
        A prompt like ``vfs:sd $ `` or ``vfs $ `` once unmounted.

    """
    if volume.state is not VolumeState.MOUNTED:
        return "vfs $ "
    return f"vfs:{volume.config.root.name or '/'} $ "


def resolve_config(environ: Mapping[str, str] | None = None) -> VolumeConfig:
    """Return the volume config named by ``SLOT_VFS_CONFIG``, or the default.

    Raises:
        VfsInitFailed: If the named config file cannot be loaded.

    """
    env = os.environ if environ is None else environ
    config_path = env.get(CONFIG_ENV_VAR)
    if config_path:
        return load_volume_config(Path(config_path))
    return VolumeConfig(root=Path.cwd())


def run() -> None:
    """Mount the volume and run the interactive REPL.

    This is the ``slot-vfs`` console entry point.  It handles:
    - Mounting (medium check, index creation).
    - Shell creation and tab completion.
    - The read-eval-print loop.
    - Graceful handling of Ctrl+C and Ctrl+D.
    - Clean unmount.
    """
    try:
        volume = Mounter(resolve_config()).mount()
    except VfsInitFailed as e:
        print(f"[INIT] {e}")  # noqa: T201
        raise SystemExit(1) from e

    shell = Shell(volume=volume)

    # Wire up tab completion via readline.
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_mount_log(volume.mount_log))  # noqa: T201

    try:
        while volume.state is VolumeState.MOUNTED:
            try:
                command = input(build_prompt(volume))
            except EOFError:
                # Ctrl+D — graceful exit
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C — graceful exit
        print("\nInterrupted.")  # noqa: T201

    finally:
        volume.unmount()
        print("Volume unmounted.")  # noqa: T201
