"""Flask application factory for the slot-vfs web UI.

The ``create_app`` function mounts a volume, creates a shell, and
returns a Flask app with three endpoints:

- ``GET /`` — render the terminal HTML page with the mount log.
- ``POST /api/execute`` — execute a command and return JSON.
- ``GET /api/status`` — return mount state and the number of files.
"""

from __future__ import annotations

from flask import Flask, Response, jsonify, render_template, request

from slot_vfs.mount import Mounter, VolumeConfig, VolumeState
from slot_vfs.repl import resolve_config
from slot_vfs.shell import Shell

_HTTP_BAD_REQUEST = 400


def create_app(config: VolumeConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Mount the volume, create a shell, and wire up routes.

    Args:
        config: Volume to serve.  Defaults to the one the REPL would use.

    Returns:
        A configured Flask application ready to serve.

    Raises:
        VfsInitFailed: If the volume cannot be mounted.

    """
    volume = Mounter(config if config is not None else resolve_config()).mount()
    shell = Shell(volume=volume)

    mount_log = "\n".join(volume.mount_log)

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template("index.html", mount_log=mount_log)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a shell command and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output`` and ``halted`` fields.

        """
        data = request.get_json(silent=True)
        if data is None or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        if volume.state is not VolumeState.MOUNTED:
            return jsonify({"output": "Volume unmounted.", "halted": True})

        command: str = data["command"]
        result = shell.execute(command)

        if result == Shell.EXIT_SENTINEL:
            return jsonify({"output": "Volume unmounted.", "halted": True})

        return jsonify({"output": result, "halted": False})

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return mount state and file count for status polling."""
        mounted = volume.state is VolumeState.MOUNTED
        entries = len(volume.vfs.entries()) if mounted else 0
        return jsonify({"mounted": mounted, "entries": entries})

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``slot-vfs-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
