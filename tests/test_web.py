"""Tests for the browser-based web UI.

The web UI provides a Flask-based terminal interface for a volume,
exposing the shell via HTTP endpoints.  Tests use ``pytest.importorskip``
so they are skipped gracefully when Flask is not installed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

flask = pytest.importorskip("flask")

from slot_vfs.mount import VolumeConfig  # noqa: E402
from slot_vfs.web.app import create_app  # noqa: E402

if TYPE_CHECKING:
    from pathlib import Path

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


def _create_client(root: Path) -> Any:
    """Create a test client from a fresh app on *root*."""
    app = create_app(VolumeConfig(root=root))
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify app factory and landing page."""

    def test_create_app_returns_flask(self, tmp_path: Path) -> None:
        """create_app should return a Flask application."""
        assert isinstance(create_app(VolumeConfig(root=tmp_path)), flask.Flask)

    def test_index_returns_html(self, tmp_path: Path) -> None:
        """GET / should return the terminal page with the mount log."""
        client = _create_client(tmp_path)
        response = client.get("/")
        assert response.status_code == HTTP_OK
        assert "text/html" in response.content_type
        assert b"slot-vfs" in response.data
        assert b"[MOUNT]" in response.data


class TestExecuteEndpoint:
    """Verify the /api/execute POST endpoint."""

    def test_write_then_read(self, tmp_path: Path) -> None:
        """Commands run against the mounted volume."""
        client = _create_client(tmp_path)
        client.post("/api/execute", json={"command": "write /a hello"})
        response = client.post("/api/execute", json={"command": "read /a"})
        assert response.status_code == HTTP_OK
        assert response.get_json() == {"output": "hello", "halted": False}

    def test_missing_command(self, tmp_path: Path) -> None:
        """A body without 'command' is a bad request."""
        client = _create_client(tmp_path)
        response = client.post("/api/execute", json={})
        assert response.status_code == HTTP_BAD_REQUEST

    def test_exit_halts(self, tmp_path: Path) -> None:
        """exit unmounts; later commands report the halt."""
        client = _create_client(tmp_path)
        first = client.post("/api/execute", json={"command": "exit"}).get_json()
        assert first["halted"] is True
        second = client.post("/api/execute", json={"command": "ls"}).get_json()
        assert second == {"output": "Volume unmounted.", "halted": True}


class TestStatusEndpoint:
    """Verify the /api/status endpoint."""

    def test_status_counts_files(self, tmp_path: Path) -> None:
        """Status reports mount state and file count."""
        client = _create_client(tmp_path)
        client.post("/api/execute", json={"command": "create /a"})
        data = client.get("/api/status").get_json()
        assert data == {"mounted": True, "entries": 1}

    def test_status_after_exit(self, tmp_path: Path) -> None:
        """After exit the volume reports unmounted."""
        client = _create_client(tmp_path)
        client.post("/api/execute", json={"command": "exit"})
        assert client.get("/api/status").get_json() == {"mounted": False, "entries": 0}
