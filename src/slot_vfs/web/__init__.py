"""Browser-based web UI for slot-vfs.

This package provides a Flask application that exposes the volume shell
through a web browser.  It is an **optional** extra — install with::

    pip install slot-vfs[web]

The ``create_app`` factory in ``app.py`` mounts a volume, creates a
shell, and serves three endpoints:

- ``GET /`` — HTML terminal page.
- ``POST /api/execute`` — execute a shell command and return JSON.
- ``GET /api/status`` — mount state and file count.
"""
