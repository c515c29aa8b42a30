# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Web service for qkrump.

Exposes decoding, report export and a small job relay over HTTP.
Built on FastAPI.

Starting the Server
-------------------
>>> from qkrump_ui import run_server
>>> run_server(port=8080)

Or from the CLI::

    qkrump serve --port 8080

Custom Deployment
-----------------
>>> from qkrump_ui import create_app
>>> app = create_app()  # ASGI app for uvicorn / gunicorn
"""

from importlib.metadata import PackageNotFoundError, version


try:
    __version__ = version("qkrump")
except PackageNotFoundError:
    __version__ = "0.0.0"

from qkrump_ui.app import create_app, run_server  # noqa: E402


__all__ = [
    "run_server",
    "create_app",
]
