"""API Package.

FastAPI server for the DSR generator.
"""

from api.server import create_app, app

__all__ = [
    "create_app",
    "app",
]
