"""API Routes Package."""

from api.routes import health, shows, equipment, pdf

__all__ = [
    "health",
    "shows",
    "equipment",
    "pdf",
]
