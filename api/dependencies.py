"""FastAPI dependencies.

Routes receive the DSRService through ``Depends(get_service)`` so tests
can swap it with ``app.dependency_overrides``.
"""

from functools import lru_cache

from core.config import get_settings
from document_service.service import DSRService, build_service


@lru_cache(maxsize=1)
def get_service() -> DSRService:
    """Service wired against the configured data directory."""
    return build_service(get_settings())
