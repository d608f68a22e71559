"""Document Service - orchestration of expansion, rendering and sweeps."""

from document_service.service import DSRService, build_service, DEFAULT_TEMPLATE_NAME

__all__ = ["DSRService", "build_service", "DEFAULT_TEMPLATE_NAME"]
