"""Activity definitions module."""

from activities.render import (
    list_pending_shows,
    render_show,
    configure_service,
    get_service,
    ListPendingShowsOutput,
    RenderShowInput,
    RenderShowOutput,
)

__all__ = [
    "list_pending_shows",
    "render_show",
    "configure_service",
    "get_service",
    "ListPendingShowsOutput",
    "RenderShowInput",
    "RenderShowOutput",
]
