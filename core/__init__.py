"""Core module - configuration, error taxonomy and observability.

Shared by the equipment resolver, the renderer, the document service and
the Temporal/HTTP entry points. Holds no DSR business logic itself.
"""

__version__ = "1.0.0"
