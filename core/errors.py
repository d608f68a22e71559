"""DSR error taxonomy.

Every failure the core surfaces to its callers is a DSRError subclass.
The ``condition`` attribute carries the condition name so callers (HTTP
layer, Temporal activities) can report it without isinstance ladders.
"""

from typing import Optional


class DSRError(Exception):
    """Base exception for DSR generation failures."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    @property
    def condition(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause is not None:
            return f"{message} ({type(self.cause).__name__}: {self.cause})"
        return message


class RecordNotFound(DSRError):
    """No show with the requested identifier exists in the catalog."""
    pass


class CatalogUnavailable(DSRError):
    """The equipment catalog could not be loaded."""
    pass


class TemplateUnavailable(DSRError):
    """The DSR template is missing or is not a usable PDF."""
    pass


class PersistFailure(DSRError):
    """The rendered document could not be written."""
    pass


class UnparseableEquipmentLine(DSRError):
    """A single equipment line failed to resolve.

    Never propagated out of the expander; the line is downgraded to an
    UNPARSEABLE item instead.
    """
    pass


class DuplicateRecord(DSRError):
    """A show id is already taken, or repeats within one bulk payload."""
    pass
