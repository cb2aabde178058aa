"""
Error taxonomy shared by the data-access layer and the request handlers.

Form validation errors are not here: marshmallow's ValidationError is caught by
models.schemas.common.load_form and turned into a list of field messages.
"""
from __future__ import annotations


class CatalogError(Exception):
    """Base error: a human-readable message plus the entity it concerns."""

    status_code = 500

    def __init__(self, message: str, entity: str | None = None):
        super().__init__(message)
        self.message = message
        self.entity = entity


class NotFoundError(CatalogError):
    """Target id absent (zero rows matched a fetch, update or soft delete)."""

    status_code = 404


class StoreFault(CatalogError):
    """The store reported a fault: connectivity, constraint violation, ..."""

    status_code = 500


class AuthorizationError(CatalogError):
    """Admin password missing or wrong."""

    status_code = 403
