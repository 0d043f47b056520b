"""Error types shared by the services, routers and the API client."""


class CatalogError(Exception):
    """Base class for catalog errors."""


class ValidationError(CatalogError):
    """Input is malformed or out of range. Never retried."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class StoreError(CatalogError):
    """The relational store is unreachable or rejected a statement."""
