"""Errors the marketplace raises beyond Protean's own taxonomy.

Missing or malformed input and illegal transitions raise
`protean.exceptions.ValidationError`; ids that do not resolve raise
`protean.exceptions.ObjectNotFoundError`. The two classes below cover the
remaining cases and are mapped to HTTP statuses by `marketplace.api.errors`.
"""


class MarketplaceError(Exception):
    """Base class carrying a human readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthorizationError(MarketplaceError):
    """The caller's role does not permit the requested operation."""


class ConflictError(MarketplaceError):
    """The operation would create a duplicate of an existing record."""
