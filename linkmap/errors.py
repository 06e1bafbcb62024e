"""
Error taxonomy for linkmap.

Every failure the core can report is an `AppError` subclass. Each kind carries
the HTTP status and the public message the boundary returns, so the API layer
can translate errors with a single exception handler and never leak internal
details (parser messages, stack traces) to clients.

Kinds:
    - InvalidInput : malformed URL supplied to create-mapping (400)
    - NotFound     : unknown identifier supplied to resolve-mapping (404)
    - StoreFailure : backend could not complete a read/write (503)
"""


class AppError(Exception):
    """Base class for errors surfaced by linkmap operations."""

    status_code: int = 500
    public_message: str = "Internal error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class InvalidInput(AppError):
    """The supplied URL is not a syntactically valid absolute URL."""

    status_code = 400
    public_message = "Invalid URL"


class NotFound(AppError):
    """No mapping exists for the requested identifier."""

    status_code = 404
    public_message = "Not found"


class StoreFailure(AppError):
    """The mapping store could not complete the request.

    Unused by the in-memory store for I/O; also raised when no free
    identifier could be obtained.
    """

    status_code = 503
    public_message = "Storage unavailable"


__all__ = ["AppError", "InvalidInput", "NotFound", "StoreFailure"]
