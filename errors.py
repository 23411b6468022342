"""Request failures raised by the resolver and renderer.

Each failure maps to exactly one HTTP status. The message is the whole body
sent to the client, so it never contains a filesystem path.
"""

from typing import Optional


class ServeError(Exception):
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class BadRequest(ServeError):
    """Malformed percent-encoding in the request path."""
    status_code = 400
    message = "Bad URL encoding"


class NotFound(ServeError):
    """Target does not exist, cannot be stat'ed or lies outside the root."""
    status_code = 404
    message = "Not found"


class Forbidden(ServeError):
    """Target exists but cannot be read or enumerated."""
    status_code = 403
    message = "Forbidden"
