"""Domain errors raised by repos and services.

Each error carries the HTTP status it maps to; ``main.py`` renders them as
``{"detail": ...}`` so clients see the same shape as a FastAPI HTTPException.
"""


class HireflowError(Exception):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class UnauthenticatedError(HireflowError):
    status_code = 401
    default_detail = "Not authenticated"


class ForbiddenError(HireflowError):
    status_code = 403
    default_detail = "Forbidden"


class NotFoundError(HireflowError):
    """Entity is missing or outside the caller's ownership scope."""

    status_code = 404
    default_detail = "Not found"


class ConflictError(HireflowError):
    status_code = 409
    default_detail = "Conflict"


class ValidationError(HireflowError):
    status_code = 400
    default_detail = "Invalid request"
