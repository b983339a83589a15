"""Domain errors mapped to HTTP status codes by the error handlers."""


class AppException(Exception):
    """Base class for errors reported to the caller."""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundException(AppException):
    """Referenced doctor, patient, appointment, consultation or slot is absent."""

    status_code = 404
    default_message = "Resource not found"


class ForbiddenException(AppException):
    """Caller is authenticated but does not own or share the resource."""

    status_code = 403
    default_message = "Forbidden"


class ConflictException(AppException):
    """Current entity state does not allow the requested change."""

    status_code = 409
    default_message = "Conflict"
