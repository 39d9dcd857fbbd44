"""
Error taxonomy.

Services raise these instead of HTTP exceptions. The application
registers one handler for ServiceError that renders the status
code and a stable error code; everything else becomes a generic
500 without leaking internal detail.
"""


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Missing or malformed input."""
    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(ServiceError):
    """Absent, malformed, expired or revoked credential."""
    status_code = 401
    code = "UNAUTHORIZED"


class AuthorizationError(ServiceError):
    """Valid credential, but the role or ownership does not allow the operation."""
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(ServiceError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(ServiceError):
    """A unique field is already taken."""
    status_code = 409
    code = "CONFLICT"


class ServiceUnavailableError(ServiceError):
    """Storage is not reachable."""
    status_code = 503
    code = "SERVICE_UNAVAILABLE"


class AuditError(Exception):
    """
    An audit entry could not be persisted.

    Internal only: the audit recorder logs it and never lets it
    reach the caller of the operation being audited.
    """
