"""
core/exceptions.py -- Domain exception taxonomy for ProjectHub.

Stores and auth utilities raise these; api/main.py maps each family to an
HTTP status and a JSON body in one place, so route handlers never build
error responses by hand.

  ValidationError       -> 400 {"message": ...}
  AuthenticationError   -> exc.status_code (401 or 400) {"message": ...}
  StoreError            -> 500 {"error": ...}

Layer rule: core/ is the kernel. No imports from api/, auth/, or projects/.
"""


class ProjectHubError(Exception):
    """Base class for every error the service raises on purpose."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ProjectHubError):
    """A required field is missing or violates a uniqueness rule."""

    status_code = 400
    message = "Validation failed"


class ConflictError(ValidationError):
    """A record with the same unique key already exists."""

    message = "User already exists"


class AuthenticationError(ProjectHubError):
    """The caller could not be authenticated."""

    status_code = 400
    message = "Authentication failed"


class MissingTokenError(AuthenticationError):
    status_code = 401
    message = "Access Denied"


class InvalidTokenError(AuthenticationError):
    """Bad signature, expired, or structurally malformed token."""

    message = "Invalid Token"


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password on login."""


class StoreError(ProjectHubError):
    """Any failure of the underlying database."""
