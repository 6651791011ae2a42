"""
Domain error taxonomy shared by the validator, repositories and routes.

Only the API routes translate these into HTTP status codes.
"""


class UserServiceError(Exception):
    """Base class for user service errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(UserServiceError):
    """Client input is malformed (400)"""


class NotFoundError(UserServiceError):
    """Requested user does not exist (404)"""


class ConflictError(UserServiceError):
    """Email uniqueness violation (409)"""


class StoreError(UserServiceError):
    """Data store unreachable or failed unexpectedly (500)"""
