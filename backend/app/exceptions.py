class AppError(Exception):
    """Base class for errors rendered as ``{"error": message}``."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class AuthenticationError(AppError):
    # Unknown email and wrong password share this message and status.
    status_code = 400
    message = "Invalid credentials"


class AuthorizationError(AppError):
    status_code = 403
    message = "Invalid or expired token"


class MissingToken(AuthorizationError):
    status_code = 401
    message = "Access token required"


class TokenInvalid(AuthorizationError):
    pass


class TokenExpired(AuthorizationError):
    pass


class DuplicateIdentity(AppError):
    status_code = 409
    message = "User already exists"


class NotFound(AppError):
    status_code = 404
    message = "Resource not found"


class UnexpectedStoreError(AppError):
    status_code = 500
    message = "Internal server error"
