"""
Custom exceptions for the application.
All API exceptions should inherit from APIException for consistent error handling.
"""
from typing import Optional, Any


class APIException(Exception):
    """
    Base exception for all API errors.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(self.message)


class BadRequestException(APIException):
    """400 Bad Request"""

    def __init__(self, message: str = "Bad request", code: str = "BAD_REQUEST"):
        super().__init__(400, code, message)


class UnauthorizedException(APIException):
    """401 Unauthorized"""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(401, code, message)


class ForbiddenException(APIException):
    """403 Forbidden"""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(403, code, message)


class NotFoundException(APIException):
    """404 Not Found"""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, code, message)


class ConflictException(APIException):
    """409 Conflict"""

    def __init__(self, message: str = "Resource conflict", code: str = "CONFLICT"):
        super().__init__(409, code, message)


class PayloadTooLargeException(APIException):
    """413 Payload Too Large"""

    def __init__(self, message: str = "Payload too large", code: str = "PAYLOAD_TOO_LARGE"):
        super().__init__(413, code, message)


class UnsupportedMediaTypeException(APIException):
    """415 Unsupported Media Type"""

    def __init__(self, message: str = "Unsupported media type", code: str = "UNSUPPORTED_MEDIA_TYPE"):
        super().__init__(415, code, message)


class ValidationException(APIException):
    """422 Validation Error"""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(422, code, message, details)


class InternalServerException(APIException):
    """500 Internal Server Error"""

    def __init__(
        self,
        message: str = "Internal server error",
        code: str = "INTERNAL_ERROR",
    ):
        super().__init__(500, code, message)


class ServiceUnavailableException(APIException):
    """503 - the database or object storage could not be reached"""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        code: str = "SERVICE_UNAVAILABLE",
    ):
        super().__init__(503, code, message)


# Authentication specific exceptions
class InvalidCredentialsException(UnauthorizedException):
    """Invalid email or password"""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
        )


class TokenExpiredException(UnauthorizedException):
    """Token has expired"""

    def __init__(self):
        super().__init__(
            message="Token has expired",
            code="TOKEN_EXPIRED",
        )


class InvalidTokenException(UnauthorizedException):
    """Token is invalid"""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="INVALID_TOKEN",
        )


class InvalidMagicLinkException(UnauthorizedException):
    """Magic link is invalid, expired or already used"""

    def __init__(self):
        super().__init__(
            message="This sign-in link is invalid or has expired",
            code="INVALID_MAGIC_LINK",
        )


# Resource specific exceptions
class UserNotFoundException(NotFoundException):
    """User not found"""

    def __init__(self):
        super().__init__(message="User not found", code="USER_NOT_FOUND")


class AgencyNotFoundException(NotFoundException):
    """Agency not found"""

    def __init__(self):
        super().__init__(message="Agency not found", code="AGENCY_NOT_FOUND")


class ProjectNotFoundException(NotFoundException):
    """Project not found"""

    def __init__(self):
        super().__init__(message="Project not found", code="PROJECT_NOT_FOUND")


class JobNotFoundException(NotFoundException):
    """Job not found"""

    def __init__(self):
        super().__init__(message="Job not found", code="JOB_NOT_FOUND")


class UnknownTermException(BadRequestException):
    """A submitted taxonomy name does not exist"""

    def __init__(self, kind: str, name: str):
        super().__init__(
            message=f'{kind} "{name}" not found. Please refresh and try again.',
            code="UNKNOWN_TERM",
        )


class EmailAlreadyExistsException(ConflictException):
    """Email already registered"""

    def __init__(self):
        super().__init__(
            message="Email already registered",
            code="EMAIL_EXISTS",
        )


# Write failures
class SaveFailedException(InternalServerException):
    """A multi-step write failed and was rolled back"""

    def __init__(self, message: str):
        super().__init__(message=message, code="SAVE_FAILED")


class ListingUnavailableException(ServiceUnavailableException):
    """A listing query failed"""

    def __init__(self, message: str):
        super().__init__(message=message, code="LISTING_UNAVAILABLE")


class StorageException(ServiceUnavailableException):
    """Object storage rejected or failed an operation"""

    def __init__(self, message: str = "An unexpected error occurred during upload."):
        super().__init__(message=message, code="STORAGE_ERROR")
