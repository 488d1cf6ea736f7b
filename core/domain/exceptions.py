"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class RequestValidationError(DomainException):
    """Raised when required request fields are missing or malformed."""

    def __init__(self, message: str = "Missing fields", errors: dict = None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.errors = errors or {}


class PermissionDeniedError(DomainException):
    """Raised when the permission resolver rejects a caller."""

    def __init__(self, message: str = "No permission"):
        super().__init__(message, code="PERMISSION_DENIED")


class NotFoundError(DomainException):
    """Base exception for absent target rows."""

    pass


class ApplicationNotFoundError(NotFoundError):
    """Raised when an application is not found."""

    def __init__(self, message: str = "App not found"):
        super().__init__(message, code="APPLICATION_NOT_FOUND")


class LicenseKeyNotFoundError(NotFoundError):
    """Raised when a key is not found for an application."""

    def __init__(self, message: str = "Key not found"):
        super().__init__(message, code="KEY_NOT_FOUND")


class SupportNotFoundError(NotFoundError):
    """Raised when a support grant is not found."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, code="SUPPORT_NOT_FOUND")


class ConflictError(DomainException):
    """Base exception for unique-constraint collisions."""

    pass


class DuplicateApplicationNameError(ConflictError):
    """Raised when an application name is already taken."""

    def __init__(self, message: str = "App exists"):
        super().__init__(message, code="DUPLICATE_NAME")


class DuplicateSupportError(ConflictError):
    """Raised when a user is already support staff."""

    def __init__(self, message: str = "Already support"):
        super().__init__(message, code="DUPLICATE_SUPPORT")


class DuplicateLicenseKeyError(ConflictError):
    """Raised when a generated key string collides with an existing one."""

    def __init__(self, message: str = "Key already exists"):
        super().__init__(message, code="DUPLICATE_KEY")


class QuotaExceededError(DomainException):
    """Raised when an owner has reached the application quota."""

    def __init__(self, message: str = "Application limit reached"):
        super().__init__(message, code="QUOTA_EXCEEDED")


class ProtectedAdminError(DomainException):
    """Raised on an attempt to remove the super-admin from the support set."""

    def __init__(self, message: str = "Cannot delete main admin"):
        super().__init__(message, code="PROTECTED_ADMIN")


class RedemptionRejectedError(DomainException):
    """
    Base exception for key redemption rejections.

    These are expected outcomes of the validation path and are
    reported to clients as non-accepted results.
    """

    pass


class InvalidApplicationError(RedemptionRejectedError):
    """Raised when the application API key is unknown."""

    def __init__(self, message: str = "Invalid API"):
        super().__init__(message, code="INVALID_APPLICATION")


class InvalidKeyError(RedemptionRejectedError):
    """Raised when the key does not exist for the application."""

    def __init__(self, message: str = "Invalid key"):
        super().__init__(message, code="INVALID_KEY")


class KeyBannedError(RedemptionRejectedError):
    """Raised when a banned key is redeemed."""

    def __init__(self, message: str = "Key banned"):
        super().__init__(message, code="KEY_BANNED")


class KeyExpiredError(RedemptionRejectedError):
    """Raised when an expired key is redeemed."""

    def __init__(self, message: str = "Key expired"):
        super().__init__(message, code="KEY_EXPIRED")


class DeviceLimitReachedError(RedemptionRejectedError):
    """Raised when a new HWID would exceed the key's device limit."""

    def __init__(self, message: str = "Device limit reached"):
        super().__init__(message, code="DEVICE_LIMIT_REACHED")
