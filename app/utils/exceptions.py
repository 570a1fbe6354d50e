"""Custom exceptions for FitZone backend."""

from typing import Any, Dict, Optional


class FitZoneException(Exception):
    """Base exception for FitZone application."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize FitZoneException.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code.
            error_code: Machine-readable error code.
            details: Additional error details.
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(FitZoneException):
    """Raised when request input is missing or malformed."""

    def __init__(
        self,
        message: str = "Missing required fields",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize ValidationError."""
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class PasswordMismatchError(ValidationError):
    """Raised when password and confirmation differ."""

    def __init__(self, message: str = "Passwords do not match") -> None:
        super().__init__(message=message, details={"field": "confirmPassword"})
        self.error_code = "PASSWORD_MISMATCH"


class ContractCodeError(FitZoneException):
    """Raised when a contract code cannot be redeemed.

    ``reason`` is the wording used by the validate endpoint, ``message`` the
    wording used by signup. They only differ for unknown codes.
    """

    reason = "Invalid contract code"
    error_code = "INVALID_CONTRACT_CODE"

    def __init__(self, code: str, message: Optional[str] = None) -> None:
        """Initialize ContractCodeError."""
        self.code = code
        super().__init__(
            message=message or self.reason,
            status_code=400,
            error_code=self.error_code,
            details={"contractCode": code},
        )


class ContractCodeNotFoundError(ContractCodeError):
    """Raised when no record exists for a contract code."""

    reason = "Contract code not found"
    error_code = "CONTRACT_CODE_NOT_FOUND"

    def __init__(self, code: str) -> None:
        super().__init__(code, message="Invalid contract code")


class ContractCodeInactiveError(ContractCodeError):
    """Raised when a contract code status is not ACTIVE."""

    reason = "Contract code is not active"
    error_code = "CONTRACT_CODE_INACTIVE"


class ContractCodeExpiredError(ContractCodeError):
    """Raised when a contract code expiry is in the past."""

    reason = "Contract code expired"
    error_code = "CONTRACT_CODE_EXPIRED"


class AuthenticationError(FitZoneException):
    """Raised when authentication fails."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize AuthenticationError."""
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair is rejected."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message=message)
        self.error_code = "INVALID_CREDENTIALS"


class AuthorizationError(FitZoneException):
    """Raised when user is not authorized to access a resource."""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize AuthorizationError."""
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


class SubscriptionInactiveError(AuthorizationError):
    """Raised when valid credentials belong to an inactive subscription."""

    def __init__(
        self,
        message: str = "Your subscription is not active. Please contact support.",
        status: Optional[str] = None,
    ) -> None:
        super().__init__(message=message, details={"status": status} if status else None)
        self.error_code = "SUBSCRIPTION_INACTIVE"


class ConflictError(FitZoneException):
    """Raised when a resource already exists."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize ConflictError."""
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class EmailInUseError(ConflictError):
    """Raised when the identity service already knows an email."""

    def __init__(self, email: str) -> None:
        super().__init__(message="Email already in use")
        self.error_code = "EMAIL_IN_USE"
        self.email = email


class UpstreamError(FitZoneException):
    """Raised when the identity service or the store fails."""

    def __init__(
        self,
        message: str = "Upstream service failure",
        error_code: str = "UPSTREAM_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize UpstreamError."""
        super().__init__(
            message=message,
            status_code=500,
            error_code=error_code,
            details=details,
        )


class UserCreationError(UpstreamError):
    """Raised when the identity record cannot be created."""

    def __init__(self, message: str = "Failed to create user") -> None:
        super().__init__(message=message, error_code="USER_CREATION_FAILED")


class SignupLoginFailedError(UpstreamError):
    """Raised when signup committed but the follow-up sign-in failed."""

    MESSAGE = "Signup succeeded, but login failed"

    def __init__(self, email: str) -> None:
        super().__init__(
            message=self.MESSAGE,
            error_code="SIGNUP_LOGIN_FAILED",
            details={"email": email},
        )
        self.email = email


class LoginFailedError(UpstreamError):
    """Raised when a sign-in succeeds but the session cannot be checked."""

    def __init__(self, message: str = "Login failed") -> None:
        super().__init__(message=message, error_code="LOGIN_FAILED")


class AuthServiceError(FitZoneException):
    """Raised by the credential exchange on any upstream failure."""

    def __init__(
        self,
        message: str = "Identity service request failed",
        upstream_status: Optional[int] = None,
        upstream_message: Optional[str] = None,
    ) -> None:
        """Initialize AuthServiceError."""
        self.upstream_status = upstream_status
        self.upstream_message = upstream_message
        details: Dict[str, Any] = {}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(
            message=message,
            status_code=500,
            error_code="AUTH_SERVICE_ERROR",
            details=details,
        )


class IdentityError(FitZoneException):
    """Raised by identity services when a user operation fails."""

    def __init__(self, message: str = "Identity operation failed") -> None:
        super().__init__(message=message, status_code=500, error_code="IDENTITY_ERROR")


class EmailAlreadyRegisteredError(IdentityError):
    """Raised by identity services when an email is taken."""

    def __init__(self, email: str) -> None:
        super().__init__(message=f"Email already registered: {email}")
        self.email = email


class TokenVerificationError(IdentityError):
    """Raised by identity services when a token is invalid or expired."""

    def __init__(self, message: str = "Token verification failed") -> None:
        super().__init__(message=message)
        self.status_code = 401
        self.error_code = "INVALID_TOKEN"
