"""Error taxonomy and delivery-error classification for live events."""

from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels."""

    TRANSIENT = "transient"  # Backend may accept the same record later
    PERMANENT = "permanent"  # Record or configuration is at fault
    CRITICAL = "critical"  # Backend unusable until reconfigured


class ErrorCategory(Enum):
    """Error categories for classification."""

    NETWORK = "network"
    AUTHENTICATION = "authentication"
    THROTTLING = "throttling"
    SERIALIZATION = "serialization"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


class LiveEventsError(Exception):
    """Base exception for live events errors."""


class ConfigurationError(LiveEventsError):
    """Missing or invalid configuration, raised when a client is set up."""


class SerializationError(LiveEventsError):
    """Event payload or context cannot be represented on the wire."""


class DeliveryError(LiveEventsError):
    """A failed delivery to the stream backend, classified for logging."""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity,
        category: ErrorCategory,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.category = category
        self.original_exception = original_exception


_THROTTLING_CODES = {
    "ProvisionedThroughputExceededException",
    "ThrottlingException",
    "LimitExceededException",
    "KMSThrottlingException",
}

_AUTHENTICATION_CODES = {
    "AccessDeniedException",
    "UnrecognizedClientException",
    "ExpiredTokenException",
    "InvalidSignatureException",
    "KMSAccessDeniedException",
}

_VALIDATION_CODES = {
    "ResourceNotFoundException",
    "InvalidArgumentException",
    "ValidationException",
    "KMSDisabledException",
    "KMSNotFoundException",
}


def _error_code(exception: Exception) -> str | None:
    """Return the AWS error code carried by a botocore ClientError, if any."""
    response = getattr(exception, "response", None)
    if not isinstance(response, dict):
        return None
    return response.get("Error", {}).get("Code")


def classify_error(exception: Exception) -> DeliveryError:
    """Classify an exception raised by a stream backend into a DeliveryError."""
    error_message = str(exception)
    error_type = type(exception).__name__
    error_code = _error_code(exception)

    if error_code in _THROTTLING_CODES:
        return DeliveryError(
            message=f"Throttling error: {error_message}",
            severity=ErrorSeverity.TRANSIENT,
            category=ErrorCategory.THROTTLING,
            original_exception=exception,
        )

    if error_code in _AUTHENTICATION_CODES:
        return DeliveryError(
            message=f"Authentication error: {error_message}",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.AUTHENTICATION,
            original_exception=exception,
        )

    if error_code in _VALIDATION_CODES:
        return DeliveryError(
            message=f"Validation error: {error_message}",
            severity=ErrorSeverity.PERMANENT,
            category=ErrorCategory.VALIDATION,
            original_exception=exception,
        )

    # Network errors (transient)
    if any(
        keyword in error_type.lower()
        for keyword in ["timeout", "connection", "network"]
    ):
        return DeliveryError(
            message=f"Network error: {error_message}",
            severity=ErrorSeverity.TRANSIENT,
            category=ErrorCategory.NETWORK,
            original_exception=exception,
        )

    # Authentication errors (critical, matching the AWS code path)
    if any(
        keyword in error_type.lower()
        for keyword in ["auth", "unauthorized", "forbidden", "credentials", "permission"]
    ):
        return DeliveryError(
            message=f"Authentication error: {error_message}",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.AUTHENTICATION,
            original_exception=exception,
        )

    # Throttling errors (transient)
    if any(
        keyword in error_message.lower()
        for keyword in ["throttl", "rate limit", "rate exceeded", "quota"]
    ):
        return DeliveryError(
            message=f"Throttling error: {error_message}",
            severity=ErrorSeverity.TRANSIENT,
            category=ErrorCategory.THROTTLING,
            original_exception=exception,
        )

    # Serialization errors (permanent)
    if any(
        keyword in error_type.lower()
        for keyword in ["json", "serialization", "encoding", "unicode"]
    ):
        return DeliveryError(
            message=f"Serialization error: {error_message}",
            severity=ErrorSeverity.PERMANENT,
            category=ErrorCategory.SERIALIZATION,
            original_exception=exception,
        )

    return DeliveryError(
        message=f"Unknown error: {error_message}",
        severity=ErrorSeverity.TRANSIENT,
        category=ErrorCategory.UNKNOWN,
        original_exception=exception,
    )
