"""
Domain Layer Exceptions

Defines the exception hierarchy for eventreg. All project-specific errors
inherit from DomainException so the API layer and the Celery task can handle
them uniformly.

Error taxonomy:
    - Validation (fatal, never retried):
        * InvalidExportRequestError - bad requester/export id or filter value
        * MessageValidationError - WhatsApp message missing required fields
    - RemoteAPI (logged with context, raised):
        * WhatsAppApiError - template-send returned a non-200 status
    - TransientInfra (recorded as failed status, re-raised for queue retry):
        * StorageError - blob storage write/url failure
        * StatusCacheError - Redis status cache failure

Architecture Notes:
    - Infrastructure adapters wrap third-party errors (botocore, OSError,
      RedisError) into StorageError / StatusCacheError so that upper layers
      never import driver exceptions.
"""


class DomainException(Exception):
    """
    Base exception for all eventreg errors.

    Examples:
        >>> raise DomainException("Business rule violation")

        >>> try:
        ...     ...
        ... except DomainException as e:
        ...     logger.error(f"Domain error: {e}")
    """

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class InvalidExportRequestError(DomainException):
    """
    Raised when an export request or one of its filter values is invalid.

    This exception is raised when:
    - requester id is not a positive integer
    - export id is empty
    - date_range filter cannot be parsed
    - sort field is not sortable

    Attributes:
        field_name: Name of the offending field (optional)

    Examples:
        >>> raise InvalidExportRequestError(
        ...     "Cannot parse date_range 'last week'", field_name="date_range"
        ... )
    """

    def __init__(self, message: str, field_name: str | None = None) -> None:
        self.field_name = field_name
        super().__init__(message)


class MessageValidationError(DomainException):
    """
    Raised when a WhatsApp message lacks one of the required fields.

    Required fields are: to, template_name, language, components.
    This is a configuration error in the notification class, so it is
    fatal and must not be retried.

    Attributes:
        missing_fields: Names of the fields that were absent or None

    Examples:
        >>> raise MessageValidationError(["language", "components"])
    """

    def __init__(self, missing_fields: list[str] | None = None) -> None:
        self.missing_fields = missing_fields or []
        message = (
            "WhatsApp message must contain: to, template_name, language, "
            "and components"
        )
        if self.missing_fields:
            message = f"{message} (missing: {', '.join(self.missing_fields)})"
        super().__init__(message)


class WhatsAppApiError(DomainException):
    """
    Raised when the WhatsApp Cloud API answers with a non-200 status.

    Attributes:
        status_code: HTTP status code returned by the API
        body: Raw response body (string)
        to: Destination phone number (optional)
        template: Template name that was sent (optional)

    Examples:
        >>> raise WhatsAppApiError(403, '{"error": {...}}', to="+6591234567")
    """

    def __init__(
        self,
        status_code: int,
        body: str,
        to: str | None = None,
        template: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.to = to
        self.template = template
        super().__init__(f"WhatsApp API error: {body}")


class StorageError(DomainException):
    """
    Raised when the blob storage backend cannot store or address a file.

    Attributes:
        path: Storage path involved (optional)
        original_error: Underlying exception from boto3 / filesystem (optional)

    Examples:
        >>> raise StorageError(
        ...     "Failed to store export file",
        ...     path="staging/default/csv/orders-2025-01-01-aB3xY.csv",
        ...     original_error=OSError("No space left on device"),
        ... )
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.path = path
        self.original_error = original_error

        detailed_parts = [message]
        if path:
            detailed_parts.append(f"Path: {path}")
        if original_error:
            detailed_parts.append(
                f"Original error: {type(original_error).__name__}: {original_error}"
            )
        super().__init__(" | ".join(detailed_parts))


class StatusCacheError(DomainException):
    """
    Raised when the export status cache cannot be read or written.

    Attributes:
        key: Cache key involved (optional)
        original_error: Underlying RedisError (optional)
    """

    def __init__(
        self,
        message: str,
        key: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.key = key
        self.original_error = original_error

        detailed_parts = [message]
        if key:
            detailed_parts.append(f"Key: {key}")
        if original_error:
            detailed_parts.append(
                f"Original error: {type(original_error).__name__}: {original_error}"
            )
        super().__init__(" | ".join(detailed_parts))
