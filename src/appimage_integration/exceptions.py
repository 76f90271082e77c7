"""Exception classes for appimage-integration operations."""


class IntegrationError(Exception):
    """Base exception for appimage-integration operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the target that failed, usually a
                package path or a payload path.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class InvalidParameterError(IntegrationError):
    """Raised when required configuration is empty or invalid."""

    error_prefix = "Invalid parameter"


class NotFoundError(IntegrationError):
    """Raised when a required entry, group or key is missing."""

    error_prefix = "Not found"


class NotSupportedError(IntegrationError):
    """Raised when a package opted out of, or cannot support, an operation."""

    error_prefix = "Not supported"


class EntryFormatError(IntegrationError):
    """Raised when entry text cannot be parsed or bytes are not text."""

    error_prefix = "Invalid format"


class ValidationError(IntegrationError):
    """Raised when a desktop entry fails validation while being edited."""

    error_prefix = "Validation failed"


class ExtractionError(IntegrationError):
    """Raised when a package payload cannot be unpacked."""

    error_prefix = "Extraction failed"


class IconError(IntegrationError):
    """Raised when icon data cannot be decoded, resized or saved."""

    error_prefix = "Icon processing failed"
