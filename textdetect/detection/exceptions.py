from textdetect.processor.exceptions import (
    PermanentObjectError,
    TransientExternalError,
)


class ServiceThrottledError(TransientExternalError):
    """Raised when the detection service rejects the call due to rate limits."""


class ServiceUnavailableError(TransientExternalError):
    """Raised when the detection service fails or cannot be reached."""


class InvalidImageFormatError(PermanentObjectError):
    """Raised when the image is corrupt, too large or in an unsupported format."""
