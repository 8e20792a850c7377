class ProcessorError(Exception):
    """Base exception for all processing errors."""


class TransientExternalError(ProcessorError):
    """External dependency failed in a way that redelivery may fix."""


class RemoteUnavailableError(TransientExternalError):
    """Raised when a remote store is throttling, unreachable or erroring."""


class RunTimeoutError(TransientExternalError):
    """Raised when a pipeline run exceeds its wall-clock deadline."""


class PermanentObjectError(ProcessorError):
    """The object itself cannot be processed; redelivery will not help."""


class ObjectNotFoundError(PermanentObjectError):
    """Raised when the referenced object does not exist."""


class MessageValidationError(ProcessorError):
    """Raised when an inbound queue message is malformed."""


class RecordValidationError(ProcessorError):
    """Raised when a record is rejected before it is written."""
