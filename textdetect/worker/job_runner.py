import time
from typing import Any

from textdetect.config.settings import Settings
from textdetect.logging.logger import Log
from textdetect.processor.exceptions import (
    MessageValidationError,
    PermanentObjectError,
    RecordValidationError,
    TransientExternalError,
)
from textdetect.processor.models import InboundMessage, receive_count_from
from textdetect.processor.processor import Processor


def failure_category(exc: Exception) -> str:
    """Label used in logs to tell retryable faults from dead-letter candidates."""
    if isinstance(exc, TransientExternalError):
        return "transient"
    if isinstance(exc, PermanentObjectError):
        return "permanent"
    if isinstance(exc, (MessageValidationError, RecordValidationError)):
        return "validation"
    return "unexpected"


class JobRunner:
    """Run one queue message, catch exceptions, and leave failures to redelivery."""

    def __init__(self, processor: Processor, queue_url: str, settings: Settings) -> None:
        self._processor = processor
        self._queue_url = queue_url
        self._settings = settings

    def run(self, raw_message: dict[str, Any]) -> bool:
        """Process a single ReceiveMessage entry. Returns True on success."""
        message_id = raw_message.get("MessageId", "<unknown>")
        try:
            message = InboundMessage.from_sqs_message(raw_message, self._queue_url)
            Log.info(
                f"Running message {message_id} for {message.object_id} "
                f"(receive {message.delivery.receive_count})"
            )
            deadline = time.monotonic() + self._settings.run_timeout_seconds
            self._processor.process(message, deadline=deadline)
            Log.info(f"Message {message_id} completed successfully")
            return True
        except Exception as exc:
            self._handle_failure(raw_message, message_id, exc)
            return False

    def _handle_failure(self, raw_message: dict[str, Any], message_id: str, exc: Exception) -> None:
        """Log the fault. The message stays queued until its visibility timeout ends."""
        category = failure_category(exc)
        Log.error(f"Message {message_id} failed ({category}): {exc}")
        receive_count = receive_count_from(raw_message.get("Attributes"))
        if receive_count >= self._settings.max_receive_count:
            Log.error(
                f"Message {message_id} reached {receive_count} receives, "
                "it will be moved to the dead-letter queue"
            )
        else:
            Log.warning(f"Message {message_id} will be redelivered (receive {receive_count})")
