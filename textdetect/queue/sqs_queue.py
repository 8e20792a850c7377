from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from textdetect.logging.logger import Log
from textdetect.processor.exceptions import RemoteUnavailableError
from textdetect.queue.models import QueueDelivery


class SqsQueue:
    """Receives and acknowledges messages on one SQS queue."""

    def __init__(self, client: Any, queue_url: str, wait_time_seconds: int = 20) -> None:
        self._client = client
        self._queue_url = queue_url
        self._wait_time_seconds = wait_time_seconds

    @property
    def queue_url(self) -> str:
        return self._queue_url

    def receive(self) -> dict[str, Any] | None:
        """Long-poll for a single message. Returns None when the queue is empty."""
        try:
            response = self._client.receive_message(
                QueueUrl=self._queue_url,
                MaxNumberOfMessages=1,
                WaitTimeSeconds=self._wait_time_seconds,
                MessageSystemAttributeNames=["ApproximateReceiveCount"],
            )
        except (ClientError, BotoCoreError) as exc:
            raise RemoteUnavailableError(f"Receive from {self._queue_url} failed: {exc}") from exc

        messages = response.get("Messages", [])
        return messages[0] if messages else None

    def acknowledge(self, delivery: QueueDelivery) -> None:
        """Delete the message so it is never redelivered."""
        try:
            self._client.delete_message(
                QueueUrl=delivery.queue_url,
                ReceiptHandle=delivery.receipt_handle,
            )
        except (ClientError, BotoCoreError) as exc:
            raise RemoteUnavailableError(
                f"Delete from {delivery.queue_url} failed: {exc}"
            ) from exc
        Log.debug(f"Deleted message from {delivery.queue_url}")

    def send(self, body: str) -> str:
        """Publish one message body. Returns the SQS message id."""
        try:
            response = self._client.send_message(QueueUrl=self._queue_url, MessageBody=body)
        except (ClientError, BotoCoreError) as exc:
            raise RemoteUnavailableError(f"Send to {self._queue_url} failed: {exc}") from exc
        return str(response.get("MessageId", ""))
