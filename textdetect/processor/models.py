import json
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from textdetect.processor.exceptions import MessageValidationError
from textdetect.queue.models import QueueDelivery, queue_url_from_arn


def object_identity(bucket: str, key: str) -> str:
    """Stable lookup key for an object: s3://{bucket}/{key}."""
    return f"s3://{bucket}/{key}"


class ObjectMessageBody(BaseModel):
    """JSON body of a queue message: {"bucket", "key", "versionId"?}."""

    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)

    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    version_id: str | None = Field(default=None, alias="versionId")


def parse_message_body(body: str) -> ObjectMessageBody:
    """Parse and validate a raw message body.

    Raises:
        MessageValidationError: if the body is not JSON or misses required fields.
    """
    try:
        payload = json.loads(body)
    except (TypeError, json.JSONDecodeError) as exc:
        raise MessageValidationError(f"Message body is not valid JSON: {exc}") from exc
    try:
        return ObjectMessageBody.model_validate(payload)
    except ValidationError as exc:
        raise MessageValidationError(f"Invalid message body: {exc}") from exc


def receive_count_from(attributes: dict[str, Any] | None) -> int:
    raw = (attributes or {}).get("ApproximateReceiveCount", "1")
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 1


@dataclass(frozen=True)
class InboundMessage:
    """One object to process plus the handle needed to acknowledge it."""

    bucket: str
    key: str
    delivery: QueueDelivery
    version_id: str | None = None

    @property
    def object_id(self) -> str:
        return object_identity(self.bucket, self.key)

    @classmethod
    def from_body(cls, body: str, delivery: QueueDelivery) -> "InboundMessage":
        parsed = parse_message_body(body)
        return cls(
            bucket=parsed.bucket,
            key=parsed.key,
            version_id=parsed.version_id,
            delivery=delivery,
        )

    @classmethod
    def from_sqs_record(cls, record: dict[str, Any]) -> "InboundMessage":
        """Build from an SQS event-source record (Lambda `Records[n]`)."""
        try:
            body = record["body"]
            receipt_handle = record["receiptHandle"]
            queue_arn = record["eventSourceARN"]
        except KeyError as exc:
            raise MessageValidationError(f"SQS record missing field {exc}") from exc
        delivery = QueueDelivery(
            receipt_handle=receipt_handle,
            queue_url=queue_url_from_arn(queue_arn, record.get("awsRegion")),
            receive_count=receive_count_from(record.get("attributes")),
        )
        return cls.from_body(body, delivery)

    @classmethod
    def from_sqs_message(cls, message: dict[str, Any], queue_url: str) -> "InboundMessage":
        """Build from a ReceiveMessage entry."""
        try:
            body = message["Body"]
            receipt_handle = message["ReceiptHandle"]
        except KeyError as exc:
            raise MessageValidationError(f"SQS message missing field {exc}") from exc
        delivery = QueueDelivery(
            receipt_handle=receipt_handle,
            queue_url=queue_url,
            receive_count=receive_count_from(message.get("Attributes")),
        )
        return cls.from_body(body, delivery)
