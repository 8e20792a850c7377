from dataclasses import dataclass

from textdetect.processor.exceptions import MessageValidationError


@dataclass(frozen=True)
class QueueDelivery:
    """What is needed to acknowledge one delivery of a message."""

    receipt_handle: str
    queue_url: str
    receive_count: int = 1


def queue_url_from_arn(queue_arn: str, region: str | None = None) -> str:
    """Build the SQS queue URL from an event-source ARN.

    arn:aws:sqs:<region>:<account>:<name> -> https://sqs.<region>.amazonaws.com/<account>/<name>
    """
    parts = queue_arn.split(":")
    if len(parts) != 6 or parts[0] != "arn" or parts[2] != "sqs":
        raise MessageValidationError(f"Not an SQS queue ARN: '{queue_arn}'")
    account_id = parts[4]
    queue_name = parts[5]
    region = region or parts[3]
    return f"https://sqs.{region}.amazonaws.com/{account_id}/{queue_name}"
