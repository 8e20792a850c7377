"""S3 Batch Operations entry point: one inventory task per invocation."""

from typing import Any

from textdetect.aws.clients import init_clients
from textdetect.config.settings import Settings
from textdetect.fanout.inventory_fanout import InventoryFanout
from textdetect.logging.logger import Log
from textdetect.queue.sqs_queue import SqsQueue

_fanout: InventoryFanout | None = None


def _get_fanout() -> InventoryFanout:
    global _fanout  # noqa: PLW0603
    if _fanout is None:
        settings = Settings()
        Log.configure(settings.log_level)
        if not settings.sqs_queue_url:
            raise ValueError("sqs_queue_url is required")
        clients = init_clients(settings)
        _fanout = InventoryFanout(SqsQueue(clients.sqs, settings.sqs_queue_url))
    return _fanout


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    return _get_fanout().handle(event)
