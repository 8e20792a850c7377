"""Event-source entry point: one SQS record per invocation."""

import json
import time
from typing import Any

from textdetect.aws.clients import init_clients
from textdetect.config.settings import Settings
from textdetect.logging.logger import Log
from textdetect.processor.exceptions import MessageValidationError
from textdetect.processor.models import InboundMessage
from textdetect.processor.pipeline import PipelineContext
from textdetect.processor.processor import Processor, build_processor

# Milliseconds kept back from the runtime's remaining time for logging and return.
DEADLINE_MARGIN_MS = 1000

_settings: Settings | None = None
_processor: Processor | None = None


def _get_processor() -> tuple[Settings, Processor]:
    global _settings, _processor  # noqa: PLW0603
    if _settings is None or _processor is None:
        _settings = Settings()
        Log.configure(_settings.log_level)
        _processor = build_processor(_settings, init_clients(_settings))
    return _settings, _processor


def run_deadline(settings: Settings, context: Any, now: float) -> float:
    """Earliest of the configured run timeout and the runtime's remaining time."""
    budget = float(settings.run_timeout_seconds)
    remaining_ms = getattr(context, "get_remaining_time_in_millis", None)
    if callable(remaining_ms):
        budget = min(budget, (remaining_ms() - DEADLINE_MARGIN_MS) / 1000)
    return now + budget


def response_for(context: PipelineContext) -> dict[str, Any]:
    if context.skipped:
        body = {"message": "Object already processed", "objectId": context.message.object_id}
    else:
        body = {
            "message": "Processing completed successfully",
            "objectId": context.message.object_id,
            "containsWord": context.record.contains_word if context.record else False,
            "markerOutcome": context.marker_outcome.value if context.marker_outcome else None,
        }
    return {"statusCode": 200, "body": json.dumps(body)}


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Process the first record; re-raise any fault so the message stays queued."""
    settings, processor = _get_processor()
    try:
        records = event.get("Records") or []
        if not records:
            raise MessageValidationError("Event contains no SQS records")
        message = InboundMessage.from_sqs_record(records[0])
        deadline = run_deadline(settings, context, time.monotonic())
        return response_for(processor.process(message, deadline=deadline))
    except Exception as exc:
        Log.error(f"Error processing image: {exc}")
        raise
