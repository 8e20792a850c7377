import time
from collections.abc import Callable, Sequence

from textdetect.aws.clients import AwsClients
from textdetect.config.settings import Settings
from textdetect.detection.rekognition_adapter import RekognitionTextDetector
from textdetect.logging.logger import Log
from textdetect.markers.object_marker import ObjectMarker
from textdetect.processor.aggregator import ResultAggregator
from textdetect.processor.exceptions import RunTimeoutError
from textdetect.processor.models import InboundMessage
from textdetect.processor.pipeline import PipelineContext, PipelineStep
from textdetect.processor.steps import (
    AcknowledgeStep,
    AggregateStep,
    CheckMarkerStep,
    DetectTextStep,
    StoreRecordStep,
    UpdateMarkerStep,
)
from textdetect.queue.sqs_queue import SqsQueue
from textdetect.storage.result_store import DynamoResultStore


class Processor:
    """Runs one message through the pipeline steps, then acknowledges it.

    Pipeline: check marker -> detect -> aggregate -> store -> update marker -> ack.
    An object whose marker is already "true" goes straight to the ack. Every
    fault propagates and leaves the message unacknowledged.
    """

    def __init__(
        self,
        steps: Sequence[PipelineStep],
        acknowledge_step: PipelineStep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._steps = list(steps)
        self._acknowledge_step = acknowledge_step
        self._clock = clock

    def process(self, message: InboundMessage, deadline: float | None = None) -> PipelineContext:
        """Run the full pipeline for one message.

        Args:
            message: The validated inbound message.
            deadline: Optional value of `clock` after which the run is abandoned.

        Raises:
            RunTimeoutError: if the deadline passes before a step starts.
        """
        Log.info(f"Processing object {message.object_id}")
        context = PipelineContext(message=message)
        try:
            for step in self._steps:
                if context.skipped:
                    break
                self._check_deadline(context, deadline)
                context = step.run(context)
            self._check_deadline(context, deadline)
            context = self._acknowledge_step.run(context)
        except Exception as exc:
            Log.error(
                f"Processing {message.object_id} failed in state "
                f"'{context.state.value}': {exc}"
            )
            raise
        return context

    def _check_deadline(self, context: PipelineContext, deadline: float | None) -> None:
        if deadline is not None and self._clock() >= deadline:
            raise RunTimeoutError(
                f"Run for {context.message.object_id} timed out in state "
                f"'{context.state.value}'"
            )


def build_processor(settings: Settings, clients: AwsClients) -> Processor:
    """Build a Processor wired to the given AWS clients."""
    if not settings.word_to_detect:
        raise ValueError("word_to_detect is required")
    if not settings.dynamodb_table:
        raise ValueError("dynamodb_table is required")

    object_marker = ObjectMarker(
        clients.s3,
        marker_name=settings.marker_tag_key,
        max_tags=settings.max_object_tags,
    )
    detector = RekognitionTextDetector(clients.rekognition, min_confidence=settings.min_confidence)
    result_store = DynamoResultStore(clients.dynamodb, settings.dynamodb_table)
    queue = SqsQueue(
        clients.sqs,
        settings.sqs_queue_url,
        wait_time_seconds=settings.queue_wait_time_seconds,
    )
    steps = [
        CheckMarkerStep(object_marker),
        DetectTextStep(detector),
        AggregateStep(ResultAggregator(), settings.word_to_detect),
        StoreRecordStep(result_store),
        UpdateMarkerStep(object_marker),
    ]
    return Processor(steps=steps, acknowledge_step=AcknowledgeStep(queue))
