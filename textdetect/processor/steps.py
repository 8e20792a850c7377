from textdetect.detection.base import BaseTextDetector
from textdetect.logging.logger import Log
from textdetect.markers.object_marker import ObjectMarker
from textdetect.processor.aggregator import ResultAggregator
from textdetect.processor.pipeline import PipelineContext, PipelineState, PipelineStep
from textdetect.queue.sqs_queue import SqsQueue
from textdetect.storage.models import ProcessedRecord
from textdetect.storage.result_store import DynamoResultStore


class CheckMarkerStep(PipelineStep):
    def __init__(self, object_marker: ObjectMarker) -> None:
        self._object_marker = object_marker

    def run(self, context: PipelineContext) -> PipelineContext:
        message = context.message
        context.markers = self._object_marker.get_markers(message.bucket, message.key)
        context.transition(PipelineState.MARKER_CHECKED)
        if self._object_marker.is_processed(context.markers):
            context.transition(PipelineState.SKIPPED_ALREADY_PROCESSED)
            Log.info(f"Object {message.object_id} already processed, skipping")
        return context


class DetectTextStep(PipelineStep):
    def __init__(self, detector: BaseTextDetector) -> None:
        self._detector = detector

    def run(self, context: PipelineContext) -> PipelineContext:
        message = context.message
        context.detection = self._detector.detect(message.bucket, message.key)
        context.transition(PipelineState.DETECTED)
        Log.info(
            f"Detected {len(context.detection.fragments)} text fragments in {message.object_id}"
        )
        return context


class AggregateStep(PipelineStep):
    def __init__(self, aggregator: ResultAggregator, target_word: str) -> None:
        self._aggregator = aggregator
        self._target_word = target_word

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.detection is None:
            raise ValueError("PipelineContext.detection must be set before aggregation")
        context.summary = self._aggregator.aggregate(context.detection, self._target_word)
        context.transition(PipelineState.AGGREGATED)
        return context


class StoreRecordStep(PipelineStep):
    def __init__(self, result_store: DynamoResultStore) -> None:
        self._result_store = result_store

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.summary is None:
            raise ValueError("PipelineContext.summary must be set before persist")
        record = ProcessedRecord(
            object_id=context.message.object_id,
            text=context.summary.flattened_text,
            contains_word=context.summary.contains_word,
        )
        self._result_store.upsert(record)
        context.record = record
        context.transition(PipelineState.STORED)
        Log.info(f"Stored result for {record.object_id} (contains_word={record.contains_word})")
        return context


class UpdateMarkerStep(PipelineStep):
    def __init__(self, object_marker: ObjectMarker) -> None:
        self._object_marker = object_marker

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.markers is None:
            raise ValueError("PipelineContext.markers must be set before marker update")
        message = context.message
        context.marker_outcome = self._object_marker.set_processed(
            message.bucket, message.key, context.markers
        )
        context.transition(PipelineState.MARKER_UPDATED)
        return context


class AcknowledgeStep(PipelineStep):
    def __init__(self, queue: SqsQueue) -> None:
        self._queue = queue

    def run(self, context: PipelineContext) -> PipelineContext:
        self._queue.acknowledge(context.message.delivery)
        context.transition(PipelineState.ACKNOWLEDGED)
        Log.info(f"Acknowledged message for {context.message.object_id}")
        return context
