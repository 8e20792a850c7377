from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from textdetect.detection.models import DetectionResult
from textdetect.markers.models import MarkerSet, MarkerUpdateOutcome
from textdetect.processor.aggregator import DetectionSummary
from textdetect.processor.models import InboundMessage
from textdetect.storage.models import ProcessedRecord


class PipelineState(str, Enum):
    RECEIVED = "received"
    MARKER_CHECKED = "marker_checked"
    SKIPPED_ALREADY_PROCESSED = "skipped_already_processed"
    DETECTED = "detected"
    AGGREGATED = "aggregated"
    STORED = "stored"
    MARKER_UPDATED = "marker_updated"
    ACKNOWLEDGED = "acknowledged"


@dataclass(slots=True)
class PipelineContext:
    message: InboundMessage
    state: PipelineState = PipelineState.RECEIVED
    history: list[PipelineState] = field(
        default_factory=lambda: [PipelineState.RECEIVED]
    )
    markers: MarkerSet | None = None
    detection: DetectionResult | None = None
    summary: DetectionSummary | None = None
    record: ProcessedRecord | None = None
    marker_outcome: MarkerUpdateOutcome | None = None

    def transition(self, state: PipelineState) -> None:
        self.state = state
        self.history.append(state)

    @property
    def skipped(self) -> bool:
        return PipelineState.SKIPPED_ALREADY_PROCESSED in self.history


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
