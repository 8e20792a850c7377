import json
from unittest.mock import MagicMock, patch

import pytest

from textdetect.config.settings import Settings
from textdetect.handlers import text_extractor
from textdetect.markers.models import MarkerUpdateOutcome
from textdetect.processor.exceptions import MessageValidationError, ObjectNotFoundError
from textdetect.processor.models import InboundMessage
from textdetect.processor.pipeline import PipelineContext, PipelineState
from textdetect.storage.models import ProcessedRecord

QUEUE_ARN = "arn:aws:sqs:us-east-1:123456789012:text-detection"


def _make_event() -> dict[str, object]:
    return {
        "Records": [
            {
                "messageId": "m-1",
                "receiptHandle": "rh-1",
                "body": json.dumps({"bucket": "b", "key": "posters/p1.jpg"}),
                "attributes": {"ApproximateReceiveCount": "1"},
                "eventSourceARN": QUEUE_ARN,
                "awsRegion": "us-east-1",
            }
        ]
    }


@pytest.fixture()
def mock_processor(settings: Settings):  # type: ignore[no-untyped-def]
    processor = MagicMock()
    with patch.object(
        text_extractor, "_get_processor", return_value=(settings, processor)
    ):
        yield processor


class TestHandler:
    def test_processes_first_record(self, mock_processor: MagicMock) -> None:
        def _process(message: InboundMessage, deadline: float) -> PipelineContext:
            context = PipelineContext(message=message)
            context.record = ProcessedRecord(message.object_id, "FINDME NOW", True)
            context.marker_outcome = MarkerUpdateOutcome.APPENDED
            context.transition(PipelineState.ACKNOWLEDGED)
            return context

        mock_processor.process.side_effect = _process

        response = text_extractor.handler(_make_event(), None)

        message = mock_processor.process.call_args.args[0]
        assert message.delivery.queue_url.endswith("/123456789012/text-detection")
        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["objectId"] == "s3://b/posters/p1.jpg"
        assert body["containsWord"] is True
        assert body["markerOutcome"] == "appended"

    def test_reports_skipped_objects(self, mock_processor: MagicMock) -> None:
        def _process(message: InboundMessage, deadline: float) -> PipelineContext:
            context = PipelineContext(message=message)
            context.transition(PipelineState.SKIPPED_ALREADY_PROCESSED)
            context.transition(PipelineState.ACKNOWLEDGED)
            return context

        mock_processor.process.side_effect = _process

        response = text_extractor.handler(_make_event(), None)

        assert json.loads(response["body"])["message"] == "Object already processed"

    def test_reraises_processing_errors(self, mock_processor: MagicMock) -> None:
        mock_processor.process.side_effect = ObjectNotFoundError("gone")

        with pytest.raises(ObjectNotFoundError):
            text_extractor.handler(_make_event(), None)

    def test_empty_event_is_a_validation_error(self, mock_processor: MagicMock) -> None:
        with pytest.raises(MessageValidationError):
            text_extractor.handler({"Records": []}, None)
        mock_processor.process.assert_not_called()


class TestRunDeadline:
    def test_uses_run_timeout_without_runtime_context(self, settings: Settings) -> None:
        settings.run_timeout_seconds = 60
        assert text_extractor.run_deadline(settings, None, now=100.0) == 160.0

    def test_caps_to_remaining_runtime(self, settings: Settings) -> None:
        settings.run_timeout_seconds = 60
        context = MagicMock()
        context.get_remaining_time_in_millis.return_value = 11_000
        assert text_extractor.run_deadline(settings, context, now=100.0) == 110.0
