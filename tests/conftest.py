import pytest

from textdetect.config.settings import Settings
from textdetect.detection.models import DetectionResult, Granularity, TextFragment
from textdetect.processor.models import InboundMessage
from textdetect.queue.models import QueueDelivery

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/text-detection"


@pytest.fixture()
def queue_url() -> str:
    return QUEUE_URL


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        word_to_detect="findme",
        dynamodb_table="text-detection-results",
        sqs_queue_url=QUEUE_URL,
    )


@pytest.fixture()
def inbound_message() -> InboundMessage:
    return InboundMessage(
        bucket="b",
        key="posters/p1.jpg",
        delivery=QueueDelivery(receipt_handle="rh-1", queue_url=QUEUE_URL),
    )


@pytest.fixture()
def detection_result() -> DetectionResult:
    """One LINE and one WORD fragment, as Rekognition returns them."""
    return DetectionResult(
        fragments=(
            TextFragment(Granularity.LINE, "FINDME NOW", 99.1),
            TextFragment(Granularity.WORD, "findme", 95.0),
        )
    )
