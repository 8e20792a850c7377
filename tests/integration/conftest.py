import pytest

from tests.integration.fakes import (
    MAX_RECEIVE_COUNT,
    QUEUE_URL,
    FakeDynamoDB,
    FakeRekognition,
    FakeS3,
    FakeSqs,
)
from textdetect.aws.clients import AwsClients
from textdetect.config.settings import Settings


@pytest.fixture()
def fake_s3() -> FakeS3:
    return FakeS3()


@pytest.fixture()
def fake_rekognition(fake_s3: FakeS3) -> FakeRekognition:
    return FakeRekognition(fake_s3)


@pytest.fixture()
def fake_dynamodb() -> FakeDynamoDB:
    return FakeDynamoDB()


@pytest.fixture()
def fake_sqs() -> FakeSqs:
    return FakeSqs()


@pytest.fixture()
def fake_clients(
    fake_s3: FakeS3,
    fake_rekognition: FakeRekognition,
    fake_dynamodb: FakeDynamoDB,
    fake_sqs: FakeSqs,
) -> AwsClients:
    return AwsClients(s3=fake_s3, rekognition=fake_rekognition, dynamodb=fake_dynamodb, sqs=fake_sqs)


@pytest.fixture()
def integration_settings() -> Settings:
    return Settings(
        word_to_detect="findme",
        dynamodb_table="text-detection-results",
        sqs_queue_url=QUEUE_URL,
        queue_poll_interval_seconds=0,
        max_receive_count=MAX_RECEIVE_COUNT,
    )
