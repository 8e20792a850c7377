from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest

from textdetect.aws import clients as aws_clients
from textdetect.config.settings import Settings


@pytest.fixture(autouse=True)
def _reset_clients() -> Generator[None, None, None]:
    aws_clients.reset_clients()
    yield
    aws_clients.reset_clients()


class TestClientConfig:
    def test_carries_timeouts_and_retries(self) -> None:
        settings = Settings(
            aws_region="eu-west-1",
            aws_connect_timeout_seconds=2,
            aws_read_timeout_seconds=9,
            aws_max_attempts=4,
        )

        config = aws_clients.build_client_config(settings)

        assert config.region_name == "eu-west-1"
        assert config.connect_timeout == 2
        assert config.read_timeout == 9
        assert config.retries == {"max_attempts": 4, "mode": "standard"}


class TestInitClients:
    def test_creates_each_service_once(self) -> None:
        with patch("textdetect.aws.clients.boto3.Session") as mock_session:
            session = mock_session.return_value
            session.client.side_effect = lambda service, **_: MagicMock(name=service)

            first = aws_clients.init_clients(Settings())
            second = aws_clients.init_clients(Settings())

        assert first is second
        services = [c.args[0] for c in session.client.call_args_list]
        assert services == ["s3", "rekognition", "dynamodb", "sqs"]

    def test_passes_endpoint_url(self) -> None:
        with patch("textdetect.aws.clients.boto3.Session") as mock_session:
            aws_clients.init_clients(Settings(aws_endpoint_url="http://localhost:4566"))

        kwargs = mock_session.return_value.client.call_args.kwargs
        assert kwargs["endpoint_url"] == "http://localhost:4566"
