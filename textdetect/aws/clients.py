from dataclasses import dataclass
from typing import Any

import boto3
from botocore.config import Config

from textdetect.config.settings import Settings


@dataclass(frozen=True)
class AwsClients:
    """Process-wide boto3 clients shared by every pipeline run."""

    s3: Any
    rekognition: Any
    dynamodb: Any
    sqs: Any


_clients: AwsClients | None = None


def build_client_config(settings: Settings) -> Config:
    """Timeouts and bounded retries carried by every AWS call."""
    return Config(
        region_name=settings.aws_region,
        connect_timeout=settings.aws_connect_timeout_seconds,
        read_timeout=settings.aws_read_timeout_seconds,
        retries={"max_attempts": settings.aws_max_attempts, "mode": "standard"},
    )


def init_clients(settings: Settings) -> AwsClients:
    """Create the global clients from settings. Subsequent calls reuse them."""
    global _clients  # noqa: PLW0603
    if _clients is None:
        session = boto3.Session()
        config = build_client_config(settings)

        def _client(service: str) -> Any:
            return session.client(
                service,
                config=config,
                endpoint_url=settings.aws_endpoint_url or None,
            )

        _clients = AwsClients(
            s3=_client("s3"),
            rekognition=_client("rekognition"),
            dynamodb=_client("dynamodb"),
            sqs=_client("sqs"),
        )
    return _clients


def reset_clients() -> None:
    """Drop the global clients so the next init_clients() builds fresh ones."""
    global _clients  # noqa: PLW0603
    _clients = None
