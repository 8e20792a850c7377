from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    aws_region: str | None = None
    aws_endpoint_url: str | None = None
    aws_connect_timeout_seconds: int = 5
    aws_read_timeout_seconds: int = 30
    aws_max_attempts: int = 3

    sqs_queue_url: str = ""
    queue_wait_time_seconds: int = Field(default=20, ge=0, le=20)
    queue_poll_interval_seconds: int = 1
    max_receive_count: int = 5

    dynamodb_table: str = ""

    word_to_detect: str = ""
    min_confidence: float = Field(default=90.0, ge=0.0, le=100.0)
    marker_tag_key: str = "rekognition_text_detection"
    max_object_tags: int = 10

    run_timeout_seconds: int = 60
