import pytest
from pydantic import ValidationError

from textdetect.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_min_confidence(self) -> None:
        s = Settings()
        assert s.min_confidence == 90.0

    def test_default_marker_tag_key(self) -> None:
        s = Settings()
        assert s.marker_tag_key == "rekognition_text_detection"

    def test_default_max_object_tags(self) -> None:
        s = Settings()
        assert s.max_object_tags == 10

    def test_default_queue_wait_time(self) -> None:
        s = Settings()
        assert s.queue_wait_time_seconds == 20

    def test_default_endpoint_url_is_unset(self) -> None:
        s = Settings()
        assert s.aws_endpoint_url is None


class TestSettingsFromEnv:
    def test_loads_word_to_detect(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORD_TO_DETECT", "FindMe")
        s = Settings()
        assert s.word_to_detect == "FindMe"

    def test_loads_dynamodb_table(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DYNAMODB_TABLE", "results")
        s = Settings()
        assert s.dynamodb_table == "results"

    def test_loads_min_confidence(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MIN_CONFIDENCE", "80.5")
        s = Settings()
        assert s.min_confidence == 80.5

    def test_loads_max_receive_count(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_RECEIVE_COUNT", "7")
        s = Settings()
        assert s.max_receive_count == 7


class TestSettingsValidation:
    def test_invalid_min_confidence_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MIN_CONFIDENCE", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_min_confidence_above_100_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MIN_CONFIDENCE", "101")
        with pytest.raises(ValidationError):
            Settings()

    def test_wait_time_above_sqs_limit_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QUEUE_WAIT_TIME_SECONDS", "30")
        with pytest.raises(ValidationError):
            Settings()
