from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from textdetect.aws.errors import error_code, is_throttling
from textdetect.detection.base import BaseTextDetector
from textdetect.detection.exceptions import (
    InvalidImageFormatError,
    ServiceThrottledError,
    ServiceUnavailableError,
)
from textdetect.detection.models import DetectionResult, Granularity, TextFragment
from textdetect.logging.logger import Log
from textdetect.processor.exceptions import ObjectNotFoundError

DEFAULT_MIN_CONFIDENCE = 90.0


class RekognitionTextDetector(BaseTextDetector):
    """Detects text in S3 images with Amazon Rekognition DetectText."""

    NOT_FOUND_CODES = frozenset({"InvalidS3ObjectException"})
    INVALID_FORMAT_CODES = frozenset(
        {
            "InvalidImageFormatException",
            "ImageTooLargeException",
            "InvalidParameterException",
        }
    )

    def __init__(self, client: Any, min_confidence: float = DEFAULT_MIN_CONFIDENCE) -> None:
        self._client = client
        self._min_confidence = min_confidence

    def detect(self, bucket: str, key: str) -> DetectionResult:
        try:
            response = self._client.detect_text(
                Image={"S3Object": {"Bucket": bucket, "Name": key}},
                Filters={"WordFilter": {"MinConfidence": self._min_confidence}},
            )
        except ClientError as exc:
            raise self._translate(exc, bucket, key) from exc
        except BotoCoreError as exc:
            raise ServiceUnavailableError(
                f"Rekognition unreachable for s3://{bucket}/{key}: {exc}"
            ) from exc

        detections = response.get("TextDetections", [])
        Log.debug(f"Rekognition returned {len(detections)} detections for s3://{bucket}/{key}")
        return DetectionResult(
            fragments=tuple(self._to_fragment(item) for item in detections)
        )

    @staticmethod
    def _to_fragment(item: dict[str, Any]) -> TextFragment:
        return TextFragment(
            granularity=Granularity(item["Type"]),
            text=item.get("DetectedText", ""),
            confidence=float(item.get("Confidence", 0.0)),
        )

    def _translate(self, exc: ClientError, bucket: str, key: str) -> Exception:
        code = error_code(exc)
        uri = f"s3://{bucket}/{key}"
        if is_throttling(exc):
            return ServiceThrottledError(f"Rekognition throttled for {uri}: {code}")
        if code in self.NOT_FOUND_CODES:
            return ObjectNotFoundError(f"Rekognition cannot read {uri}: {code}")
        if code in self.INVALID_FORMAT_CODES:
            return InvalidImageFormatError(f"Unsupported or corrupt image {uri}: {code}")
        return ServiceUnavailableError(f"Rekognition failed for {uri}: {code}")
