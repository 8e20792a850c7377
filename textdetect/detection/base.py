from abc import ABC, abstractmethod

from textdetect.detection.models import DetectionResult


class BaseTextDetector(ABC):
    """Contract for all text detection adapters."""

    @abstractmethod
    def detect(self, bucket: str, key: str) -> DetectionResult:
        """Detect text in a stored image.

        Args:
            bucket: Bucket holding the image.
            key: Object key of the image.

        Returns:
            DetectionResult with fragments already filtered by the service's
            minimum confidence.

        Raises:
            ServiceThrottledError, ServiceUnavailableError: retryable faults.
            ObjectNotFoundError, InvalidImageFormatError: permanent faults.
        """
