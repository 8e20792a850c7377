from textdetect.detection.base import BaseTextDetector
from textdetect.detection.models import DetectionResult, Granularity, TextFragment
from textdetect.detection.rekognition_adapter import RekognitionTextDetector

__all__ = [
    "BaseTextDetector",
    "DetectionResult",
    "Granularity",
    "RekognitionTextDetector",
    "TextFragment",
]
