from dataclasses import dataclass

from textdetect.detection.models import DetectionResult, Granularity

LINE_SEPARATOR = " | "


@dataclass(frozen=True)
class DetectionSummary:
    """Flattened transcript and the target-word flag for one object."""

    flattened_text: str
    contains_word: bool


class ResultAggregator:
    """Turns a DetectionResult into what gets stored."""

    def aggregate(self, result: DetectionResult, target_word: str) -> DetectionSummary:
        """Join LINE fragments for the transcript, match on WORD fragments.

        Matching is a case-insensitive substring test, so "FindMe" matches
        "please findme here".
        """
        flattened_text = LINE_SEPARATOR.join(
            f.text for f in result.of(Granularity.LINE)
        )
        needle = target_word.lower()
        contains_word = any(
            needle in f.text.lower() for f in result.of(Granularity.WORD)
        )
        return DetectionSummary(flattened_text=flattened_text, contains_word=contains_word)
