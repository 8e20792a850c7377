from dataclasses import dataclass, field
from enum import Enum


class Granularity(str, Enum):
    """Unit a detected fragment covers."""

    LINE = "LINE"
    WORD = "WORD"


@dataclass(frozen=True)
class TextFragment:
    """One unit of recognized text."""

    granularity: Granularity
    text: str
    confidence: float


@dataclass(frozen=True)
class DetectionResult:
    """Fragments in the order the detection service returned them."""

    fragments: tuple[TextFragment, ...] = field(default_factory=tuple)

    def of(self, granularity: Granularity) -> list[TextFragment]:
        return [f for f in self.fragments if f.granularity is granularity]
