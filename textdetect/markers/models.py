from dataclasses import dataclass, field
from enum import Enum

MARKER_TRUE = "true"
MARKER_FALSE = "false"


@dataclass(frozen=True)
class Marker:
    """A single object tag."""

    name: str
    value: str


@dataclass(frozen=True)
class MarkerSet:
    """Tags attached to an object, in the order the store returned them."""

    markers: tuple[Marker, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.markers)

    def value_of(self, name: str) -> str | None:
        """Value of the first tag called `name`, or None when absent."""
        for marker in self.markers:
            if marker.name == name:
                return marker.value
        return None

    def with_value(self, name: str, value: str) -> "MarkerSet":
        """Copy with every tag called `name` set to `value`, order preserved."""
        return MarkerSet(
            tuple(
                Marker(m.name, value) if m.name == name else m
                for m in self.markers
            )
        )

    def appended(self, name: str, value: str) -> "MarkerSet":
        return MarkerSet((*self.markers, Marker(name, value)))

    @classmethod
    def from_tag_set(cls, tag_set: list[dict[str, str]]) -> "MarkerSet":
        return cls(tuple(Marker(t["Key"], t["Value"]) for t in tag_set))

    def to_tag_set(self) -> list[dict[str, str]]:
        return [{"Key": m.name, "Value": m.value} for m in self.markers]


class MarkerUpdateOutcome(str, Enum):
    """What set_processed did to the object's tags."""

    UPDATED_EXISTING = "updated_existing"
    APPENDED = "appended"
    ALREADY_PROCESSED = "already_processed"
    SKIPPED_CAPACITY = "skipped_capacity"
