from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessedRecord:
    """Durable detection outcome for one object."""

    object_id: str
    text: str
    contains_word: bool
