"""Timed caption fragment type."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class TranscriptSnippet:
    """One timed caption fragment.

    Attributes:
        text: Caption text, already unescaped and tag-filtered.
        start: Time in seconds the fragment appears.
        duration: Seconds the fragment stays on screen. This is display time,
            not speech time, and may overlap the next fragment.
    """

    text: str
    start: float
    duration: float

    def to_raw_data(self) -> dict[str, Any]:
        return {"text": self.text, "start": self.start, "duration": self.duration}
