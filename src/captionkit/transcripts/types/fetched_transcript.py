"""Fetched transcript type."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .snippet import TranscriptSnippet


@dataclass(frozen=True, slots=True)
class FetchedTranscript:
    """The snippets of one caption track together with its metadata.

    Attributes:
        snippets: Snippets in document order.
        video_id: The video the captions belong to.
        language: Display name of the caption language.
        language_code: Language code of the captions.
        is_generated: Whether the captions were produced by speech recognition
            (or machine translation).
        title: Video title.
        thumbnail_url: Video thumbnail URL.
    """

    snippets: tuple[TranscriptSnippet, ...]
    video_id: str
    language: str
    language_code: str
    is_generated: bool
    title: str = ""
    thumbnail_url: str = ""

    def __iter__(self) -> Iterator[TranscriptSnippet]:
        return iter(self.snippets)

    def __len__(self) -> int:
        return len(self.snippets)

    def __getitem__(self, index: int) -> TranscriptSnippet:
        return self.snippets[index]

    def to_raw_data(self) -> list[dict[str, Any]]:
        """Return the snippets as ``{text, start, duration}`` dictionaries."""
        return [snippet.to_raw_data() for snippet in self.snippets]
