"""Data types for the transcripts module."""

from .fetched_transcript import FetchedTranscript
from .snippet import TranscriptSnippet
from .translation_language import TranslationLanguage

__all__ = [
    "FetchedTranscript",
    "TranscriptSnippet",
    "TranslationLanguage",
]
