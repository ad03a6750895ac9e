"""Caption tracks, their catalog and the timed-text parser."""

from .catalog import TranscriptCatalog
from .parser import TranscriptParser
from .transcript import Transcript
from .types import FetchedTranscript, TranscriptSnippet, TranslationLanguage

__all__ = [
    "FetchedTranscript",
    "Transcript",
    "TranscriptCatalog",
    "TranscriptParser",
    "TranscriptSnippet",
    "TranslationLanguage",
]
