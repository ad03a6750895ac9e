"""Render fetched transcripts as text, JSON, SRT or WebVTT.

Formatters are stateless; every method is a pure function of its input.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
import json
import math

from .exceptions import UnknownFormatterError
from .transcripts.types import FetchedTranscript, TranscriptSnippet


class Formatter(ABC):
    """Base class for transcript formatters."""

    @abstractmethod
    def format_transcript(self, transcript: FetchedTranscript) -> str:
        """Render a single transcript."""

    @abstractmethod
    def format_transcripts(self, transcripts: Sequence[FetchedTranscript]) -> str:
        """Render several transcripts into one document."""


class PrettyPrintFormatter(Formatter):
    """Indented JSON: a list of snippet objects, or a list of such lists."""

    indent: int | None = 2

    def format_transcript(self, transcript: FetchedTranscript) -> str:
        return json.dumps(transcript.to_raw_data(), indent=self.indent)

    def format_transcripts(self, transcripts: Sequence[FetchedTranscript]) -> str:
        return json.dumps(
            [transcript.to_raw_data() for transcript in transcripts],
            indent=self.indent,
        )


class JSONFormatter(PrettyPrintFormatter):
    """Compact JSON with the same structure as ``PrettyPrintFormatter``."""

    indent = None


class TextFormatter(Formatter):
    """Plain text, one snippet per line, without timing."""

    separator = "\n\n\n"

    def format_transcript(self, transcript: FetchedTranscript) -> str:
        return "\n".join(snippet.text for snippet in transcript)

    def format_transcripts(self, transcripts: Sequence[FetchedTranscript]) -> str:
        return self.separator.join(
            self.format_transcript(transcript) for transcript in transcripts
        )


def seconds_to_timestamp_parts(seconds: float) -> tuple[int, int, int, int]:
    """Split seconds into hours, minutes, seconds and milliseconds.

    Each unit is truncated and the milliseconds are rounded. Rounding does not
    carry into the seconds, so values just below a whole second can yield
    1000 milliseconds.
    """
    hours = math.floor(seconds / 3600)
    remainder = seconds - hours * 3600
    mins = math.floor(remainder / 60)
    remainder -= mins * 60
    secs = math.floor(remainder)
    millis = round((remainder - secs) * 1000)
    return hours, mins, secs, millis


def cue_end_times(snippets: Sequence[TranscriptSnippet]) -> list[float]:
    """Compute when each snippet stops being displayed.

    A snippet ends at ``start + duration`` unless the next snippet starts
    earlier, in which case it ends where the next one starts. Only the
    immediately following snippet is considered.
    """
    ends: list[float] = []
    for i, snippet in enumerate(snippets):
        end = snippet.start + snippet.duration
        if i < len(snippets) - 1 and snippets[i + 1].start < end:
            end = snippets[i + 1].start
        ends.append(end)
    return ends


class _TimestampedFormatter(TextFormatter):
    separator = "\n\n"

    @abstractmethod
    def _format_timestamp(
        self, hours: int, mins: int, secs: int, millis: int
    ) -> str:
        pass

    @abstractmethod
    def _format_cue(
        self, index: int, time_text: str, snippet: TranscriptSnippet
    ) -> str:
        pass

    @abstractmethod
    def _format_document(self, cues: list[str]) -> str:
        pass

    def _timestamp(self, seconds: float) -> str:
        return self._format_timestamp(*seconds_to_timestamp_parts(seconds))

    def format_transcript(self, transcript: FetchedTranscript) -> str:
        snippets = transcript.snippets
        cues = [
            self._format_cue(
                i,
                f"{self._timestamp(snippet.start)} --> {self._timestamp(end)}",
                snippet,
            )
            for i, (snippet, end) in enumerate(
                zip(snippets, cue_end_times(snippets), strict=True)
            )
        ]
        return self._format_document(cues)


class SRTFormatter(_TimestampedFormatter):
    """SubRip subtitles: numbered cues with comma millisecond separators."""

    def _format_timestamp(
        self, hours: int, mins: int, secs: int, millis: int
    ) -> str:
        return f"{hours:02d}:{mins:02d}:{secs:02d},{millis:03d}"

    def _format_cue(
        self, index: int, time_text: str, snippet: TranscriptSnippet
    ) -> str:
        return f"{index + 1}\n{time_text}\n{snippet.text}"

    def _format_document(self, cues: list[str]) -> str:
        return "\n\n".join(cues) + "\n"


class WebVTTFormatter(_TimestampedFormatter):
    """WebVTT subtitles: a header line and unnumbered cues."""

    def _format_timestamp(
        self, hours: int, mins: int, secs: int, millis: int
    ) -> str:
        return f"{hours:02d}:{mins:02d}:{secs:02d}.{millis:03d}"

    def _format_cue(
        self, index: int, time_text: str, snippet: TranscriptSnippet
    ) -> str:
        return f"{time_text}\n{snippet.text}"

    def _format_document(self, cues: list[str]) -> str:
        return "WEBVTT\n\n" + "\n\n".join(cues) + "\n"


class FormatterLoader:
    """Look up formatters by name."""

    DEFAULT = "pretty"
    TYPES: dict[str, Callable[[], Formatter]] = {
        "json": JSONFormatter,
        "pretty": PrettyPrintFormatter,
        "text": TextFormatter,
        "webvtt": WebVTTFormatter,
        "srt": SRTFormatter,
    }

    def load(self, formatter_type: str | None = None) -> Formatter:
        """Return a new formatter for ``formatter_type``.

        Args:
            formatter_type: Registered name; empty or None selects ``pretty``.

        Raises:
            UnknownFormatterError: If the name is not registered.
        """
        formatter_type = formatter_type or self.DEFAULT
        try:
            factory = self.TYPES[formatter_type]
        except KeyError as e:
            raise UnknownFormatterError(formatter_type, list(self.TYPES)) from e
        return factory()
