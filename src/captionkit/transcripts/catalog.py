"""Per-video catalog of caption tracks and language-preference lookup."""

from collections.abc import Iterable, Iterator, Mapping
import logging

from ..exceptions import ErrorKind, TranscriptRetrievalError
from .transcript import Transcript
from .types import TranslationLanguage

logger = logging.getLogger(__name__)


class TranscriptCatalog:
    """The caption tracks available for one video.

    Manual and generated tracks live in separate maps keyed by language code;
    the same code may appear in both.

    Attributes:
        video_id: The video the catalog describes.
        translation_languages: Languages tracks can be translated into, in
            the order the platform lists them.
    """

    def __init__(
        self,
        video_id: str,
        manually_created_transcripts: Mapping[str, Transcript],
        generated_transcripts: Mapping[str, Transcript],
        translation_languages: Iterable[TranslationLanguage],
    ):
        self.video_id = video_id
        self._manually_created_transcripts = dict(manually_created_transcripts)
        self._generated_transcripts = dict(generated_transcripts)
        self.translation_languages = tuple(translation_languages)

    def __iter__(self) -> Iterator[Transcript]:
        yield from self._manually_created_transcripts.values()
        yield from self._generated_transcripts.values()

    def find_transcript(self, language_codes: Iterable[str]) -> Transcript:
        """Find a track for the first available language in ``language_codes``.

        Language order dominates: a generated track in a preferred language
        beats a manual track in a less preferred one. Within one language a
        manual track wins.

        Args:
            language_codes: Language codes in descending priority.

        Returns:
            The first matching track.

        Raises:
            TranscriptRetrievalError: NO_TRANSCRIPT_FOUND if nothing matches.
        """
        return self._find(
            language_codes,
            (self._manually_created_transcripts, self._generated_transcripts),
        )

    def find_manually_created_transcript(
        self, language_codes: Iterable[str]
    ) -> Transcript:
        """Like ``find_transcript`` but only considers manual tracks."""
        return self._find(language_codes, (self._manually_created_transcripts,))

    def find_generated_transcript(self, language_codes: Iterable[str]) -> Transcript:
        """Like ``find_transcript`` but only considers generated tracks."""
        return self._find(language_codes, (self._generated_transcripts,))

    def _find(
        self,
        language_codes: Iterable[str],
        transcript_maps: tuple[dict[str, Transcript], ...],
    ) -> Transcript:
        language_codes = list(language_codes)
        for language_code in language_codes:
            for transcripts in transcript_maps:
                if language_code in transcripts:
                    return transcripts[language_code]

        logger.debug(
            "No transcript matches the requested languages.",
            extra={"video_id": self.video_id, "language_codes": language_codes},
        )
        raise TranscriptRetrievalError(
            ErrorKind.NO_TRANSCRIPT_FOUND,
            self.video_id,
            requested_language_codes=language_codes,
            catalog=self,
        )

    @staticmethod
    def _describe(transcripts: dict[str, Transcript]) -> str:
        if not transcripts:
            return "None"
        return "".join(f" - {transcript}\n" for transcript in transcripts.values())

    def __str__(self) -> str:
        if self.translation_languages:
            translations = "".join(
                f' - {tl.language_code} ("{tl.language}")\n'
                for tl in self.translation_languages
            )
        else:
            translations = "None"
        return (
            f"For this video ({self.video_id}) transcripts are available in the "
            "following languages:\n\n"
            "(MANUALLY CREATED)\n"
            f"{self._describe(self._manually_created_transcripts)}\n\n"
            "(GENERATED)\n"
            f"{self._describe(self._generated_transcripts)}\n\n"
            "(TRANSLATION LANGUAGES)\n"
            f"{translations}"
        )
