"""A single caption track that can be fetched or translated."""

from dataclasses import dataclass, field
import logging

from lxml import etree

from ..exceptions import ErrorKind, TranscriptRetrievalError
from ..http_client import HttpClient
from ..settings import PO_TOKEN_EXPERIMENT_MARKER
from .parser import TranscriptParser
from .types import FetchedTranscript, TranslationLanguage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transcript:
    """A caption track resolved from a video's catalog.

    Instances are immutable; ``translate`` returns a new track.

    Attributes:
        video_id: The video the track belongs to.
        url: Absolute URL of the track's timed-text payload.
        language: Display name of the track language.
        language_code: Language code of the track.
        is_generated: Whether the track was produced by speech recognition.
        translation_languages: Languages the track can be translated into.
        title: Video title.
        thumbnail_url: Video thumbnail URL.
    """

    http_client: HttpClient = field(repr=False, compare=False)
    video_id: str
    url: str
    language: str
    language_code: str
    is_generated: bool
    translation_languages: tuple[TranslationLanguage, ...] = ()
    title: str = ""
    thumbnail_url: str = ""

    @property
    def is_translatable(self) -> bool:
        return len(self.translation_languages) > 0

    def fetch(self, preserve_formatting: bool = False) -> FetchedTranscript:
        """Download and parse the track.

        Every call goes over the network; nothing is cached.

        Args:
            preserve_formatting: Keep basic formatting tags such as ``<b>``.

        Returns:
            The parsed snippets with this track's metadata.

        Raises:
            TranscriptRetrievalError: PO_TOKEN_REQUIRED if the track needs a
                proof-of-origin token, otherwise the transport classification
                of the request or REQUEST_FAILED for an unparsable payload.
        """
        log_params = {"video_id": self.video_id, "language_code": self.language_code}
        if PO_TOKEN_EXPERIMENT_MARKER in self.url:
            raise TranscriptRetrievalError(ErrorKind.PO_TOKEN_REQUIRED, self.video_id)

        logger.debug("Fetching transcript.", extra=log_params)
        response = self.http_client.get(self.url, video_id=self.video_id)
        try:
            snippets = TranscriptParser(preserve_formatting).parse(response.text)
        except etree.XMLSyntaxError as e:
            raise TranscriptRetrievalError(
                ErrorKind.REQUEST_FAILED,
                self.video_id,
                reason=f"failed to parse XML: {e}",
            ) from e

        logger.debug(
            "Transcript fetched.", extra={**log_params, "snippets": len(snippets)}
        )
        return FetchedTranscript(
            snippets=tuple(snippets),
            video_id=self.video_id,
            language=self.language,
            language_code=self.language_code,
            is_generated=self.is_generated,
            title=self.title,
            thumbnail_url=self.thumbnail_url,
        )

    def translate(self, language_code: str) -> "Transcript":
        """Return a machine-translated variant of this track.

        The translated track counts as generated and cannot be translated
        again.

        Args:
            language_code: Target language code.

        Returns:
            A new track pointing at the translated payload.

        Raises:
            TranscriptRetrievalError: NOT_TRANSLATABLE if the track offers no
                translations, TRANSLATION_LANGUAGE_NOT_AVAILABLE if the target
                language is not among them.
        """
        if not self.is_translatable:
            raise TranscriptRetrievalError(ErrorKind.NOT_TRANSLATABLE, self.video_id)

        targets = {tl.language_code: tl.language for tl in self.translation_languages}
        if language_code not in targets:
            raise TranscriptRetrievalError(
                ErrorKind.TRANSLATION_LANGUAGE_NOT_AVAILABLE,
                self.video_id,
                requested_language_codes=[language_code],
            )

        logger.debug(
            "Translating transcript.",
            extra={
                "video_id": self.video_id,
                "from_language_code": self.language_code,
                "to_language_code": language_code,
            },
        )
        return Transcript(
            http_client=self.http_client,
            video_id=self.video_id,
            url=f"{self.url}&tlang={language_code}",
            language=targets[language_code],
            language_code=language_code,
            is_generated=True,
            translation_languages=(),
            title=self.title,
            thumbnail_url=self.thumbnail_url,
        )

    def __str__(self) -> str:
        marker = "[TRANSLATABLE]" if self.is_translatable else ""
        return f'{self.language_code} ("{self.language}"){marker}'
