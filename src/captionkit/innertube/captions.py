"""Build a transcript catalog from the player's captions section."""

import logging

from ..exceptions import ErrorKind, TranscriptRetrievalError
from ..http_client import HttpClient
from ..settings import THUMBNAIL_URL, UNSUPPORTED_FORMAT_PARAM
from ..transcripts.catalog import TranscriptCatalog
from ..transcripts.transcript import Transcript
from ..transcripts.types import TranslationLanguage
from .player_data import PlayerData

logger = logging.getLogger(__name__)

GENERATED_TRACK_KIND = "asr"


def extract_captions_sections(
    player_data: PlayerData, video_id: str
) -> tuple[PlayerData, PlayerData]:
    """Locate the video details and caption track list in the player data.

    Args:
        player_data: The decoded player response, already known to be playable.
        video_id: The video the response belongs to.

    Returns:
        The ``videoDetails`` object and the ``playerCaptionsTracklistRenderer``
        object.

    Raises:
        TranscriptRetrievalError: DATA_UNPARSABLE without video details,
            TRANSCRIPTS_DISABLED when any level of the captions section is
            missing.
    """
    video_details = player_data.section("videoDetails")
    if video_details is None:
        raise TranscriptRetrievalError(ErrorKind.DATA_UNPARSABLE, video_id)

    captions = player_data.section("captions")
    if captions is None:
        raise TranscriptRetrievalError(ErrorKind.TRANSCRIPTS_DISABLED, video_id)

    renderer = captions.section("playerCaptionsTracklistRenderer")
    if renderer is None or not renderer.has("captionTracks"):
        raise TranscriptRetrievalError(ErrorKind.TRANSCRIPTS_DISABLED, video_id)

    return video_details, renderer


def _translation_languages(captions: PlayerData) -> list[TranslationLanguage]:
    languages: list[TranslationLanguage] = []
    for entry in captions.sections("translationLanguages"):
        language_code = entry.text("languageCode")
        language = entry.text("languageName", "runs", 0, "text")
        if language_code is None or language is None:
            continue
        languages.append(
            TranslationLanguage(language=language, language_code=language_code)
        )
    return languages


def build_catalog(
    http_client: HttpClient,
    video_id: str,
    video_details: PlayerData,
    captions: PlayerData,
) -> TranscriptCatalog:
    """Partition the caption tracks into manual and generated tracks.

    Tracks without a language code or URL are skipped. Tracks share the
    video's translation language list only if they are flagged translatable.

    Args:
        http_client: Transport the resulting tracks fetch through.
        video_id: The video the tracks belong to.
        video_details: The ``videoDetails`` section.
        captions: The ``playerCaptionsTracklistRenderer`` section.

    Returns:
        A freshly built catalog.
    """
    translation_languages = tuple(_translation_languages(captions))
    title = video_details.text("title") or ""
    thumbnail_url = THUMBNAIL_URL.format(video_id=video_id)

    manually_created: dict[str, Transcript] = {}
    generated: dict[str, Transcript] = {}
    for track in captions.sections("captionTracks"):
        language_code = track.text("languageCode")
        base_url = track.text("baseUrl")
        if language_code is None or base_url is None:
            continue

        is_generated = track.text("kind") == GENERATED_TRACK_KIND
        is_translatable = track.get("isTranslatable", tpe=bool) or False
        target = generated if is_generated else manually_created
        target[language_code] = Transcript(
            http_client=http_client,
            video_id=video_id,
            url=base_url.replace(UNSUPPORTED_FORMAT_PARAM, ""),
            language=track.text("name", "runs", 0, "text") or "",
            language_code=language_code,
            is_generated=is_generated,
            translation_languages=translation_languages if is_translatable else (),
            title=title,
            thumbnail_url=thumbnail_url,
        )

    logger.debug(
        "Transcript catalog built.",
        extra={
            "video_id": video_id,
            "manually_created": sorted(manually_created),
            "generated": sorted(generated),
            "translation_languages": len(translation_languages),
        },
    )
    return TranscriptCatalog(
        video_id, manually_created, generated, translation_languages
    )
