"""Unit tests for caption section extraction and catalog construction."""

from collections.abc import Iterator
from typing import Any

import pytest

from captionkit.exceptions import ErrorKind, TranscriptRetrievalError
from captionkit.http_client import HttpClient
from captionkit.innertube import PlayerData
from captionkit.innertube.captions import build_catalog, extract_captions_sections
from captionkit.transcripts import TranslationLanguage

from helpers.player import TIMEDTEXT_URL, VIDEO_ID, caption_track, player_response


@pytest.fixture
def http_client() -> Iterator[HttpClient]:
    with HttpClient() as client:
        yield client


def _catalog_from(http_client: HttpClient, response: dict[str, Any]):
    video_details, captions = extract_captions_sections(PlayerData(response), VIDEO_ID)
    return build_catalog(http_client, VIDEO_ID, video_details, captions)


# --- Tests: extract_captions_sections ---


@pytest.mark.unit
def test_extract_requires_video_details():
    response = player_response([caption_track("en", "English")])
    del response["videoDetails"]

    with pytest.raises(TranscriptRetrievalError) as exc:
        extract_captions_sections(PlayerData(response), VIDEO_ID)

    assert exc.value.kind is ErrorKind.DATA_UNPARSABLE


@pytest.mark.unit
@pytest.mark.parametrize(
    "captions",
    [
        None,
        {},
        {"playerCaptionsTracklistRenderer": {}},
        {"playerCaptionsTracklistRenderer": {"translationLanguages": []}},
    ],
)
def test_extract_missing_captions_means_disabled(captions: dict[str, Any] | None):
    response = player_response()
    if captions is None:
        del response["captions"]
    else:
        response["captions"] = captions

    with pytest.raises(TranscriptRetrievalError) as exc:
        extract_captions_sections(PlayerData(response), VIDEO_ID)

    assert exc.value.kind is ErrorKind.TRANSCRIPTS_DISABLED


# --- Tests: build_catalog ---


@pytest.mark.unit
def test_build_catalog_partitions_tracks(http_client: HttpClient):
    response = player_response(
        [
            caption_track("en", "English", translatable=True),
            caption_track("en", "English (auto-generated)", kind="asr"),
            caption_track("de", "German"),
        ],
        [("es", "Spanish"), ("fr", "French")],
        title="Me at the zoo",
    )

    catalog = _catalog_from(http_client, response)

    manual_en = catalog.find_manually_created_transcript(["en"])
    generated_en = catalog.find_generated_transcript(["en"])
    german = catalog.find_transcript(["de"])

    assert manual_en.is_generated is False
    assert manual_en.language == "English"
    assert manual_en.translation_languages == (
        TranslationLanguage(language="Spanish", language_code="es"),
        TranslationLanguage(language="French", language_code="fr"),
    )
    assert generated_en.is_generated is True
    assert generated_en.translation_languages == ()
    assert german.is_translatable is False
    assert catalog.translation_languages == manual_en.translation_languages
    for transcript in catalog:
        assert transcript.video_id == VIDEO_ID
        assert transcript.title == "Me at the zoo"
        assert transcript.thumbnail_url == (
            f"https://i.ytimg.com/vi/{VIDEO_ID}/hqdefault.jpg"
        )


@pytest.mark.unit
def test_build_catalog_strips_unsupported_format(http_client: HttpClient):
    response = player_response(
        [caption_track("en", "English", base_url=f"{TIMEDTEXT_URL}&fmt=srv3&lang=en")]
    )

    catalog = _catalog_from(http_client, response)

    assert catalog.find_transcript(["en"]).url == f"{TIMEDTEXT_URL}&lang=en"


@pytest.mark.unit
def test_build_catalog_skips_tracks_without_language_code(http_client: HttpClient):
    response = player_response(
        [caption_track(None, "Unknown"), caption_track("en", "English")]
    )

    catalog = _catalog_from(http_client, response)

    assert [t.language_code for t in catalog] == ["en"]


@pytest.mark.unit
def test_build_catalog_defaults_missing_names(http_client: HttpClient):
    response = player_response([caption_track("en")])
    del response["videoDetails"]["title"]

    catalog = _catalog_from(http_client, response)

    transcript = catalog.find_transcript(["en"])
    assert transcript.language == ""
    assert transcript.title == ""


@pytest.mark.unit
def test_build_catalog_skips_malformed_translation_languages(
    http_client: HttpClient,
):
    response = player_response([caption_track("en", "English", translatable=True)])
    renderer = response["captions"]["playerCaptionsTracklistRenderer"]
    renderer["translationLanguages"] = [
        {"languageCode": "es", "languageName": {"runs": [{"text": "Spanish"}]}},
        {"languageCode": "xx"},
        "garbage",
    ]

    catalog = _catalog_from(http_client, response)

    assert catalog.translation_languages == (
        TranslationLanguage(language="Spanish", language_code="es"),
    )


@pytest.mark.unit
def test_build_catalog_with_empty_track_list(http_client: HttpClient):
    catalog = _catalog_from(http_client, player_response())

    assert list(catalog) == []
    with pytest.raises(TranscriptRetrievalError) as exc:
        catalog.find_transcript(["en"])
    assert exc.value.kind is ErrorKind.NO_TRANSCRIPT_FOUND
