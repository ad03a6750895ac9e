"""Unit tests for retrieval error explanations."""

import pytest

from captionkit.exceptions import ErrorKind, TranscriptRetrievalError, explain
from captionkit.proxies import GenericProxyConfig, WebshareProxyConfig

VIDEO_ID = "explain_id"
WATCH_PAGE_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"


@pytest.mark.unit
@pytest.mark.parametrize("kind", list(ErrorKind))
def test_every_kind_names_the_video(kind: ErrorKind):
    error = TranscriptRetrievalError(kind, VIDEO_ID, reason="boom")

    message = str(error)

    assert message.startswith(
        f"\nCould not retrieve a transcript for the video {WATCH_PAGE_URL}!"
    )
    assert "This is most likely caused by:" in message
    assert explain(error) == message


@pytest.mark.unit
@pytest.mark.parametrize(
    "kind, blocked",
    [
        (ErrorKind.REQUEST_BLOCKED, True),
        (ErrorKind.IP_BLOCKED, True),
        (ErrorKind.REQUEST_FAILED, False),
        (ErrorKind.VIDEO_UNAVAILABLE, False),
    ],
)
def test_is_blocked(kind: ErrorKind, blocked: bool):
    assert kind.is_blocked is blocked


@pytest.mark.unit
def test_request_failed_includes_reason():
    error = TranscriptRetrievalError(
        ErrorKind.REQUEST_FAILED, VIDEO_ID, reason="HTTP 500: Internal Server Error"
    )

    assert (
        "Request to the platform failed: HTTP 500: Internal Server Error" in str(error)
    )


@pytest.mark.unit
@pytest.mark.parametrize(
    "kind, text",
    [
        (ErrorKind.VIDEO_UNAVAILABLE, "The video is no longer available"),
        (ErrorKind.TRANSCRIPTS_DISABLED, "Subtitles are disabled for this video"),
        (ErrorKind.NOT_TRANSLATABLE, "The requested language is not translatable"),
        (
            ErrorKind.CONSENT_COOKIE_FAILED,
            "Failed to automatically give consent to saving cookies",
        ),
    ],
)
def test_fixed_causes(kind: ErrorKind, text: str):
    assert text in str(TranscriptRetrievalError(kind, VIDEO_ID))


@pytest.mark.unit
def test_blocked_explanation_depends_on_proxy():
    plain = TranscriptRetrievalError(ErrorKind.REQUEST_BLOCKED, VIDEO_ID)
    generic = TranscriptRetrievalError(
        ErrorKind.REQUEST_BLOCKED,
        VIDEO_ID,
        proxy_config=GenericProxyConfig(http_url="http://proxy:3128"),
    )
    webshare = TranscriptRetrievalError(
        ErrorKind.IP_BLOCKED,
        VIDEO_ID,
    ).with_proxy_config(WebshareProxyConfig(proxy_username="u", proxy_password="p"))

    assert "Use proxies to hide your IP address" in str(plain)
    assert "despite you using proxies" in str(generic)
    assert "despite you using rotating residential proxies" in str(webshare)


@pytest.mark.unit
def test_with_proxy_config_returns_same_error():
    error = TranscriptRetrievalError(ErrorKind.IP_BLOCKED, VIDEO_ID)
    config = GenericProxyConfig(https_url="http://proxy:3128")

    assert error.with_proxy_config(config) is error
    assert error.proxy_config is config


@pytest.mark.unit
def test_unplayable_lists_sub_reasons():
    error = TranscriptRetrievalError(
        ErrorKind.VIDEO_UNPLAYABLE,
        VIDEO_ID,
        reason="Video unavailable",
        sub_reasons=["first", "second"],
    )

    assert (
        "The video is unplayable for the following reason: Video unavailable\n\n"
        "Additional Details:\n - first\n - second\n"
    ) in str(error)


@pytest.mark.unit
def test_error_attributes_default_empty():
    error = TranscriptRetrievalError(ErrorKind.DATA_UNPARSABLE, VIDEO_ID)

    assert error.kind is ErrorKind.DATA_UNPARSABLE
    assert error.video_id == VIDEO_ID
    assert error.reason is None
    assert error.sub_reasons == []
    assert error.requested_language_codes == []
    assert error.catalog is None
    assert error.proxy_config is None
    assert error.status_code is None
