"""Custom exceptions for captionkit.

Every failure that happens while retrieving captions for a video is reported
as a single ``TranscriptRetrievalError`` tagged with an ``ErrorKind``. The
kind selects the explanation shown to the user; the remaining attributes hold
kind-specific details for programmatic handling.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Self

from .settings import WATCH_URL

if TYPE_CHECKING:
    from .proxies import ProxyConfig
    from .transcripts.catalog import TranscriptCatalog


class CaptionkitError(Exception):
    """Base class for application-specific errors."""


class ConfigLoadError(CaptionkitError):
    """Raised when command line or environment settings cannot be used.

    Attributes:
        setting: Name of the offending setting, if known.
    """

    def __init__(self, message: str, setting: str | None = None):
        super().__init__(message)
        self.setting = setting


class InvalidProxyConfigError(CaptionkitError):
    """Raised when a proxy configuration cannot produce any proxy URL."""


class UnknownFormatterError(CaptionkitError):
    """Raised when a formatter name is not registered.

    Attributes:
        formatter_name: The requested formatter name.
        supported: The names that are registered.
    """

    def __init__(self, formatter_name: str, supported: Sequence[str]):
        super().__init__(
            f"The format '{formatter_name}' is not supported. "
            f"Choose one of the following formats: {', '.join(supported)}"
        )
        self.formatter_name = formatter_name
        self.supported = list(supported)


class ErrorKind(Enum):
    """Represent why a transcript could not be retrieved.

    Values:
        REQUEST_FAILED: An HTTP request failed or returned an error status.
        REQUEST_BLOCKED: The platform refused to serve the player data (bot check).
        IP_BLOCKED: The platform rate limited or challenged the client address.
        DATA_UNPARSABLE: A required field was missing from upstream data.
        VIDEO_UNAVAILABLE: The video no longer exists.
        VIDEO_UNPLAYABLE: The video cannot be played for another reason.
        AGE_RESTRICTED: The video requires a signed-in adult account.
        INVALID_VIDEO_ID: A URL was passed where a video id was expected.
        TRANSCRIPTS_DISABLED: The video has no caption tracks.
        CONSENT_COOKIE_FAILED: The cookie consent wall could not be passed.
        NO_TRANSCRIPT_FOUND: None of the requested languages is available.
        NOT_TRANSLATABLE: The track cannot be machine translated.
        TRANSLATION_LANGUAGE_NOT_AVAILABLE: The translation target is not offered.
        PO_TOKEN_REQUIRED: The track requires a proof-of-origin token.
    """

    REQUEST_FAILED = "request_failed"
    REQUEST_BLOCKED = "request_blocked"
    IP_BLOCKED = "ip_blocked"
    DATA_UNPARSABLE = "data_unparsable"
    VIDEO_UNAVAILABLE = "video_unavailable"
    VIDEO_UNPLAYABLE = "video_unplayable"
    AGE_RESTRICTED = "age_restricted"
    INVALID_VIDEO_ID = "invalid_video_id"
    TRANSCRIPTS_DISABLED = "transcripts_disabled"
    CONSENT_COOKIE_FAILED = "consent_cookie_failed"
    NO_TRANSCRIPT_FOUND = "no_transcript_found"
    NOT_TRANSLATABLE = "not_translatable"
    TRANSLATION_LANGUAGE_NOT_AVAILABLE = "translation_language_not_available"
    PO_TOKEN_REQUIRED = "po_token_required"

    @property
    def is_blocked(self) -> bool:
        """Whether this kind means the platform is blocking the client."""
        return self in (ErrorKind.REQUEST_BLOCKED, ErrorKind.IP_BLOCKED)

    def __str__(self) -> str:
        return self.value


class TranscriptRetrievalError(CaptionkitError):
    """Raised when captions for a video cannot be listed, selected or fetched.

    Attributes:
        kind: The failure category.
        video_id: The video the failure relates to.
        reason: Free-form reason (HTTP failure text or playability reason).
        sub_reasons: Additional playability details, possibly empty.
        requested_language_codes: Language codes the caller asked for.
        catalog: Catalog that was searched, for NO_TRANSCRIPT_FOUND.
        proxy_config: Proxy configuration active when a block was surfaced.
        status_code: HTTP status of the rejected response, if any.
    """

    def __init__(
        self,
        kind: ErrorKind,
        video_id: str,
        *,
        reason: str | None = None,
        sub_reasons: Sequence[str] = (),
        requested_language_codes: Sequence[str] = (),
        catalog: TranscriptCatalog | None = None,
        proxy_config: ProxyConfig | None = None,
        status_code: int | None = None,
    ):
        super().__init__(kind, video_id)
        self.kind = kind
        self.video_id = video_id
        self.reason = reason
        self.sub_reasons = list(sub_reasons)
        self.requested_language_codes = list(requested_language_codes)
        self.catalog = catalog
        self.proxy_config = proxy_config
        self.status_code = status_code

    def with_proxy_config(self, proxy_config: ProxyConfig | None) -> Self:
        """Attach the active proxy configuration and return this error."""
        self.proxy_config = proxy_config
        return self

    def __str__(self) -> str:
        return explain(self)


_ISSUE_FOOTER = (
    "If you are sure that the described cause is not responsible for this error "
    "and that a transcript should be retrievable, please report it together with "
    "the video id and the version of captionkit you are using."
)

_BLOCKED_REASONS = (
    "The platform is blocking requests from your IP. This usually is due to one "
    "of the following reasons:\n"
    "- You have done too many requests and your IP has been blocked\n"
    "- You are doing requests from an IP belonging to a cloud provider (like AWS, "
    "Google Cloud Platform, Azure, etc.). Most IPs from cloud providers are "
    "blocked.\n\n"
)

_CAUSES: dict[ErrorKind, str] = {
    ErrorKind.DATA_UNPARSABLE: (
        "The data required to fetch the transcript is not parsable. This should "
        "not happen, please open an issue (make sure to include the video ID)!"
    ),
    ErrorKind.VIDEO_UNAVAILABLE: "The video is no longer available",
    ErrorKind.INVALID_VIDEO_ID: (
        "You provided an invalid video id. Make sure you are using the video id "
        "and NOT the url!\n\n"
        'Do NOT run: `TranscriptApi().fetch("https://www.youtube.com/watch?v=1234")`\n'
        'Instead run: `TranscriptApi().fetch("1234")`'
    ),
    ErrorKind.IP_BLOCKED: (
        _BLOCKED_REASONS + "Routing your requests through a rotating residential "
        "proxy pool is the most reliable way to work around this."
    ),
    ErrorKind.TRANSCRIPTS_DISABLED: "Subtitles are disabled for this video",
    ErrorKind.AGE_RESTRICTED: (
        "This video is age-restricted. Therefore, you are unable to retrieve "
        "transcripts for it without authenticating yourself, which is not "
        "supported."
    ),
    ErrorKind.CONSENT_COOKIE_FAILED: (
        "Failed to automatically give consent to saving cookies"
    ),
    ErrorKind.NOT_TRANSLATABLE: "The requested language is not translatable",
    ErrorKind.TRANSLATION_LANGUAGE_NOT_AVAILABLE: (
        "The requested translation language is not available"
    ),
    ErrorKind.PO_TOKEN_REQUIRED: (
        "The requested video cannot be retrieved without a PO Token. If this "
        "happens, please open an issue!"
    ),
}


def _blocked_cause(proxy_config: ProxyConfig | None) -> str:
    from .proxies import GenericProxyConfig, WebshareProxyConfig

    match proxy_config:
        case WebshareProxyConfig():
            return (
                "The platform is blocking your requests, despite you using "
                "rotating residential proxies. Make sure that you have purchased "
                '"Residential" proxies and NOT "Proxy Server" or "Static '
                'Residential", as those won\'t work as reliably!'
            )
        case GenericProxyConfig():
            return (
                "The platform is blocking your requests, despite you using "
                "proxies. Keep in mind that a proxy is just a way to hide your "
                "real IP behind the IP of that proxy, but there is no guarantee "
                "that the IP of that proxy won't be blocked as well.\n\n"
                "The only truly reliable way to prevent IP blocks is rotating "
                "through a large pool of residential IPs."
            )
        case _:
            return _BLOCKED_REASONS + (
                "There are two things you can do to work around this:\n"
                "1. Use proxies to hide your IP address.\n"
                "2. (NOT RECOMMENDED) Authenticate your requests using cookies. "
                "The platform will eventually ban the account that you have used "
                "to authenticate with!"
            )


def _cause(error: TranscriptRetrievalError) -> str:
    match error.kind:
        case ErrorKind.REQUEST_FAILED:
            return f"Request to the platform failed: {error.reason}"
        case ErrorKind.REQUEST_BLOCKED | ErrorKind.IP_BLOCKED if error.proxy_config:
            return _blocked_cause(error.proxy_config)
        case ErrorKind.REQUEST_BLOCKED:
            return _blocked_cause(None)
        case ErrorKind.VIDEO_UNPLAYABLE:
            reason = error.reason or "No reason specified!"
            if error.sub_reasons:
                reason += "\n\nAdditional Details:\n"
                reason += "".join(f" - {sub}\n" for sub in error.sub_reasons)
            return f"The video is unplayable for the following reason: {reason}"
        case ErrorKind.NO_TRANSCRIPT_FOUND:
            summary = str(error.catalog) if error.catalog is not None else ""
            return (
                "No transcripts were found for any of the requested language "
                f"codes: {error.requested_language_codes}\n\n{summary}"
            )
        case kind:
            return _CAUSES[kind]


def explain(error: TranscriptRetrievalError) -> str:
    """Compose the human-readable explanation for a retrieval error.

    Args:
        error: The error to explain.

    Returns:
        A message naming the video and, where known, the most likely cause.
    """
    video_url = WATCH_URL.format(video_id=error.video_id)
    message = f"\nCould not retrieve a transcript for the video {video_url}!"
    cause = _cause(error)
    if cause:
        message += f" This is most likely caused by:\n\n{cause}\n\n{_ISSUE_FOOTER}"
    return message
