"""Fixed endpoints and request payloads for the video platform."""

from types import MappingProxyType
from typing import Any, Final

WATCH_URL: Final = "https://www.youtube.com/watch?v={video_id}"
INNERTUBE_API_URL: Final = "https://www.youtube.com/youtubei/v1/player?key={api_key}"
THUMBNAIL_URL: Final = "https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"

# Client descriptor sent with every player request.
INNERTUBE_CONTEXT: Final[MappingProxyType[str, Any]] = MappingProxyType(
    {
        "client": MappingProxyType(
            {
                "clientName": "ANDROID",
                "clientVersion": "20.10.38",
            }
        ),
    }
)

COOKIE_DOMAIN: Final = ".youtube.com"
CONSENT_FORM_MARKER: Final = 'action="https://consent.youtube.com/s"'
CAPTCHA_MARKER: Final = 'class="g-recaptcha"'

# Tracks carrying this experiment flag require a PO token we cannot provide.
PO_TOKEN_EXPERIMENT_MARKER: Final = "&exp=xpe"

# srv3 payloads use a different schema than the one the parser understands.
UNSUPPORTED_FORMAT_PARAM: Final = "&fmt=srv3"

DEFAULT_LANGUAGES: Final = ("en",)
