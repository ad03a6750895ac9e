"""Acquire a video's caption catalog from the watch page and player endpoint.

The pipeline is page fetch (passing the cookie consent wall if shown), API key
extraction, a POST to the internal player endpoint, playability
classification and catalog construction. When the platform blocks the round
trip, it is repeated with a linear backoff as often as the active proxy
configuration allows.
"""

import html
import json
import logging
import re
import time
from typing import Any

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_incrementing,
)

from ..exceptions import ErrorKind, TranscriptRetrievalError
from ..http_client import HttpClient
from ..proxies import ProxyConfig
from ..settings import (
    CAPTCHA_MARKER,
    CONSENT_FORM_MARKER,
    COOKIE_DOMAIN,
    INNERTUBE_API_URL,
    INNERTUBE_CONTEXT,
    WATCH_URL,
)
from ..transcripts.catalog import TranscriptCatalog
from .captions import build_catalog, extract_captions_sections
from .playability import classify_playability
from .player_data import PlayerData

logger = logging.getLogger(__name__)

_API_KEY_PATTERN = re.compile(r'"INNERTUBE_API_KEY":\s*"([a-zA-Z0-9_-]+)"')
_CONSENT_VALUE_PATTERN = re.compile(r'name="v" value="(.*?)"')


def _is_blocked(exc: BaseException) -> bool:
    return isinstance(exc, TranscriptRetrievalError) and exc.kind.is_blocked


def innertube_request_body(video_id: str) -> dict[str, Any]:
    """Return the JSON body for a player request."""
    return {
        "context": {"client": dict(INNERTUBE_CONTEXT["client"])},
        "videoId": video_id,
    }


class TranscriptListFetcher:
    """Fetch the catalog of caption tracks for a video.

    Attributes:
        _http_client: Transport shared by every request of the pipeline.
        _proxy_config: Active proxy configuration, which bounds the retries.
    """

    def __init__(
        self, http_client: HttpClient, proxy_config: ProxyConfig | None = None
    ):
        self._http_client = http_client
        self._proxy_config = proxy_config

    def fetch(self, video_id: str) -> TranscriptCatalog:
        """Build the catalog for ``video_id`` over the network.

        Args:
            video_id: The video id (not a URL).

        Returns:
            A freshly built catalog.

        Raises:
            TranscriptRetrievalError: If any stage of the pipeline fails.
        """
        player_data = self._fetch_player_data_with_retries(video_id)
        video_details, captions = extract_captions_sections(player_data, video_id)
        return build_catalog(self._http_client, video_id, video_details, captions)

    def _fetch_player_data_with_retries(self, video_id: str) -> PlayerData:
        retries = self._proxy_config.retries_when_blocked if self._proxy_config else 0

        def log_retry(retry_state: RetryCallState) -> None:
            next_action = retry_state.next_action
            logger.warning(
                "Request blocked, retrying.",
                extra={
                    "video_id": video_id,
                    "attempt": retry_state.attempt_number,
                    "retries": retries,
                    "backoff_seconds": next_action.sleep if next_action else None,
                },
            )

        retrying = Retrying(
            stop=stop_after_attempt(max(retries, 1)),
            wait=wait_incrementing(start=1, increment=1),
            retry=retry_if_exception(_is_blocked),
            before_sleep=log_retry,
            sleep=time.sleep,
            reraise=True,
        )
        try:
            return retrying(self._fetch_playable_player_data, video_id)
        except TranscriptRetrievalError as e:
            if e.kind.is_blocked:
                e.with_proxy_config(self._proxy_config)
            raise

    def _fetch_playable_player_data(self, video_id: str) -> PlayerData:
        page = self._fetch_video_html(video_id)
        api_key = self._extract_innertube_api_key(page, video_id)
        player_data = self._fetch_innertube_data(video_id, api_key)
        classify_playability(player_data, video_id)
        return player_data

    def _fetch_html(self, video_id: str) -> str:
        logger.debug("Fetching watch page.", extra={"video_id": video_id})
        response = self._http_client.get(
            WATCH_URL.format(video_id=video_id), video_id=video_id
        )
        return html.unescape(response.text)

    def _create_consent_cookie(self, page: str, video_id: str) -> None:
        match = _CONSENT_VALUE_PATTERN.search(page)
        if match is None:
            raise TranscriptRetrievalError(ErrorKind.CONSENT_COOKIE_FAILED, video_id)
        self._http_client.set_cookie(
            "CONSENT", f"YES+{match.group(1)}", domain=COOKIE_DOMAIN
        )
        logger.debug("Consent cookie created.", extra={"video_id": video_id})

    def _fetch_video_html(self, video_id: str) -> str:
        page = self._fetch_html(video_id)
        if CONSENT_FORM_MARKER not in page:
            return page

        self._create_consent_cookie(page, video_id)
        page = self._fetch_html(video_id)
        if CONSENT_FORM_MARKER in page:
            raise TranscriptRetrievalError(ErrorKind.CONSENT_COOKIE_FAILED, video_id)
        return page

    def _extract_innertube_api_key(self, page: str, video_id: str) -> str:
        match = _API_KEY_PATTERN.search(page)
        if match is not None:
            logger.debug("Extracted API key.", extra={"video_id": video_id})
            return match.group(1)
        if CAPTCHA_MARKER in page:
            raise TranscriptRetrievalError(ErrorKind.IP_BLOCKED, video_id)
        raise TranscriptRetrievalError(ErrorKind.DATA_UNPARSABLE, video_id)

    def _fetch_innertube_data(self, video_id: str, api_key: str) -> PlayerData:
        body = json.dumps(innertube_request_body(video_id)).encode("utf-8")
        logger.debug("Requesting player data.", extra={"video_id": video_id})
        response = self._http_client.post(
            INNERTUBE_API_URL.format(api_key=api_key),
            "application/json",
            body,
            video_id=video_id,
        )
        try:
            data = response.json()
        except ValueError as e:
            # JSONDecodeError or UnicodeDecodeError
            raise TranscriptRetrievalError(
                ErrorKind.REQUEST_FAILED, video_id, reason=f"invalid JSON: {e}"
            ) from e
        if not isinstance(data, dict):
            raise TranscriptRetrievalError(ErrorKind.DATA_UNPARSABLE, video_id)
        return PlayerData(data)
