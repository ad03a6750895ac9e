"""Public entry point for listing and fetching video transcripts."""

from collections.abc import Iterable
import logging
from types import TracebackType
from typing import Self

import httpx

from .http_client import HttpClient
from .innertube import TranscriptListFetcher
from .proxies import ProxyConfig
from .settings import DEFAULT_LANGUAGES
from .transcripts import FetchedTranscript, TranscriptCatalog

logger = logging.getLogger(__name__)


class TranscriptApi:
    """Retrieve caption tracks for videos without an official API key.

    Every call repeats the full network round trip; nothing is cached. An
    instance owns a cookie jar and is not safe to share between threads, so
    construct one per thread.

    Attributes:
        _http_client: Transport used by every request of this instance.
        _fetcher: Pipeline that builds catalogs.
    """

    def __init__(
        self,
        proxy_config: ProxyConfig | None = None,
        http_client: httpx.Client | None = None,
    ):
        """Create an API instance.

        Args:
            proxy_config: Proxy to route requests through.
            http_client: Preconfigured client to send requests with.

        Raises:
            InvalidProxyConfigError: If both arguments are given.
        """
        self._http_client = HttpClient(proxy_config=proxy_config, client=http_client)
        self._http_client.headers["Accept-Language"] = "en-US"
        self._fetcher = TranscriptListFetcher(self._http_client, proxy_config)

    def list(self, video_id: str) -> TranscriptCatalog:
        """List the caption tracks available for a video.

        Args:
            video_id: The video id (not the URL).

        Returns:
            A catalog of manual and generated tracks.

        Raises:
            TranscriptRetrievalError: If the catalog cannot be retrieved.
        """
        logger.debug("Listing transcripts.", extra={"video_id": video_id})
        return self._fetcher.fetch(video_id)

    def fetch(
        self,
        video_id: str,
        languages: Iterable[str] = DEFAULT_LANGUAGES,
        preserve_formatting: bool = False,
    ) -> FetchedTranscript:
        """Fetch the best matching transcript for a video.

        Shortcut for ``list(video_id).find_transcript(languages).fetch(...)``.

        Args:
            video_id: The video id (not the URL).
            languages: Language codes in descending priority; empty means
                English. A single code may be passed as a string.
            preserve_formatting: Keep basic formatting tags such as ``<b>``.

        Returns:
            The fetched transcript.

        Raises:
            TranscriptRetrievalError: If no transcript can be retrieved.
        """
        if isinstance(languages, str):
            languages = (languages,)
        language_codes = list(languages) or list(DEFAULT_LANGUAGES)
        return (
            self.list(video_id)
            .find_transcript(language_codes)
            .fetch(preserve_formatting=preserve_formatting)
        )

    def close(self) -> None:
        self._http_client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
