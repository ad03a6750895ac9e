"""Blocking HTTP transport shared by every stage of the pipeline.

Wraps an ``httpx.Client`` holding the process-wide headers, the cookie jar
and the proxy routing, and maps transport failures and error statuses onto
``TranscriptRetrievalError``.
"""

import logging
from types import TracebackType
from typing import Self

import httpx

from .exceptions import ErrorKind, InvalidProxyConfigError, TranscriptRetrievalError
from .proxies import ProxyConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def raise_for_status(response: httpx.Response, video_id: str) -> None:
    """Classify an HTTP response status.

    Args:
        response: The response to check.
        video_id: Video the request was made for, for error context.

    Raises:
        TranscriptRetrievalError: IP_BLOCKED on 429, REQUEST_FAILED on any
            other status of 400 or above.
    """
    if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
        raise TranscriptRetrievalError(
            ErrorKind.IP_BLOCKED, video_id, status_code=response.status_code
        )
    if response.status_code >= 400:
        raise TranscriptRetrievalError(
            ErrorKind.REQUEST_FAILED,
            video_id,
            reason=f"HTTP {response.status_code}: {response.reason_phrase}",
            status_code=response.status_code,
        )


def _build_client(proxy_config: ProxyConfig | None) -> httpx.Client:
    mounts: dict[str, httpx.BaseTransport] | None = None
    if proxy_config is not None:
        http_url, https_url = proxy_config.to_proxy_urls()
        mounts = {
            "http://": httpx.HTTPTransport(proxy=http_url),
            "https://": httpx.HTTPTransport(proxy=https_url),
        }
    return httpx.Client(
        timeout=DEFAULT_TIMEOUT_SECONDS,
        follow_redirects=True,
        mounts=mounts,
    )


class HttpClient:
    """Blocking GET/POST transport with shared headers and cookies.

    Not safe to share between threads: the cookie jar and headers are
    mutated while a pipeline runs.

    Either a proxy configuration or a preconfigured ``httpx.Client`` may be
    given, not both.

    Attributes:
        headers: Headers sent with every request.
        cookies: Cookie jar shared by every request.
    """

    def __init__(
        self,
        proxy_config: ProxyConfig | None = None,
        client: httpx.Client | None = None,
    ):
        if client is not None and proxy_config is not None:
            raise InvalidProxyConfigError(
                "A proxy configuration cannot be applied to an injected httpx "
                "client; configure the proxy on the client or pass only the "
                "proxy configuration"
            )
        self._client = client if client is not None else _build_client(proxy_config)
        if proxy_config is not None and proxy_config.prevent_keeping_connections_alive:
            self._client.headers["Connection"] = "close"
        logger.debug(
            "HttpClient initialized.",
            extra={
                "proxy_config": type(proxy_config).__name__ if proxy_config else None,
            },
        )

    @property
    def headers(self) -> httpx.Headers:
        return self._client.headers

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    def set_cookie(self, name: str, value: str, domain: str) -> None:
        """Store a cookie scoped to ``domain`` in the shared jar."""
        self._client.cookies.set(name, value, domain=domain)

    def get(self, url: str, *, video_id: str) -> httpx.Response:
        """Send a GET request and classify its status.

        Args:
            url: Absolute URL to fetch.
            video_id: Video the request is made for, for error context.

        Returns:
            The response, with a status below 400.

        Raises:
            TranscriptRetrievalError: If the request fails or is rejected.
        """
        logger.debug("Sending GET request.", extra={"url": url, "video_id": video_id})
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise TranscriptRetrievalError(
                ErrorKind.REQUEST_FAILED, video_id, reason=str(e)
            ) from e
        raise_for_status(response, video_id)
        return response

    def post(
        self, url: str, content_type: str, body: bytes, *, video_id: str
    ) -> httpx.Response:
        """Send a POST request and classify its status.

        Args:
            url: Absolute URL to post to.
            content_type: Value of the Content-Type header.
            body: Encoded request body.
            video_id: Video the request is made for, for error context.

        Returns:
            The response, with a status below 400.

        Raises:
            TranscriptRetrievalError: If the request fails or is rejected.
        """
        logger.debug("Sending POST request.", extra={"url": url, "video_id": video_id})
        try:
            response = self._client.post(
                url, content=body, headers={"Content-Type": content_type}
            )
        except httpx.HTTPError as e:
            raise TranscriptRetrievalError(
                ErrorKind.REQUEST_FAILED, video_id, reason=str(e)
            ) from e
        raise_for_status(response, video_id)
        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
