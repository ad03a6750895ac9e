"""Shared fixtures for integration tests."""

from collections.abc import Iterator
import os

import pytest

from captionkit.api import TranscriptApi
from captionkit.proxies import WebshareProxyConfig


@pytest.fixture
def transcript_api() -> Iterator[TranscriptApi]:
    """Provide a TranscriptApi, routed through Webshare if credentials are set.

    Setting CAPTIONKIT_WEBSHARE_PROXY_USERNAME and
    CAPTIONKIT_WEBSHARE_PROXY_PASSWORD avoids IP blocks when the suite runs
    from cloud hosts.
    """
    username = os.environ.get("CAPTIONKIT_WEBSHARE_PROXY_USERNAME")
    password = os.environ.get("CAPTIONKIT_WEBSHARE_PROXY_PASSWORD")
    proxy_config = (
        WebshareProxyConfig(proxy_username=username, proxy_password=password)
        if username and password
        else None
    )
    with TranscriptApi(proxy_config=proxy_config) as api:
        yield api
