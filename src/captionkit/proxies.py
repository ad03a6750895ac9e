"""Proxy configurations understood by the HTTP transport.

A proxy configuration tells the transport which proxy URLs to dial, whether
connections must be closed after each request, and how many times a blocked
catalog request may be retried.
"""

from abc import ABC, abstractmethod
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import InvalidProxyConfigError


class ProxyConfig(BaseModel, ABC):
    """Base class for proxy configurations."""

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def to_proxy_urls(self) -> tuple[str, str]:
        """Return the HTTP and HTTPS proxy URLs."""

    @property
    def prevent_keeping_connections_alive(self) -> bool:
        """Whether every request should open a fresh connection."""
        return False

    @property
    def retries_when_blocked(self) -> int:
        """How many attempts a blocked catalog request may make."""
        return 0


class GenericProxyConfig(ProxyConfig):
    """A fixed HTTP/HTTPS/SOCKS proxy.

    If only one of the URLs is set, it is used for both schemes.

    Attributes:
        http_url: Proxy URL for plain HTTP requests.
        https_url: Proxy URL for HTTPS requests.
    """

    http_url: str | None = None
    https_url: str | None = None

    @model_validator(mode="after")
    def _require_one_url(self) -> Self:
        if not self.http_url and not self.https_url:
            raise InvalidProxyConfigError(
                "GenericProxyConfig requires you to define at least one of the "
                "two: http or https"
            )
        return self

    def to_proxy_urls(self) -> tuple[str, str]:
        http_url = self.http_url or self.https_url
        https_url = self.https_url or self.http_url
        assert http_url is not None and https_url is not None
        return http_url, https_url


class WebshareProxyConfig(ProxyConfig):
    """Webshare rotating residential proxy pool.

    The proxy URL is synthesized from the account credentials; the ``-rotate``
    suffix makes the pool hand out a new egress address per connection, so
    keep-alive is always disabled.

    Attributes:
        proxy_username: Webshare proxy username.
        proxy_password: Webshare proxy password.
        filter_ip_locations: Country codes the egress IPs are restricted to.
        retries: Attempts allowed when a request is blocked.
        domain_name: Proxy host.
        proxy_port: Proxy port.
    """

    proxy_username: str
    proxy_password: str
    filter_ip_locations: list[str] = Field(default_factory=list[str])
    retries: int = Field(default=10, ge=0)
    domain_name: str = "p.webshare.io"
    proxy_port: int = Field(default=80, gt=0)

    @property
    def url(self) -> str:
        """The proxy URL with location filters and rotation enabled."""
        location_codes = "".join(
            f"-{code.upper()}" for code in self.filter_ip_locations
        )
        return (
            f"http://{self.proxy_username}{location_codes}-rotate:"
            f"{self.proxy_password}@{self.domain_name}:{self.proxy_port}/"
        )

    def to_proxy_urls(self) -> tuple[str, str]:
        return self.url, self.url

    @property
    def prevent_keeping_connections_alive(self) -> bool:
        return True

    @property
    def retries_when_blocked(self) -> int:
        return self.retries
