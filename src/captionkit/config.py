"""Command line and environment configuration for captionkit.

Settings are read from ``CAPTIONKIT_``-prefixed environment variables and,
when the command line front end runs, from command line arguments.
"""

import logging
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, CliPositionalArg, SettingsConfigDict

from .proxies import GenericProxyConfig, ProxyConfig, WebshareProxyConfig
from .settings import DEFAULT_LANGUAGES

logger = logging.getLogger(__name__)

WEBSHARE_RETRIES_WHEN_BLOCKED = 10


class AppSettings(BaseSettings):
    """Settings for a command line run.

    Attributes:
        video_ids: Videos to process.
        list_transcripts: List available tracks instead of fetching one.
        languages: Language codes in descending priority.
        exclude_generated: Only consider manually created tracks.
        exclude_manually_created: Only consider generated tracks.
        format: Output formatter name.
        translate: Language code to translate the selected track into.
        webshare_proxy_username: Webshare rotating residential proxy username.
        webshare_proxy_password: Webshare rotating residential proxy password.
        http_proxy: Proxy URL for HTTP requests.
        https_proxy: Proxy URL for HTTPS requests.
        log_format: Format for application logs (human or json).
        log_level: Logging level for the application.
        log_include_stacktrace: Include full stack traces in error logs.
    """

    video_ids: CliPositionalArg[list[str]] = Field(
        description="List of video ids (not URLs) to retrieve transcripts for.",
    )
    list_transcripts: bool = Field(
        default=False,
        description="List the available languages instead of fetching transcripts.",
    )
    languages: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LANGUAGES),
        description="Language codes in descending priority (e.g. de en).",
    )
    exclude_generated: bool = Field(
        default=False,
        description="Exclude automatically generated transcripts.",
    )
    exclude_manually_created: bool = Field(
        default=False,
        description="Exclude manually created transcripts.",
    )
    format: str = Field(
        default="pretty",
        description="Output format: json, pretty, text, srt or webvtt.",
    )
    translate: str | None = Field(
        default=None,
        description="Language code to translate the transcript into.",
    )
    webshare_proxy_username: str | None = Field(
        default=None,
        description="Webshare rotating residential proxy username.",
    )
    webshare_proxy_password: str | None = Field(
        default=None,
        description="Webshare rotating residential proxy password.",
    )
    http_proxy: str | None = Field(
        default=None,
        description="Proxy URL used for HTTP requests.",
    )
    https_proxy: str | None = Field(
        default=None,
        description="Proxy URL used for HTTPS requests.",
    )
    log_format: Literal["human", "json"] = Field(
        default="human",
        description="Format for application logs ('human' or 'json').",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level (e.g., DEBUG, INFO, WARNING). Case-insensitive.",
    )
    log_include_stacktrace: bool = Field(
        default=False,
        description="Include full stack traces in error logs.",
    )

    model_config = SettingsConfigDict(
        env_prefix="CAPTIONKIT_",
        cli_prog_name="captionkit",
        cli_kebab_case=True,
        cli_implicit_flags=True,
        extra="ignore",
    )

    @field_validator("video_ids", mode="after")
    @classmethod
    def strip_backslashes(cls, v: list[str]) -> list[str]:
        """Remove backslashes that shells leave in escaped video ids."""
        return [video_id.replace("\\", "") for video_id in v]

    @field_validator("translate", "http_proxy", "https_proxy", mode="before")
    @classmethod
    def empty_string_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def proxy_config(self) -> ProxyConfig | None:
        """Build the proxy configuration the settings describe.

        Webshare credentials take precedence over generic proxy URLs.

        Returns:
            The proxy configuration, or None if no proxy is configured.

        Raises:
            InvalidProxyConfigError: If the generic proxy settings are unusable.
        """
        if self.webshare_proxy_username or self.webshare_proxy_password:
            return WebshareProxyConfig(
                proxy_username=self.webshare_proxy_username or "",
                proxy_password=self.webshare_proxy_password or "",
                retries=WEBSHARE_RETRIES_WHEN_BLOCKED,
            )
        if self.http_proxy or self.https_proxy:
            return GenericProxyConfig(
                http_url=self.http_proxy, https_url=self.https_proxy
            )
        return None
