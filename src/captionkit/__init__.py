"""Retrieve video captions by scraping the player's internal endpoint."""

from .api import TranscriptApi
from .exceptions import (
    CaptionkitError,
    ErrorKind,
    InvalidProxyConfigError,
    TranscriptRetrievalError,
    UnknownFormatterError,
)
from .formatters import (
    Formatter,
    FormatterLoader,
    JSONFormatter,
    PrettyPrintFormatter,
    SRTFormatter,
    TextFormatter,
    WebVTTFormatter,
)
from .proxies import GenericProxyConfig, ProxyConfig, WebshareProxyConfig
from .transcripts import (
    FetchedTranscript,
    Transcript,
    TranscriptCatalog,
    TranscriptSnippet,
    TranslationLanguage,
)

__all__ = [
    "CaptionkitError",
    "ErrorKind",
    "FetchedTranscript",
    "Formatter",
    "FormatterLoader",
    "GenericProxyConfig",
    "InvalidProxyConfigError",
    "JSONFormatter",
    "PrettyPrintFormatter",
    "ProxyConfig",
    "SRTFormatter",
    "TextFormatter",
    "Transcript",
    "TranscriptApi",
    "TranscriptCatalog",
    "TranscriptRetrievalError",
    "TranscriptSnippet",
    "TranslationLanguage",
    "UnknownFormatterError",
    "WebshareProxyConfig",
]
