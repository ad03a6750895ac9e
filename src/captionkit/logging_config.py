"""Logging configuration for the captionkit command line front end.

Provides a human-readable formatter that appends ``extra`` fields and a
condensed exception trace, a JSON alternative, and a filter that tags every
record with the video currently being processed. The library modules only
create loggers; configuring them is left to the application.
"""

from collections.abc import Mapping
from contextvars import ContextVar
import json
import logging
from logging.config import dictConfig
import sys
from typing import Any, Literal

_original_log_record_factory = logging.getLogRecordFactory()


def custom_record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
    """Create a log record carrying the attributes of its exception chain.

    Public attributes of every exception in the ``__cause__``/``__context__``
    chain are collected into ``exc_custom_attrs`` (first occurrence wins) and
    their messages into ``semantic_trace``.
    """
    record = _original_log_record_factory(*args, **kwargs)

    if record.exc_info and record.exc_info[1]:
        collected_attrs: dict[str, Any] = {}
        semantic_chain_messages: list[str] = []

        current_exc: BaseException | None = record.exc_info[1]
        while current_exc:
            for name, val in vars(current_exc).items():
                if not name.startswith("_") and name not in collected_attrs:
                    collected_attrs[name] = val
            semantic_chain_messages.append(str(current_exc).strip())
            current_exc = current_exc.__cause__ or current_exc.__context__

        if collected_attrs:
            record.exc_custom_attrs = collected_attrs
        if semantic_chain_messages:
            record.semantic_trace = semantic_chain_messages

    return record


_video_id_var: ContextVar[str | None] = ContextVar("video_id", default=None)


def set_video_id(video_id: str | None) -> None:
    """Tag subsequent log records in this context with ``video_id``."""
    _video_id_var.set(video_id)


class VideoIdFilter(logging.Filter):
    """Inject the video being processed into each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        video_id = _video_id_var.get()
        if video_id is not None and not hasattr(record, "video_id"):
            record.video_id = video_id
        return True


_should_include_stacktrace: bool = False

_STANDARD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "taskName",
        "exc_custom_attrs",
        "semantic_trace",
    }
)


def _format_value(value: Any) -> str:
    if isinstance(value, dict | list | tuple):
        try:
            return json.dumps(value, sort_keys=True, separators=(", ", ":"))
        except TypeError:
            return str(value)  # pyright: ignore[reportUnknownArgumentType]
    return str(value)


class HumanReadableExtrasFormatter(logging.Formatter):
    """Format records as ``time LEVEL [logger] key:value ... - message``.

    Extra fields and public attributes of the logged exception are appended
    as key-value pairs. Unless stack traces are enabled, exceptions are shown
    as their chain of messages instead of a traceback.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{", "$"] = "%",
        validate: bool = True,
        *,
        defaults: Mapping[str, Any] | None = None,
    ):
        super().__init__(fmt, datefmt, style, validate, defaults=defaults)

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        prefix = f"{timestamp} {record.levelname} [{record.name}]"

        combined_extras: dict[str, Any] = {}
        exc_custom_attributes = getattr(record, "exc_custom_attrs", None)
        if isinstance(exc_custom_attributes, dict):
            combined_extras.update(exc_custom_attributes)  # type: ignore
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                combined_extras[key] = value

        parts = [prefix]
        parts.extend(
            f"{key}:{_format_value(value)}" for key, value in combined_extras.items()
        )
        parts.append(f"- {record.getMessage()}")
        final_log_string = " ".join(parts)

        if record.exc_info:
            if _should_include_stacktrace:
                if not record.exc_text:
                    record.exc_text = self.formatException(record.exc_info)
                final_log_string += "\n" + record.exc_text
            else:
                semantic_trace: list[str] | None = getattr(
                    record, "semantic_trace", None
                )
                for i, msg in enumerate(semantic_trace or []):
                    label = "Error" if i == 0 else "  Caused by"
                    final_log_string += f"\n{label}: {msg}"

        if record.stack_info:
            final_log_string += "\n" + self.formatStack(record.stack_info)

        return final_log_string


LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "video_id_filter": {
            "()": VideoIdFilter,
        },
    },
    "formatters": {
        "human_readable_formatter": {
            "()": HumanReadableExtrasFormatter,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "json_formatter": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console_handler": {
            "class": "logging.StreamHandler",
            "formatter": "human_readable_formatter",
            # stdout carries the transcripts
            "stream": "ext://sys.stderr",
            "filters": ["video_id_filter"],
        },
    },
    "loggers": {
        "captionkit": {
            "handlers": ["console_handler"],
            "level": "WARNING",
            "propagate": False,
        },
        "httpx": {
            "handlers": ["console_handler"],
            "level": "WARNING",
            "propagate": False,
        },
    },
    "root": {
        "handlers": ["console_handler"],
        "level": "WARNING",
    },
}


def setup_logging(
    log_format_type: Literal["human", "json"],
    app_log_level_name: str,
    include_stacktrace: bool,
) -> None:
    """Configure logging for the command line front end.

    Args:
        log_format_type: Format for logs ('human' or 'json').
        app_log_level_name: Logging level name (e.g., 'INFO', 'DEBUG').
        include_stacktrace: Whether to include full stack traces in error logs.
    """
    global _should_include_stacktrace
    _should_include_stacktrace = include_stacktrace

    logging.setLogRecordFactory(custom_record_factory)

    log_level_upper = app_log_level_name.upper()
    if not isinstance(getattr(logging, log_level_upper, None), int):
        print(
            f"Warning: Invalid log level '{app_log_level_name}'. "
            "Defaulting to WARNING.",
            file=sys.stderr,
        )
        log_level_upper = "WARNING"
    LOGGING_CONFIG["loggers"]["captionkit"]["level"] = log_level_upper

    formatter = (
        "json_formatter"
        if log_format_type.lower() == "json"
        else "human_readable_formatter"
    )
    LOGGING_CONFIG["handlers"]["console_handler"]["formatter"] = formatter

    dictConfig(LOGGING_CONFIG)
