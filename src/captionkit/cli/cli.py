"""Command-line interface for captionkit.

Processes every requested video independently: failures are collected per
video and reported ahead of the successful results instead of aborting the
whole batch.
"""

from collections.abc import Callable, Sequence
import logging
import sys
from typing import TypeAlias

from pydantic import ValidationError

from ..api import TranscriptApi
from ..config import AppSettings
from ..exceptions import CaptionkitError, ConfigLoadError, TranscriptRetrievalError
from ..formatters import FormatterLoader
from ..logging_config import set_video_id, setup_logging
from ..proxies import ProxyConfig
from ..transcripts import FetchedTranscript, TranscriptCatalog

logger = logging.getLogger(__name__)

ApiFactory: TypeAlias = Callable[[ProxyConfig | None], TranscriptApi]


def load_settings(argv: Sequence[str] | None = None) -> AppSettings:
    """Parse settings from the environment and command line arguments.

    Args:
        argv: Arguments without the program name; None reads ``sys.argv``.

    Raises:
        ConfigLoadError: If the settings fail validation.
    """
    cli_args: list[str] | bool = list(argv) if argv is not None else True
    try:
        return AppSettings(_cli_parse_args=cli_args)  # type: ignore[call-arg]
    except ValidationError as e:
        raise ConfigLoadError("Invalid command line or environment settings.") from e


def _fetch_transcript(
    settings: AppSettings, catalog: TranscriptCatalog
) -> FetchedTranscript:
    if settings.exclude_manually_created:
        transcript = catalog.find_generated_transcript(settings.languages)
    elif settings.exclude_generated:
        transcript = catalog.find_manually_created_transcript(settings.languages)
    else:
        transcript = catalog.find_transcript(settings.languages)

    if settings.translate:
        transcript = transcript.translate(settings.translate)

    return transcript.fetch(preserve_formatting=False)


def run(settings: AppSettings, api_factory: ApiFactory = TranscriptApi) -> str:
    """Process every video in ``settings`` and render the combined output.

    Args:
        settings: Parsed settings for this run.
        api_factory: Builds the API for the configured proxy.

    Returns:
        Error explanations followed by catalog summaries or formatted
        transcripts, separated by blank lines.

    Raises:
        InvalidProxyConfigError: If the proxy settings are unusable.
        UnknownFormatterError: If the output format is not registered.
    """
    if settings.exclude_manually_created and settings.exclude_generated:
        logger.info("Both transcript sources excluded; nothing to do.")
        return ""

    formatter = FormatterLoader().load(settings.format)
    proxy_config = settings.proxy_config()

    transcripts: list[FetchedTranscript] = []
    catalogs: list[TranscriptCatalog] = []
    errors: list[TranscriptRetrievalError] = []

    with api_factory(proxy_config) as api:
        for video_id in settings.video_ids:
            set_video_id(video_id)
            try:
                catalog = api.list(video_id)
                if settings.list_transcripts:
                    catalogs.append(catalog)
                else:
                    transcripts.append(_fetch_transcript(settings, catalog))
            except TranscriptRetrievalError as e:
                logger.warning(
                    "Could not retrieve transcript.",
                    extra={"error_kind": str(e.kind)},
                )
                errors.append(e)
        set_video_id(None)

    sections = [str(error) for error in errors]
    if settings.list_transcripts:
        sections.extend(str(catalog) for catalog in catalogs)
    elif transcripts:
        sections.append(formatter.format_transcripts(transcripts))

    logger.debug(
        "Batch finished.",
        extra={
            "videos": len(settings.video_ids),
            "errors": len(errors),
        },
    )
    return "\n\n".join(sections)


def main_cli(argv: Sequence[str] | None = None) -> int:
    """Run the command line front end.

    Args:
        argv: Arguments without the program name; None reads ``sys.argv``.

    Returns:
        Process exit code: 0 when the batch ran, 1 when the settings or
        proxy configuration are unusable.
    """
    try:
        settings = load_settings(argv)
    except ConfigLoadError as e:
        print(f"{e}\n{e.__cause__}", file=sys.stderr)
        return 1

    setup_logging(
        log_format_type=settings.log_format,
        app_log_level_name=settings.log_level,
        include_stacktrace=settings.log_include_stacktrace,
    )
    logger.debug(
        "Application settings loaded.",
        extra={
            "video_ids": settings.video_ids,
            "languages": settings.languages,
            "format": settings.format,
            "list_transcripts": settings.list_transcripts,
        },
    )

    try:
        output = run(settings)
    except CaptionkitError as e:
        logger.error("Could not start transcript retrieval.", exc_info=e)
        return 1

    print(output)
    return 0
