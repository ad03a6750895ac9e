"""Parse timed-text payloads into transcript snippets."""

import html
import re

from lxml import etree

from .types import TranscriptSnippet

FORMATTING_TAGS = frozenset(
    {"strong", "em", "b", "i", "mark", "small", "del", "ins", "sub", "sup"}
)

_ANY_TAG = re.compile(r"<[^>]*>")
_NAMED_TAG = re.compile(r"</?([a-zA-Z][a-zA-Z0-9]*)\b[^>]*>", re.IGNORECASE)

_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


def _parse_seconds(value: str | None) -> float:
    if value is None:
        return 0.0
    try:
        return float(value)
    except ValueError:
        return 0.0


def _keep_formatting_tag(match: re.Match[str]) -> str:
    if match.group(1).lower() in FORMATTING_TAGS:
        return match.group(0)
    return ""


class TranscriptParser:
    """Turn a timed-text XML document into ordered snippets.

    Without ``preserve_formatting`` every markup tag is removed from the
    caption text. With it, tags in ``FORMATTING_TAGS`` survive verbatim and
    all others are removed.
    """

    def __init__(self, preserve_formatting: bool = False):
        self._preserve_formatting = preserve_formatting

    def _clean(self, text: str) -> str:
        text = html.unescape(text)
        if self._preserve_formatting:
            return _NAMED_TAG.sub(_keep_formatting_tag, text)
        return _ANY_TAG.sub("", text)

    def parse(self, raw_data: str) -> list[TranscriptSnippet]:
        """Parse a timed-text document.

        Args:
            raw_data: The XML payload of a caption track.

        Returns:
            Snippets in document order. Elements without text are skipped and
            unparsable timing attributes default to 0.0.

        Raises:
            lxml.etree.XMLSyntaxError: If the payload is not well-formed XML.
        """
        root = etree.fromstring(raw_data.encode("utf-8"), parser=_XML_PARSER)
        snippets: list[TranscriptSnippet] = []
        for element in root:
            if element.tag != "text" or not element.text:
                continue
            snippets.append(
                TranscriptSnippet(
                    text=self._clean(element.text),
                    start=_parse_seconds(element.get("start")),
                    duration=_parse_seconds(element.get("dur")),
                )
            )
        return snippets
