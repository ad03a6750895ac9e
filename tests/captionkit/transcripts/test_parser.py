"""Unit tests for TranscriptParser."""

from lxml import etree
import pytest

from captionkit.transcripts import TranscriptParser, TranscriptSnippet

from helpers.player import timedtext


@pytest.mark.unit
def test_parse_returns_snippets_in_document_order():
    """Snippets keep document order, even when it is not sorted by time."""
    raw = timedtext(("second", 5.0, 1.5), ("first", 1.0, 2.0))

    snippets = TranscriptParser().parse(raw)

    assert snippets == [
        TranscriptSnippet(text="second", start=5.0, duration=1.5),
        TranscriptSnippet(text="first", start=1.0, duration=2.0),
    ]


@pytest.mark.unit
def test_parse_strips_all_tags_without_preserve_formatting():
    raw = timedtext(("<b>hi</b> <i>there</i>", 0.0, 1.0))

    snippets = TranscriptParser(preserve_formatting=False).parse(raw)

    assert snippets[0].text == "hi there"


@pytest.mark.unit
def test_parse_keeps_formatting_tags_with_preserve_formatting():
    raw = timedtext(("<b>hi</b> <i>there</i>", 0.0, 1.0))

    snippets = TranscriptParser(preserve_formatting=True).parse(raw)

    assert snippets[0].text == "<b>hi</b> <i>there</i>"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, expected",
    [
        ('<font color="red">hi</font>', "hi"),
        ('<B class="x">loud</B>', '<B class="x">loud</B>'),
        ("<span>a</span><sup>2</sup>", "a<sup>2</sup>"),
        ("<em>x</em><br/>y", "<em>x</em>y"),
    ],
)
def test_parse_preserve_formatting_filters_by_allow_list(text: str, expected: str):
    """Only allow-listed tags survive, matched case-insensitively."""
    raw = timedtext((text, 0.0, 1.0))

    snippets = TranscriptParser(preserve_formatting=True).parse(raw)

    assert snippets[0].text == expected


@pytest.mark.unit
def test_parse_unescapes_html_entities():
    """Entities escaped twice in the payload come out as plain characters."""
    raw = (
        "<transcript>"
        '<text start="0" dur="1">I&amp;#39;m &amp;quot;here&amp;quot;</text>'
        "</transcript>"
    )

    snippets = TranscriptParser().parse(raw)

    assert snippets[0].text == "I'm \"here\""


@pytest.mark.unit
def test_parse_skips_empty_and_foreign_elements():
    raw = (
        "<transcript>"
        '<text start="0" dur="1"></text>'
        '<text start="1" dur="1"/>'
        '<note start="2" dur="1">not a caption</note>'
        '<text start="3" dur="1">kept</text>'
        "</transcript>"
    )

    snippets = TranscriptParser().parse(raw)

    assert [s.text for s in snippets] == ["kept"]


@pytest.mark.unit
def test_parse_defaults_missing_or_malformed_timing_to_zero():
    """A bad attribute only affects its own value, never the whole parse."""
    raw = (
        "<transcript>"
        '<text dur="2.5">no start</text>'
        '<text start="abc" dur="">garbage</text>'
        '<text start="4.25" dur="1.75">fine</text>'
        "</transcript>"
    )

    snippets = TranscriptParser().parse(raw)

    assert [(s.start, s.duration) for s in snippets] == [
        (0.0, 2.5),
        (0.0, 0.0),
        (4.25, 1.75),
    ]


@pytest.mark.unit
def test_parse_raises_on_malformed_xml():
    with pytest.raises(etree.XMLSyntaxError):
        TranscriptParser().parse("<transcript><text>")
