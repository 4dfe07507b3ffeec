"""Unit tests for all formatter modules.

WHY: Each formatter turns the AlignedTranscript into a file another tool
consumes. Invalid JSON, lost speakers, or unescaped HTML would break
those tools silently.

HOW: Every formatter runs on the aligned interview sample. The JSON
output is re-validated against the bundled schema and fed back through
extraction; the plain text output is fed back through the parser.

RULES:
- Schema validation uses transcript_aligner/schemas/transcript.schema.json
"""

import json

import jsonschema
import pytest

from transcript_aligner.core.extraction import SCHEMA_PATH, extract_source
from transcript_aligner.core.ir import (
    AlignedParagraph,
    AlignedTranscript,
    AlignedWord,
)
from transcript_aligner.core.parsing import parse_corrected_text
from transcript_aligner.core.pipeline import align_transcript
from transcript_aligner.formatters import FORMATTERS
from transcript_aligner.formatters.html_transcript import HtmlTranscriptFormatter
from transcript_aligner.formatters.json_transcript import JsonTranscriptFormatter
from transcript_aligner.formatters.plain_text import PlainTextFormatter


@pytest.fixture
def aligned(machine_transcript, corrected_text):
    return align_transcript(
        extract_source(machine_transcript),
        parse_corrected_text(corrected_text),
    )


@pytest.fixture
def tricky_transcript():
    words = [AlignedWord("<b>&", 0.0, 0.25), AlignedWord('"quoted"', 0.25, 0.5)]
    return AlignedTranscript(
        words=words,
        paragraphs=[AlignedParagraph(speaker='Tom "T"', start=0.0, end=0.5, words=words)],
        text='<b>& "quoted"',
    )


class TestRegistry:
    """Every registered formatter yields one output with its own suffix."""

    def test_keys(self):
        assert set(FORMATTERS) == {"json", "plain_text", "html"}

    @pytest.mark.parametrize("key", sorted(FORMATTERS))
    def test_single_output_with_own_suffix(self, key, aligned):
        formatter = FORMATTERS[key]()
        outputs = formatter.format(aligned)
        assert len(outputs) == 1
        assert outputs[0].suffix == formatter.suffix
        assert outputs[0].suffix.startswith("-aligned.")


class TestJsonFormatter:
    """JSON output is schema-valid and readable as a machine transcript."""

    def test_valid_against_schema(self, aligned):
        content = JsonTranscriptFormatter().format(aligned)[0].content
        with open(SCHEMA_PATH) as f:
            jsonschema.validate(instance=json.loads(content), schema=json.load(f))

    def test_structure(self, aligned):
        output = JsonTranscriptFormatter().format(aligned)[0]
        body = json.loads(output.content)
        assert output.media_type == "application/json"
        assert body["text"] == aligned.text
        assert body["words"][6] == {"text": "will", "start": 2.6, "end": 3.0}
        assert body["paragraphs"][0]["speaker"] == "Alice"
        assert body["stats"]["edit_distance"] == 2

    def test_speaker_omitted_when_unknown(self, machine_transcript, corrected_text):
        aligned = align_transcript(
            extract_source(machine_transcript),
            parse_corrected_text(corrected_text),
            inherit_speakers=False,
        )
        body = json.loads(JsonTranscriptFormatter().format(aligned)[0].content)
        assert "speaker" not in body["paragraphs"][1]

    def test_output_extracts_as_source(self, aligned):
        body = json.loads(JsonTranscriptFormatter().format(aligned)[0].content)
        source = extract_source(body)
        assert source.words == [w.text for w in aligned.words]
        assert [p.speaker for p in source.paragraphs] == ["Alice", "Speaker 2"]

    def test_non_ascii_kept(self):
        words = [AlignedWord("på", 0.0, 1.0)]
        transcript = AlignedTranscript(
            words=words, paragraphs=[AlignedParagraph(None, 0.0, 1.0, words)], text="på",
        )
        assert "på" in JsonTranscriptFormatter().format(transcript)[0].content


class TestPlainTextFormatter:
    """Plain text output is readable and parses back as corrected text."""

    def test_paragraph_layout(self, aligned):
        content = PlainTextFormatter().format(aligned)[0].content
        assert content == (
            "Alice:\nWelcome to the show!\n\n"
            "Speaker 2:\nToday we will talk about weather.\n"
        )

    def test_no_header_without_speaker(self):
        words = [AlignedWord("hi", 0.0, 1.0)]
        transcript = AlignedTranscript(
            words=words, paragraphs=[AlignedParagraph(None, 0.0, 1.0, words)], text="hi",
        )
        assert PlainTextFormatter().format(transcript)[0].content == "hi\n"

    def test_empty_transcript(self):
        transcript = AlignedTranscript(words=[], paragraphs=[], text="")
        assert PlainTextFormatter().format(transcript)[0].content == ""

    def test_output_parses_back(self, aligned):
        content = PlainTextFormatter().format(aligned)[0].content
        reparsed = parse_corrected_text(content)
        assert reparsed.words == [w.text for w in aligned.words]
        assert [p.speaker for p in reparsed.paragraphs] == ["Alice", "Speaker 2"]

    @pytest.mark.parametrize("speaker", [
        "Dr. J. R. R. Tolkien Junior Esq",
        "Host: Main",
        "[Guest]",
    ])
    def test_unlabelable_speaker_written_without_header(self, speaker):
        words = [AlignedWord("hi", 0.0, 1.0)]
        transcript = AlignedTranscript(
            words=words, paragraphs=[AlignedParagraph(speaker, 0.0, 1.0, words)], text="hi",
        )
        content = PlainTextFormatter().format(transcript)[0].content
        assert content == "hi\n"
        reparsed = parse_corrected_text(content)
        assert reparsed.words == ["hi"]
        assert len(reparsed.paragraphs) == 1

    def test_six_word_speaker_keeps_header(self):
        words = [AlignedWord("hi", 0.0, 1.0)]
        speaker = "Dr. J. R. R. Tolkien Esq"
        transcript = AlignedTranscript(
            words=words, paragraphs=[AlignedParagraph(speaker, 0.0, 1.0, words)], text="hi",
        )
        content = PlainTextFormatter().format(transcript)[0].content
        assert content == speaker + ":\nhi\n"
        assert parse_corrected_text(content).paragraphs[0].speaker == speaker


class TestHtmlFormatter:
    """HTML output wraps each word in a timed, escaped span."""

    def test_word_spans_carry_timing(self, aligned):
        content = HtmlTranscriptFormatter().format(aligned)[0].content
        assert content.startswith('<article class="transcript">')
        assert '<span data-start="2.600" data-end="3.000">will</span>' in content
        assert 'data-speaker="Alice"' in content
        assert content.count("<p ") == 2

    def test_escapes_text_and_attributes(self, tricky_transcript):
        content = HtmlTranscriptFormatter().format(tricky_transcript)[0].content
        assert "&lt;b&gt;&amp;" in content
        assert 'data-speaker="Tom &quot;T&quot;"' in content
        assert "<b>" not in content

    def test_media_type(self, aligned):
        assert HtmlTranscriptFormatter().format(aligned)[0].media_type == "text/html"
