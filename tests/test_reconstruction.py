"""Unit tests for paragraph reconstruction and speaker inheritance."""

from transcript_aligner.core.ir import (
    AlignedWord,
    AlignmentStats,
    CorrectedTranscript,
    SourceParagraph,
    TargetParagraph,
)
from transcript_aligner.core.reconstruction import SpeakerTimeline, reconstruct, speaker_at


def _words(*specs):
    return [AlignedWord(text, start, end) for text, start, end in specs]


class TestReconstruct:
    """Paragraph timing comes from the first and last aligned word."""

    def test_paragraph_timing_from_first_and_last_word(self):
        words = _words(("a", 0.0, 0.5), ("b", 0.6, 1.0), ("c", 2.0, 2.5))
        corrected = CorrectedTranscript(
            words=["a", "b", "c"],
            paragraphs=[TargetParagraph(0, 2, "Alice"), TargetParagraph(2, 3)],
        )
        transcript = reconstruct(words, corrected)

        first, second = transcript.paragraphs
        assert (first.speaker, first.start, first.end, first.text) == ("Alice", 0.0, 1.0, "a b")
        assert (second.speaker, second.start, second.end) == (None, 2.0, 2.5)
        assert transcript.text == "a b c"

    def test_explicit_speaker_wins_over_source(self):
        words = _words(("a", 0.0, 0.5))
        corrected = CorrectedTranscript(["a"], [TargetParagraph(0, 1, "Alice")])
        transcript = reconstruct(words, corrected, [SourceParagraph(0.0, 1.0, "Speaker 1")])
        assert transcript.paragraphs[0].speaker == "Alice"

    def test_missing_speaker_inherited(self):
        words = _words(("a", 0.0, 0.5), ("b", 2.5, 3.0))
        corrected = CorrectedTranscript(["a", "b"], [TargetParagraph(0, 1), TargetParagraph(1, 2)])
        source = [SourceParagraph(0.0, 1.0, "Speaker 1"), SourceParagraph(2.0, 3.0, "Speaker 2")]
        transcript = reconstruct(words, corrected, source)
        assert [p.speaker for p in transcript.paragraphs] == ["Speaker 1", "Speaker 2"]

    def test_no_source_paragraphs_leaves_speaker_empty(self):
        words = _words(("a", 0.0, 0.5))
        corrected = CorrectedTranscript(["a"], [TargetParagraph(0, 1)])
        assert reconstruct(words, corrected).paragraphs[0].speaker is None

    def test_stats_carried_through(self):
        stats = AlignmentStats(matches=1)
        corrected = CorrectedTranscript(["a"], [TargetParagraph(0, 1)])
        transcript = reconstruct(_words(("a", 0, 1)), corrected, stats=stats)
        assert transcript.stats is stats

    def test_empty(self):
        transcript = reconstruct([], CorrectedTranscript([], []))
        assert transcript.paragraphs == []
        assert transcript.text == ""

    def test_to_dict_shape(self):
        words = _words(("a", 0.0, 0.5))
        corrected = CorrectedTranscript(["a"], [TargetParagraph(0, 1)])
        body = reconstruct(words, corrected).to_dict()
        assert body == {
            "words": [{"text": "a", "start": 0.0, "end": 0.5}],
            "paragraphs": [{"start": 0.0, "end": 0.5, "text": "a"}],
            "text": "a",
        }


class TestSpeakerAt:
    """Machine speaker lookup by time for unlabeled paragraphs."""

    def test_containing_paragraph(self):
        source = [SourceParagraph(0.0, 1.0, "A"), SourceParagraph(1.0, 2.0, "B")]
        assert speaker_at(1.5, source) == "B"

    def test_gap_uses_preceding_paragraph(self):
        source = [SourceParagraph(0.0, 1.0, "A"), SourceParagraph(5.0, 6.0, "B")]
        assert speaker_at(3.0, source) == "A"

    def test_before_first_paragraph(self):
        assert speaker_at(0.5, [SourceParagraph(1.0, 2.0, "A")]) is None

    def test_paragraphs_without_speaker_skipped(self):
        source = [SourceParagraph(0.0, 1.0, "A"), SourceParagraph(1.0, 2.0, None)]
        assert speaker_at(1.5, source) == "A"

    def test_shared_boundary_goes_to_earlier_paragraph(self):
        source = [SourceParagraph(0.0, 1.0, "A"), SourceParagraph(1.0, 2.0, "B")]
        assert speaker_at(1.0, source) == "A"

    def test_unsorted_paragraphs(self):
        source = [SourceParagraph(5.0, 6.0, "B"), SourceParagraph(0.0, 1.0, "A")]
        assert speaker_at(0.5, source) == "A"
        assert speaker_at(5.5, source) == "B"
        assert speaker_at(9.0, source) == "B"


class TestSpeakerTimeline:
    """One index over the machine paragraphs answers repeated lookups."""

    def test_many_paragraphs(self):
        source = [
            SourceParagraph(float(i), i + 0.5, "Speaker {}".format(i % 3))
            for i in range(1000)
        ]
        timeline = SpeakerTimeline(source)
        assert timeline.speaker_at(0.25) == "Speaker 0"
        assert timeline.speaker_at(500.25) == "Speaker 2"
        assert timeline.speaker_at(998.75) == "Speaker 2"
        assert timeline.speaker_at(-1.0) is None

    def test_empty_when_no_speakers(self):
        timeline = SpeakerTimeline([SourceParagraph(0.0, 1.0, None)])
        assert not timeline
        assert timeline.speaker_at(0.5) is None
