"""Reassembly of aligned words into timed, speaker-labeled paragraphs.

WHY: The timing resolver returns a flat word list. Consumers need the
corrected paragraph structure back — with speakers and paragraph-level
start/end times — in the same shape as the machine transcript.

HOW: Each TargetParagraph's word range is sliced out of the aligned word
list. The paragraph start is its first word's start, the end its last
word's end. Paragraphs without a speaker label can inherit one from the
machine transcript's paragraph covering the same moment.

RULES:
- One AlignedParagraph per TargetParagraph, in order
- Paragraph start/end come from first/last word, never re-derived
- Explicit speaker labels from the corrected text always win
- Inheritance picks the source paragraph containing the paragraph start,
  else the last source paragraph starting before it; at a shared
  boundary the earlier paragraph wins
- Source paragraphs are indexed once by start time, so each lookup is a
  binary search
- text is every word joined by single spaces
"""

from __future__ import annotations

import bisect
from typing import List, Optional, Sequence

from transcript_aligner.core.ir import (
    AlignedParagraph,
    AlignedTranscript,
    AlignedWord,
    AlignmentStats,
    CorrectedTranscript,
    SourceParagraph,
)


class SpeakerTimeline:
    """Machine paragraphs with a speaker, sorted by start time."""

    def __init__(self, source_paragraphs: Sequence[SourceParagraph]):
        self._paragraphs = sorted(
            (p for p in source_paragraphs if p.speaker is not None),
            key=lambda p: p.start,
        )
        self._starts = [p.start for p in self._paragraphs]

    def __bool__(self) -> bool:
        return bool(self._paragraphs)

    def speaker_at(self, time_s: float) -> Optional[str]:
        """Speaker of the paragraph active at time_s, or None before the first."""
        index = bisect.bisect_right(self._starts, time_s) - 1
        if index < 0:
            return None
        if index > 0 and self._paragraphs[index - 1].end >= time_s:
            return self._paragraphs[index - 1].speaker
        return self._paragraphs[index].speaker


def speaker_at(time_s: float, source_paragraphs: Sequence[SourceParagraph]) -> Optional[str]:
    """Find the machine speaker label active at time_s.

    Returns None when no source paragraph with a speaker starts at or
    before time_s. Build a SpeakerTimeline directly for repeated lookups.
    """
    return SpeakerTimeline(source_paragraphs).speaker_at(time_s)


def reconstruct(
    aligned_words: Sequence[AlignedWord],
    corrected: CorrectedTranscript,
    source_paragraphs: Optional[Sequence[SourceParagraph]] = None,
    stats: Optional[AlignmentStats] = None,
) -> AlignedTranscript:
    """Build the AlignedTranscript from resolver output and paragraph metadata.

    Args:
        aligned_words: One AlignedWord per corrected word, in order.
        corrected: The parsed corrected transcript (paragraph ranges).
        source_paragraphs: Machine paragraphs for speaker inheritance;
            None or empty disables inheritance.
        stats: Alignment operation counts to carry into the result.

    Returns:
        AlignedTranscript ready for formatters.
    """
    words = list(aligned_words)
    paragraphs: List[AlignedParagraph] = []
    timeline = SpeakerTimeline(source_paragraphs or [])

    for target in corrected.paragraphs:
        para_words = words[target.word_start:target.word_end]
        if not para_words:
            continue

        speaker = target.speaker
        if speaker is None and timeline:
            speaker = timeline.speaker_at(para_words[0].start)

        paragraphs.append(AlignedParagraph(
            speaker=speaker,
            start=para_words[0].start,
            end=para_words[-1].end,
            words=para_words,
        ))

    return AlignedTranscript(
        words=words,
        paragraphs=paragraphs,
        text=" ".join(w.text for w in words),
        stats=stats if stats is not None else AlignmentStats(),
    )
