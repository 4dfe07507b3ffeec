"""End-to-end alignment: machine transcript + corrected text → timed transcript.

WHY: The CLI and the HTTP API run exactly the same sequence of steps.
Keeping it in one function means both surfaces log, validate, and
enforce the capacity limit identically.

HOW: align() the machine words against the corrected words, transfer
timing with resolve_timing(), then reconstruct() paragraphs and
speakers. Operation counts are logged once per run.

RULES:
- Inputs are already extracted/parsed (see extraction.py, parsing.py)
- The capacity ceiling is checked before any table is built
- Speaker inheritance defaults to config.INHERIT_SOURCE_SPEAKERS
"""

from __future__ import annotations

import logging
from typing import Optional

from transcript_aligner.config import INHERIT_SOURCE_SPEAKERS, MAX_ALIGNMENT_WORDS
from transcript_aligner.core.alignment import align, summarize
from transcript_aligner.core.ir import AlignedTranscript, CorrectedTranscript, SourceTranscript
from transcript_aligner.core.reconstruction import reconstruct
from transcript_aligner.core.timing import resolve_timing

logger = logging.getLogger(__name__)


def align_transcript(
    source: SourceTranscript,
    corrected: CorrectedTranscript,
    max_words: Optional[int] = MAX_ALIGNMENT_WORDS,
    inherit_speakers: bool = INHERIT_SOURCE_SPEAKERS,
) -> AlignedTranscript:
    """Transfer timing from a machine transcript onto corrected text.

    Args:
        source: Extracted machine transcript.
        corrected: Parsed corrected transcript.
        max_words: Per-sequence alignment ceiling; None disables it.
        inherit_speakers: Fill missing speaker labels from machine paragraphs.

    Returns:
        The corrected transcript with word and paragraph timing.

    Raises:
        AlignmentCapacityError: If either word list exceeds max_words.
    """
    operations = align(source.words, corrected.words, max_words=max_words)
    stats = summarize(operations)
    logger.info(
        "Aligned %d machine words to %d corrected words: "
        "%d matched, %d substituted, %d inserted, %d deleted",
        len(source.words),
        len(corrected.words),
        stats.matches,
        stats.substitutions,
        stats.insertions,
        stats.deletions,
    )

    aligned_words = resolve_timing(operations, source.timings, corrected.words)

    return reconstruct(
        aligned_words,
        corrected,
        source_paragraphs=source.paragraphs if inherit_speakers else None,
        stats=stats,
    )
