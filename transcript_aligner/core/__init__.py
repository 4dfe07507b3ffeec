"""Alignment engine, timing transfer, and the IR around them.

WHY: The core package holds the stable heart of the aligner — the IR
dataclasses, the edit-distance engine, and the timing resolver — plus the
extraction/parsing/reconstruction steps that feed and drain them.

HOW: ir.py defines the data structures, normalize.py the word comparison,
alignment.py and timing.py the two core operations, extraction.py and
parsing.py the inputs, reconstruction.py and pipeline.py the outputs.

RULES:
- align() and resolve_timing() are pure — no I/O, no logging, no config reads
  beyond their defaults
- Input validation lives in extraction.py, never in the core operations
"""

from transcript_aligner.core.alignment import AlignmentCapacityError, align, edit_distance
from transcript_aligner.core.extraction import TranscriptValidationError, extract_source
from transcript_aligner.core.normalize import normalize_word
from transcript_aligner.core.parsing import parse_corrected_text
from transcript_aligner.core.pipeline import align_transcript
from transcript_aligner.core.timing import resolve_timing

__all__ = [
    "AlignmentCapacityError",
    "TranscriptValidationError",
    "align",
    "align_transcript",
    "edit_distance",
    "extract_source",
    "normalize_word",
    "parse_corrected_text",
    "resolve_timing",
]
