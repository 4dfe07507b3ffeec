"""Transcript Aligner — timing transfer from ASR output to corrected text.

WHY: ASR transcripts have accurate word timing but wrong words; a human
correction pass fixes the words but loses the timing. Re-running audio
alignment is slow and needs the audio. This package reconciles the two
text-only: the corrected words inherit the machine words' timing.

HOW: Four-stage pipeline — extract (machine JSON), parse (corrected
text), align + transfer timing (core), format (pluggable formatters).
Each stage is independently testable.

RULES:
- All formatters consume the same AlignedTranscript IR
- The core (align, resolve_timing) is pure and does no I/O
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
