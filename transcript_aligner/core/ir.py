"""Intermediate representation dataclasses for transcript alignment.

WHY: Extraction, parsing, alignment, timing transfer, reconstruction and
formatting each need a different view of the same two transcripts. A
small set of well-typed dataclasses lets every stage hand off to the
next without passing loose dicts around.

HOW: Three groups of dataclasses:
  Inputs   — SourceTranscript (machine words + timings + paragraphs),
             CorrectedTranscript (corrected words + paragraph ranges)
  Core     — TimingInterval, OpKind, AlignmentOp, AlignedWord
  Outputs  — AlignedParagraph, AlignmentStats, AlignedTranscript

RULES:
- All times are float seconds
- TimingInterval is frozen: source timing is immutable after extraction
- AlignmentOp indices are None exactly where the kind has no counterpart
  (source_index for insert, target_index for delete)
- AlignedWord is only constructed by the timing resolver
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OpKind(str, Enum):
    """Kind of one edit operation turning the source into the target."""

    MATCH = "match"
    SUBSTITUTE = "substitute"
    INSERT = "insert"
    DELETE = "delete"


@dataclass(frozen=True)
class TimingInterval:
    """A (start, end) pair in seconds.

    Values are copied as given; validation belongs to extraction.
    """

    start: float
    end: float


@dataclass(frozen=True)
class AlignmentOp:
    """One step of an edit-distance alignment.

    RULES:
    - match / substitute: both indices set
    - insert: source_index is None (target word has no source counterpart)
    - delete: target_index is None (source word is dropped)
    """

    kind: OpKind
    source_index: int | None = None
    target_index: int | None = None

    @property
    def is_anchor(self) -> bool:
        """True for operations that carry a source timing onto the target."""
        return self.kind in (OpKind.MATCH, OpKind.SUBSTITUTE)


@dataclass
class AlignedWord:
    """A corrected word with its transferred timing."""

    text: str
    start: float
    end: float

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "start": self.start, "end": self.end}


@dataclass
class SourceParagraph:
    """A paragraph of the machine transcript, by time range."""

    start: float
    end: float
    speaker: str | None = None


@dataclass
class SourceTranscript:
    """Machine transcript reduced to what the aligner needs.

    RULES:
    - words and timings are parallel: timings[i] belongs to words[i]
    - paragraphs may be empty when the machine JSON carries none
    """

    words: list[str]
    timings: list[TimingInterval]
    paragraphs: list[SourceParagraph] = field(default_factory=list)


@dataclass
class TargetParagraph:
    """A paragraph of the corrected text as a half-open word index range."""

    word_start: int
    word_end: int
    speaker: str | None = None


@dataclass
class CorrectedTranscript:
    """Corrected plain text split into words and paragraph ranges.

    RULES:
    - words excludes speaker labels
    - paragraphs cover words in order without gaps or overlap
    """

    words: list[str]
    paragraphs: list[TargetParagraph] = field(default_factory=list)


@dataclass
class AlignmentStats:
    """Operation counts for one alignment."""

    matches: int = 0
    substitutions: int = 0
    insertions: int = 0
    deletions: int = 0

    @property
    def edit_distance(self) -> int:
        return self.substitutions + self.insertions + self.deletions

    def to_dict(self) -> dict[str, int]:
        return {
            "matches": self.matches,
            "substitutions": self.substitutions,
            "insertions": self.insertions,
            "deletions": self.deletions,
            "edit_distance": self.edit_distance,
        }


@dataclass
class AlignedParagraph:
    """A reconstructed paragraph with speaker and first/last word timing."""

    speaker: str | None
    start: float
    end: float
    words: list[AlignedWord] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(w.text for w in self.words)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.speaker is not None:
            result["speaker"] = self.speaker
        result["start"] = self.start
        result["end"] = self.end
        result["text"] = self.text
        return result


@dataclass
class AlignedTranscript:
    """The complete corrected transcript with transferred timing.

    WHY: This is the top-level container that formatters receive. Its
    dict form mirrors the machine transcript JSON so an aligned result can
    be fed back into the pipeline.
    """

    words: list[AlignedWord]
    paragraphs: list[AlignedParagraph]
    text: str
    stats: AlignmentStats = field(default_factory=AlignmentStats)

    def to_dict(self) -> dict[str, Any]:
        return {
            "words": [w.to_dict() for w in self.words],
            "paragraphs": [p.to_dict() for p in self.paragraphs],
            "text": self.text,
        }
