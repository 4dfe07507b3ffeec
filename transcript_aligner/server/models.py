"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: One request model for POST /alignments, response models for each
endpoint, and an enum for the closed set of output formats. All models
include Field descriptions for rich OpenAPI docs.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- OutputFormat values match keys in transcript_aligner.formatters.FORMATTERS
- The machine transcript is accepted as a raw dict; its structure is
  validated by extraction.py (jsonschema), not by pydantic
- Python 3.9+ compatible (use Optional from typing in models)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Available output format identifiers."""

    json = "json"
    plain_text = "plain_text"
    html = "html"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class AlignmentRequest(BaseModel):
    """Machine transcript plus corrected text to align."""

    transcript: Dict[str, Any] = Field(
        description=(
            "Machine transcript JSON: {words: [{text, start, end}], "
            "paragraphs: [{speaker?, start, end}]}."
        ),
    )
    corrected_text: str = Field(
        description=(
            "Corrected plain text. Paragraphs separated by newlines; optional "
            "speaker labels '[Name]:', '[Name]' or 'Name:'."
        ),
    )
    formats: Optional[List[OutputFormat]] = Field(
        default=None,
        description="Output formats to render. Defaults to none (structured result only).",
    )
    max_words: Optional[int] = Field(
        default=None,
        ge=1,
        description="Per-transcript word limit. Defaults to the server's ALIGNER_MAX_WORDS.",
    )
    inherit_speakers: Optional[bool] = Field(
        default=None,
        description="Fill missing speaker labels from machine paragraphs. Defaults to server config.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "transcript": {
                    "words": [
                        {"text": "Hello", "start": 0.0, "end": 0.4},
                        {"text": "word", "start": 0.5, "end": 0.9},
                    ],
                    "paragraphs": [{"speaker": "Alice", "start": 0.0, "end": 0.9}],
                },
                "corrected_text": "Alice: Hello, world.",
                "formats": ["plain_text"],
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class WordTiming(BaseModel):
    text: str = Field(description="Corrected word text.")
    start: float = Field(description="Start time in seconds.")
    end: float = Field(description="End time in seconds.")


class ParagraphTiming(BaseModel):
    speaker: Optional[str] = Field(default=None, description="Speaker label, if known.")
    start: float = Field(description="Start of the paragraph's first word (seconds).")
    end: float = Field(description="End of the paragraph's last word (seconds).")
    text: str = Field(description="Paragraph text.")


class AlignmentStatsModel(BaseModel):
    matches: int = Field(description="Words identical after normalization.")
    substitutions: int = Field(description="Corrected words replacing a machine word.")
    insertions: int = Field(description="Corrected words with no machine counterpart.")
    deletions: int = Field(description="Machine words removed by the correction.")
    edit_distance: int = Field(description="substitutions + insertions + deletions.")


class AlignmentResponse(BaseModel):
    """Timed corrected transcript with optional rendered outputs."""

    words: List[WordTiming] = Field(description="Corrected words with transferred timing.")
    paragraphs: List[ParagraphTiming] = Field(description="Corrected paragraphs with timing.")
    text: str = Field(description="All corrected words joined by spaces.")
    stats: AlignmentStatsModel = Field(description="Alignment operation counts.")
    outputs: Dict[str, str] = Field(
        default_factory=dict,
        description="Rendered file content keyed by requested format.",
    )


class FormatInfo(BaseModel):
    key: str = Field(description="Format identifier used in requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix the CLI appends to the output stem.")


class HealthResponse(BaseModel):
    status: str = Field(description="Service status, always 'ok' when reachable.")
    version: str = Field(description="Package version.")


class ErrorResponse(BaseModel):
    detail: str = Field(description="Human-readable error description.")
