"""Aligned transcript JSON formatter.

WHY: Downstream tools (caption builders, editors, the aligner itself on a
second pass) consume the same JSON shape the machine transcript arrived
in. Emitting that shape makes the corrected transcript a drop-in
replacement for the original.

HOW: AlignedTranscript.to_dict() plus the alignment stats, validated
against the bundled transcript schema before returning.

RULES:
- Top-level keys: words, paragraphs, text, stats
- Paragraph speaker is omitted when unknown
- Validate output against the schema; raise on failure
- Output suffix: "-aligned.json"
"""

from __future__ import annotations

import json
from typing import Any

import jsonschema

from transcript_aligner.core.extraction import get_schema
from transcript_aligner.core.ir import AlignedTranscript
from transcript_aligner.formatters.base import BaseFormatter, FormatterOutput


class JsonTranscriptFormatter(BaseFormatter):
    """Formatter that produces word- and paragraph-timed JSON."""

    @property
    def name(self) -> str:
        return "Aligned JSON"

    @property
    def suffix(self) -> str:
        return "-aligned.json"

    def format(self, transcript: AlignedTranscript) -> list[FormatterOutput]:
        """Convert the AlignedTranscript into JSON.

        Raises:
            jsonschema.ValidationError: If the generated JSON does not
                conform to the transcript schema.
        """
        output: dict[str, Any] = transcript.to_dict()
        output["stats"] = transcript.stats.to_dict()

        jsonschema.validate(instance=output, schema=get_schema())

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=json.dumps(output, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
