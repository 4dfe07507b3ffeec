"""Output formatter registry — pluggable format hub.

WHY: The CLI and API layers need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["json"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API requests)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from transcript_aligner.formatters.html_transcript import HtmlTranscriptFormatter
from transcript_aligner.formatters.json_transcript import JsonTranscriptFormatter
from transcript_aligner.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from transcript_aligner.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "json": JsonTranscriptFormatter,
    "plain_text": PlainTextFormatter,
    "html": HtmlTranscriptFormatter,
}
