"""Interactive-transcript HTML formatter.

WHY: Web players highlight the current word while media plays. They need
markup where every word carries its own timing and every paragraph its
speaker and time range.

HOW: One <p> per paragraph with data-start/data-end (and data-speaker
when known); an optional <strong class="speaker"> label; one <span> per
word with data-start/data-end. All text is HTML-escaped.

RULES:
- Times are written in seconds with millisecond precision
- Words are separated by a single space inside the paragraph
- Output is a fragment wrapped in <article class="transcript">, not a page
- Output suffix: "-aligned.html"
"""

from __future__ import annotations

from html import escape
from typing import List

from transcript_aligner.core.ir import AlignedParagraph, AlignedTranscript
from transcript_aligner.formatters.base import BaseFormatter, FormatterOutput


def _seconds(value: float) -> str:
    return "{:.3f}".format(value)


def _paragraph_html(paragraph: AlignedParagraph) -> str:
    attrs = 'data-start="{}" data-end="{}"'.format(
        _seconds(paragraph.start), _seconds(paragraph.end),
    )
    parts: List[str] = []
    if paragraph.speaker:
        attrs += ' data-speaker="{}"'.format(escape(paragraph.speaker, quote=True))
        parts.append('<strong class="speaker">{}:</strong>'.format(escape(paragraph.speaker)))

    for word in paragraph.words:
        parts.append('<span data-start="{}" data-end="{}">{}</span>'.format(
            _seconds(word.start), _seconds(word.end), escape(word.text),
        ))

    return "  <p {}>{}</p>".format(attrs, " ".join(parts))


class HtmlTranscriptFormatter(BaseFormatter):
    """Formatter that produces word-timed HTML markup."""

    @property
    def name(self) -> str:
        return "Interactive HTML"

    @property
    def suffix(self) -> str:
        return "-aligned.html"

    def format(self, transcript: AlignedTranscript) -> List[FormatterOutput]:
        lines = ['<article class="transcript">']
        lines.extend(_paragraph_html(p) for p in transcript.paragraphs)
        lines.append("</article>")

        return [
            FormatterOutput(
                suffix=self.suffix,
                content="\n".join(lines) + "\n",
                media_type="text/html",
            )
        ]
