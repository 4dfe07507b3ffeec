"""Plain text transcript formatter with speaker-labeled paragraphs.

WHY: Editors need a simple, readable transcript for review — no JSON,
no timecodes, just the corrected text grouped into paragraphs. The
layout is also valid corrected-text input, so a reviewed file can be
fed straight back into the aligner.

HOW: One block per paragraph. When the paragraph has a speaker, a
"Name:" header goes on its own line above the text. Blocks are
separated by a blank line. A header is only written when the corrected
text parser reads it back as the same speaker.

RULES:
- Header format: "Name:" on its own line, text on the next line
- Paragraphs without a speaker get no header
- Speakers the parser cannot recognize as a label (more than 6 words,
  or containing ":", "[" or "]") get no header either
- Double newline between paragraphs, single trailing newline
- Output suffix: "-aligned.txt"
"""

from __future__ import annotations

import logging
from typing import List, Optional

from transcript_aligner.core.ir import AlignedTranscript
from transcript_aligner.core.parsing import split_speaker_label
from transcript_aligner.formatters.base import BaseFormatter, FormatterOutput

logger = logging.getLogger(__name__)


def _speaker_header(speaker: Optional[str]) -> Optional[str]:
    if not speaker:
        return None
    header = "{}:".format(speaker)
    if split_speaker_label(header) != (speaker, ""):
        logger.debug("Speaker %r cannot be written as a label header", speaker)
        return None
    return header


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces speaker-labeled plain text paragraphs."""

    @property
    def name(self) -> str:
        return "Plain Text"

    @property
    def suffix(self) -> str:
        return "-aligned.txt"

    def format(self, transcript: AlignedTranscript) -> List[FormatterOutput]:
        blocks: List[str] = []
        for paragraph in transcript.paragraphs:
            header = _speaker_header(paragraph.speaker)
            if header:
                blocks.append("{}\n{}".format(header, paragraph.text))
            else:
                blocks.append(paragraph.text)

        content = "\n\n".join(blocks)
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=content,
                media_type="text/plain",
            )
        ]
