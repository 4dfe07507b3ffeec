"""Corrected plain text parsing into words, paragraphs, and speakers.

WHY: Human correctors edit plain text, not JSON. They keep paragraph
breaks and often prefix a paragraph with who is speaking. The aligner
needs the flat word list; reconstruction needs to know which words form
which paragraph and under which speaker.

HOW: Split the text on newlines, drop blank lines, and look for a
speaker label at the start of each remaining line. The rest of the line
is split on whitespace into words. Each paragraph records the half-open
index range of its words in the flat list.

RULES:
- Paragraphs are separated by one or more newlines
- Speaker label forms: "[Name]:", "[Name]", "Name:" — Name is 1-6 words
- "Name:" requires whitespace or end of line after the colon, so "10:30"
  is not a label; name words may not contain "[", "]" or ":"
- Labels are not part of the target words
- A label-only line applies its speaker to the next paragraph with words
- Lines with no words produce no paragraph
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from transcript_aligner.core.ir import CorrectedTranscript, TargetParagraph

_NAME_WORDS = r"[^\s:\[\]]+(?:[ \t]+[^\s:\[\]]+){0,5}"

_BRACKET_LABEL_RE = re.compile(r"^\[\s*(" + _NAME_WORDS + r")\s*\]:?(?:\s+|$)")
_COLON_LABEL_RE = re.compile(r"^(" + _NAME_WORDS + r"):(?:\s+|$)")

_PARAGRAPH_SPLIT_RE = re.compile(r"\n+")


def split_speaker_label(line: str) -> Tuple[Optional[str], str]:
    """Split a leading speaker label off a paragraph line.

    Returns:
        (speaker, remaining text). speaker is None when no label matches.
    """
    stripped = line.strip()
    for pattern in (_BRACKET_LABEL_RE, _COLON_LABEL_RE):
        match = pattern.match(stripped)
        if match:
            return match.group(1), stripped[match.end():].strip()
    return None, stripped


def parse_corrected_text(text: str) -> CorrectedTranscript:
    """Parse corrected plain text into a CorrectedTranscript.

    Args:
        text: Corrected transcript text, one paragraph per line block.

    Returns:
        Flat target word list with paragraph ranges and speakers.
    """
    words: List[str] = []
    paragraphs: List[TargetParagraph] = []
    pending_speaker: Optional[str] = None

    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    for line in _PARAGRAPH_SPLIT_RE.split(normalized):
        if not line.strip():
            continue

        speaker, body = split_speaker_label(line)
        body_words = body.split()

        if not body_words:
            # Label on its own line: applies to the next paragraph
            if speaker is not None:
                pending_speaker = speaker
            continue

        if speaker is None:
            speaker = pending_speaker
        pending_speaker = None

        start = len(words)
        words.extend(body_words)
        paragraphs.append(TargetParagraph(word_start=start, word_end=len(words), speaker=speaker))

    return CorrectedTranscript(words=words, paragraphs=paragraphs)


def load_corrected(path: Union[str, Path]) -> CorrectedTranscript:
    """Read a corrected transcript text file (UTF-8) and parse it."""
    return parse_corrected_text(Path(path).read_text(encoding="utf-8"))
