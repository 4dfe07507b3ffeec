"""Shared test fixtures for the transcript_aligner test suite.

WHY: Several test modules need the same small interview: a machine
transcript with a misheard word and a corrected text that fixes it, adds
a missing word, and labels the first speaker. Centralizing it keeps the
expected values in one place.

HOW: Pytest fixtures provide the raw machine JSON dict, the corrected
text, and files written to tmp_path for CLI tests.

RULES:
- Machine word "whether" is a mishearing of "weather" (substitution)
- Corrected text adds "will" (insertion borrowing "talk" timing)
- First paragraph is labeled "[Alice]:"; the second has no label and
  inherits "Speaker 2" from the machine paragraphs
"""

import json
from typing import Any, Dict, List

import pytest


MACHINE_WORDS: List[Dict[str, Any]] = [
    {"text": "Welcome", "start": 0.0, "end": 0.5},
    {"text": "to",      "start": 0.5, "end": 0.7},
    {"text": "the",     "start": 0.7, "end": 0.8},
    {"text": "show.",   "start": 0.8, "end": 1.2},
    {"text": "Today",   "start": 2.0, "end": 2.4},
    {"text": "we",      "start": 2.4, "end": 2.6},
    {"text": "talk",    "start": 2.6, "end": 3.0},
    {"text": "about",   "start": 3.0, "end": 3.3},
    {"text": "whether", "start": 3.3, "end": 3.8},
]

MACHINE_PARAGRAPHS: List[Dict[str, Any]] = [
    {"speaker": "Speaker 1", "start": 0.0, "end": 1.2},
    {"speaker": "Speaker 2", "start": 2.0, "end": 3.8},
]

CORRECTED_TEXT = "[Alice]: Welcome to the show!\n\nToday we will talk about weather.\n"


@pytest.fixture
def machine_transcript():
    """Machine transcript JSON dict with two speaker paragraphs."""
    return {
        "words": [dict(w) for w in MACHINE_WORDS],
        "paragraphs": [dict(p) for p in MACHINE_PARAGRAPHS],
    }


@pytest.fixture
def corrected_text():
    return CORRECTED_TEXT


@pytest.fixture
def transcript_files(tmp_path, machine_transcript, corrected_text):
    """Write the sample pair to disk; returns (machine_path, corrected_path)."""
    machine_path = tmp_path / "episode.json"
    machine_path.write_text(json.dumps(machine_transcript), encoding="utf-8")
    corrected_path = tmp_path / "episode.txt"
    corrected_path.write_text(corrected_text, encoding="utf-8")
    return machine_path, corrected_path
