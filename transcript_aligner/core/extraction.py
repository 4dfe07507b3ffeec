"""Machine transcript loading, validation, and word/timing extraction.

WHY: The aligner and the timing resolver copy timing values without
inspecting them. Anything malformed in the machine transcript (negative
times, inverted intervals, NaN) would flow straight into the output, so
this module is the one place that rejects bad input before the core runs.

HOW: The JSON document is validated with jsonschema against the bundled
transcript schema, then checked for constraints JSON Schema cannot
express (finite numbers, start <= end). Valid words become two parallel
lists — texts and TimingIntervals — plus the paragraph time ranges.

RULES:
- Input shape: {words: [{text, start, end}], paragraphs: [{speaker?, start, end}]}
- paragraphs is optional; unknown extra fields are ignored
- Times must be finite, non-negative, and start <= end
- Word text is stripped; words empty after stripping are skipped with
  their timing, so words[i] and timings[i] always belong together
- Any violation raises TranscriptValidationError naming the JSON path
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import jsonschema
from jsonschema.exceptions import best_match

from transcript_aligner.core.ir import SourceParagraph, SourceTranscript, TimingInterval

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "transcript.schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


class TranscriptValidationError(ValueError):
    """Raised when a machine transcript fails validation.

    WHY: Callers (CLI, HTTP API) need a typed exception to report bad
    input distinctly from capacity problems or internal failures.

    HOW: Wraps the JSON path of the offending value and a readable reason.

    RULES:
    - path uses "$.words[3].start" notation ("$" for the document root)
    - Raised before any alignment work starts
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__("Invalid transcript at {}: {}".format(path, message))


def get_schema() -> Dict[str, Any]:
    """Load the transcript JSON schema, cached after the first call."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _format_path(parts: Iterable[Union[str, int]]) -> str:
    path = "$"
    for part in parts:
        if isinstance(part, int):
            path += "[{}]".format(part)
        else:
            path += ".{}".format(part)
    return path


def validate_transcript_dict(data: Any) -> None:
    """Validate a transcript document against the bundled schema.

    Raises:
        TranscriptValidationError: For the most relevant schema violation.
    """
    validator = jsonschema.Draft7Validator(get_schema())
    error = best_match(validator.iter_errors(data))
    if error is not None:
        raise TranscriptValidationError(_format_path(error.absolute_path), error.message)


def _read_time(raw: Dict[str, Any], name: str, path: str) -> float:
    try:
        return float(raw[name])
    except OverflowError:
        raise TranscriptValidationError(
            "{}.{}".format(path, name), "time out of range"
        )


def _check_interval(start: float, end: float, path: str) -> None:
    for name, value in (("start", start), ("end", end)):
        if not math.isfinite(value):
            raise TranscriptValidationError(
                "{}.{}".format(path, name), "time must be a finite number, got {!r}".format(value)
            )
    if end < start:
        raise TranscriptValidationError(
            path, "end ({}) is before start ({})".format(end, start)
        )


def extract_source(data: Dict[str, Any]) -> SourceTranscript:
    """Validate a machine transcript dict and extract words and timings.

    Args:
        data: Parsed machine-transcript JSON.

    Returns:
        SourceTranscript with parallel words/timings and paragraph ranges.

    Raises:
        TranscriptValidationError: If the document is malformed.
    """
    validate_transcript_dict(data)

    words: List[str] = []
    timings: List[TimingInterval] = []
    skipped = 0

    for index, raw in enumerate(data["words"]):
        path = "$.words[{}]".format(index)
        start = _read_time(raw, "start", path)
        end = _read_time(raw, "end", path)
        _check_interval(start, end, path)

        text = raw["text"].strip()
        if not text:
            skipped += 1
            continue
        words.append(text)
        timings.append(TimingInterval(start=start, end=end))

    if skipped:
        logger.debug("Skipped %d empty machine words", skipped)

    paragraphs: List[SourceParagraph] = []
    for index, raw in enumerate(data.get("paragraphs") or []):
        path = "$.paragraphs[{}]".format(index)
        start = _read_time(raw, "start", path)
        end = _read_time(raw, "end", path)
        _check_interval(start, end, path)
        speaker = raw.get("speaker")
        if isinstance(speaker, str):
            speaker = speaker.strip() or None
        paragraphs.append(SourceParagraph(start=start, end=end, speaker=speaker))

    return SourceTranscript(words=words, timings=timings, paragraphs=paragraphs)


def load_source(path: Union[str, Path]) -> SourceTranscript:
    """Read a machine transcript JSON file and extract it.

    Raises:
        FileNotFoundError: If the file does not exist.
        TranscriptValidationError: If the file is not valid JSON or fails
            validation.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TranscriptValidationError(
            "$", "not valid JSON ({} at line {}, column {})".format(exc.msg, exc.lineno, exc.colno)
        )
    return extract_source(data)
