"""Command-line interface for the Transcript Aligner.

WHY: Users need a simple way to carry timing from a machine transcript
onto a corrected text file from the terminal. The CLI wires together the
full pipeline — machine JSON extraction, corrected text parsing,
alignment, timing transfer, reconstruction, pluggable formatter output,
and file saving — behind a single command.

HOW: Uses argparse to accept the machine transcript and the corrected
text, an output format selection, an output directory, and the alignment
ceiling. Status messages go to stderr; output files are saved next to the
corrected text file (or to --output-dir).

RULES:
- Positional arguments: machine transcript JSON, corrected text file
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, stem from the corrected text file,
  numeric suffix for conflicts (-aligned-2.json)
- Status output goes to stderr (not stdout)
- Exit codes: 0 success, 1 bad input or capacity exceeded, 130 interrupted
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from transcript_aligner.config import INHERIT_SOURCE_SPEAKERS, LOG_LEVEL, MAX_ALIGNMENT_WORDS
from transcript_aligner.core.extraction import load_source
from transcript_aligner.core.parsing import load_corrected
from transcript_aligner.core.pipeline import align_transcript
from transcript_aligner.formatters import FORMATTERS
from transcript_aligner.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    WHY: Users may run the aligner multiple times on the same file.
    Overwriting previous output would lose work.

    RULES:
    - First attempt: {stem}{suffix} (e.g. episode-aligned.json)
    - Conflict: insert a counter before the extension
      (e.g. episode-aligned-2.json), starting at 2
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _parse_format_keys(raw: Optional[str]) -> List[str]:
    """Split and validate the --formats value.

    Raises:
        ValueError: If a key is not a registered formatter.
    """
    if not raw:
        return list(FORMATTERS.keys())
    keys = [k.strip() for k in raw.split(",") if k.strip()]
    for key in keys:
        if key not in FORMATTERS:
            raise ValueError("Unknown format '{}'. Available formats: {}".format(
                key, ", ".join(sorted(FORMATTERS.keys())),
            ))
    return keys


def run(args: argparse.Namespace) -> List[Path]:
    """Run the alignment pipeline for parsed CLI arguments.

    Returns:
        Paths of the saved output files.
    """
    machine_path = Path(args.machine_transcript)
    corrected_path = Path(args.corrected_text)
    format_keys = _parse_format_keys(args.formats)

    output_dir = Path(args.output_dir) if args.output_dir else corrected_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)

    max_words: Optional[int] = args.max_words if args.max_words and args.max_words > 0 else None

    _status("Loading machine transcript: {}".format(machine_path.name))
    source = load_source(machine_path)
    _status("  {} words, {} paragraphs".format(len(source.words), len(source.paragraphs)))

    _status("Loading corrected text: {}".format(corrected_path.name))
    corrected = load_corrected(corrected_path)
    _status("  {} words, {} paragraphs".format(len(corrected.words), len(corrected.paragraphs)))

    _status("Aligning...")
    transcript = align_transcript(
        source,
        corrected,
        max_words=max_words,
        inherit_speakers=args.speaker_inheritance,
    )
    stats = transcript.stats
    _status("  {} matched, {} substituted, {} inserted, {} deleted".format(
        stats.matches, stats.substitutions, stats.insertions, stats.deletions,
    ))

    _status("Formatting output...")
    saved: List[Path] = []
    stem = corrected_path.stem
    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(transcript):
            path = _save_output(output, stem, output_dir)
            saved.append(path)
            _status("  Saved: {}".format(path.name))

    _status("Done! Saved {} file(s) to {}".format(len(saved), output_dir))
    return saved


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="transcript_aligner",
        description="Transfer word timing from a machine transcript (JSON) onto "
                    "corrected plain text and write timed output formats.",
    )

    parser.add_argument(
        "machine_transcript",
        help="Path to the timestamped machine transcript JSON.",
    )

    parser.add_argument(
        "corrected_text",
        help="Path to the corrected plain text transcript.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: next to the corrected text).",
    )

    parser.add_argument(
        "--max-words",
        type=int,
        default=MAX_ALIGNMENT_WORDS or 0,
        help="Maximum words per transcript before refusing to align; "
             "0 disables the limit (default: %(default)s).",
    )

    parser.add_argument(
        "--speaker-inheritance",
        action=argparse.BooleanOptionalAction,
        default=INHERIT_SOURCE_SPEAKERS,
        help="Fill missing speaker labels from the machine transcript "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except (ValueError, OSError) as e:
        # Bad input, capacity exceeded, missing files
        logger.debug("Alignment failed", exc_info=True)
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
