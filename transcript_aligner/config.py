"""Configuration constants, alignment limits, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The alignment ceiling, the fallback interval, and
the server defaults are plain module-level values,
so operators can tune a deployment with environment variables alone.

HOW: python-dotenv loads the .env file on import. Constants are defined
at module level with environment overrides read once at import time.

RULES:
- ALIGNER_MAX_WORDS caps each word sequence fed to the aligner (0 disables)
- FALLBACK_INTERVAL is the dummy timing for an alignment with no anchors
- PUNCTUATION_CHARS is the trailing-run set stripped during normalization
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer from the environment, raising a clear error if malformed."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "{} must be an integer, got {!r}. Check the .env file.".format(name, raw)
        )


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Alignment
# ---------------------------------------------------------------------------

DEFAULT_MAX_WORDS = 5000
"""Practical per-sequence limit (~25M DP cells at 5000 x 5000)."""

_max_words = _env_int("ALIGNER_MAX_WORDS", DEFAULT_MAX_WORDS)
MAX_ALIGNMENT_WORDS: int | None = _max_words if _max_words > 0 else None
"""Enforced ceiling on each sequence length, or None when disabled."""

FALLBACK_INTERVAL: tuple[float, float] = (0.0, 0.1)
"""Timing given to inserted words when the alignment has no match at all."""

PUNCTUATION_CHARS = ".,!?;:'\""
"""Characters stripped as a single trailing run before word comparison."""

INHERIT_SOURCE_SPEAKERS = _env_bool("INHERIT_SOURCE_SPEAKERS", True)

# ---------------------------------------------------------------------------
# Logging and server defaults
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("ALIGNER_LOG_LEVEL", "INFO").upper()
API_HOST = os.getenv("ALIGNER_API_HOST", "0.0.0.0")
API_PORT = _env_int("ALIGNER_API_PORT", 8000)
