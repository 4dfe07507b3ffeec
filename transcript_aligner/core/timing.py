"""Timing transfer from machine words onto corrected words.

WHY: After alignment, most corrected words have a machine counterpart
whose timing can be copied. Inserted words (present only in the
corrected text) have none, yet every output word needs an interval so
captions and editors can place it on the timeline.

HOW: Three linear passes over the operation sequence:
  1. A backward scan records, for every position, the nearest anchor
     (match/substitute) at or after it; a forward scan records the
     nearest anchor at or before it.
  2. Each operation is resolved: anchors copy their source interval,
     inserts borrow from the next anchor ahead, else the nearest one
     behind, else the fallback interval. Deletes emit nothing.
  3. Consecutive inserted words that borrowed from the same anchor
     have that interval evenly subdivided between them.

RULES:
- match / substitute: exact source interval, never re-derived
- delete: no output word
- insert: look ahead first, then look back, then FALLBACK_INTERVAL
- A run breaks at any non-inserted word or a different anchor; grouping
  is by adjacency, never by comparing interval values globally
- Fallback intervals are not subdivided
- Values are copied or subdivided, never validated
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from transcript_aligner.config import FALLBACK_INTERVAL
from transcript_aligner.core.ir import AlignedWord, AlignmentOp, OpKind, TimingInterval


def _nearest_anchors(
    operations: Sequence[AlignmentOp],
) -> tuple[List[Optional[int]], List[Optional[int]]]:
    """Return (next_anchor, prev_anchor) position lists.

    next_anchor[k] is the index of the first anchor operation at position
    >= k; prev_anchor[k] the last one at position <= k. None when absent.
    """
    count = len(operations)
    next_anchor: List[Optional[int]] = [None] * count
    prev_anchor: List[Optional[int]] = [None] * count

    following: Optional[int] = None
    for k in range(count - 1, -1, -1):
        if operations[k].is_anchor:
            following = k
        next_anchor[k] = following

    preceding: Optional[int] = None
    for k in range(count):
        if operations[k].is_anchor:
            preceding = k
        prev_anchor[k] = preceding

    return next_anchor, prev_anchor


def _subdivide_run(words: List[AlignedWord], first: int, last: int) -> None:
    """Split the shared interval of words[first..last] into equal parts."""
    count = last - first + 1
    if count < 2:
        return
    start = words[first].start
    end = words[first].end
    width = (end - start) / count
    for r in range(count):
        word = words[first + r]
        word.start = start + r * width
        word.end = end if r == count - 1 else start + (r + 1) * width


def resolve_timing(
    operations: Sequence[AlignmentOp],
    source_timings: Sequence[TimingInterval],
    target_words: Sequence[str],
) -> List[AlignedWord]:
    """Assign one timing interval to every non-deleted target word.

    Args:
        operations: Alignment operations in forward order (see align()).
        source_timings: One interval per source word.
        target_words: The corrected words the operations point into.

    Returns:
        AlignedWord list in target order; its length equals the number of
        non-delete operations.
    """
    next_anchor, prev_anchor = _nearest_anchors(operations)

    words: List[AlignedWord] = []
    # Anchor position each output word borrowed from; None for anchors
    # themselves and for fallback words, which never form runs.
    borrowed_from: List[Optional[int]] = []

    for k, op in enumerate(operations):
        if op.kind is OpKind.DELETE:
            continue

        text = target_words[op.target_index]

        if op.is_anchor:
            timing = source_timings[op.source_index]
            words.append(AlignedWord(text=text, start=timing.start, end=timing.end))
            borrowed_from.append(None)
            continue

        anchor = next_anchor[k + 1] if k + 1 < len(operations) else None
        if anchor is None and k > 0:
            anchor = prev_anchor[k - 1]

        if anchor is None:
            start, end = FALLBACK_INTERVAL
        else:
            timing = source_timings[operations[anchor].source_index]
            start, end = timing.start, timing.end
        words.append(AlignedWord(text=text, start=start, end=end))
        borrowed_from.append(anchor)

    _split_shared_intervals(words, borrowed_from)
    return words


def _split_shared_intervals(
    words: List[AlignedWord],
    borrowed_from: List[Optional[int]],
) -> None:
    """Subdivide each adjacent run of words that borrowed the same anchor."""
    run_start = 0
    for k in range(1, len(words) + 1):
        if (
            k < len(words)
            and borrowed_from[k] is not None
            and borrowed_from[k] == borrowed_from[run_start]
        ):
            continue
        if borrowed_from[run_start] is not None:
            _subdivide_run(words, run_start, k - 1)
        run_start = k
