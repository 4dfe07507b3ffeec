"""Edit-distance alignment between machine and corrected word sequences.

WHY: Timing can only move from the machine transcript to the corrected
one if we know which corrected word corresponds to which machine word.
A minimum edit-distance alignment gives that correspondence for the
local edits a human correction pass makes: fixing a misheard word
(substitute), adding a missed word (insert), dropping a hallucinated one
(delete).

HOW: Classic dynamic programming over an explicit (N+1) x (M+1) cost
table, filled iteratively row by row. Words are compared in normalized
form (see normalize.py). A single backtrack from (N, M) to (0, 0)
recovers one minimum-cost path, which is then reversed into forward
order.

RULES:
- Row 0 and column 0 hold the cumulative insert-all / delete-all costs
- Equal words: cell = diagonal (no cost added); otherwise
  1 + min(diagonal, up, left)
- Backtrack tie-break is fixed: match > substitute > delete > insert
- Empty inputs are valid and produce all-insert or all-delete sequences
- Each sequence length is checked against max_words BEFORE the table is
  allocated; exceeding it raises AlignmentCapacityError
- Pure function: no I/O, no shared state, safe to call concurrently
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from transcript_aligner.config import MAX_ALIGNMENT_WORDS
from transcript_aligner.core.ir import AlignmentOp, AlignmentStats, OpKind
from transcript_aligner.core.normalize import normalize_words


class AlignmentCapacityError(ValueError):
    """Raised when a word sequence exceeds the configured alignment ceiling.

    WHY: The cost table is O(N*M) in memory. Two 5000-word sequences
    already need 25M cells; larger inputs should be split by the caller
    rather than silently exhausting memory.

    HOW: Raised by align() before any allocation happens.

    RULES:
    - Message includes both sequence lengths and the limit
    - Subclasses ValueError so callers handling bad input catch it too
    """

    def __init__(self, source_words: int, target_words: int, max_words: int) -> None:
        self.source_words = source_words
        self.target_words = target_words
        self.max_words = max_words
        super().__init__(
            "Alignment input too large ({:,} source words, {:,} target words; "
            "limit is {:,} words per sequence). Split the transcript into "
            "smaller sections or raise ALIGNER_MAX_WORDS.".format(
                source_words, target_words, max_words,
            )
        )


def check_capacity(
    source_len: int,
    target_len: int,
    max_words: Optional[int] = MAX_ALIGNMENT_WORDS,
) -> None:
    """Raise AlignmentCapacityError if either length exceeds max_words.

    A max_words of None disables the check.
    """
    if max_words is None:
        return
    if source_len > max_words or target_len > max_words:
        raise AlignmentCapacityError(source_len, target_len, max_words)


def _build_cost_table(source: List[str], target: List[str]) -> List[List[int]]:
    """Fill the edit-distance table for two normalized word lists."""
    n = len(source)
    m = len(target)

    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n + 1):
        table[i][0] = i
    for j in range(m + 1):
        table[0][j] = j

    for i in range(1, n + 1):
        src = source[i - 1]
        row = table[i]
        prev_row = table[i - 1]
        for j in range(1, m + 1):
            if src == target[j - 1]:
                row[j] = prev_row[j - 1]
            else:
                row[j] = 1 + min(prev_row[j - 1], prev_row[j], row[j - 1])

    return table


def _backtrack(
    table: List[List[int]],
    source: List[str],
    target: List[str],
) -> List[AlignmentOp]:
    """Walk the cost table from (N, M) back to (0, 0).

    HOW: At each cell the first applicable move wins, in this order:
      1. match      — words equal and cost equals the diagonal
      2. substitute — cost equals diagonal + 1
      3. delete     — cost equals the cell above + 1
      4. insert     — everything else (cost equals the cell to the left + 1)
    Row 0 can only insert and column 0 can only delete.
    """
    ops: List[AlignmentOp] = []
    i = len(source)
    j = len(target)

    while i > 0 or j > 0:
        cost = table[i][j]
        if i > 0 and j > 0:
            diagonal = table[i - 1][j - 1]
            if source[i - 1] == target[j - 1] and cost == diagonal:
                ops.append(AlignmentOp(OpKind.MATCH, i - 1, j - 1))
                i -= 1
                j -= 1
                continue
            if cost == diagonal + 1:
                ops.append(AlignmentOp(OpKind.SUBSTITUTE, i - 1, j - 1))
                i -= 1
                j -= 1
                continue
        if i > 0 and (j == 0 or cost == table[i - 1][j] + 1):
            ops.append(AlignmentOp(OpKind.DELETE, source_index=i - 1))
            i -= 1
        else:
            ops.append(AlignmentOp(OpKind.INSERT, target_index=j - 1))
            j -= 1

    ops.reverse()
    return ops


def align(
    source_words: Sequence[str],
    target_words: Sequence[str],
    max_words: Optional[int] = MAX_ALIGNMENT_WORDS,
) -> List[AlignmentOp]:
    """Compute a minimum edit-distance alignment from source to target.

    Args:
        source_words: Machine transcript words, in order.
        target_words: Corrected transcript words, in order.
        max_words: Per-sequence ceiling; None disables the check.

    Returns:
        Operations in forward order. Non-delete target indices run
        0..M-1 and non-insert source indices run 0..N-1, each exactly once.

    Raises:
        AlignmentCapacityError: If either sequence is longer than max_words.
    """
    check_capacity(len(source_words), len(target_words), max_words)

    source = normalize_words(source_words)
    target = normalize_words(target_words)

    table = _build_cost_table(source, target)
    return _backtrack(table, source, target)


def edit_distance(
    source_words: Sequence[str],
    target_words: Sequence[str],
    max_words: Optional[int] = MAX_ALIGNMENT_WORDS,
) -> int:
    """Minimum number of substitutions, insertions and deletions."""
    check_capacity(len(source_words), len(target_words), max_words)
    table = _build_cost_table(normalize_words(source_words), normalize_words(target_words))
    return table[-1][-1]


def summarize(operations: Sequence[AlignmentOp]) -> AlignmentStats:
    """Count operations by kind."""
    stats = AlignmentStats()
    for op in operations:
        if op.kind is OpKind.MATCH:
            stats.matches += 1
        elif op.kind is OpKind.SUBSTITUTE:
            stats.substitutions += 1
        elif op.kind is OpKind.INSERT:
            stats.insertions += 1
        else:
            stats.deletions += 1
    return stats


def alignment_cost(operations: Sequence[AlignmentOp]) -> int:
    """Number of non-match operations, i.e. the edit distance of the path."""
    return summarize(operations).edit_distance
