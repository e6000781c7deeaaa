"""
Longest Common Subsequence engine.

Classic O(n·m) dynamic-programming table with backtracking. The common
prefix and suffix of the two inputs are matched up front and excluded from
the table; this leaves the LCS length unchanged and makes the usual
single-edit diff of a large file linear.

Backtracking runs from the end of both sequences. On a tie it steps in ``b``
first, so the reconstruction is deterministic for identical inputs and a
run of non-common tokens always reads deletes before inserts.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum


class OpCode(StrEnum):
    EQUAL = "equal"
    DELETE = "delete"  # present only in a
    INSERT = "insert"  # present only in b


@dataclass(frozen=True, slots=True)
class EditOp:
    """One step of an edit script; indices point into ``a`` and ``b``."""

    op: OpCode
    a_index: int | None
    b_index: int | None


def _common_affixes(a: Sequence[str], b: Sequence[str]) -> tuple[int, int]:
    """Return (prefix, suffix) lengths shared by a and b, never overlapping."""
    n, m = len(a), len(b)
    prefix = 0
    limit = min(n, m)
    while prefix < limit and a[prefix] == b[prefix]:
        prefix += 1
    suffix = 0
    limit -= prefix
    while suffix < limit and a[n - 1 - suffix] == b[m - 1 - suffix]:
        suffix += 1
    return prefix, suffix


def _build_table(a: Sequence[str], b: Sequence[str]) -> list[list[int]]:
    rows, cols = len(a), len(b)
    dp = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(1, rows + 1):
        token = a[i - 1]
        prev = dp[i - 1]
        cur = dp[i]
        for j in range(1, cols + 1):
            if token == b[j - 1]:
                cur[j] = prev[j - 1] + 1
            else:
                up, left = prev[j], cur[j - 1]
                cur[j] = up if up > left else left
    return dp


def _align_middle(
    a: Sequence[str], b: Sequence[str], a_offset: int, b_offset: int
) -> list[EditOp]:
    dp = _build_table(a, b)
    ops: list[EditOp] = []
    i, j = len(a), len(b)
    while i > 0 and j > 0:
        if a[i - 1] == b[j - 1]:
            ops.append(EditOp(OpCode.EQUAL, a_offset + i - 1, b_offset + j - 1))
            i -= 1
            j -= 1
        elif dp[i - 1][j] > dp[i][j - 1]:
            ops.append(EditOp(OpCode.DELETE, a_offset + i - 1, None))
            i -= 1
        else:
            ops.append(EditOp(OpCode.INSERT, None, b_offset + j - 1))
            j -= 1
    while j > 0:
        ops.append(EditOp(OpCode.INSERT, None, b_offset + j - 1))
        j -= 1
    while i > 0:
        ops.append(EditOp(OpCode.DELETE, a_offset + i - 1, None))
        i -= 1
    ops.reverse()
    return ops


def align(a: Sequence[str], b: Sequence[str]) -> list[EditOp]:
    """
    Compute a minimal edit script turning ``a`` into ``b``.

    Returns:
        EditOps in sequence order. The EQUAL ops, in order, are the LCS.
    """
    prefix, suffix = _common_affixes(a, b)
    n, m = len(a), len(b)

    ops = [EditOp(OpCode.EQUAL, k, k) for k in range(prefix)]
    ops.extend(
        _align_middle(a[prefix : n - suffix], b[prefix : m - suffix], prefix, prefix)
    )
    ops.extend(
        EditOp(OpCode.EQUAL, n - suffix + k, m - suffix + k) for k in range(suffix)
    )
    return ops


def compute_lcs(a: Sequence[str], b: Sequence[str]) -> list[str]:
    """Return the longest common subsequence of two token sequences."""
    if not a or not b:
        return []
    return [a[op.a_index] for op in align(a, b) if op.op is OpCode.EQUAL]


def lcs_length(a: Sequence[str], b: Sequence[str]) -> int:
    """LCS length only, using two rolling rows instead of the full table."""
    prefix, suffix = _common_affixes(a, b)
    a = a[prefix : len(a) - suffix]
    b = b[prefix : len(b) - suffix]
    if len(b) > len(a):
        a, b = b, a
    if not b:
        return prefix + suffix

    prev = [0] * (len(b) + 1)
    for token in a:
        cur = [0] * (len(b) + 1)
        for j in range(1, len(b) + 1):
            if token == b[j - 1]:
                cur[j] = prev[j - 1] + 1
            else:
                up, left = prev[j], cur[j - 1]
                cur[j] = up if up > left else left
        prev = cur
    return prefix + suffix + prev[-1]
