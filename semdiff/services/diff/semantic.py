"""
Semantic line diff: the renderable row list for a file modification.

Pipeline:
  1. Align the two line arrays (LCS) into context lines and change runs.
  2. Inside each run, pair the k-th removed line with the k-th added line
     when their similarity reaches the modification threshold, and attach a
     word-level inline diff to both sides of every accepted pair.
  3. Collapse unchanged stretches, keeping ``context_lines`` rows next to
     each change. Collapsed rows travel inside an ``expand`` marker so the
     renderer can splice them back without recomputing.
"""

from __future__ import annotations

import structlog

from semdiff.schemas.diff import DiffLine, DiffLineType
from semdiff.services.diff.edit_script import (
    ChangeRun,
    pair_run,
    resolve_context_lines,
    resolve_threshold,
    segment_lines,
    validate_inputs,
)
from semdiff.services.diff.inline import compute_inline_diff
from semdiff.services.diff.tokenize import split_lines

_log = structlog.get_logger(__name__)


def _run_rows(
    run: ChangeRun, old_lines: list[str], new_lines: list[str], threshold: float
) -> tuple[list[DiffLine], int]:
    """Removed rows then added rows for one run, plus the number of accepted pairs."""
    inline = {
        k: compute_inline_diff(old_lines[run.removed[k]], new_lines[run.added[k]])
        for k in pair_run(run, old_lines, new_lines, threshold)
    }
    rows = [
        DiffLine(
            type=DiffLineType.REMOVED,
            content=old_lines[index],
            old_line_num=index + 1,
            inline_diff=inline.get(k),
        )
        for k, index in enumerate(run.removed)
    ]
    rows.extend(
        DiffLine(
            type=DiffLineType.ADDED,
            content=new_lines[index],
            new_line_num=index + 1,
            inline_diff=inline.get(k),
        )
        for k, index in enumerate(run.added)
    )
    return rows, len(inline)


class _Collapser:
    """Replaces hidden context rows with numbered expand markers."""

    def __init__(self, context_lines: int) -> None:
        self.context_lines = context_lines
        self.next_index = 0

    def marker(self, hidden: list[DiffLine]) -> list[DiffLine]:
        if not hidden:
            return []
        line = DiffLine(
            type=DiffLineType.EXPAND,
            expand_index=self.next_index,
            hidden_lines=len(hidden),
            hidden_line_data=hidden,
        )
        self.next_index += 1
        return [line]

    def collapse(self, run: list[DiffLine], before: bool, after: bool) -> list[DiffLine]:
        """
        Collapse one maximal context run.

        ``before``/``after`` tell whether a change precedes or follows it.
        """
        keep = self.context_lines
        if not before and not after:
            return self.marker(run)
        if not before:
            split = max(len(run) - keep, 0)
            return self.marker(run[:split]) + run[split:]
        if not after:
            return run[:keep] + self.marker(run[keep:])
        if len(run) <= 2 * keep:
            return run
        return run[:keep] + self.marker(run[keep : len(run) - keep]) + run[len(run) - keep :]


def _collapse_context(rows: list[DiffLine], context_lines: int) -> list[DiffLine]:
    collapser = _Collapser(context_lines)
    output: list[DiffLine] = []
    pending: list[DiffLine] = []
    seen_change = False

    for row in rows:
        if row.type is DiffLineType.CONTEXT:
            pending.append(row)
            continue
        if pending:
            output.extend(collapser.collapse(pending, before=seen_change, after=True))
            pending = []
        seen_change = True
        output.append(row)

    if pending:
        output.extend(collapser.collapse(pending, before=seen_change, after=False))
    return output


def build_semantic_diff_lines(
    original: str,
    modified: str,
    context_lines: int | None = None,
    similarity_threshold: float | None = None,
) -> list[DiffLine]:
    """
    Build the full renderable diff of ``original`` → ``modified``.

    Args:
        original: Content before the change.
        modified: Latest known content after the change.
        context_lines: Unchanged rows kept on each side of a change;
            defaults to the configured ``default_context_lines``.
        similarity_threshold: Pairing threshold override; defaults to the
            configured ``similarity_threshold``.

    Returns:
        DiffLine rows in display order.

    Raises:
        InvalidInputError: texts are not strings or ``context_lines`` is negative.
    """
    validate_inputs(original, modified, context_lines)
    context_lines = resolve_context_lines(context_lines)
    threshold = resolve_threshold(similarity_threshold)

    old_lines = split_lines(original)
    new_lines = split_lines(modified)

    rows: list[DiffLine] = []
    runs = paired = 0
    for segment in segment_lines(old_lines, new_lines):
        if isinstance(segment, ChangeRun):
            run_rows, run_pairs = _run_rows(segment, old_lines, new_lines, threshold)
            rows.extend(run_rows)
            runs += 1
            paired += run_pairs
        else:
            rows.append(
                DiffLine(
                    type=DiffLineType.CONTEXT,
                    content=old_lines[segment.old_index],
                    old_line_num=segment.old_index + 1,
                    new_line_num=segment.new_index + 1,
                )
            )

    lines = _collapse_context(rows, context_lines)
    _log.debug(
        "semantic_diff_built",
        old_lines=len(old_lines),
        new_lines=len(new_lines),
        runs=runs,
        paired=paired,
        rows=len(lines),
    )
    return lines
