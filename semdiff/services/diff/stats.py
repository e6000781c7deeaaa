"""Aggregate added/removed/changed line counts for the summary badge."""

from __future__ import annotations

from semdiff.schemas.diff import DiffStats
from semdiff.services.diff.edit_script import (
    ChangeRun,
    pair_run,
    resolve_threshold,
    segment_lines,
    validate_inputs,
)
from semdiff.services.diff.tokenize import split_lines


def compute_diff_stats(
    original: str, modified: str, similarity_threshold: float | None = None
) -> DiffStats:
    """
    Count line changes between two texts.

    A removed/added pair that passes the modification threshold inside the
    same run counts once as ``changed`` instead of once in each of
    ``added`` and ``removed``.
    """
    validate_inputs(original, modified)
    threshold = resolve_threshold(similarity_threshold)
    old_lines = split_lines(original)
    new_lines = split_lines(modified)

    added = removed = changed = 0
    for segment in segment_lines(old_lines, new_lines):
        if not isinstance(segment, ChangeRun):
            continue
        pairs = len(pair_run(segment, old_lines, new_lines, threshold))
        changed += pairs
        added += len(segment.added) - pairs
        removed += len(segment.removed) - pairs

    return DiffStats(
        added=added,
        removed=removed,
        changed=changed,
        total_changes=added + removed + changed,
    )
