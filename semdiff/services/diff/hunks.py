"""
Unified-diff style hunks: nearby changes grouped with surrounding context.

Used by compact previews (e.g. a tool confirmation panel) that show each
hunk separately with collapsed gaps in between.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from semdiff.schemas.diff import DiffHunk
from semdiff.services.diff.edit_script import (
    ChangeRun,
    resolve_context_lines,
    segment_lines,
    validate_inputs,
)
from semdiff.services.diff.tokenize import split_lines

_log = structlog.get_logger(__name__)


@dataclass(slots=True)
class _Span:
    """Half-open line ranges touched by one or more change runs."""

    old_start: int
    old_end: int
    new_start: int
    new_end: int


def _change_spans(old_lines: list[str], new_lines: list[str]) -> list[_Span]:
    spans: list[_Span] = []
    old_pos = new_pos = 0
    for segment in segment_lines(old_lines, new_lines):
        if isinstance(segment, ChangeRun):
            old_end = old_pos + len(segment.removed)
            new_end = new_pos + len(segment.added)
            spans.append(_Span(old_pos, old_end, new_pos, new_end))
            old_pos, new_pos = old_end, new_end
        else:
            old_pos += 1
            new_pos += 1
    return spans


def compute_diff_hunks(
    original: str, modified: str, context_lines: int | None = None
) -> list[DiffHunk]:
    """
    Group changes into hunks with ``context_lines`` of context on each side.

    Changes separated by at most ``2 * context_lines`` unchanged lines share
    a hunk. Identical inputs produce no hunks.
    """
    validate_inputs(original, modified, context_lines)
    context_lines = resolve_context_lines(context_lines)
    old_lines = split_lines(original)
    new_lines = split_lines(modified)

    spans = _change_spans(old_lines, new_lines)
    groups: list[_Span] = []
    for span in spans:
        if groups and span.old_start - groups[-1].old_end <= 2 * context_lines:
            groups[-1].old_end = span.old_end
            groups[-1].new_end = span.new_end
        else:
            groups.append(span)

    hunks: list[DiffHunk] = []
    for group in groups:
        lead = min(context_lines, group.old_start)
        trail = min(context_lines, len(old_lines) - group.old_end)
        old_start, old_end = group.old_start - lead, group.old_end + trail
        new_start, new_end = group.new_start - lead, group.new_end + trail
        hunks.append(
            DiffHunk(
                original_start=old_start,
                original_end=old_end,
                modified_start=new_start,
                modified_end=new_end,
                original_lines=old_lines[old_start:old_end],
                modified_lines=new_lines[new_start:new_end],
            )
        )

    _log.debug("diff_hunks_computed", hunks=len(hunks), changes=len(spans))
    return hunks
