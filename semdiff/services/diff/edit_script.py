"""
Line-level edit script shared by the stats, hunk and semantic builders.

The LCS alignment of two line arrays is folded into an ordered list of
segments: one ``ContextLine`` per common line and one ``ChangeRun`` per
maximal stretch of non-common lines between two common lines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from semdiff.config.settings import get_settings
from semdiff.core.errors import InvalidInputError
from semdiff.services.diff.lcs import OpCode, align
from semdiff.services.diff.similarity import string_similarity

_log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ContextLine:
    old_index: int
    new_index: int


@dataclass(slots=True)
class ChangeRun:
    """Original-only lines (``removed``) and modified-only lines (``added``) of one stretch."""

    removed: list[int] = field(default_factory=list)
    added: list[int] = field(default_factory=list)


Segment = ContextLine | ChangeRun


def ensure_text(name: str, value: Any) -> None:
    """Reject a non-string text argument, logging the rejection first."""
    if not isinstance(value, str):
        _log.warning("invalid_diff_input", argument=name, received=type(value).__name__)
        raise InvalidInputError(name, f"{name} must be a string", value)


def validate_inputs(original: Any, modified: Any, context_lines: Any = None) -> None:
    """Reject non-string texts and negative or non-integer context sizes (None means default)."""
    ensure_text("original", original)
    ensure_text("modified", modified)
    if context_lines is not None and (
        not isinstance(context_lines, int)
        or isinstance(context_lines, bool)
        or context_lines < 0
    ):
        _log.warning("invalid_diff_input", argument="context_lines", received=context_lines)
        raise InvalidInputError(
            "context_lines", "context_lines must be a non-negative integer", context_lines
        )


def resolve_context_lines(context_lines: int | None) -> int:
    if context_lines is None:
        return get_settings().default_context_lines
    return context_lines


def resolve_threshold(threshold: float | None) -> float:
    """Configured threshold when None; an explicit override must lie in [0, 1]."""
    if threshold is None:
        return get_settings().similarity_threshold
    if (
        not isinstance(threshold, int | float)
        or isinstance(threshold, bool)
        or not 0.0 <= threshold <= 1.0
    ):
        _log.warning("invalid_diff_input", argument="similarity_threshold", received=threshold)
        raise InvalidInputError(
            "similarity_threshold", "similarity_threshold must be between 0 and 1", threshold
        )
    return threshold


def segment_lines(old_lines: list[str], new_lines: list[str]) -> list[Segment]:
    """Fold the line alignment into context lines and change runs."""
    segments: list[Segment] = []
    run: ChangeRun | None = None

    for step in align(old_lines, new_lines):
        if step.op is OpCode.EQUAL:
            if run is not None:
                segments.append(run)
                run = None
            segments.append(ContextLine(step.a_index, step.b_index))
            continue
        if run is None:
            run = ChangeRun()
        if step.op is OpCode.DELETE:
            run.removed.append(step.a_index)
        else:
            run.added.append(step.b_index)

    if run is not None:
        segments.append(run)
    return segments


def pair_run(
    run: ChangeRun,
    old_lines: list[str],
    new_lines: list[str],
    threshold: float,
) -> list[int]:
    """
    Positionally pair the k-th removed line with the k-th added line.

    Returns:
        Positions k whose pair scored at least ``threshold``.
    """
    return [
        k
        for k in range(min(len(run.removed), len(run.added)))
        if string_similarity(old_lines[run.removed[k]], new_lines[run.added[k]]) >= threshold
    ]
