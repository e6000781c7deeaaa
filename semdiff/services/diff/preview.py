"""
File diff preview: the boundary between the content source and the engine.

A created file has no meaningful alignment (every line is trivially
non-common), so it is rendered directly as all-added rows instead of going
through the semantic builder.
"""

from __future__ import annotations

import structlog
from pydantic import BaseModel, ConfigDict

from semdiff.config.settings import get_settings
from semdiff.schemas.diff import DiffLine, DiffLineType, DiffStats
from semdiff.services.diff.edit_script import ensure_text, validate_inputs
from semdiff.services.diff.semantic import build_semantic_diff_lines
from semdiff.services.diff.stats import compute_diff_stats
from semdiff.services.diff.tokenize import split_lines

_log = structlog.get_logger(__name__)


class FileDiff(BaseModel):
    """Everything a diff panel needs for one file."""

    model_config = ConfigDict(frozen=True)

    is_new_file: bool
    is_large: bool
    lines: list[DiffLine]
    stats: DiffStats


def build_new_file_diff_lines(content: str) -> list[DiffLine]:
    """Every line of a newly created file as an added row."""
    ensure_text("content", content)
    return [
        DiffLine(type=DiffLineType.ADDED, content=line, new_line_num=index + 1)
        for index, line in enumerate(split_lines(content))
    ]


def build_file_diff(
    original: str | None,
    modified: str,
    context_lines: int | None = None,
) -> FileDiff:
    """
    Diff one file for display.

    ``original`` is None or empty for a newly created file.
    """
    settings = get_settings()
    if original is None:
        original = ""
    validate_inputs(original, modified, context_lines)
    is_new_file = original == ""

    if is_new_file:
        lines = build_new_file_diff_lines(modified)
    else:
        lines = build_semantic_diff_lines(original, modified, context_lines)
    stats = compute_diff_stats(original, modified)
    is_large = max(len(original), len(modified)) > settings.large_content_threshold

    if is_large:
        _log.info("large_file_diff", original_chars=len(original), modified_chars=len(modified))
    return FileDiff(is_new_file=is_new_file, is_large=is_large, lines=lines, stats=stats)


def expand_diff_lines(lines: list[DiffLine], expand_index: int) -> list[DiffLine]:
    """Return ``lines`` with the given expand marker replaced by its hidden rows."""
    expanded: list[DiffLine] = []
    for line in lines:
        if line.type is DiffLineType.EXPAND and line.expand_index == expand_index:
            expanded.extend(line.hidden_line_data or [])
        else:
            expanded.append(line)
    return expanded
