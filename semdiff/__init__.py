"""Semantic text-diff engine - public API"""

from .core.errors import AppError, ErrorCode, InvalidInputError
from .schemas.diff import (
    DiffHunk,
    DiffLine,
    DiffLineType,
    DiffStats,
    InlineDiffResult,
    InlinePart,
    InlinePartType,
    diff_lines_to_json,
    json_to_diff_lines,
)
from .services.diff.hunks import compute_diff_hunks
from .services.diff.inline import compute_inline_diff
from .services.diff.lcs import compute_lcs
from .services.diff.preview import (
    FileDiff,
    build_file_diff,
    build_new_file_diff_lines,
    expand_diff_lines,
)
from .services.diff.semantic import build_semantic_diff_lines
from .services.diff.similarity import string_similarity
from .services.diff.stats import compute_diff_stats

__all__ = [
    # Core operations
    "compute_lcs",
    "string_similarity",
    "compute_diff_stats",
    "compute_inline_diff",
    "build_semantic_diff_lines",
    "compute_diff_hunks",
    # File previews
    "FileDiff",
    "build_file_diff",
    "build_new_file_diff_lines",
    "expand_diff_lines",
    # Value types
    "DiffHunk",
    "DiffLine",
    "DiffLineType",
    "DiffStats",
    "InlineDiffResult",
    "InlinePart",
    "InlinePartType",
    "diff_lines_to_json",
    "json_to_diff_lines",
    # Errors
    "AppError",
    "ErrorCode",
    "InvalidInputError",
]
