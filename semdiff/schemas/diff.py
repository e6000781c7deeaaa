"""
Diff value types shared by the engine and its renderers.

All models are frozen: a diff result is an immutable value created fresh
per call. Fields serialise with camelCase aliases (``oldLineNum``,
``inlineDiff``, ``hiddenLineData``) for the rendering layer.
"""

from __future__ import annotations

import json
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_MODEL_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class DiffLineType(StrEnum):
    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"
    EXPAND = "expand"


class InlinePartType(StrEnum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


class InlinePart(BaseModel):
    """A span of one line in a word-level diff."""

    model_config = _MODEL_CONFIG

    text: str
    type: InlinePartType


class InlineDiffResult(BaseModel):
    """Word-level diff of one old/new line pair."""

    model_config = _MODEL_CONFIG

    old_parts: list[InlinePart] = Field(default_factory=list)  # unchanged | removed
    new_parts: list[InlinePart] = Field(default_factory=list)  # unchanged | added


class DiffLine(BaseModel):
    """
    One row of a rendered diff.

    ``added`` rows carry no ``old_line_num``, ``removed`` rows no
    ``new_line_num``, ``context`` rows carry both. ``expand`` rows have no
    content and stand in for the unchanged rows held in ``hidden_line_data``.
    """

    model_config = _MODEL_CONFIG

    type: DiffLineType
    content: str | None = None
    old_line_num: int | None = Field(default=None, ge=1)
    new_line_num: int | None = Field(default=None, ge=1)
    inline_diff: InlineDiffResult | None = None
    expand_index: int | None = Field(default=None, ge=0)
    hidden_lines: int | None = Field(default=None, ge=0)
    hidden_line_data: list[DiffLine] | None = None


class DiffStats(BaseModel):
    """Aggregate line counts; a paired modification counts once as ``changed``."""

    model_config = _MODEL_CONFIG

    added: int = 0
    removed: int = 0
    changed: int = 0
    total_changes: int = 0

    def summary(self) -> str:
        """Compact badge text, e.g. ``+3/-1``. A changed line counts on both sides."""
        return f"+{self.added + self.changed}/-{self.removed + self.changed}"


class DiffHunk(BaseModel):
    """
    A unified-diff style hunk: one or more nearby changes plus context.

    Starts are 0-based and ends exclusive, indexing the split line arrays.
    """

    model_config = _MODEL_CONFIG

    original_start: int
    original_end: int
    modified_start: int
    modified_end: int
    original_lines: list[str]
    modified_lines: list[str]


DiffLine.model_rebuild()


def diff_lines_to_json(lines: list[DiffLine]) -> str:
    """Serialise diff lines to a compact camelCase JSON string."""
    return json.dumps(
        [line.model_dump(mode="json", by_alias=True, exclude_none=True) for line in lines],
        ensure_ascii=False,
    )


def json_to_diff_lines(raw: str) -> list[DiffLine]:
    """Deserialise a JSON string produced by ``diff_lines_to_json``."""
    return [DiffLine.model_validate(item) for item in json.loads(raw)]
