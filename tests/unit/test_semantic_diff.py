"""Unit tests for semdiff.services.diff.semantic."""
import pytest

from semdiff.core.errors import InvalidInputError
from semdiff.schemas.diff import DiffLineType
from semdiff.services.diff.semantic import build_semantic_diff_lines
from semdiff.services.diff.stats import compute_diff_stats


def _of(lines, line_type):
    return [line for line in lines if line.type == line_type]


def _changed(lines):
    return [line for line in lines if line.type in (DiffLineType.ADDED, DiffLineType.REMOVED)]


def _flatten(lines):
    """Rows with every expand marker replaced by its hidden rows."""
    out = []
    for line in lines:
        if line.type == DiffLineType.EXPAND:
            out.extend(line.hidden_line_data)
        else:
            out.append(line)
    return out


IMPORTS = """import { foo } from './foo';
import { bar } from './bar';
import { baz } from './baz';

function test() {
  return 42;
}"""


# ─── Identity ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("context", [0, 1, 3])
def test_identical_content_has_no_changes(context):
    lines = build_semantic_diff_lines(IMPORTS, IMPORTS, context)
    assert _changed(lines) == []
    assert all(line.inline_diff is None for line in _flatten(lines))


def test_identical_content_is_one_expand_marker():
    lines = build_semantic_diff_lines(IMPORTS, IMPORTS, 3)
    assert len(lines) == 1
    assert lines[0].type == DiffLineType.EXPAND
    assert lines[0].hidden_lines == 7


def test_empty_content():
    assert build_semantic_diff_lines("", "", 0) == []


def test_repeated_identical_imports_are_not_changes():
    text = "import a from 'a';\nimport a from 'a';\nimport b from 'b';"
    assert _changed(build_semantic_diff_lines(text, text, 3)) == []


# ─── Pairing ──────────────────────────────────────────────────────────────────

def test_added_token_pairs_removed_and_added_line():
    original = 'import { getAISettings } from "../tools/index.js";'
    modified = 'import { getAISettings, newFunction } from "../tools/index.js";'
    lines = build_semantic_diff_lines(original, modified, 3)

    removed = _of(lines, DiffLineType.REMOVED)
    added = _of(lines, DiffLineType.ADDED)
    assert len(removed) == 1
    assert len(added) == 1
    assert removed[0].inline_diff is not None
    assert added[0].inline_diff is not None
    assert removed[0].inline_diff == added[0].inline_diff


def test_renamed_function_is_paired():
    lines = build_semantic_diff_lines(
        "function oldName() { return 42; }", "function newName() { return 42; }", 0
    )
    assert [line.type for line in lines] == [DiffLineType.REMOVED, DiffLineType.ADDED]
    assert all(line.inline_diff is not None for line in lines)


def test_signature_change_is_paired():
    lines = build_semantic_diff_lines(
        "function test(a, b) {", "function test(a: string, b: number) {", 0
    )
    assert _of(lines, DiffLineType.REMOVED)[0].inline_diff is not None


def test_dissimilar_lines_are_not_paired():
    lines = build_semantic_diff_lines(
        "const x = 1;", 'function doSomething() { return "hello"; }', 0
    )
    removed = _of(lines, DiffLineType.REMOVED)
    added = _of(lines, DiffLineType.ADDED)
    assert len(removed) == len(added) == 1
    assert removed[0].inline_diff is None
    assert added[0].inline_diff is None


def test_pairing_is_positional_within_a_run():
    original = "line1\nline2\nline3"
    modified = "line1\nline2_modified\nline3_modified"
    lines = build_semantic_diff_lines(original, modified, 0)

    assert _of(lines, DiffLineType.CONTEXT) == []
    removed = _of(lines, DiffLineType.REMOVED)
    added = _of(lines, DiffLineType.ADDED)
    assert [line.content for line in removed] == ["line2", "line3"]
    assert [line.content for line in added] == ["line2_modified", "line3_modified"]
    assert all(line.inline_diff is not None for line in removed + added)


def test_surplus_lines_in_a_run_stay_unpaired():
    original = "import { Component } from 'react';\nimport { useState } from 'react';\nimport { useEffect } from 'react';"
    modified = "import { Component, useState, useEffect } from 'react';"
    lines = build_semantic_diff_lines(original, modified, 0)

    removed = _of(lines, DiffLineType.REMOVED)
    added = _of(lines, DiffLineType.ADDED)
    assert len(removed) == 3
    assert len(added) == 1
    assert removed[0].inline_diff is not None
    assert removed[1].inline_diff is None
    assert removed[2].inline_diff is None


def test_pairing_is_bidirectional():
    original = "a = compute(1)\nunrelated old\nz = 9"
    modified = "a = compute(2)\ncompletely different text here\nz = 9"
    lines = build_semantic_diff_lines(original, modified, 1)
    paired_removed = [l for l in _of(lines, DiffLineType.REMOVED) if l.inline_diff]
    paired_added = [l for l in _of(lines, DiffLineType.ADDED) if l.inline_diff]
    assert len(paired_removed) == len(paired_added) == 1


def test_removed_rows_precede_added_rows_in_a_run():
    lines = build_semantic_diff_lines("x\nold1\nold2\ny", "x\nnew1\nnew2\ny", 0)
    assert [line.type for line in lines if line.type != DiffLineType.EXPAND] == [
        DiffLineType.REMOVED,
        DiffLineType.REMOVED,
        DiffLineType.ADDED,
        DiffLineType.ADDED,
    ]


# ─── Edge cases ───────────────────────────────────────────────────────────────

def test_single_line_replacement():
    lines = build_semantic_diff_lines("hello", "world", 0)
    assert len(_of(lines, DiffLineType.REMOVED)) == 1
    assert len(_of(lines, DiffLineType.ADDED)) == 1


def test_trailing_newline_difference_is_a_change():
    lines = build_semantic_diff_lines("line1\nline2\n", "line1\nline2", 0)
    assert len(_changed(lines)) == 1
    assert _changed(lines)[0].type == DiffLineType.REMOVED


def test_whitespace_only_change():
    lines = build_semantic_diff_lines("line1\n  line2\nline3", "line1\n    line2\nline3", 0)
    assert len(_changed(lines)) == 2


def test_reordering_is_detected():
    original = "function a() {}\nfunction b() {}\nfunction c() {}"
    modified = "function c() {}\nfunction a() {}\nfunction b() {}"
    assert _changed(build_semantic_diff_lines(original, modified, 0))


def test_comment_addition_with_zero_context():
    lines = build_semantic_diff_lines("const x = 1;", "// This is a comment\nconst x = 1;", 0)
    assert len(_of(lines, DiffLineType.ADDED)) == 1
    assert _of(lines, DiffLineType.CONTEXT) == []


def test_new_file_through_general_algorithm_is_all_added():
    lines = build_semantic_diff_lines("", "a\nb", 3)
    assert [line.type for line in lines] == [DiffLineType.ADDED, DiffLineType.ADDED]


def test_consistent_results_for_same_input():
    original, modified = "line1\nline2\nline3", "line1\nchanged\nline3"
    assert build_semantic_diff_lines(original, modified, 1) == build_semantic_diff_lines(
        original, modified, 1
    )


@pytest.mark.parametrize(
    ("original", "modified"),
    [
        ("line1\nline2\nline3\nline4", "line1\nchanged\nline3\nadded\nline4"),
        ("line1\nline2\nline3\nline4", "line1\nadded1\nline3\nadded2"),
    ],
)
def test_unpaired_row_count_matches_stats(original, modified):
    lines = build_semantic_diff_lines(original, modified, 0)
    assert len(_changed(lines)) == compute_diff_stats(original, modified).total_changes


# ─── Line numbers ─────────────────────────────────────────────────────────────

def test_line_numbers_by_row_type():
    lines = build_semantic_diff_lines(
        "line1\nline2\nline3\nline4\nline5", "line1\nline2\nmodified3\nline4\nline5", 1
    )
    for line in lines:
        if line.type == DiffLineType.REMOVED:
            assert line.old_line_num == 3 and line.new_line_num is None
        elif line.type == DiffLineType.ADDED:
            assert line.new_line_num == 3 and line.old_line_num is None
        elif line.type == DiffLineType.CONTEXT:
            assert line.old_line_num == line.new_line_num
            assert line.old_line_num in (2, 4)


def test_line_numbers_strictly_increase(numbered_text):
    original = numbered_text(30)
    modified = numbered_text(30, {3: "changed3", 15: "changed15", 16: "extra"}) + "\ntail"
    rows = _flatten(build_semantic_diff_lines(original, modified, 2))

    old_nums = [row.old_line_num for row in rows if row.old_line_num is not None]
    new_nums = [row.new_line_num for row in rows if row.new_line_num is not None]
    assert old_nums == sorted(set(old_nums))
    assert new_nums == sorted(set(new_nums))


def test_every_line_appears_exactly_once(numbered_text):
    original = numbered_text(40, {5: "gone"})
    modified = numbered_text(40, {20: "changed", 35: "also changed"})
    rows = _flatten(build_semantic_diff_lines(original, modified, 2))

    old_rows = [r for r in rows if r.type in (DiffLineType.CONTEXT, DiffLineType.REMOVED)]
    new_rows = [r for r in rows if r.type in (DiffLineType.CONTEXT, DiffLineType.ADDED)]
    assert "\n".join(r.content for r in old_rows) == original
    assert "\n".join(r.content for r in new_rows) == modified


# ─── Context collapsing ───────────────────────────────────────────────────────

def test_interior_change_keeps_padding_with_one_context_line():
    lines = build_semantic_diff_lines(
        "line1\nline2\nline3\nline4\nline5", "line1\nchanged\nline3\nline4\nline5", 1
    )
    assert _of(lines, DiffLineType.CONTEXT)
    assert _changed(lines)


def test_zero_context_shows_only_changes():
    lines = build_semantic_diff_lines(
        "line1\nline2\nline3\nline4\nline5", "line1\nline2\nchanged\nline4\nline5", 0
    )
    assert _of(lines, DiffLineType.CONTEXT) == []
    expands = _of(lines, DiffLineType.EXPAND)
    assert [e.hidden_lines for e in expands] == [2, 2]


def test_leading_and_trailing_context_trimmed_at_far_end(numbered_text):
    original = numbered_text(20)
    modified = numbered_text(20, {10: "changed"})
    lines = build_semantic_diff_lines(original, modified, 3)

    assert [line.type for line in lines] == (
        [DiffLineType.EXPAND]
        + [DiffLineType.CONTEXT] * 3
        + [DiffLineType.REMOVED, DiffLineType.ADDED]
        + [DiffLineType.CONTEXT] * 3
        + [DiffLineType.EXPAND]
    )
    assert lines[0].hidden_lines == 7
    assert lines[-1].hidden_lines == 6
    assert [line.content for line in lines[1:4]] == ["line8", "line9", "line10"]


def test_distant_changes_collapse_interior_region(numbered_text):
    original = numbered_text(100)
    modified = numbered_text(100, {10: "changed1", 90: "changed2"})
    lines = build_semantic_diff_lines(original, modified, 3)

    expands = _of(lines, DiffLineType.EXPAND)
    assert len(expands) == 3
    interior = expands[1]
    assert interior.hidden_lines == 79 - 2 * 3
    assert len(interior.hidden_line_data) == interior.hidden_lines
    assert interior.hidden_line_data[0].old_line_num == 15
    assert [e.expand_index for e in expands] == [0, 1, 2]


def test_short_interior_region_is_not_collapsed():
    original = "a\nb\nc\nd\ne"
    modified = "A\nb\nc\nd\nE"
    lines = build_semantic_diff_lines(original, modified, 2)
    assert _of(lines, DiffLineType.EXPAND) == []
    assert [line.content for line in _of(lines, DiffLineType.CONTEXT)] == ["b", "c", "d"]


def test_hidden_rows_are_context_rows(numbered_text):
    lines = build_semantic_diff_lines(numbered_text(50), numbered_text(50, {25: "x"}), 1)
    for marker in _of(lines, DiffLineType.EXPAND):
        assert marker.content is None
        assert all(row.type == DiffLineType.CONTEXT for row in marker.hidden_line_data)


def test_default_context_comes_from_settings(monkeypatch, numbered_text):
    monkeypatch.setenv("SEMDIFF_DEFAULT_CONTEXT_LINES", "1")
    lines = build_semantic_diff_lines(numbered_text(20), numbered_text(20, {10: "changed"}))
    assert len(_of(lines, DiffLineType.CONTEXT)) == 2


def test_large_single_edit(numbered_text):
    original = numbered_text(1000)
    modified = numbered_text(1000, {500: "changed"})
    lines = build_semantic_diff_lines(original, modified, 3)
    assert len(_changed(lines)) == 2


# ─── Invalid input ────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    ("original", "modified", "context"),
    [(None, "x", 3), ("x", None, 3), ("x", "y", -1), ("x", "y", 1.5)],
)
def test_invalid_input_is_rejected(original, modified, context):
    with pytest.raises(InvalidInputError) as exc_info:
        build_semantic_diff_lines(original, modified, context)
    assert exc_info.value.code == "DIFF_001"


def test_negative_threshold_is_rejected():
    with pytest.raises(InvalidInputError):
        build_semantic_diff_lines("abc", "xyz", 0, similarity_threshold=-1)
