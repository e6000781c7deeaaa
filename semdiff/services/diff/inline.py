"""
Word-level inline diff of one modified line.

Tokens come from ``split_words`` (words, whitespace runs, single
punctuation characters), so a one-character edit such as ``1`` → ``2`` in
``const x = 1;`` highlights exactly that token. Adjacent tokens of the same
kind are merged into one part.
"""

from __future__ import annotations

from semdiff.schemas.diff import InlineDiffResult, InlinePart, InlinePartType
from semdiff.services.diff.edit_script import ensure_text
from semdiff.services.diff.lcs import OpCode, align
from semdiff.services.diff.tokenize import split_words


def _append(parts: list[InlinePart], text: str, part_type: InlinePartType) -> None:
    if parts and parts[-1].type is part_type:
        parts[-1] = InlinePart(text=parts[-1].text + text, type=part_type)
    else:
        parts.append(InlinePart(text=text, type=part_type))


def compute_inline_diff(old_line: str, new_line: str) -> InlineDiffResult:
    """
    Diff two lines word by word.

    ``old_parts`` holds unchanged/removed spans of ``old_line`` and
    ``new_parts`` unchanged/added spans of ``new_line``; each side
    concatenates back to its line.
    """
    ensure_text("old_line", old_line)
    ensure_text("new_line", new_line)

    old_tokens = split_words(old_line)
    new_tokens = split_words(new_line)
    old_parts: list[InlinePart] = []
    new_parts: list[InlinePart] = []

    for step in align(old_tokens, new_tokens):
        if step.op is OpCode.EQUAL:
            _append(old_parts, old_tokens[step.a_index], InlinePartType.UNCHANGED)
            _append(new_parts, new_tokens[step.b_index], InlinePartType.UNCHANGED)
        elif step.op is OpCode.DELETE:
            _append(old_parts, old_tokens[step.a_index], InlinePartType.REMOVED)
        else:
            _append(new_parts, new_tokens[step.b_index], InlinePartType.ADDED)

    return InlineDiffResult(old_parts=old_parts, new_parts=new_parts)
