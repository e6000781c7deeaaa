"""
Tokenizers for line-level and word-level diffing.

Both are lossless: joining the tokens (with "\n" for lines) reproduces the
input exactly. No whitespace or case normalisation is applied.
"""

from __future__ import annotations

import re

# Word runs, whitespace runs, or a single punctuation character
_WORD_TOKEN_RE = re.compile(r"\w+|\s+|[^\w\s]")


def split_lines(text: str) -> list[str]:
    """
    Split text on "\\n" into lines.

    The empty string has no lines. A trailing newline yields a final empty
    line, and "\\r" is kept, so CRLF and LF content compare unequal.
    """
    if not text:
        return []
    return text.split("\n")


def split_words(line: str) -> list[str]:
    """Split a line into word, whitespace and punctuation tokens."""
    return _WORD_TOKEN_RE.findall(line)


def split_chars(text: str) -> list[str]:
    return list(text)
