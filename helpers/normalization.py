#!/usr/bin/env python3
"""
Normalization utilities:
- Split decoded document text into trimmed, non-empty lines
- Re-join them with single newlines for whole-text pattern search
- Collapse whitespace inside extracted values

Used after text extraction and before field extraction.
"""
import re
from typing import NamedTuple, Optional, Tuple

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")


class NormalizedText(NamedTuple):
    lines: Tuple[str, ...]
    joined: str


def normalize_text(text: Optional[str]) -> NormalizedText:
    if not text:
        return NormalizedText((), "")
    lines = tuple(l.strip() for l in _LINE_SPLIT_RE.split(text) if l.strip())
    return NormalizedText(lines, "\n".join(lines))


def clean_whitespace(text: Optional[str]) -> str:
    if not text:
        return ""
    text = re.sub(r"\s+", " ", text)
    return text.strip()
