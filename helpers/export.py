#!/usr/bin/env python3
"""
Review / export helpers:
 - apply user edits to a copy of an ExtractionResult
 - serialize a result to indented JSON
 - name the download after the uploaded file
"""
import json
import os
from dataclasses import fields, replace
from typing import Any, Dict, Optional

from helpers.field_extraction import ExtractionResult
from helpers.normalization import clean_whitespace

EXPORT_SUFFIX = ".parsed.json"
DEFAULT_BASENAME = "resume"


def export_filename(original: Optional[str]) -> str:
    base = os.path.basename((original or "").strip()) or DEFAULT_BASENAME
    return f"{base}{EXPORT_SUFFIX}"


def to_json(result: ExtractionResult, indent: int = 2) -> str:
    return json.dumps(result.to_dict(), indent=indent, ensure_ascii=False)


def apply_edits(result: ExtractionResult, edits: Optional[Dict[str, Any]]) -> ExtractionResult:
    """
    Return a new record with the edited fields replaced; `result` is left untouched.
    Blank strings clear a field. Raises ValueError on unknown field names.
    """
    if not edits:
        return result
    known = {f.name for f in fields(ExtractionResult)}
    unknown = set(edits) - known
    if unknown:
        raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")
    # from_dict does the per-field cleaning (blank -> None, skills parsing)
    cleaned = ExtractionResult.from_dict(edits)
    changes = {k: getattr(cleaned, k) for k in edits}
    return replace(result, **changes)


def summary_lines(result: ExtractionResult) -> Dict[str, str]:
    """Display-ready values for the review form; absent fields render as "-"."""
    out = {}
    for f in fields(ExtractionResult):
        v = getattr(result, f.name)
        if f.name == "skills":
            out[f.name] = ", ".join(v) if v else "-"
        else:
            out[f.name] = clean_whitespace(v) or "-"
    return out
