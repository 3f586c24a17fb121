#!/usr/bin/env python3
"""
Worker function for single and batch processing.
Each call runs the full pipeline on one file:
decode bytes -> normalize text -> extract fields.
"""
import os
import sys
import time
import logging
from typing import Dict, Any, Optional

from helpers.vocabulary import Vocabulary
from helpers.normalization import normalize_text
from helpers.export import to_json
from helpers.field_extraction import ExtractionResult, extract_fields
from helpers.text_extraction import extract_text_from_bytes

logger = logging.getLogger(__name__)


def parse_text(text: str, vocabulary: Optional[Vocabulary] = None) -> ExtractionResult:
    """Normalize already-decoded text and extract the fields."""
    return extract_fields(normalize_text(text), vocabulary=vocabulary)


def process_single_file(
    filename: str,
    data: bytes,
    vocabulary: Optional[Vocabulary] = None,
) -> Dict[str, Any]:
    """
    Process one file and return an envelope containing:
    {
      "file": filename,
      "status": "ok" or "error",
      "parsed": {...},
      "timings": {...},
      "parse_time": float
    }
    """
    start_total = time.perf_counter()
    timings = {}

    try:
        # -------------------------------
        # Text extraction
        # -------------------------------
        t0 = time.perf_counter()
        raw_text = extract_text_from_bytes(filename, data)
        timings["decode"] = time.perf_counter() - t0

        # -------------------------------
        # Normalization
        # -------------------------------
        t0 = time.perf_counter()
        norm = normalize_text(raw_text)
        timings["normalize"] = time.perf_counter() - t0

        # -------------------------------
        # Field extraction
        # -------------------------------
        t0 = time.perf_counter()
        result = extract_fields(norm, vocabulary=vocabulary)
        timings["extract"] = time.perf_counter() - t0

        total_elapsed = time.perf_counter() - start_total
        logger.debug("Parsed %s in %.3fs (%d lines)", filename, total_elapsed, len(norm.lines))

        return {
            "file": filename,
            "status": "ok",
            "parsed": result.to_dict(),
            "timings": timings,
            "parse_time": total_elapsed,
        }

    except Exception as e:
        logger.exception("Failed to process %s", filename)
        return {
            "file": filename,
            "status": "error",
            "error": str(e),
            "parse_time": time.perf_counter() - start_total,
        }


# ------------------ CLI quick-test ------------------
if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m helpers.batch_worker /path/to/resume")
        sys.exit(1)
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    path = sys.argv[1]
    with open(path, "rb") as f:
        b = f.read()
    envelope = process_single_file(os.path.basename(path), b)
    if envelope["status"] != "ok":
        print("Error:", envelope.get("error"))
        sys.exit(2)
    print(to_json(ExtractionResult.from_dict(envelope["parsed"])))
