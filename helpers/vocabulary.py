#!/usr/bin/env python3
"""
Keyword tables used by the field extractor:
 - skills (web-development technology names)
 - cities / countries used to spot a location line
 - location indicator words (address, street, ...)
 - document header labels that are never a name

Defaults live here; a JSON file named by RESUME_VOCAB_PATH can extend them.

Usage:
  from helpers.vocabulary import get_vocabulary
  vocab = get_vocabulary()
  print(vocab.skills)
"""
import os
import re
import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

VOCAB_PATH = os.getenv("RESUME_VOCAB_PATH", "")

DEFAULT_SKILLS = (
    "react", "reactjs", "next.js", "nextjs", "typescript", "javascript",
    "html", "css", "scss", "sass", "redux", "mobx", "node", "nodejs",
    "graphql", "rest", "api", "jest", "testing", "webpack", "vite",
    "storybook", "tailwind", "mui", "material-ui", "aws",
)

# Gulf region + South Asia, plus a few frequent destinations
DEFAULT_CITIES = (
    "dubai", "abu dhabi", "sharjah", "ajman", "uae", "united arab emirates",
    "doha", "qatar", "riyadh", "jeddah", "dammam", "saudi arabia", "ksa",
    "muscat", "oman", "kuwait", "manama", "bahrain",
    "karachi", "lahore", "islamabad", "pakistan",
    "mumbai", "delhi", "new delhi", "bangalore", "bengaluru", "hyderabad",
    "chennai", "pune", "kolkata", "india",
    "dhaka", "bangladesh", "colombo", "sri lanka", "kathmandu", "nepal",
    "usa", "uk", "canada", "singapore",
)

DEFAULT_LOCATION_INDICATORS = (
    "address", "location", "street", "city", "country", "po box",
)

DEFAULT_HEADER_LABELS = ("resume", "curriculum vitae", "cv", "profile")

_TABLE_KEYS = ("skills", "cities", "location_indicators", "header_labels")


def _keyword_pattern(words: Iterable[str]) -> re.Pattern:
    # longest first so "abu dhabi" wins over "abu"
    ordered = sorted({w for w in words if w}, key=len, reverse=True)
    if not ordered:
        return re.compile(r"(?!x)x")
    body = "|".join(r"\s+".join(re.escape(p) for p in w.split()) for w in ordered)
    return re.compile(rf"\b(?:{body})\b", re.IGNORECASE)


def _dedupe(words: Iterable[str]) -> Tuple[str, ...]:
    cleaned = (str(w).strip().lower() for w in words)
    return tuple(dict.fromkeys(w for w in cleaned if w))


@dataclass(frozen=True)
class Vocabulary:
    skills: Tuple[str, ...] = DEFAULT_SKILLS
    cities: Tuple[str, ...] = DEFAULT_CITIES
    location_indicators: Tuple[str, ...] = DEFAULT_LOCATION_INDICATORS
    header_labels: Tuple[str, ...] = DEFAULT_HEADER_LABELS
    _city_re: re.Pattern = field(init=False, repr=False, compare=False)
    _indicator_re: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for key in _TABLE_KEYS:
            object.__setattr__(self, key, _dedupe(getattr(self, key)))
        object.__setattr__(self, "_city_re", _keyword_pattern(self.cities))
        object.__setattr__(
            self, "_indicator_re",
            _keyword_pattern(self.location_indicators + self.cities),
        )

    def is_header_label(self, line: str) -> bool:
        return line.strip().lower() in self.header_labels

    def find_city(self, line: str) -> Optional[re.Match]:
        return self._city_re.search(line)

    def mentions_city(self, line: str) -> bool:
        return bool(self.find_city(line))

    def mentions_location(self, line: str) -> bool:
        """Any location indicator word or known place name, whole-word."""
        return bool(self._indicator_re.search(line))

    def extended(self, extra: Dict[str, Iterable[str]]) -> "Vocabulary":
        """Return a copy with each table extended by extra[key] (appended, de-duplicated)."""
        unknown = set(extra) - set(_TABLE_KEYS)
        if unknown:
            raise ValueError(f"Unknown vocabulary tables: {', '.join(sorted(unknown))}")
        merged = {
            key: tuple(getattr(self, key)) + tuple(extra.get(key) or ())
            for key in _TABLE_KEYS
        }
        return Vocabulary(**merged)


DEFAULT_VOCABULARY = Vocabulary()

_loaded: Optional[Vocabulary] = None


def load_vocabulary(path: str) -> Vocabulary:
    """
    Read a JSON object of extra keywords and merge it into the defaults.
    Raises ValueError / OSError on a bad file: a broken config should be loud.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Vocabulary file {path} must contain a JSON object")
    for key, words in data.items():
        if not isinstance(words, list):
            raise ValueError(f"Vocabulary table '{key}' must be a list of strings")
    vocab = DEFAULT_VOCABULARY.extended(data)
    logger.info("Loaded vocabulary extensions from %s", path)
    return vocab


def get_vocabulary() -> Vocabulary:
    """
    Process-wide vocabulary: defaults, extended by RESUME_VOCAB_PATH when set.
    A broken extension file is reported once and the defaults are used,
    so extraction keeps working.
    """
    global _loaded
    if _loaded is None:
        vocab = DEFAULT_VOCABULARY
        if VOCAB_PATH:
            try:
                vocab = load_vocabulary(VOCAB_PATH)
            except (OSError, ValueError):
                logger.exception("Could not load vocabulary from %s; using default tables", VOCAB_PATH)
        _loaded = vocab
    return _loaded
