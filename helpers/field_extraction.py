#!/usr/bin/env python3
"""
Extracts contact info (name, email, phone, location), a short summary
and known skill keywords from normalized resume text.

Every heuristic is first-match-in-scan-order and degrades to None
(or an empty skills tuple) instead of raising.
"""
import re
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from helpers.normalization import NormalizedText, normalize_text, clean_whitespace
from helpers.vocabulary import Vocabulary, get_vocabulary

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(r"\+?\d[\d \-()]{6,}\d")
NAME_RE = re.compile(r"^[A-Z][A-Za-z .'\-]*$")
# label must open a line or follow a separator: "Address: ...", "... | Based in ..."
LOCATION_LABEL_RE = re.compile(
    r"(?:^|[|•·;,][ \t]*)"
    r"(?:Address|Location|Based[ \t]+in|Lives[ \t]+in|Resident[ \t]+of)\b"
    r"[ \t]*[:\-]?[ \t]*([A-Za-z0-9][A-Za-z0-9 ,.'#/\-]*)",
    re.MULTILINE,
)
_SEPARATOR_RUN_RE = re.compile(r"(?:\s*(?:[|•·;/,–—]|\s-\s)\s*)+")
_TRAILING_JUNK_RE = re.compile(r"[^A-Za-z]+$")
_TRAILING_PLACE_RE = re.compile(r"[A-Za-z][A-Za-z ,]*$")

MIN_PHONE_DIGITS = 7
NAME_SCAN_LINES = 10
NAME_MIN_WORDS, NAME_MAX_WORDS = 2, 4
SUMMARY_MAX_LINES = 3

TextInput = Union[str, NormalizedText, None]


@dataclass(frozen=True)
class ExtractionResult:
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None
    skills: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["skills"] = list(self.skills)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractionResult":
        """Build a record from a plain dict (API payloads, edited forms). Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {}
        for k, v in (data or {}).items():
            if k not in known:
                continue
            if k == "skills":
                values[k] = parse_skills(v)
            else:
                v = clean_whitespace(str(v)) if v is not None else ""
                values[k] = v or None
        return cls(**values)


def parse_skills(value: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    """Accept a list or a comma-separated string; lowercase and de-duplicate, order kept."""
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    cleaned = (clean_whitespace(str(s)).lower() for s in value)
    return tuple(dict.fromkeys(s for s in cleaned if s))


def _as_normalized(text: TextInput) -> NormalizedText:
    if isinstance(text, NormalizedText):
        return text
    return normalize_text(text)


# ---------------- Per-field heuristics ----------------
def extract_email(joined: str) -> Optional[str]:
    if not joined:
        return None
    m = EMAIL_RE.search(joined)
    return m.group(0) if m else None


def extract_phone(joined: str) -> Optional[str]:
    if not joined:
        return None
    for m in PHONE_RE.finditer(joined):
        candidate = m.group(0).strip()
        if len(re.sub(r"\D", "", candidate)) >= MIN_PHONE_DIGITS:
            return candidate
    return None


def extract_name(lines: Tuple[str, ...], email: Optional[str], phone: Optional[str],
                 vocab: Vocabulary) -> Optional[str]:
    """
    First of the top lines that looks like a person's name:
    2-4 words, starts uppercase, letters/space/.'- only, not ALL CAPS.
    Header labels, contact lines and location lines are skipped.
    """
    for ln in lines[:NAME_SCAN_LINES]:
        if vocab.is_header_label(ln):
            continue
        if email and email in ln:
            continue
        if phone and phone in ln:
            continue
        if vocab.mentions_location(ln):
            continue
        words = ln.split()
        if not NAME_MIN_WORDS <= len(words) <= NAME_MAX_WORDS:
            continue
        if not NAME_RE.match(ln) or ln.isupper():
            continue
        return ln
    return None


def _strip_place(s: str) -> str:
    return clean_whitespace(s).strip(" ,.-")


def extract_location(norm: NormalizedText, email: Optional[str], phone: Optional[str],
                     vocab: Vocabulary) -> Optional[str]:
    # (a) labelled: "Address: Dubai, UAE", "Based in Lahore"
    for m in LOCATION_LABEL_RE.finditer(norm.joined):
        # "Address: jane@..." is a contact, not a place
        if norm.joined.startswith("@", m.end()):
            continue
        place = _strip_place(m.group(1))
        if place:
            return place

    # (b) first line naming a known city / country
    for ln in norm.lines:
        if not vocab.mentions_city(ln):
            continue
        if email:
            ln = ln.replace(email, " ")
        if phone:
            ln = ln.replace(phone, " ")
        ln = _SEPARATOR_RUN_RE.sub(", ", ln)
        # "Dubai, UAE." / "Lahore 54000"
        ln = _TRAILING_JUNK_RE.sub("", clean_whitespace(ln))
        m = _TRAILING_PLACE_RE.search(ln)
        if not m:
            continue
        run = m.group(0)
        # "Currently living in Dubai, UAE" -> start at the place name
        city = vocab.find_city(run)
        place = _strip_place(run[city.start():] if city else run)
        if place:
            return place
    return None


def extract_skills(joined: str, vocab: Vocabulary) -> Tuple[str, ...]:
    if not joined:
        return ()
    low = joined.lower()
    return tuple(k for k in vocab.skills if k in low)


def extract_summary(lines: Tuple[str, ...], name: Optional[str]) -> Optional[str]:
    if not lines:
        return None
    start = 0
    if name:
        idx = next((i for i, ln in enumerate(lines) if ln == name), None)
        if idx is None:
            idx = next((i for i, ln in enumerate(lines) if name in ln), None)
        if idx is not None and idx + 1 < len(lines):
            start = idx + 1
    return " ".join(lines[start:start + SUMMARY_MAX_LINES]) or None


# ---------------- Top-level assembler ----------------
def extract_fields(text: TextInput, vocabulary: Optional[Vocabulary] = None) -> ExtractionResult:
    """
    Run every heuristic over one document.
    `text` may be raw decoded text or an already NormalizedText.
    """
    vocab = vocabulary or get_vocabulary()
    norm = _as_normalized(text)

    email = extract_email(norm.joined)
    phone = extract_phone(norm.joined)
    name = extract_name(norm.lines, email, phone, vocab)

    return ExtractionResult(
        name=name,
        email=email,
        phone=phone,
        location=extract_location(norm, email, phone, vocab),
        summary=extract_summary(norm.lines, name),
        skills=extract_skills(norm.joined, vocab),
    )
