#!/usr/bin/env python3
"""
 - Decode uploaded resume bytes into plain text (PDF / DOCX / plain text)
 - OCR fallback for PDFs without a text layer (pdf→image + pytesseract)
 - Never raises: every failure falls back to best-effort raw byte decoding
"""
import io
import os
import sys
import logging
from typing import List, Optional

import docx
import pdfplumber
import pytesseract
from pdf2image import convert_from_bytes
from PIL import Image, ImageFilter, ImageOps

logger = logging.getLogger(__name__)

# ------------------ Config / helpers ------------------
OCR_ENABLED = os.getenv("OCR_ENABLED", "1").lower() not in ("0", "false", "no")
# Default DPI 200 for faster conversions; override with env var OCR_DPI if needed
OCR_DPI = int(os.getenv("OCR_DPI", "200"))
OCR_LANG = os.getenv("OCR_LANG", "eng")
TESSERACT_CONFIG = "--psm 3 --oem 3"
# a text layer shorter than this is treated as a scanned PDF
MIN_TEXT_LAYER_CHARS = int(os.getenv("MIN_TEXT_LAYER_CHARS", "50"))

if os.getenv("TESSERACT_CMD"):
    pytesseract.pytesseract.tesseract_cmd = os.getenv("TESSERACT_CMD")

PDF_EXTENSIONS = (".pdf",)
DOCX_EXTENSIONS = (".docx",)
TEXT_EXTENSIONS = (".txt", ".md")
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS + DOCX_EXTENSIONS + TEXT_EXTENSIONS


def is_pdf(filename: str) -> bool:
    return (filename or "").lower().endswith(PDF_EXTENSIONS)

def is_docx(filename: str) -> bool:
    return (filename or "").lower().endswith(DOCX_EXTENSIONS)

def is_text(filename: str) -> bool:
    return (filename or "").lower().endswith(TEXT_EXTENSIONS)

def is_supported(filename: str) -> bool:
    return (filename or "").lower().endswith(SUPPORTED_EXTENSIONS)


def decode_raw_bytes(data: bytes) -> str:
    """Last-resort interpretation of the upload as text."""
    if not data:
        return ""
    text = data.decode("utf-8", errors="ignore")
    # strip a UTF-8 BOM left by some editors
    return text.lstrip("\ufeff")

# ------------------ OCR ------------------
def preprocess_pil_image(img: Image.Image) -> Image.Image:
    """
    Grayscale, median denoise, autocontrast.
    Returns a PIL Image (mode 'L') suitable for pytesseract.
    """
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")
    img = img.convert("L")
    img = img.filter(ImageFilter.MedianFilter(size=3))
    return ImageOps.autocontrast(img)

def ocr_pdf_bytes(data: bytes) -> str:
    images = convert_from_bytes(data, dpi=OCR_DPI)
    texts: List[str] = []
    for img in images:
        img = preprocess_pil_image(img)
        texts.append(pytesseract.image_to_string(img, lang=OCR_LANG, config=TESSERACT_CONFIG))
    return "\n\n".join(t.strip() for t in texts if t.strip())

# ------------------ Per-format decoders ------------------
def extract_text_from_pdf_bytes(data: bytes, ocr_fallback: Optional[bool] = None) -> str:
    """
    Native text extraction with pdfplumber first.
    If that yields little/no text and ocr_fallback is True, OCR the rendered pages.
    Falls back to raw byte decoding if nothing could be read.
    """
    if ocr_fallback is None:
        ocr_fallback = OCR_ENABLED
    text_parts = []
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                t = page.extract_text()
                if t:
                    text_parts.append(t)
    except Exception as e:
        logger.warning("pdfplumber failed (%s); trying fallbacks", e)
        text_parts = []

    joined = "\n\n".join(text_parts).strip()
    if len(joined) >= MIN_TEXT_LAYER_CHARS or (joined and not ocr_fallback):
        return joined

    if ocr_fallback:
        try:
            ocr_text = ocr_pdf_bytes(data)
            if ocr_text:
                return ocr_text
        except Exception as e:
            logger.warning("OCR fallback failed (%s)", e)

    return joined or decode_raw_bytes(data)

def extract_text_from_docx_bytes(data: bytes) -> str:
    try:
        doc = docx.Document(io.BytesIO(data))
        parts = [p.text for p in doc.paragraphs if p.text]
        for table in doc.tables:
            for row in table.rows:
                cells = [c.text.strip() for c in row.cells if c.text.strip()]
                if cells:
                    parts.append(" | ".join(dict.fromkeys(cells)))
        return "\n".join(parts).strip()
    except Exception as e:
        logger.warning("python-docx failed (%s); decoding raw bytes", e)
        return decode_raw_bytes(data)

def extract_text_from_bytes(filename: str, data: bytes) -> str:
    """
    Master function: pick a decoder from the filename extension and return text.
    Never raises; unknown extensions are read as plain text.
    """
    if not data:
        return ""
    if is_pdf(filename):
        return extract_text_from_pdf_bytes(data)
    if is_docx(filename):
        return extract_text_from_docx_bytes(data)
    return decode_raw_bytes(data)

# ------------------ CLI quick-test ------------------
if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m helpers.text_extraction /path/to/file")
        sys.exit(1)
    path = sys.argv[1]
    with open(path, "rb") as f:
        b = f.read()
    print("Extracting:", path)
    txt = extract_text_from_bytes(os.path.basename(path), b)
    print("----BEGIN TEXT----")
    print(txt[:20000])
    print("----END TEXT----")
