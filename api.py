#!/usr/bin/env python3
"""
- Reads uploaded file bytes
- Extracts text (native PDF / DOCX / plain text, OCR fallback for scans)
- Normalizes the text into lines
- Extracts name / email / phone / location / summary / skills
- Returns final JSON
- Applies user edits and serves the result as a downloadable JSON file
    -> POST /parse, /parse/text, /parse/batch
    -> POST /export (edited record -> <filename>.parsed.json attachment)
Nothing is stored: every request is handled in memory.
"""
import os
import io
import time
import logging
from typing import List, Optional, Dict, Any
from urllib.parse import quote
from pydantic import BaseModel
from fastapi.responses import StreamingResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, File, UploadFile, HTTPException
from concurrent.futures import ThreadPoolExecutor

# pipeline helpers (local modules)
from helpers.vocabulary import get_vocabulary
from helpers.field_extraction import ExtractionResult
from helpers.export import apply_edits, export_filename, to_json
from helpers.batch_worker import parse_text, process_single_file
from helpers.text_extraction import is_supported, SUPPORTED_EXTENSIONS

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "0.3.0"
MAX_WORKERS_CAP = int(os.getenv("MAX_WORKERS_CAP", "6"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

app = FastAPI(title="Parsely-API", version=API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class TextPayload(BaseModel):
    text: str = ""


class ExportPayload(BaseModel):
    filename: Optional[str] = None
    parsed: Dict[str, Any] = {}
    edits: Optional[Dict[str, Any]] = None


# load (and validate) the keyword tables once at startup
@app.on_event("startup")
def startup_event():
    vocab = get_vocabulary()
    logger.info("Vocabulary ready: %d skills, %d places", len(vocab.skills), len(vocab.cities))

@app.get("/health")
def health():
    return {"status": "ok", "version": API_VERSION}

def _check_upload(filename: str, contents: bytes):
    if not is_supported(filename):
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported file type '{filename}'. Choose one of {', '.join(SUPPORTED_EXTENSIONS)}",
        )
    if not contents:
        raise HTTPException(status_code=422, detail="Empty or invalid file")
    if len(contents) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"File larger than {MAX_UPLOAD_BYTES} bytes")

@app.post("/parse")
async def parse_resume(file: UploadFile = File(None)):
    if not file:
        raise HTTPException(status_code=400, detail="No file uploaded")
    try:
        filename = file.filename or "uploaded"
        contents = await file.read()
        _check_upload(filename, contents)
        r = process_single_file(filename, contents)
        if r.get("status") != "ok":
            # expose worker error to client
            raise HTTPException(status_code=422, detail=r.get("error") or "Parsing failed")
        return r
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("parse failed")
        raise HTTPException(status_code=500, detail=f"Internal error: {e}")

@app.post("/parse/text")
def parse_plain_text(payload: TextPayload):
    result = parse_text(payload.text)
    return {"status": "ok", "parsed": result.to_dict()}

@app.post("/parse/batch")
async def parse_batch(files: List[UploadFile] = File(None)):
    if not files:
        raise HTTPException(status_code=400, detail="No files provided")

    payload = []
    for f in files:
        contents = await f.read()
        payload.append((f.filename or "unknown", contents))

    results = []
    to_process = []
    for filename, data in payload:
        try:
            _check_upload(filename, data)
            to_process.append((filename, data))
        except HTTPException as e:
            results.append({"file": filename, "status": "error", "error": e.detail})

    cpu = os.cpu_count() or 2
    max_workers = min(max(1, cpu - 1), max(1, len(to_process)), MAX_WORKERS_CAP)

    start_time = time.perf_counter()
    try:
        with ThreadPoolExecutor(max_workers=max_workers) as ex:
            futures = [ex.submit(process_single_file, filename, data) for filename, data in to_process]
            for fut in futures:
                results.append(fut.result())
    except Exception as e:
        logger.exception("batch failed")
        raise HTTPException(status_code=500, detail=f"Batch processing failed: {e}")
    elapsed = time.perf_counter() - start_time

    return {"batch_count": len(results), "results": results, "parse_time": elapsed}

@app.post("/export")
def export_record(payload: ExportPayload):
    """
    Serialize a (possibly edited) record: expects {"filename": "...", "parsed": {...}, "edits": {...}}
    """
    try:
        result = apply_edits(ExtractionResult.from_dict(payload.parsed), payload.edits)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    name = export_filename(payload.filename)
    body = to_json(result).encode("utf-8")
    return StreamingResponse(
        io.BytesIO(body),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{quote(name)}"'},
    )
