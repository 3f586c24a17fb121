from helpers import batch_worker
from helpers.batch_worker import parse_text, process_single_file


def test_process_text_file(sample_resume_bytes):
    r = process_single_file("cv.txt", sample_resume_bytes)
    assert r["status"] == "ok"
    assert r["file"] == "cv.txt"
    assert r["parsed"]["name"] == "Aisha Khan"
    assert r["parsed"]["email"] == "aisha.khan@example.com"
    assert set(r["timings"]) == {"decode", "normalize", "extract"}
    assert r["parse_time"] >= 0


def test_process_empty_file():
    r = process_single_file("cv.txt", b"")
    assert r["status"] == "ok"
    assert r["parsed"]["name"] is None
    assert r["parsed"]["skills"] == []


def test_unexpected_failure_becomes_error_envelope(monkeypatch, sample_resume_bytes):
    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(batch_worker, "extract_fields", boom)
    r = process_single_file("cv.txt", sample_resume_bytes)
    assert r["status"] == "error"
    assert r["error"] == "boom"
    assert "parsed" not in r


def test_parse_text(sample_resume):
    assert parse_text(sample_resume).location == "Dubai, UAE"
