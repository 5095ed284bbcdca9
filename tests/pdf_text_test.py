from pathlib import Path

import pytest
from reportlab.pdfgen import canvas  # type: ignore

from course_extractor.pdf_text import (
    DEFAULT_MAX_PAGES,
    PdfTextError,
    extract_pdf_text,
    group_words_into_rows,
    max_pages_from_env,
)


def test_group_words_into_rows():
    words = [
        {"text": "UNITS", "x0": 200.0, "top": 101.0},
        {"text": "MATH", "x0": 10.0, "top": 100.0},
        {"text": "CHEM", "x0": 10.0, "top": 130.0},
        {"text": "101", "x0": 60.0, "top": 99.5},
        {"text": "3", "x0": 150.0, "top": 100.2},
        {"text": "  ", "x0": 170.0, "top": 100.0},
    ]
    rows = group_words_into_rows(words, page=1)
    assert [r.text() for r in rows] == ["MATH 101 3 UNITS", "CHEM"]
    assert {r.page for r in rows} == {1}


def test_max_pages_from_env(monkeypatch):
    monkeypatch.delenv("COURSE_EXTRACTOR_MAX_PAGES", raising=False)
    assert max_pages_from_env() == DEFAULT_MAX_PAGES
    monkeypatch.setenv("COURSE_EXTRACTOR_MAX_PAGES", "5")
    assert max_pages_from_env() == 5
    monkeypatch.setenv("COURSE_EXTRACTOR_MAX_PAGES", "lots")
    assert max_pages_from_env() == DEFAULT_MAX_PAGES
    monkeypatch.setenv("COURSE_EXTRACTOR_MAX_PAGES", "0")
    assert max_pages_from_env() == DEFAULT_MAX_PAGES


def _make_pdf(path: Path, pages: list[str]) -> None:
    c = canvas.Canvas(str(path))
    c.setFont("Helvetica", 12)
    for line in pages:
        c.drawString(72, 720, line)
        c.showPage()
    c.save()


def test_extract_pdf_text_limits_pages(tmp_path):
    pdf = tmp_path / "t.pdf"
    _make_pdf(pdf, ["MATH 101 3 UNITS", "CHEM 102 4 UNITS", "BIOL 110 2 UNITS"])
    text = extract_pdf_text(pdf, max_pages=2)
    assert text.splitlines() == ["MATH 101 3 UNITS", "CHEM 102 4 UNITS"]


def test_unreadable_pdf(tmp_path):
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"not a pdf at all")
    with pytest.raises(PdfTextError):
        extract_pdf_text(bad)
