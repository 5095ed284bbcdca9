from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

try:
    import pdfplumber  # type: ignore
except Exception:
    pdfplumber = None  # type: ignore

log = logging.getLogger(__name__)

# Transcripts put their course tables up front; later pages are mostly legends.
DEFAULT_MAX_PAGES = 3


class PdfTextError(RuntimeError):
    """The PDF could not be opened or its text layer could not be read."""


@dataclass
class Tok:
    text: str
    x0: float
    top: float


@dataclass
class Row:
    page: int
    y: float
    toks: list[Tok]

    def text(self) -> str:
        return " ".join(t.text for t in self.toks)


def max_pages_from_env(default: int = DEFAULT_MAX_PAGES) -> int:
    raw = os.environ.get("COURSE_EXTRACTOR_MAX_PAGES", "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning("ignoring COURSE_EXTRACTOR_MAX_PAGES=%r (not an integer)", raw)
        return default
    return value if value > 0 else default


def group_words_into_rows(words: list[dict], page: int, y_tol: float = 3.2) -> list[Row]:  # type: ignore[type-arg]
    """Bucket pdfplumber words into visual rows, left to right within a row."""
    rows: list[Row] = []
    cur: Row | None = None
    ordered = sorted(words, key=lambda w: (float(w.get("top", 0.0)), float(w.get("x0", 0.0))))
    for w in ordered:
        t = str(w.get("text") or "").strip()
        if not t:
            continue
        tok = Tok(t, float(w.get("x0", 0.0)), float(w.get("top", 0.0)))
        if cur is None or abs(tok.top - cur.y) > y_tol:
            if cur is not None:
                cur.toks.sort(key=lambda tt: tt.x0)
                rows.append(cur)
            cur = Row(page, tok.top, [tok])
        else:
            cur.toks.append(tok)
    if cur is not None:
        cur.toks.sort(key=lambda tt: tt.x0)
        rows.append(cur)
    return rows


def extract_rows(path: Path, max_pages: int | None = None) -> list[Row]:
    if pdfplumber is None:
        raise PdfTextError("pdfplumber unavailable in this environment.")
    limit = max_pages if max_pages is not None else max_pages_from_env()
    rows: list[Row] = []
    try:
        with pdfplumber.open(path) as pdf:
            for pidx, page in enumerate(pdf.pages, start=1):
                if pidx > limit:
                    break
                words = page.extract_words() or []
                rows.extend(group_words_into_rows(words, pidx))
    except Exception as exc:
        raise PdfTextError(f"could not read {path}: {exc}") from exc
    log.debug("read %d row(s) from %s", len(rows), path)
    return rows


def extract_pdf_text(path: Path, max_pages: int | None = None) -> str:
    """Text layer of the first ``max_pages`` pages, one visual row per line."""
    return "\n".join(r.text() for r in extract_rows(path, max_pages=max_pages))


def read_input_text(path: Path, max_pages: int | None = None) -> str:
    if path.suffix.lower() == ".pdf":
        return extract_pdf_text(path, max_pages=max_pages)
    return path.read_text(encoding="utf-8", errors="replace")
