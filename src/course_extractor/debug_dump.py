from __future__ import annotations

import argparse
import re
from pathlib import Path
from re import Pattern

from course_extractor.cli import non_negative_int
from course_extractor.extract_courses import (
    CONTEXT_AFTER,
    CONTEXT_BEFORE,
    context_window,
    find_course_codes,
    match_credit_rule,
    match_grade_rule,
)
from course_extractor.grades import GRADING_SCALES
from course_extractor.normalize import normalize_text
from course_extractor.pdf_text import PdfTextError, read_input_text


def dump(
    text: str,
    max_grade: int,
    rx: Pattern[str] | None = None,
    before: int = CONTEXT_BEFORE,
    after: int = CONTEXT_AFTER,
    show_text: bool = False,
) -> None:
    normalized = normalize_text(text)
    if show_text:
        print(normalized)
        print("=" * 60)
    for m in find_course_codes(normalized):
        if rx and not rx.search(m.code):
            continue
        window = context_window(normalized, m, before=before, after=after)
        units = match_credit_rule(window)
        grade = match_grade_rule(window, max_grade)
        print(f"[{m.code} @ {m.start}..{m.end}]")
        print(f"   window: {window.text!r}")
        print(f"   units: {units[0]} via {units[1]!r}" if units else "   units: default")
        print(f"   grade: {grade[0]:g} via {grade[1]!r}" if grade else "   grade: not found")
        print("-" * 60)


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(
        prog="course-extractor-debug", description="Show course windows and the rules that fired"
    )
    ap.add_argument("path", help="Path to PDF or .txt")
    ap.add_argument("--scale", type=int, choices=GRADING_SCALES, required=True)
    ap.add_argument("--pages", type=int, default=None, help="PDF pages to read")
    ap.add_argument("--window-before", type=non_negative_int, default=CONTEXT_BEFORE)
    ap.add_argument("--window-after", type=non_negative_int, default=CONTEXT_AFTER)
    ap.add_argument("--grep", help="Regex to filter course codes", default=None)
    ap.add_argument("--text", action="store_true", help="Also print the normalized text")
    args = ap.parse_args(argv)

    path = Path(args.path)
    if not path.exists():
        print("File not found:", path)
        return
    try:
        text = read_input_text(path, max_pages=args.pages)
    except PdfTextError as exc:
        print(exc)
        return

    rx: Pattern[str] | None = re.compile(args.grep, re.I) if args.grep else None
    dump(
        text,
        args.scale,
        rx=rx,
        before=args.window_before,
        after=args.window_after,
        show_text=args.text,
    )


if __name__ == "__main__":
    main()
