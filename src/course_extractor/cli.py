from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from course_extractor.extract_courses import (
    CONTEXT_AFTER,
    CONTEXT_BEFORE,
    ExtractedCourse,
    example_courses,
    extract_course_data,
)
from course_extractor.grades import GRADING_SCALES, calculate_gpa
from course_extractor.pdf_text import PdfTextError, read_input_text


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("pdfminer").setLevel(logging.ERROR)


def non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {n}")
    return n


def format_course(c: ExtractedCourse) -> str:
    units = f"{c.credit_units}{'' if c.credit_unit_found else '?'} units"
    grade = f"grade point {c.grade_point:g}" if c.grade_found else "grade point ?"
    return f"  {c.name} — {units} — {grade}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="course-extractor",
        description="Pull course codes, credit units and grades out of transcripts",
    )
    parser.add_argument("inputs", nargs="+", help="PDF or .txt file(s)")
    parser.add_argument(
        "--scale", type=int, choices=GRADING_SCALES, required=True, help="Grading scale (4 or 5)"
    )
    parser.add_argument(
        "--ignore-grades", action="store_true", help="Only recover credit units"
    )
    parser.add_argument(
        "--pages",
        type=int,
        default=None,
        help="PDF pages to read (default: COURSE_EXTRACTOR_MAX_PAGES or 3)",
    )
    parser.add_argument(
        "--window-before",
        type=non_negative_int,
        default=CONTEXT_BEFORE,
        help="Context chars before a code",
    )
    parser.add_argument(
        "--window-after",
        type=non_negative_int,
        default=CONTEXT_AFTER,
        help="Context chars after a code",
    )
    parser.add_argument("--json", action="store_true", help="Print records as JSON")
    parser.add_argument(
        "--examples", action="store_true", help="Show example courses when nothing is detected"
    )
    parser.add_argument("--verbose", action="store_true", help="Log matching details")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(args.verbose)

    failed = False
    for inp in args.inputs:
        p = Path(inp)
        base = p.name
        if not p.exists():
            print("File not found:", p)
            failed = True
            continue
        try:
            text = read_input_text(p, max_pages=args.pages)
        except PdfTextError as exc:
            print(f"Could not read {base}: {exc}")
            failed = True
            continue

        courses = extract_course_data(
            text,
            args.scale,
            ignore_grades=args.ignore_grades,
            before=args.window_before,
            after=args.window_after,
        )
        used_examples = not courses and args.examples
        if used_examples:
            courses = example_courses()

        if args.json:
            doc = {
                "file": base,
                "examples": used_examples,
                "courses": [c.to_dict() for c in courses],
                "gpa": calculate_gpa(courses),
            }
            print(json.dumps(doc, indent=2))
            continue

        print(f"Results for {base}")
        if not courses:
            print(" [no course codes detected]")
        else:
            if used_examples:
                print(" [no course codes detected, showing examples]")
            for c in courses:
                print(format_course(c))
            print(f"  GPA: {calculate_gpa(courses):.2f} / {args.scale}")
        if args.verbose:
            unconfirmed = sum(1 for c in courses if not (c.credit_unit_found and c.grade_found))
            print(f"[verbose] records needing review: {unconfirmed}")
        print(f"Parsed {base} (scale: {args.scale})")

    if failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
