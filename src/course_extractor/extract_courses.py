from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from re import Pattern

from course_extractor.grades import GradingScale, convert_grade_to_points, parse_grading_scale
from course_extractor.normalize import normalize_text

log = logging.getLogger(__name__)

# ---------- Tuning ----------
CONTEXT_BEFORE = 150
CONTEXT_AFTER = 250
DEFAULT_CREDIT_UNITS = 3
MIN_CREDIT_UNITS = 1
MAX_CREDIT_UNITS = 12
FALLBACK_MAX_CREDIT_UNITS = 6

# ---------- Regexes ----------
# ABC 123, ABC123, ABC-123, ABCD 1234X
COURSE_CODE_PAT = re.compile(r"\b([A-Z]{2,4})\s?-?\s?(\d{3,4}[A-Z]?)\b")

_UNIT_KW = r"(?:UNITS?|CREDITS?|CU|CR|HOURS?)"
_GRADE_LABEL = r"(?:GRADE|COURSE\s+GRADE|GRADE\s+VALUE|MARK|SCORE)"
_POINT_LABEL = r"(?:GRADE\s+POINTS?|GP|GPA)"
_LETTER = r"([A-F][+-]?)\b"
_NUMERIC_GRADE = re.compile(r"^\d(?:\.\d+)?$")

# Tokens that mark a course status (in progress, withdrawn, incomplete, audit,
# transfer, credit only, no credit) and look like letter grades.
STATUS_TOKEN_PAT = re.compile(r"\b(?:IP|W|I|AU|TR|CR|NC)\b")


@dataclass(frozen=True)
class Rule:
    name: str
    pattern: Pattern[str]
    anchored: bool = True
    low: int = MIN_CREDIT_UNITS
    high: int = MAX_CREDIT_UNITS


# Anchored rules see only the text after the course code.
CREDIT_UNIT_RULES: tuple[Rule, ...] = (
    Rule("number+keyword", re.compile(rf"(?<![\d.])(\d{{1,2}})(?:\.0+)?\s*{_UNIT_KW}\b")),
    Rule("keyword=number", re.compile(rf"\b{_UNIT_KW}\s*[=:]\s*(\d{{1,2}})(?:\.0+)?\b")),
    Rule(
        "labeled phrase",
        re.compile(r"\b(?:COURSE\s+UNIT|CREDIT\s+UNIT|CREDIT\s+HOUR)S?\s*[=:]?\s*(\d{1,2})\b"),
    ),
    Rule("parenthesized", re.compile(rf"\(\s*(\d{{1,2}})\s*(?:{_UNIT_KW})?\s*\)")),
    Rule("adjacent digit", re.compile(r"^\s*[-:]?\s*(\d)\b(?!\s*(?:ST|ND|RD|TH|\d))")),
    Rule("digit+CR", re.compile(r"(?<![\d.])\b(\d)\s*(?:CR|CU)\b")),
    Rule(
        "standalone digit",
        re.compile(r"\s([1-6])\b(?!\s*(?:ST|ND|RD|TH|\d|%|\.|,\d))"),
        low=MIN_CREDIT_UNITS,
        high=FALLBACK_MAX_CREDIT_UNITS,
    ),
)

# Whole-window rules run last: label, grade point, score+letter, bare letter.
GRADE_RULES: tuple[Rule, ...] = (
    Rule("label", re.compile(rf"\b{_GRADE_LABEL}\s*[=:]?\s*{_LETTER}")),
    Rule("grade point", re.compile(rf"\b{_POINT_LABEL}\s*[=:]?\s*(\d(?:\.\d+)?)\b")),
    Rule("bare letter", re.compile(rf"\b{_LETTER}")),
    Rule("score+letter", re.compile(rf"\b\d+\s*{_LETTER}")),
    Rule("label (window)", re.compile(rf"\b{_GRADE_LABEL}\s*[=:]?\s*{_LETTER}"), anchored=False),
    Rule(
        "grade point (window)",
        re.compile(rf"\b{_POINT_LABEL}\s*[=:]?\s*(\d(?:\.\d+)?)\b"),
        anchored=False,
    ),
    Rule("score+letter (window)", re.compile(rf"\b\d+\s*{_LETTER}"), anchored=False),
    Rule("bare letter (window)", re.compile(rf"\b{_LETTER}"), anchored=False),
)


@dataclass
class ExtractedCourse:
    name: str
    credit_units: int
    grade_point: float
    credit_unit_found: bool = False
    grade_found: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "creditUnits": self.credit_units,
            "gradePoint": self.grade_point,
            "creditUnitFound": self.credit_unit_found,
            "gradeFound": self.grade_found,
        }


@dataclass(frozen=True)
class CodeMatch:
    code: str
    start: int
    end: int


@dataclass(frozen=True)
class CourseWindow:
    """Slice of normalized text around one course code.

    ``code_start``/``code_end`` locate the code inside ``text``.
    """

    code: str
    text: str
    code_start: int
    code_end: int

    @property
    def tail(self) -> str:
        return self.text[self.code_end :]

    @property
    def masked(self) -> str:
        # the code's own digits/letters must not read as a score or a grade
        width = self.code_end - self.code_start
        return self.text[: self.code_start] + " " * width + self.text[self.code_end :]


def canonical_code(letters: str, digits: str) -> str:
    return f"{letters} {digits}"


def find_course_codes(normalized: str) -> list[CodeMatch]:
    """Return each distinct course code once, in order of first appearance."""
    out: list[CodeMatch] = []
    seen: set[str] = set()
    for m in COURSE_CODE_PAT.finditer(normalized):
        code = canonical_code(m.group(1), m.group(2))
        if code in seen:
            log.debug("skipping repeated course code %s at %d", code, m.start())
            continue
        seen.add(code)
        out.append(CodeMatch(code, m.start(), m.end()))
    return out


def context_window(
    normalized: str,
    match: CodeMatch,
    before: int = CONTEXT_BEFORE,
    after: int = CONTEXT_AFTER,
) -> CourseWindow:
    start = max(0, match.start - max(0, before))
    end = min(len(normalized), match.end + max(0, after))
    return CourseWindow(
        code=match.code,
        text=normalized[start:end],
        code_start=match.start - start,
        code_end=match.end - start,
    )


def match_credit_rule(window: CourseWindow) -> tuple[int, str] | None:
    """First credit-unit rule whose candidate falls inside its accepted range."""
    for rule in CREDIT_UNIT_RULES:
        m = rule.pattern.search(window.tail if rule.anchored else window.masked)
        if not m:
            continue
        units = int(m.group(1))
        if rule.low <= units <= rule.high:
            return units, rule.name
        log.debug("%s: rejected %d units from rule %r", window.code, units, rule.name)
    return None


def recover_credit_units(window: CourseWindow) -> tuple[int, bool]:
    hit = match_credit_rule(window)
    if hit is None:
        return DEFAULT_CREDIT_UNITS, False
    return hit[0], True


def _grade_value(token: str, max_grade: int) -> float | None:
    if _NUMERIC_GRADE.match(token):
        value = float(token)
        return value if 0 <= value <= max_grade else None
    return convert_grade_to_points(token, max_grade)


def match_grade_rule(window: CourseWindow, max_grade: int) -> tuple[float, str] | None:
    # A status token anywhere in the window vetoes every candidate.
    if STATUS_TOKEN_PAT.search(window.masked):
        log.debug("%s: status token in window, grade left blank", window.code)
        return None
    for rule in GRADE_RULES:
        m = rule.pattern.search(window.tail if rule.anchored else window.masked)
        if not m:
            continue
        value = _grade_value(m.group(1), max_grade)
        if value is not None:
            return value, rule.name
        log.debug("%s: rejected grade %r from rule %r", window.code, m.group(1), rule.name)
    return None


def recover_grade(
    window: CourseWindow, max_grade: GradingScale, suppress: bool = False
) -> tuple[float, bool]:
    if suppress:
        return 0, False
    hit = match_grade_rule(window, max_grade)
    if hit is None:
        return 0, False
    return hit[0], True


def extract_course_data(
    text: str,
    max_grade: GradingScale,
    ignore_grades: bool = False,
    *,
    before: int = CONTEXT_BEFORE,
    after: int = CONTEXT_AFTER,
) -> list[ExtractedCourse]:
    """Pull course records out of raw transcript text.

    ``max_grade`` (4 or 5) picks the letter-to-point table and the valid range
    for numeric grade points; it has no default. With ``ignore_grades`` every
    record comes back with ``grade_point=0`` and ``grade_found=False``.
    Fields that could not be recovered carry a placeholder value and a False
    ``*_found`` flag, so the caller can ask the user to confirm them.
    """
    scale = parse_grading_scale(max_grade)
    normalized = normalize_text(text)
    courses: list[ExtractedCourse] = []
    for match in find_course_codes(normalized):
        window = context_window(normalized, match, before=before, after=after)
        units, units_found = recover_credit_units(window)
        grade_point, grade_found = recover_grade(window, scale, suppress=ignore_grades)
        courses.append(
            ExtractedCourse(
                name=match.code,
                credit_units=units,
                grade_point=grade_point,
                credit_unit_found=units_found,
                grade_found=grade_found,
            )
        )
    log.debug("extracted %d course(s) from %d characters", len(courses), len(normalized))
    return courses


def example_courses() -> list[ExtractedCourse]:
    """Placeholder courses offered when a transcript yields nothing usable."""
    return [
        ExtractedCourse("MATH 101", 3, 0),
        ExtractedCourse("COMP 202", 4, 0),
        ExtractedCourse("PHYS 105", 3, 0),
        ExtractedCourse("ENGL 211", 3, 0),
    ]
