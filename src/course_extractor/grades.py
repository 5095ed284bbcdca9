from __future__ import annotations

from collections.abc import Iterable
from typing import Literal, Protocol

GradingScale = Literal[4, 5]
GRADING_SCALES: tuple[int, ...] = (4, 5)

# A "+" carries no bonus; E exists only on the 5-point scale.
_POINTS_5 = {"A": 5, "B": 4, "C": 3, "D": 2, "E": 1, "F": 0}
_POINTS_4 = {"A": 4, "B": 3, "C": 2, "D": 1, "F": 0}


class InvalidGradingScale(ValueError):
    """Raised when a grading scale other than 4 or 5 reaches a public entry point."""


class _Graded(Protocol):
    credit_units: int
    grade_point: float


def parse_grading_scale(value: object) -> int:
    """Coerce ``value`` (4, "5", 5.0 ...) to a grading scale or raise InvalidGradingScale."""
    try:
        scale = float(str(value).strip())
    except ValueError:
        scale = None
    if isinstance(value, bool) or scale not in GRADING_SCALES:
        raise InvalidGradingScale(f"grading scale must be one of {GRADING_SCALES}, got {value!r}")
    return int(scale)


def convert_grade_to_points(grade: str, max_grade: int) -> int:
    """Map a letter grade to grade points on the 5-point or 4-point scale.

    ``A``/``A+`` share a value, as do the other ``+`` variants. Anything that
    is not a known letter (including ``E`` on the 4-point scale) is worth 0.
    """
    g = (grade or "").strip().upper()
    if len(g) == 2 and g[1] == "+":
        g = g[0]
    elif len(g) != 1:
        return 0
    table = _POINTS_5 if max_grade == 5 else _POINTS_4
    return table.get(g, 0)


def calculate_gpa(courses: Iterable[_Graded]) -> float:
    total_points = 0.0
    total_units = 0
    for c in courses:
        total_points += c.credit_units * c.grade_point
        total_units += c.credit_units
    if total_units == 0:
        return 0.0
    return round(total_points / total_units, 2)


def calculate_cgpa(
    previous_cgpa: float,
    previous_credits: int,
    semesters: Iterable[tuple[float, int]],
) -> float:
    """Fold new ``(gpa, credit_units)`` semesters into a previous CGPA."""
    weighted = previous_cgpa * previous_credits
    units = previous_credits
    for gpa, sem_units in semesters:
        weighted += gpa * sem_units
        units += sem_units
    if units <= 0:
        return 0.0
    return round(weighted / units, 2)
