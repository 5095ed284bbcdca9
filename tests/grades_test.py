from dataclasses import dataclass

import pytest

from course_extractor.grades import (
    InvalidGradingScale,
    calculate_cgpa,
    calculate_gpa,
    convert_grade_to_points,
    parse_grading_scale,
)


@pytest.mark.parametrize(
    "grade,five,four",
    [
        ("A", 5, 4),
        ("A+", 5, 4),
        ("B", 4, 3),
        ("B+", 4, 3),
        ("C", 3, 2),
        ("C+", 3, 2),
        ("D", 2, 1),
        ("D+", 2, 1),
        ("E", 1, 0),
        ("E+", 1, 0),
        ("F", 0, 0),
        ("P", 0, 0),
        ("", 0, 0),
        ("AB", 0, 0),
    ],
)
def test_convert_grade_to_points(grade, five, four):
    assert convert_grade_to_points(grade, 5) == five
    assert convert_grade_to_points(grade, 4) == four


def test_convert_is_case_insensitive():
    assert convert_grade_to_points(" b+ ", 5) == 4


@pytest.mark.parametrize("value,expected", [(4, 4), ("5", 5), (5.0, 5), (" 4 ", 4)])
def test_parse_grading_scale(value, expected):
    assert parse_grading_scale(value) == expected


@pytest.mark.parametrize("value", [3, 10, "five", None, True, 4.5])
def test_parse_grading_scale_rejects(value):
    with pytest.raises(InvalidGradingScale):
        parse_grading_scale(value)


@dataclass
class _Course:
    credit_units: int
    grade_point: float


def test_calculate_gpa():
    assert calculate_gpa([]) == 0.0
    assert calculate_gpa([_Course(3, 5), _Course(2, 3)]) == 4.2
    assert calculate_gpa([_Course(4, 4), _Course(3, 0), _Course(3, 2)]) == 2.2


def test_calculate_cgpa():
    assert calculate_cgpa(0.0, 0, []) == 0.0
    assert calculate_cgpa(4.0, 30, [(3.0, 15), (5.0, 15)]) == 4.0
    assert calculate_cgpa(3.5, 20, [(4.5, 20)]) == 4.0
