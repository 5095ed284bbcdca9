import pytest

from course_extractor.normalize import normalize_text


def test_collapses_strips_and_uppercases():
    raw = "  Math 101\t\tCalculus I *\n\n3 Units  |  Grade: A+ "
    assert normalize_text(raw) == "MATH 101 CALCULUS I 3 UNITS GRADE: A"


def test_keeps_separator_punctuation():
    assert normalize_text("comp-202 (3) a.b,c;d:e") == "COMP-202 (3) A.B,C;D:E"


def test_dashes_fold_to_hyphen():
    assert normalize_text("MATH\N{EN DASH}101 \N{EM DASH} x\N{NO-BREAK SPACE}y") == "MATH-101 - X Y"


def test_empty():
    assert normalize_text("") == ""
    assert normalize_text(" \n\t ") == ""


@pytest.mark.parametrize(
    "raw",
    [
        "Fall 2023 | PHYS105 · 4 cr ★ B",
        "ß été ﬁnal ΐ",
        "a & b # c\n\n\n d",
        "__init__ ** 75% (A)",
    ],
)
def test_idempotent(raw):
    once = normalize_text(raw)
    assert normalize_text(once) == once
