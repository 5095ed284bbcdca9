from __future__ import annotations

import re

_WS = re.compile(r"\s+")
# ASCII letters/digits, whitespace and the punctuation transcripts use as separators
_DISALLOWED = re.compile(r"[^A-Za-z0-9\s.,():;\-]")


def _fold_layout_chars(s: str) -> str:
    s = s.replace("\xa0", " ").replace("\u2009", " ")
    s = s.replace("\u2013", "-").replace("\u2014", "-").replace("\u2212", "-")
    return s


def normalize_text(text: str) -> str:
    """Flatten raw PDF text into one uppercase line for pattern scanning.

    Whitespace runs collapse to a single space, anything outside
    ``[A-Z0-9 .,():;-]`` is dropped, and the result is trimmed and uppercased.
    ``normalize_text(normalize_text(s)) == normalize_text(s)`` for any ``s``.
    """
    if not text:
        return ""
    s = _WS.sub(" ", _fold_layout_chars(text))
    s = _DISALLOWED.sub("", s)
    # dropped characters can leave two spaces side by side
    s = _WS.sub(" ", s)
    return s.strip().upper()
