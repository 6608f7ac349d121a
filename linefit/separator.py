"""Finding the words of a paragraph.

A separator maps text to the spans of its words, in order and without overlap. Breaks are allowed between any two
spans. The text between two spans must be whitespace, it may also be empty, which allows a break inside a run of
characters without inserting a separator (between two CJK ideographs, after a hyphen).
"""

import re
from typing import Callable, TypeAlias

from .errors import ContractViolation
from .types import Span

WordSeparator: TypeAlias = Callable[[str], list[Span]]

re_words = re.compile(r"\S+")


def whitespace_separator(text: str) -> list[Span]:
    """Words are maximal runs of non-whitespace characters."""
    return [m.span() for m in re_words.finditer(text)]


class UnicodeSeparator:
    """Finds words at the line break opportunities of the Unicode line breaking algorithm (UAX #14).

    Every break opportunity ends a word, and trailing whitespace is stripped from it. Text without spaces, like
    Chinese or Japanese, can thus be broken between characters, and words are broken after hyphens. Mandatory breaks
    are treated like any other break opportunity, hard line breaks are handled by the preserve whitespace policy.
    """

    def __init__(self):
        from uniseg.linebreak import line_break_units

        self._line_break_units = line_break_units

    def __call__(self, text: str) -> list[Span]:
        spans = []
        start = 0
        for unit in self._line_break_units(text):
            end = start + len(unit)
            word = unit.strip()
            if word:
                offset = start + len(unit) - len(unit.lstrip())
                spans.append((offset, offset + len(word)))
            start = end
        return spans


def validate_spans(text: str, spans: list[Span]) -> list[Span]:
    """Checks that spans are non-empty, ordered, and separated only by whitespace."""
    previous = 0
    for start, end in spans:
        if not previous <= start < end <= len(text) or (start > previous and not text[previous:start].isspace()):
            raise ContractViolation(
                f"Word separator returned invalid span {(start, end)!r} for {text!r}: spans must be non-empty, "
                "ordered, and separated only by whitespace",
                text,
            )
        previous = end

    if previous < len(text) and not text[previous:].isspace():
        raise ContractViolation(f"Word separator dropped the text {text[previous:]!r} from {text!r}", text)
    return spans
