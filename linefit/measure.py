from typing import Callable, Sequence, TypeAlias
from unicodedata import east_asian_width

import numpy as np
from wcwidth import wcwidth

from .errors import ContractViolation
from .types import IntVector

Measure: TypeAlias = Callable[[str], Sequence[int] | IntVector]


class ColumnMeasure:
    """Measures text in terminal columns, one width per code point.

    Combining marks and other zero width characters take no space, East Asian wide and fullwidth characters take two
    columns. Characters for which no width is defined (control characters) fall back to ``fallback_width`` instead of
    failing, tabs count as ``tab_width`` columns.
    """

    def __init__(self, ambiguous_width: int = 1, fallback_width: int = 1, tab_width: int = 4):
        self.ambiguous_width = ambiguous_width
        self.fallback_width = fallback_width
        self.tab_width = tab_width

    def __call__(self, text: str) -> IntVector:
        return self.character_widths(text)

    def character_widths(self, text: str) -> IntVector:
        widths = np.fromiter((self._char_width(ch) for ch in text), dtype=np.int64, count=len(text))
        return widths

    def width(self, text: str) -> int:
        return int(self.character_widths(text).sum())

    def _char_width(self, ch: str) -> int:
        if ch == "\t":
            return self.tab_width

        w = wcwidth(ch)
        if w < 0:
            return self.fallback_width
        if w == 1 and self.ambiguous_width != 1 and east_asian_width(ch) == "A":
            return self.ambiguous_width
        return w

    def __repr__(self):
        return (
            f"{type(self).__name__}(ambiguous_width={self.ambiguous_width}, "
            f"fallback_width={self.fallback_width}, tab_width={self.tab_width})"
        )


def monospace_measure(s: str) -> list[int]:
    return [1] * len(s)


def character_widths(measure: Measure, text: str) -> IntVector:
    """Runs an oracle over ``text`` and checks the result.

    Raises ContractViolation when the oracle does not return one non-negative width per character.
    """
    widths = np.asarray(measure(text))
    if widths.shape != (len(text),):
        raise ContractViolation(
            f"Width oracle returned {widths.size} widths for {len(text)} characters in {text!r}", text
        )

    # Integral floats are accepted, anything else would have to be rounded
    if not np.issubdtype(widths.dtype, np.integer):
        if not np.issubdtype(widths.dtype, np.floating) or not np.all(np.mod(widths, 1) == 0):
            raise ContractViolation(f"Width oracle returned non-integer widths for {text!r}", text)

    widths = widths.astype(np.int64)
    if len(widths) and widths.min() < 0:
        raise ContractViolation(f"Width oracle returned a negative width for {text!r}", text)
    return widths


def text_width(measure: Measure, text: str) -> int:
    return int(character_widths(measure, text).sum())
