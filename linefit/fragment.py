import logging
import re
from dataclasses import dataclass, replace
from functools import cached_property
from typing import Iterator

import numpy as np

from .measure import ColumnMeasure, Measure, character_widths, text_width
from .options import WhitespacePolicy
from .separator import WordSeparator, validate_spans, whitespace_separator
from .splitter import Splitter, no_split, validate_split_points
from .types import BoolVector, IntVector

logger = logging.getLogger(__name__)

re_newline = re.compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class Fragment:
    """
    A fragment represents an unbreakable chunk of characters. Each fragment has a width and a whitespace width value.
    The latter represents the spacing between that and the next fragment. The penalty width is a special spacing that
    is only used when the fragment appears at the end of a line, for example to reserve space for a hyphen.

    Interior fragments end inside a word: breaking after them splits the word.
    """

    word: str
    whitespace: str
    penalty: str
    width: int
    whitespace_width: int
    penalty_width: int
    interior: bool


class Fragments:
    """An immutable paragraph of fragments, stored column-wise."""

    words: list[str]
    whitespace: list[str]
    penalties: list[str]

    widths: IntVector
    whitespace_widths: IntVector
    penalty_widths: IntVector
    interior: BoolVector

    def __init__(
        self,
        words: list[str],
        whitespace: list[str],
        penalties: list[str],
        widths: IntVector,
        whitespace_widths: IntVector,
        penalty_widths: IntVector,
        interior: BoolVector,
    ):
        n = len(words)
        if not len(whitespace) == len(penalties) == len(widths) == len(whitespace_widths) == len(penalty_widths) == n:
            raise ValueError("All fragment attributes must have the same length.")

        self.words = list(words)
        self.whitespace = list(whitespace)
        self.penalties = list(penalties)
        self.widths = self._freeze(widths, np.int64)
        self.whitespace_widths = self._freeze(whitespace_widths, np.int64)
        self.penalty_widths = self._freeze(penalty_widths, np.int64)
        self.interior = self._freeze(interior, bool)

    @staticmethod
    def _freeze(values, dtype):
        arr = np.array(values, dtype=dtype).reshape(-1)
        arr.flags.writeable = False
        return arr

    @classmethod
    def empty(cls) -> "Fragments":
        return cls([], [], [], [], [], [], [])

    @classmethod
    def from_fragments(cls, fragments: list[Fragment]) -> "Fragments":
        return cls(
            [f.word for f in fragments],
            [f.whitespace for f in fragments],
            [f.penalty for f in fragments],
            [f.width for f in fragments],
            [f.whitespace_width for f in fragments],
            [f.penalty_width for f in fragments],
            [f.interior for f in fragments],
        )

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return Fragments(
                self.words[i],
                self.whitespace[i],
                self.penalties[i],
                self.widths[i],
                self.whitespace_widths[i],
                self.penalty_widths[i],
                self.interior[i],
            )

        return Fragment(
            self.words[i],
            self.whitespace[i],
            self.penalties[i],
            int(self.widths[i]),
            int(self.whitespace_widths[i]),
            int(self.penalty_widths[i]),
            bool(self.interior[i]),
        )

    def __iter__(self) -> Iterator[Fragment]:
        for i in range(len(self)):
            yield self[i]

    def __repr__(self):
        return f"{type(self).__name__}({self.words!r})"

    @cached_property
    def prefix_widths(self) -> list[int]:
        """Cumulative width of fragments and their whitespace, prefix_widths[k] covers fragments[:k]."""
        cwidths = np.zeros(len(self) + 1, dtype=np.int64)
        cwidths[1:] = (self.widths + self.whitespace_widths).cumsum()
        return cwidths.tolist()

    def line_width(self, i: int, j: int) -> int:
        """Width of a line holding fragments[i:j], without the trailing whitespace but with the trailing penalty."""
        cwidths = self.prefix_widths
        return cwidths[j] - cwidths[i] - int(self.whitespace_widths[j - 1]) + int(self.penalty_widths[j - 1])

    def get_fragment_str(self, i: int) -> str:
        """Helper function to get the text representation of the i-th fragment."""
        return self.words[i] + self.whitespace[i]


class TextFragmenter:
    """Cuts text into fragments at the words found by a separator and at the break points offered by a word splitter."""

    def __init__(
        self,
        measure: Measure = None,
        splitter: Splitter = None,
        whitespace: WhitespacePolicy | str = WhitespacePolicy.NORMALIZE,
        tab_width: int = 4,
        separator: WordSeparator = None,
    ):
        if measure is None:
            measure = ColumnMeasure(tab_width=tab_width)

        if splitter is None:
            splitter = no_split

        if separator is None:
            separator = whitespace_separator

        self.measure = measure
        self.splitter = splitter
        self.separator = separator
        self.whitespace = WhitespacePolicy(whitespace)
        self.tab_width = tab_width
        self.space_width = text_width(measure, " ")

    def paragraphs(self, text: str) -> list[Fragments]:
        """Fragments every paragraph of the text. Only preserved whitespace keeps newlines as hard breaks."""
        if not text:
            return []

        if self.whitespace is WhitespacePolicy.PRESERVE:
            return [self(paragraph) for paragraph in re_newline.split(text)]
        return [self(text)]

    def __call__(self, text: str) -> Fragments:
        spans = validate_spans(text, self.separator(text))
        if not spans:
            return Fragments.empty()

        widths = character_widths(self.measure, text)
        if self.whitespace is WhitespacePolicy.PRESERVE:
            widths[np.fromiter((ch == "\t" for ch in text), dtype=bool, count=len(text))] = self.tab_width

        cwidths = np.zeros(len(text) + 1, dtype=np.int64)
        cwidths[1:] = widths.cumsum()

        fragments = []
        for k, (start, end) in enumerate(spans):
            ws_end = spans[k + 1][0] if k + 1 < len(spans) else len(text)
            if self.whitespace is WhitespacePolicy.PRESERVE:
                ws, ws_width = self._render(text[end:ws_end]), int(cwidths[ws_end] - cwidths[end])
            elif end < ws_end and k + 1 < len(spans):
                ws, ws_width = " ", self.space_width
            else:
                ws, ws_width = "", 0

            fragments.extend(self._split_word(text[start:end], cwidths[start : end + 1] - cwidths[start], ws, ws_width))

        lead = spans[0][0]
        if self.whitespace is WhitespacePolicy.PRESERVE and lead > 0:
            # Leading whitespace indents the first word, a line cannot end before it
            first = fragments[0]
            fragments[0] = replace(
                first, word=self._render(text[:lead]) + first.word, width=int(cwidths[lead]) + first.width
            )

        return Fragments.from_fragments(fragments)

    def _split_word(self, word: str, cwidths: IntVector, ws: str, ws_width: int) -> list[Fragment]:
        points = validate_split_points(word, self.splitter(word))

        pieces = []
        start = 0
        for offset, marker in points:
            pieces.append(
                Fragment(
                    word[start:offset],
                    "",
                    marker,
                    int(cwidths[offset] - cwidths[start]),
                    0,
                    text_width(self.measure, marker),
                    True,
                )
            )
            start = offset

        pieces.append(Fragment(word[start:], ws, "", int(cwidths[-1] - cwidths[start]), ws_width, 0, False))
        return pieces

    def _render(self, whitespace: str) -> str:
        return whitespace.replace("\t", " " * self.tab_width)


def _cut(widths: list[int], width: int) -> list[int]:
    """Greedy cut points of a run of characters into pieces of at most ``width`` columns."""
    cuts = []
    start = 0
    line_width = 0
    for i, w in enumerate(widths):
        if line_width + w > width and i > start:
            cuts.append(i)
            start = i
            line_width = 0
        line_width += w
    return cuts


def break_long_fragments(fragments: Fragments, width: int, measure: Measure) -> Fragments:
    """Breaks every fragment that cannot fit a line of ``width`` columns into pieces that fit.

    A fragment fits when its width plus its penalty width does, since a line ending in it also shows its marker. A
    single character wider than ``width`` is kept whole. The pieces carry no marker, the last one keeps the whitespace
    and penalty of the original fragment and is cut short enough to leave room for the penalty.
    """
    result = []
    for fragment in fragments:
        if fragment.width + fragment.penalty_width <= width:
            result.append(fragment)
            continue

        logger.debug("Breaking fragment %r of width %d to fit width %d", fragment.word, fragment.width, width)
        widths = character_widths(measure, fragment.word).tolist()

        cuts = _cut(widths, width)
        start = cuts[-1] if cuts else 0
        if sum(widths[start:]) + fragment.penalty_width > width and len(widths) - start > 1:
            # The marker only fits after a shorter last piece
            cuts.append(len(widths) - 1)

        bounds = [0, *cuts, len(widths)]
        for a, b in zip(bounds[:-2], bounds[1:-1]):
            result.append(Fragment(fragment.word[a:b], "", "", sum(widths[a:b]), 0, 0, True))

        a = bounds[-2]
        result.append(
            Fragment(
                fragment.word[a:],
                fragment.whitespace,
                fragment.penalty,
                sum(widths[a:]),
                fragment.whitespace_width,
                fragment.penalty_width,
                fragment.interior,
            )
        )

    return Fragments.from_fragments(result)
