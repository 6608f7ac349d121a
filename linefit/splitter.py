import operator
import re
from functools import partial
from typing import Callable, NamedTuple, Sequence, TypeAlias

from .errors import ContractViolation


class SplitPoint(NamedTuple):
    offset: int  # Break position inside the word
    marker: str = "-"  # Text appended to the line when it breaks here


Splitter: TypeAlias = Callable[[str], Sequence[SplitPoint | int]]


def no_split(word: str) -> list[SplitPoint]:
    return []


class HyphenSplitter:
    """Allows breaks right after hyphens that already appear inside a word.

    The hyphen stays with the left piece, so no extra marker is inserted: "well-known" can become "well-" / "known".
    """

    _re_hyphen = re.compile(r"(?<=[^\W_])-(?=[^\W_])")

    def __call__(self, word: str) -> list[SplitPoint]:
        return [SplitPoint(m.end(), "") for m in self._re_hyphen.finditer(word)]


class DictionarySplitter:
    """Hyphenates words using the pattern dictionaries shipped with pyphen."""

    def __init__(self, lang: str = "en_US", min_length: int = 4, marker: str = "-"):
        import pyphen

        self.lang = lang
        self.min_length = min_length
        self.marker = marker
        self.dictionary = pyphen.Pyphen(lang=lang)

    def __call__(self, word: str) -> list[SplitPoint]:
        if len(word) < self.min_length:
            return []
        return [SplitPoint(pos, self.marker) for pos in self.dictionary.positions(word)]


def _split_point(word: str, point: SplitPoint | int) -> SplitPoint:
    if isinstance(point, tuple) and len(point) == 2:
        offset, marker = point
    else:
        offset, marker = point, "-"

    try:
        offset = operator.index(offset)
    except TypeError as e:
        raise ContractViolation(f"Word splitter returned a non-integer offset {offset!r} for {word!r}", word) from e
    if not isinstance(marker, str):
        raise ContractViolation(f"Word splitter returned a non-string marker {marker!r} for {word!r}", word)
    return SplitPoint(offset, marker)


def validate_split_points(word: str, points: Sequence[SplitPoint | int]) -> list[SplitPoint]:
    """Normalizes splitter output and checks that offsets lie inside the word in strictly increasing order.

    Offsets may be any integral type, numpy integers included.
    """
    result = []
    previous = 0
    for point in map(partial(_split_point, word), points):
        if not previous < point.offset < len(word):
            raise ContractViolation(
                f"Word splitter returned invalid offsets {list(points)!r} for {word!r}: offsets must be strictly "
                f"increasing and lie between 0 and {len(word)}",
                word,
            )
        previous = point.offset
        result.append(point)

    return result
