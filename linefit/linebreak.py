"""Line breaking algorithms.

Both algorithms take a fragment sequence and a function mapping a line number (starting from 0) to the target width
of that line, and return the break indices ``[0, b1, ..., n]``: line k holds ``fragments[b(k):b(k+1)]``.

Fragments are never split here, a fragment wider than its line is placed on a line of its own.
"""

import logging
from typing import Callable, Sequence, TypeAlias

from .fragment import Fragments
from .options import Penalties
from .smawk import OnlineConcaveMinima
from .types import Partition

logger = logging.getLogger(__name__)

LineWidths: TypeAlias = Callable[[int], int]


def line_widths_from(width: int | Sequence[int]) -> LineWidths:
    """Turns a width or a list of per-line widths into a line width function. The last width repeats."""
    if isinstance(width, int):
        return lambda line_number: width

    widths = list(width)
    last = len(widths) - 1
    return lambda line_number: widths[min(line_number, last)]


def wrap_first_fit(fragments: Fragments, line_widths: LineWidths) -> Partition:
    """Fills lines left to right, breaking before the first fragment that does not fit.

    This is what most text editors do. A choice is never revisited, so a short line may be left behind where moving a
    word up would have balanced the paragraph; see ``wrap_optimal_fit`` for that.
    """
    breaks = [0]
    width = 0
    for idx in range(len(fragments)):
        fragment_width = int(fragments.widths[idx])
        target_width = line_widths(len(breaks) - 1)
        if width + fragment_width + int(fragments.penalty_widths[idx]) > target_width and idx > breaks[-1]:
            breaks.append(idx)
            width = 0
        width += fragment_width + int(fragments.whitespace_widths[idx])

    if len(fragments):
        breaks.append(len(fragments))
    return breaks


class LineNumbers:
    """Line numbers of the optimal break before each fragment, filled in lazily from the minima found so far."""

    def __init__(self):
        self.line_numbers = [0]

    def get(self, i: int, minima: OnlineConcaveMinima) -> int:
        while (pos := len(self.line_numbers)) < i + 1:
            self.line_numbers.append(1 + self.line_numbers[minima.index(pos)])
        return self.line_numbers[i]


def line_penalty(
    i: int,
    j: int,
    n: int,
    line_width: int,
    target_width: int,
    interior: bool,
    penalties: Penalties,
    overflow_penalty: int,
) -> int:
    """Cost of a line holding fragments[i:j] out of n, excluding the cost of the lines before it."""
    cost = penalties.nline_penalty

    if line_width > target_width:
        cost += (line_width - target_width) * overflow_penalty
    elif j < n:
        gap = target_width - line_width
        cost += gap * gap
    elif i + 1 == j and line_width < target_width // penalties.short_last_line_fraction:
        # The last line may be as short as it likes, unless it is a lone word
        cost += penalties.short_last_line_penalty

    if interior:
        cost += penalties.hyphen_penalty

    return cost


class _LineCost:
    """The cost of the line fragments[i:j] against its target width, shared by both optimal-fit searches."""

    def __init__(self, fragments: Fragments, line_widths: LineWidths, penalties: Penalties, max_width: int):
        self.fragments = fragments
        self.n = len(fragments)
        self.line_widths = line_widths
        self.penalties = penalties
        self.overflow_penalty = penalties.effective_overflow_penalty(self.n, max_width)
        self.interior = fragments.interior.tolist()

    def __call__(self, i: int, j: int, line_number: int) -> int:
        target_width = max(1, self.line_widths(line_number))
        line_width = self.fragments.line_width(i, j)
        return line_penalty(
            i, j, self.n, line_width, target_width, self.interior[j - 1], self.penalties, self.overflow_penalty
        )


def _max_width(fragments: Fragments, line_widths: LineWidths) -> int:
    # Only the first n lines can ever be used
    return max((line_widths(k) for k in range(max(1, len(fragments)))), default=1)


def wrap_optimal_fit(
    fragments: Fragments,
    line_widths: LineWidths,
    penalties: Penalties | None = None,
    threshold: int = 64,
    use_smawk: bool = True,
) -> tuple[Partition, int]:
    """Chooses the breaks that minimize the total cost of all lines in the paragraph.

    The cost of a line is described in ``Penalties``: a squared penalty on the space left at the end of every line
    but the last, a per-line penalty, and large penalties for overflow.

    Take "To be, or not to be: that is the question" in a column of 10. First fit gives

        "To be, or"   1² =  1
        "not to be:"  0² =  0
        "that is"     3² =  9
        "the"         7² = 49
        "question"

    with 59 in slack penalties, while the best layout has 37:

        "To be,"     4² = 16
        "or not to"  1² =  1
        "be: that"   2² =  4
        "is the"     4² = 16
        "question"

    Trying every layout is exponential and the direct dynamic program is quadratic. But the cost of the line
    fragments[i:j] plus the best cost up to fragment i forms a totally monotone matrix, so the column minima can be
    found in linear time with the online SMAWK search. The direct program is still used for short paragraphs, below
    ``threshold`` fragments, where it is faster.

    Returns the break indices and the total cost.
    """
    if penalties is None:
        penalties = Penalties()

    n = len(fragments)
    if not n:
        return [0], 0

    if not use_smawk or n < threshold:
        logger.debug("Using quadratic search for %d fragments", n)
        return wrap_optimal_fit_quadratic(fragments, line_widths, penalties)

    line_cost = _LineCost(fragments, line_widths, penalties, _max_width(fragments, line_widths))
    line_numbers = LineNumbers()

    def cost(i: int, j: int) -> int:
        if j > n:
            return -i

        # minima.value(i) is final here: the optimal cost of breaking before fragments[i]
        return minima.value(i) + line_cost(i, j, line_numbers.get(i, minima))

    minima = OnlineConcaveMinima(cost, 0)

    breaks = [n]
    while breaks[-1]:
        breaks.append(minima.index(breaks[-1]))
    breaks.reverse()

    return breaks, minima.value(n)


def wrap_optimal_fit_quadratic(
    fragments: Fragments,
    line_widths: LineWidths,
    penalties: Penalties | None = None,
) -> tuple[Partition, int]:
    """Same as ``wrap_optimal_fit``, by trying every start of the last line for each prefix of the paragraph."""
    if penalties is None:
        penalties = Penalties()

    n = len(fragments)
    if not n:
        return [0], 0

    line_cost = _LineCost(fragments, line_widths, penalties, _max_width(fragments, line_widths))
    line_numbers = [0] * (n + 1)
    best = [0] + [None] * n
    index = [0] * (n + 1)

    for j in range(1, n + 1):
        for i in range(j):
            c = best[i] + line_cost(i, j, line_numbers[i])
            if best[j] is None or c < best[j]:
                best[j] = c
                index[j] = i
        line_numbers[j] = line_numbers[index[j]] + 1

    breaks = [n]
    while breaks[-1]:
        breaks.append(index[breaks[-1]])
    breaks.reverse()

    return breaks, best[n]


def partition_cost(
    fragments: Fragments,
    breaks: Partition,
    line_widths: LineWidths,
    penalties: Penalties | None = None,
) -> int:
    """Total cost of the layout given by ``breaks`` under the optimal-fit cost function."""
    if penalties is None:
        penalties = Penalties()

    if len(fragments) == 0:
        return 0

    line_cost = _LineCost(fragments, line_widths, penalties, _max_width(fragments, line_widths))
    return sum(line_cost(i, j, line_number) for line_number, (i, j) in enumerate(zip(breaks, breaks[1:])))
