import numpy as np
import pytest

from test_textwrap import NORMALIZED_TEXTS
from linefit import (
    Fragments,
    OnlineConcaveMinima,
    Penalties,
    TextColumn,
    TextFragmenter,
    concave_minima,
    monospace_measure,
    partition_cost,
    wrap_first_fit,
    wrap_optimal_fit,
    wrap_optimal_fit_quadratic,
)
from linefit.linebreak import line_widths_from


def make_fragments(widths, interior=None):
    """Builds a paragraph of dummy words with the given widths, separated by single spaces."""
    n = len(widths)
    if interior is None:
        interior = [False] * n
    interior = [bool(x) for x in interior[: n - 1]] + [False]
    return Fragments(
        ["x" * int(w) for w in widths],
        ["" if h else " " for h in interior[: n - 1]] + [""],
        ["-" if h else "" for h in interior],
        widths,
        [0 if h else 1 for h in interior[: n - 1]] + [0],
        [1 if h else 0 for h in interior],
        interior,
    )


def test_first_fit_breaks():
    fragments = TextFragmenter(measure=monospace_measure)("The quick brown fox jumps over the lazy dog")
    assert wrap_first_fit(fragments, line_widths_from(10)) == [0, 2, 4, 6, 8, 9]


def test_first_fit_empty():
    assert wrap_first_fit(Fragments.empty(), line_widths_from(10)) == [0]


def test_first_fit_overflow():
    fragments = make_fragments([1, 12, 1])
    assert wrap_first_fit(fragments, line_widths_from(5)) == [0, 1, 2, 3]


def test_first_fit_counts_penalty_width():
    # "xx xxxx-" needs 8 columns, so the hyphenated piece moves to the next line
    fragments = make_fragments([2, 4, 3], interior=[False, True])
    assert wrap_first_fit(fragments, line_widths_from(7)) == [0, 1, 3]


def test_optimal_fit_empty():
    assert wrap_optimal_fit(Fragments.empty(), line_widths_from(10)) == ([0], 0)
    assert wrap_optimal_fit_quadratic(Fragments.empty(), line_widths_from(10)) == ([0], 0)


def test_optimal_fit_beats_first_fit():
    fragments = TextFragmenter(measure=monospace_measure)("To be, or not to be: that is the question")
    line_widths = line_widths_from(10)

    greedy = wrap_first_fit(fragments, line_widths)
    breaks, cost = wrap_optimal_fit(fragments, line_widths, threshold=0)

    assert greedy == [0, 3, 6, 8, 9, 10]
    assert partition_cost(fragments, greedy, line_widths) == 5 * 1000 + 1 + 0 + 9 + 49
    assert cost == 5 * 1000 + 16 + 1 + 4 + 16
    assert partition_cost(fragments, breaks, line_widths) == cost
    assert breaks != greedy


@pytest.mark.parametrize("max_word", [5, 14])
@pytest.mark.parametrize("seed", range(20))
def test_optimal_fit_matches_quadratic_search(seed, max_word):
    rng = np.random.default_rng(seed)
    n = int(rng.integers(1, 150))
    width = int(rng.integers(6, 40))
    widths = rng.integers(1, max_word + 1, size=n)
    interior = rng.random(n) < 0.2
    fragments = make_fragments(widths, interior)
    line_widths = line_widths_from(width)

    breaks, cost = wrap_optimal_fit(fragments, line_widths, threshold=0)
    expected_breaks, expected = wrap_optimal_fit_quadratic(fragments, line_widths)

    assert cost == expected
    # Equal costs are resolved towards the earlier break by both searches
    assert breaks == expected_breaks
    assert partition_cost(fragments, breaks, line_widths) == cost
    assert breaks[0] == 0 and breaks[-1] == n
    assert all(a < b for a, b in zip(breaks, breaks[1:]))


@pytest.mark.parametrize("width", [20, 30, 45, 72])
def test_optimal_fit_matches_quadratic_search_on_text(width):
    fragmenter = TextFragmenter()
    for text in NORMALIZED_TEXTS:
        fragments = fragmenter(text)
        fast = TextColumn(fragments, width, algorithm="optimal", smawk_threshold=0)
        slow = TextColumn(fragments, width, algorithm="optimal", use_smawk=False)
        greedy = TextColumn(fragments, width, algorithm="greedy")

        assert fast.cost == slow.cost
        assert fast.breaks == slow.breaks
        assert fast.cost <= partition_cost(fragments, greedy.breaks, line_widths_from(width))


def test_optimal_fit_avoids_overflow():
    # Putting the short words together would overflow by one column, an extra line is always cheaper
    fragments = make_fragments([5, 5, 5, 5, 5, 5])
    breaks, cost = wrap_optimal_fit(fragments, line_widths_from(10))
    assert all(fragments.line_width(i, j) <= 10 for i, j in zip(breaks, breaks[1:]))

    penalties = Penalties(overflow_penalty=1)
    assert penalties.effective_overflow_penalty(6, 10) == 7 * (1000 + 100 + 25 + 25)


def test_optimal_fit_short_last_line():
    fragments = make_fragments([8, 8, 1])
    line_widths = line_widths_from(20)

    assert wrap_optimal_fit_quadratic(fragments, line_widths) == ([0, 3], 1000)

    # A lone word shorter than a tenth of the width on the last line
    no_penalty = Penalties(short_last_line_penalty=0)
    assert partition_cost(fragments, [0, 2, 3], line_widths) == 1000 + 3 * 3 + 1000 + 25
    assert partition_cost(fragments, [0, 2, 3], line_widths, no_penalty) == 1000 + 3 * 3 + 1000


def test_optimal_fit_heterogeneous_widths():
    fragments = make_fragments([3, 3, 3, 3])
    line_widths = line_widths_from([3, 7])
    fast = wrap_optimal_fit(fragments, line_widths, threshold=0)
    slow = wrap_optimal_fit_quadratic(fragments, line_widths)
    assert fast == slow == ([0, 1, 3, 4], 3000 + 0 + 0)


def brute_force_column_minima(matrix, rows, cols):
    return {col: min((matrix(row, col), row) for row in rows) for col in cols}


@pytest.mark.parametrize("seed", range(10))
def test_concave_minima(seed):
    rng = np.random.default_rng(seed)
    a = np.sort(rng.integers(0, 100, size=int(rng.integers(1, 60)))).tolist()
    b = np.sort(rng.integers(0, 100, size=int(rng.integers(1, 60)))).tolist()

    def matrix(i, j):
        return (a[j] - b[i]) ** 2

    rows, cols = range(len(b)), range(len(a))
    minima = concave_minima(rows, cols, matrix)
    expected = brute_force_column_minima(matrix, rows, cols)

    assert set(minima) == set(cols)
    for col in cols:
        value, row = minima[col]
        assert value == expected[col][0]
        assert matrix(row, col) == value


def test_concave_minima_empty():
    assert concave_minima(range(3), [], lambda i, j: 0) == {}


@pytest.mark.parametrize("seed", range(10))
def test_online_concave_minima(seed):
    rng = np.random.default_rng(seed)
    n = int(rng.integers(1, 80))
    target = int(rng.integers(5, 30))
    positions = np.concatenate([[0], rng.integers(1, 8, size=n).cumsum()]).tolist()

    def weight(i, j):
        return (positions[j] - positions[i] - target) ** 2

    def matrix(i, j):
        if j > n:
            return -i
        return minima.value(i) + weight(i, j)

    minima = OnlineConcaveMinima(matrix, 0)

    best = [0]
    for j in range(1, n + 1):
        best.append(min(best[i] + weight(i, j) for i in range(j)))

    assert [minima.value(j) for j in range(n + 1)] == best
    for j in range(1, n + 1):
        i = minima.index(j)
        assert best[i] + weight(i, j) == best[j]


def test_online_concave_minima_iteration():
    def matrix(i, j):
        return minima.value(i) + (j - i - 2) ** 2

    minima = OnlineConcaveMinima(matrix, 0)
    values = []
    for value, index in minima:
        values.append(value)
        if len(values) == 5:
            break

    assert values == [0, 1, 0, 1, 0]
    assert minima.index(0) is None
    assert minima.index(2) == 0
    assert minima.index(4) == 2


def test_optimal_fit_ties_prefer_earlier_break():
    # Every word is one column wide, so many layouts share the optimal cost
    fragments = make_fragments([1] * 90)
    line_widths = line_widths_from(4)

    fast = wrap_optimal_fit(fragments, line_widths, threshold=0)
    slow = wrap_optimal_fit_quadratic(fragments, line_widths)

    assert fast == slow


def test_optimal_fit_interior_break_costs_hyphen_penalty():
    fragments = make_fragments([3, 3], interior=[True])
    hyphenated = partition_cost(fragments, [0, 1, 2], line_widths_from(5))
    assert hyphenated == 1000 + 1 + 25 + 1000 + 0
