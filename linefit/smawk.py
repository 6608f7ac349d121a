"""Searching totally monotone matrices.

The matrices are never stored: they are given as a function ``matrix(i, j)`` evaluated on demand, so memory stays
linear in the number of rows and columns searched.

``concave_minima`` is the SMAWK algorithm of Aggarwal, Klawe, Moran, Shor and Wilber, Geometric applications of a
matrix searching algorithm, Algorithmica 2, pp. 195-208 (1987).

``OnlineConcaveMinima`` is the online variant of Galil and Park, A linear time algorithm for concave one-dimensional
dynamic programming (1989), following the Python formulation by D. Eppstein.
"""

from typing import Callable, Iterator, Sequence, TypeAlias

Matrix: TypeAlias = Callable[[int, int], int | float]


def _reduce(rows: Sequence[int], cols: Sequence[int], matrix: Matrix) -> list[int]:
    """Drops the rows that cannot hold the minimum of any column, leaving at most ``len(cols)`` rows.

    The k-th surviving row is dominated in the first k columns. A new row that beats it in column k dominates it in
    every later column too, so it is dropped.
    """
    survivors: list[int] = []
    for row in rows:
        while survivors:
            col = cols[len(survivors) - 1]
            if matrix(survivors[-1], col) <= matrix(row, col):
                break
            survivors.pop()
        if len(survivors) < len(cols):
            survivors.append(row)
    return survivors


def concave_minima(rows: Sequence[int], cols: Sequence[int], matrix: Matrix) -> dict[int, tuple[int | float, int]]:
    """Finds the minimum of every column of a totally monotone matrix.

    Returns a dictionary mapping each column to a ``(value, row)`` pair. Ties are broken in favor of earlier rows.

    The matrix must satisfy ``matrix(i, j) > matrix(i', j) => matrix(i, j') > matrix(i', j')`` for every ``i < i'``
    and ``j < j'``, so that in every submatrix the rows holding the column minima are non-decreasing.
    """
    if not cols:
        return {}

    rows = _reduce(rows, cols, matrix)
    minima = concave_minima(rows, cols[1::2], matrix)

    # An even column only has to search the rows between the minima of its odd neighbours
    position = {row: k for k, row in enumerate(rows)}
    lo = 0
    for c in range(0, len(cols), 2):
        hi = position[minima[cols[c + 1]][1]] if c + 1 < len(cols) else len(rows) - 1
        minima[cols[c]] = min((matrix(rows[k], cols[c]), rows[k]) for k in range(lo, hi + 1))
        lo = hi

    return minima


class OnlineConcaveMinima:
    """
    Computes ``value(j) = min { matrix(i, j) | i < j }`` for j = 1, 2, ... with ``value(0) = initial``, together with
    the minimizing row ``index(j)``.

    ``matrix(i, j)`` is never called before ``value(i)`` is final, so the matrix function may depend on earlier
    minima. This is what makes one-dimensional dynamic programs such as line breaking fit the algorithm.

    ``matrix(i, j)`` must return a value for any ``j``, including columns past the end of the problem. ``-i`` is a
    suitable value there since it does not break total monotonicity; flag values such as None do.
    """

    def __init__(self, matrix: Matrix, initial: int | float):
        self._matrix = matrix
        self._values: list[int | float] = [initial]
        self._rows: list[int | None] = [None]

        # Columns up to _done are final. Columns up to _tentative hold the best value among rows _base.._done, and
        # rows before _base are known to supply no minimum past _tentative.
        self._done = 0
        self._base = 0
        self._tentative = 0

    def __iter__(self) -> Iterator[tuple[int | float, int | None]]:
        j = 0
        while True:
            yield self.value(j), self.index(j)
            j += 1

    def value(self, j: int) -> int | float:
        self._solve_until(j)
        return self._values[j]

    def index(self, j: int) -> int | None:
        self._solve_until(j)
        return self._rows[j]

    def _solve_until(self, j: int):
        while self._done < j:
            self._advance()

    def _advance(self):
        j = self._done + 1

        if j > self._tentative:
            self._solve_block()
        elif (diagonal := self._matrix(j - 1, j)) < self._values[j]:
            # Row j - 1 wins column j, so no earlier row wins any later column
            self._values[j], self._rows[j] = diagonal, j - 1
            self._base = self._tentative = j - 1
        elif self._matrix(j - 1, self._tentative) < self._values[self._tentative]:
            # Row j - 1 wins the tentative column, the block has to be solved again from there
            self._base = self._tentative = j - 1

        self._done = j
        self._tentative = max(self._tentative, j)

    def _solve_block(self):
        """Solves the largest square block of columns to the right of the finished rows."""
        rows = range(self._base, self._done + 1)
        cols = range(self._done + 1, self._done + len(rows) + 1)
        minima = concave_minima(rows, cols, self._matrix)

        for col in cols:
            value, row = minima[col]
            if col == len(self._values):
                self._values.append(value)
                self._rows.append(row)
            elif value < self._values[col]:
                self._values[col], self._rows[col] = value, row

        self._tentative = cols[-1]
