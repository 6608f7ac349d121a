from typing import TypeAlias, TypeVar
import numpy as np

T = TypeVar("T")
Vector: TypeAlias = np.ndarray[tuple[int, ...], np.dtype[T]]  # type: ignore[type-var]
IntVector: TypeAlias = Vector[np.int64]
BoolVector: TypeAlias = Vector[np.bool]

Span: TypeAlias = tuple[int, int]

# Break indices 0 = b0 < b1 < ... < bk = n, line i spans fragments[b(i-1):b(i)]
Partition: TypeAlias = list[int]
