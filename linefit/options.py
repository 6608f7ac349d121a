from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any

from .errors import ConfigurationError
from .measure import ColumnMeasure, Measure
from .separator import WordSeparator, whitespace_separator
from .splitter import Splitter, no_split


class Algorithm(str, Enum):
    FIRST_FIT = "greedy"
    OPTIMAL_FIT = "optimal"


class OverflowPolicy(str, Enum):
    ALLOW = "allow"  # Over-wide fragments get a line of their own
    REJECT = "reject"  # Over-wide fragments are broken so that no line overflows


class WhitespacePolicy(str, Enum):
    PRESERVE = "preserve"
    NORMALIZE = "normalize"


@dataclass(frozen=True)
class Penalties:
    """Cost parameters of the optimal-fit algorithm.

    Every line costs ``nline_penalty``, which keeps the number of lines down. Lines other than the last one add the
    square of their slack. Overflowing lines cost ``overflow_penalty`` per column, raised when needed so that any
    overflow is more expensive than every layout without one. A last line holding a single fragment and shorter than
    ``1 / short_last_line_fraction`` of the width costs ``short_last_line_penalty``. A line ending inside a word, at a
    hyphenation point or inside a broken long word, costs ``hyphen_penalty``.
    """

    nline_penalty: int = 1000
    overflow_penalty: int = 1000
    short_last_line_fraction: int = 10
    short_last_line_penalty: int = 25
    hyphen_penalty: int = 25

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"Penalty {f.name} must be a non-negative integer, got {value!r}")
        if self.short_last_line_fraction == 0:
            raise ConfigurationError("short_last_line_fraction must be positive")

    def line_bound(self, width: int) -> int:
        """Largest cost a line that fits within ``width`` columns can have."""
        return self.nline_penalty + width * width + self.short_last_line_penalty + self.hyphen_penalty

    def effective_overflow_penalty(self, n: int, max_width: int) -> int:
        return max(self.overflow_penalty, (n + 1) * self.line_bound(max_width))


@dataclass(frozen=True)
class WrapOptions:
    """Configuration bundle for wrapping. String values are accepted for the enum fields."""

    algorithm: Algorithm = Algorithm.FIRST_FIT
    overflow_policy: OverflowPolicy = OverflowPolicy.ALLOW
    whitespace_policy: WhitespacePolicy = WhitespacePolicy.NORMALIZE
    measure: Measure = field(default_factory=ColumnMeasure)
    splitter: Splitter = no_split
    separator: WordSeparator = whitespace_separator
    penalties: Penalties = field(default_factory=Penalties)
    smawk_threshold: int = 64
    use_smawk: bool = True
    tab_width: int = 4
    keep_trailing_whitespace: bool = False

    def __post_init__(self):
        for name, enum in (
            ("algorithm", Algorithm),
            ("overflow_policy", OverflowPolicy),
            ("whitespace_policy", WhitespacePolicy),
        ):
            value = getattr(self, name)
            try:
                object.__setattr__(self, name, enum(value))
            except ValueError as e:
                choices = ", ".join(repr(m.value) for m in enum)
                raise ConfigurationError(f"Invalid {name} {value!r}, expected one of {choices}") from e

        if not callable(self.measure):
            raise ConfigurationError(f"measure must be callable, got {self.measure!r}")
        if not callable(self.separator):
            raise ConfigurationError(f"separator must be callable, got {self.separator!r}")
        if not callable(self.splitter):
            raise ConfigurationError(f"splitter must be callable, got {self.splitter!r}")
        if not isinstance(self.penalties, Penalties):
            raise ConfigurationError(f"penalties must be a Penalties instance, got {self.penalties!r}")
        if self.smawk_threshold < 0:
            raise ConfigurationError(f"smawk_threshold cannot be negative, got {self.smawk_threshold}")
        if self.tab_width <= 0:
            raise ConfigurationError(f"tab_width must be positive, got {self.tab_width}")

    def replace(self, **changes: Any) -> "WrapOptions":
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigurationError(f"Unknown wrap options: {', '.join(sorted(unknown))}")
        return replace(self, **changes)
