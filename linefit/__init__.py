from .errors import ConfigurationError, ContractViolation, WrapError
from .fragment import Fragment, Fragments, TextFragmenter, break_long_fragments
from .measure import ColumnMeasure, monospace_measure, text_width
from .options import Algorithm, OverflowPolicy, Penalties, WhitespacePolicy, WrapOptions
from .smawk import OnlineConcaveMinima, concave_minima
from .separator import UnicodeSeparator, whitespace_separator
from .splitter import DictionarySplitter, HyphenSplitter, SplitPoint, no_split
from .text import TextColumn, assemble_lines, fill, wrap
from .linebreak import partition_cost, wrap_first_fit, wrap_optimal_fit, wrap_optimal_fit_quadratic

__all__ = [
    "Algorithm",
    "ColumnMeasure",
    "ConfigurationError",
    "ContractViolation",
    "DictionarySplitter",
    "Fragment",
    "Fragments",
    "HyphenSplitter",
    "OnlineConcaveMinima",
    "OverflowPolicy",
    "Penalties",
    "SplitPoint",
    "TextColumn",
    "TextFragmenter",
    "UnicodeSeparator",
    "WhitespacePolicy",
    "WrapError",
    "WrapOptions",
    "assemble_lines",
    "break_long_fragments",
    "concave_minima",
    "fill",
    "monospace_measure",
    "no_split",
    "partition_cost",
    "text_width",
    "whitespace_separator",
    "wrap",
    "wrap_first_fit",
    "wrap_optimal_fit",
    "wrap_optimal_fit_quadratic",
]
