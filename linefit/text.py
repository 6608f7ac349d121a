import logging
from functools import cached_property
from typing import Any, Sequence

from .errors import ConfigurationError
from .fragment import Fragments, TextFragmenter, break_long_fragments
from .options import Algorithm, OverflowPolicy, Penalties, WhitespacePolicy, WrapOptions
from .types import Partition
from .linebreak import line_widths_from, wrap_first_fit, wrap_optimal_fit

logger = logging.getLogger(__name__)


def validate_width(width: int | Sequence[int]) -> int | list[int]:
    """Ensure that the target line width(s) are positive integers."""
    if isinstance(width, bool):
        raise ConfigurationError(f"Target width must be an integer, got {width!r}")

    if isinstance(width, int):
        if width <= 0:
            raise ConfigurationError(f"Target width must be positive, got {width}")
        return width

    try:
        widths = list(width)
    except TypeError as e:
        raise ConfigurationError(f"Target width must be an integer or a sequence of integers, got {width!r}") from e

    if not widths:
        raise ConfigurationError("At least one target width is required")
    for w in widths:
        if isinstance(w, bool) or not isinstance(w, int) or w <= 0:
            raise ConfigurationError(f"Target widths must be positive integers, got {w!r}")
    return widths


def assemble_lines(fragments: Fragments, breaks: Partition, keep_trailing_whitespace: bool = False) -> list[str]:
    """Renders the lines of a partition.

    Fragments inside a line are joined with their whitespace. The whitespace after the last fragment of a line is
    dropped, and its penalty (a hyphen for a split word) is appended instead. The very last line keeps its trailing
    whitespace only when ``keep_trailing_whitespace`` is set.
    """
    lines = []
    last = len(breaks) - 2
    for k, (i, j) in enumerate(zip(breaks, breaks[1:])):
        parts = [fragments.get_fragment_str(idx) for idx in range(i, j - 1)]
        parts.append(fragments.words[j - 1])
        if k == last and keep_trailing_whitespace:
            parts.append(fragments.whitespace[j - 1])
        else:
            parts.append(fragments.penalties[j - 1])
        lines.append("".join(parts))
    return lines


class TextColumn:
    """A paragraph laid out in a column of the given width(s)."""

    def __init__(
        self,
        fragments: Fragments,
        column_width: int | Sequence[int],
        algorithm: Algorithm | str = Algorithm.FIRST_FIT,
        penalties: Penalties | None = None,
        smawk_threshold: int = 64,
        use_smawk: bool = True,
        keep_trailing_whitespace: bool = False,
    ):
        self.fragments = fragments
        self.column_width = validate_width(column_width)
        self.algorithm = Algorithm(algorithm)
        self.penalties = penalties or Penalties()
        self.smawk_threshold = smawk_threshold
        self.use_smawk = use_smawk
        self.keep_trailing_whitespace = keep_trailing_whitespace

    @cached_property
    def _layout(self) -> tuple[Partition, int | None]:
        line_widths = line_widths_from(self.column_width)
        if self.algorithm is Algorithm.OPTIMAL_FIT:
            return wrap_optimal_fit(
                self.fragments, line_widths, self.penalties, threshold=self.smawk_threshold, use_smawk=self.use_smawk
            )
        return wrap_first_fit(self.fragments, line_widths), None

    @property
    def breaks(self) -> Partition:
        return self._layout[0]

    @property
    def cost(self) -> int | None:
        """Total cost of the layout, only known for the optimal-fit algorithm."""
        return self._layout[1]

    def to_list(self) -> list[str]:
        return assemble_lines(self.fragments, self.breaks, self.keep_trailing_whitespace)


def _remaining_widths(width: int | list[int], offset: int) -> int | list[int]:
    """Widths of the lines from line number ``offset`` on."""
    if isinstance(width, int):
        return width
    return width[min(offset, len(width) - 1) :]


def _resolve_options(options: WrapOptions | None, overrides: dict[str, Any]) -> WrapOptions:
    if options is None:
        options = WrapOptions()
    if overrides:
        options = options.replace(**overrides)
    return options


def wrap(text: str, width: int | Sequence[int], options: WrapOptions | None = None, **overrides: Any) -> list[str]:
    """Wraps text into lines no wider than ``width`` columns.

    ``width`` may also be a list of widths, one per line, the last one repeating. Line numbers run across paragraphs:
    with preserved newlines, the first line of a paragraph takes the width that follows the last line before it.
    Options are taken from ``options`` and keyword overrides, see ``WrapOptions``.

    Returns the lines without trailing whitespace. Words wider than the width are kept whole on a line of their own,
    unless the overflow policy is ``reject``, in which case they are broken up.
    """
    width = validate_width(width)
    options = _resolve_options(options, overrides)

    fragmenter = TextFragmenter(
        measure=options.measure,
        splitter=options.splitter,
        whitespace=options.whitespace_policy,
        tab_width=options.tab_width,
        separator=options.separator,
    )
    paragraphs = fragmenter.paragraphs(text)
    logger.debug(
        "Wrapping %d paragraph(s) at width %s with the %s algorithm", len(paragraphs), width, options.algorithm.value
    )

    lines = []
    for fragments in paragraphs:
        if options.overflow_policy is OverflowPolicy.REJECT:
            narrowest = width if isinstance(width, int) else min(width)
            fragments = break_long_fragments(fragments, narrowest, options.measure)

        if not len(fragments):
            # A blank line between preserved paragraphs stays blank
            if options.whitespace_policy is WhitespacePolicy.PRESERVE:
                lines.append("")
            continue

        column = TextColumn(
            fragments,
            _remaining_widths(width, len(lines)),
            algorithm=options.algorithm,
            penalties=options.penalties,
            smawk_threshold=options.smawk_threshold,
            use_smawk=options.use_smawk,
            keep_trailing_whitespace=options.keep_trailing_whitespace,
        )
        lines.extend(column.to_list())

    return lines


def fill(text: str, width: int | Sequence[int], options: WrapOptions | None = None, **overrides: Any) -> str:
    """Wraps text and joins the lines with newlines."""
    return "\n".join(wrap(text, width, options, **overrides))
