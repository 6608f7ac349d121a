import pytest

from linefit import ColumnMeasure, ContractViolation, monospace_measure, text_width
from linefit.measure import character_widths


def test_monospace_measure():
    assert monospace_measure("abc") == [1, 1, 1]
    assert monospace_measure("中文") == [1, 1]
    assert text_width(monospace_measure, "") == 0


def test_column_measure_ascii():
    fm = ColumnMeasure()
    assert fm("ab c").tolist() == [1, 1, 1, 1]
    assert fm.width("hello") == 5


def test_column_measure_wide_characters():
    fm = ColumnMeasure()
    assert fm("a中").tolist() == [1, 2]
    assert fm.width("中文") == 4


def test_column_measure_combining_characters():
    fm = ColumnMeasure()
    assert fm("e\u0301").tolist() == [1, 0]
    assert fm.width("cafe\u0301") == 4


def test_column_measure_fallback():
    assert ColumnMeasure()("\x07").tolist() == [1]
    assert ColumnMeasure(fallback_width=0)("\x07").tolist() == [0]


def test_column_measure_tabs():
    assert ColumnMeasure().width("\t") == 4
    assert ColumnMeasure(tab_width=8).width("a\tb") == 10


def test_column_measure_ambiguous_width():
    assert ColumnMeasure().width("±") == 1
    assert ColumnMeasure(ambiguous_width=2).width("±") == 2
    assert ColumnMeasure(ambiguous_width=2).width("a") == 1


def test_broken_measure():
    with pytest.raises(ContractViolation) as e:
        text_width(lambda s: [-1] * len(s), "ab")
    assert e.value.text == "ab"

    with pytest.raises(ContractViolation):
        character_widths(lambda s: [1, 1, 1], "ab")


@pytest.mark.parametrize("widths", [[0.5, 1], [1, float("nan")], ["1", "1"], [None, 1]])
def test_non_integer_measure(widths):
    with pytest.raises(ContractViolation) as e:
        character_widths(lambda s: widths, "ab")
    assert e.value.text == "ab"


def test_integral_float_measure():
    widths = character_widths(lambda s: [1.0, 2.0], "ab")
    assert widths.tolist() == [1, 2]
    assert widths.dtype.kind == "i"
    assert text_width(lambda s: [], "") == 0
