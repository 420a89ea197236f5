import pytest

from workbook_compare.utils.address import (
    CellRange, format_address, from_index, number_to_column,
    parse_address, parse_range, range_contains, to_index
)
from workbook_compare.utils.exceptions import AddressParseError


@pytest.mark.parametrize("text", ["A1", "Z26", "AA1", "AB100"])
def test_address_round_trip(text):
    row, col = parse_address(text)
    assert format_address(row, col) == text


@pytest.mark.parametrize("text,expected", [
    ("A1", (1, 1)),
    ("Z26", (26, 26)),
    ("AA1", (1, 27)),
    ("AB100", (100, 28)),
    ("AZ3", (3, 52)),
    ("BA3", (3, 53)),
    ("XFD1048576", (1048576, 16384)),
])
def test_parse_address_values(text, expected):
    assert parse_address(text) == expected


@pytest.mark.parametrize("text", ["1A", "", "A", "A-1", "a1", "A0", " A1", "A1:B2", "A1\n", "A01", "B007"])
def test_parse_address_rejects_malformed(text):
    with pytest.raises(AddressParseError):
        parse_address(text)


def test_address_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_address("??")


@pytest.mark.parametrize("col,letters", [(1, "A"), (26, "Z"), (27, "AA"), (702, "ZZ"), (703, "AAA")])
def test_number_to_column(col, letters):
    assert number_to_column(col) == letters


def test_format_address_rejects_non_positive():
    with pytest.raises(AddressParseError):
        format_address(0, 1)
    with pytest.raises(AddressParseError):
        format_address(1, 0)


def test_parse_range():
    assert parse_range("A1:B2") == ((1, 1), (2, 2))
    assert parse_range("C3:C3") == ((3, 3), (3, 3))
    assert parse_range("D4") == ((4, 4), (4, 4))


@pytest.mark.parametrize("text", ["", "A1:", ":B2", "A1:B2:C3", "A1-B2", "A1:B2\n"])
def test_parse_range_rejects_malformed(text):
    with pytest.raises(AddressParseError):
        parse_range(text)


def test_cell_range_normalises_reversed_bounds():
    cell_range = CellRange.from_string("C5:A1")
    assert (cell_range.start_row, cell_range.start_col) == (1, 1)
    assert (cell_range.end_row, cell_range.end_col) == (5, 3)
    assert str(cell_range) == "A1:C5"
    assert cell_range.row_count == 5
    assert cell_range.col_count == 3


def test_range_contains():
    assert range_contains("B2:C3", 2, 2)
    assert range_contains("B2:C3", 3, 3)
    assert not range_contains("B2:C3", 1, 2)
    assert not range_contains("B2:C3", 2, 4)
    assert range_contains(CellRange.from_string("A1:A1"), 1, 1)


def test_index_conversion_is_inverse():
    assert to_index(1, 1) == (0, 0)
    assert from_index(0, 0) == (1, 1)
    assert from_index(*to_index(7, 42)) == (7, 42)
