"""Schematic scanner tests: token extraction, adjacency, part numbers, gears."""
import pytest

from gearscan.puzzle_input import Input
from gearscan.schematic import (
    extract_numbers,
    extract_symbols,
    gear_ratios,
    is_adjacent,
    parse_row_numbers,
    parse_row_symbols,
    part1,
    part2,
    part_numbers,
)
from gearscan.types import NumberToken, SymbolToken


SCHEMATIC = [
    "467..114..",
    "...*......",
    "..35..633.",
    "......#...",
    "617*......",
    ".....+.58.",
    "..592.....",
    "......755.",
    "...$.*....",
    ".664.598..",
]


# ============================================================================
# Tokens
# ============================================================================
def test_number_token_rejects_empty_span():
    with pytest.raises(ValueError):
        NumberToken(value=1, row=0, start=3, end=2)


@pytest.mark.parametrize("char", ["1", ".", "", "**"])
def test_symbol_token_rejects_non_symbols(char):
    with pytest.raises(ValueError):
        SymbolToken(char=char, row=0, col=0)


def test_tokens_are_immutable():
    number = NumberToken(value=1, row=0, start=0, end=0)
    with pytest.raises(AttributeError):
        number.value = 2


# ============================================================================
# Extraction
# ============================================================================
def test_parse_row_numbers_spans():
    numbers = parse_row_numbers(4, "617*...12.3")
    assert numbers == [
        NumberToken(value=617, row=4, start=0, end=2),
        NumberToken(value=12, row=4, start=7, end=8),
        NumberToken(value=3, row=4, start=10, end=10),
    ]


def test_parse_row_numbers_keeps_leading_zeros_in_span():
    assert parse_row_numbers(0, ".007.") == [NumberToken(value=7, row=0, start=1, end=3)]


@pytest.mark.parametrize("line", ["", "......", "*#$+", "..².."])
def test_line_without_ascii_digits_has_no_numbers(line):
    assert parse_row_numbers(0, line) == []


@pytest.mark.parametrize("line", ["", "467..114..", "0123456789", "....."])
def test_line_of_digits_and_dots_has_no_symbols(line):
    assert parse_row_symbols(0, line) == []


def test_parse_row_symbols_positions():
    assert parse_row_symbols(8, "...$.*....") == [
        SymbolToken(char="$", row=8, col=3),
        SymbolToken(char="*", row=8, col=5),
    ]


def test_unknown_characters_are_symbols():
    symbols = parse_row_symbols(0, "a ²")
    assert [s.char for s in symbols] == ["a", " ", "²"]


def test_extract_numbers_uses_line_index_as_row():
    numbers = extract_numbers(Input.from_lines(SCHEMATIC))
    assert [n.value for n in numbers] == [467, 114, 35, 633, 617, 58, 592, 755, 664, 598]
    assert [n.row for n in numbers] == [0, 0, 2, 2, 4, 5, 6, 7, 9, 9]


def test_extract_symbols():
    symbols = extract_symbols(Input.from_lines(SCHEMATIC))
    assert [(s.char, s.row, s.col) for s in symbols] == [
        ("*", 1, 3),
        ("#", 3, 6),
        ("*", 4, 3),
        ("+", 5, 5),
        ("$", 8, 3),
        ("*", 8, 5),
    ]


def test_numbers_never_span_lines():
    numbers = extract_numbers(Input.from_lines(["..12", "34.."]))
    assert [n.value for n in numbers] == [12, 34]


# ============================================================================
# Adjacency
# ============================================================================
NUMBER = NumberToken(value=1, row=2, start=4, end=6)


@pytest.mark.parametrize(
    "row, col",
    [(2, 4), (2, 7), (2, 6), (1, 3), (3, 3), (1, 7), (3, 7), (3, 5), (1, 5)],
)
def test_is_adjacent(row, col):
    assert is_adjacent(NUMBER, SymbolToken(char="*", row=row, col=col))


@pytest.mark.parametrize("row, col", [(2, 2), (1, 2), (0, 4), (4, 4), (2, 8), (3, 8)])
def test_is_not_adjacent(row, col):
    assert not is_adjacent(NUMBER, SymbolToken(char="*", row=row, col=col))


@pytest.mark.parametrize("col", [4, 5, 6])
def test_symbol_inside_span_on_same_row_is_adjacent(col):
    assert is_adjacent(NUMBER, SymbolToken(char="#", row=2, col=col))


@pytest.mark.parametrize("row", [0, 4, 5, 100])
def test_rows_more_than_one_apart_are_never_adjacent(row):
    for col in range(0, 12):
        assert not is_adjacent(NUMBER, SymbolToken(char="#", row=row, col=col))


def test_is_adjacent_starts_at_zero():
    number = NumberToken(value=1, row=0, start=0, end=6)
    assert is_adjacent(number, SymbolToken(char="*", row=1, col=1))
    assert is_adjacent(number, SymbolToken(char="*", row=1, col=0))


def test_number_in_first_row_and_column():
    input = Input.from_lines(["12..", "*..."])
    assert part_numbers(input) == [12]


# ============================================================================
# Part numbers and gear ratios
# ============================================================================
def test_part_numbers():
    assert part_numbers(Input.from_lines(SCHEMATIC)) == [467, 35, 633, 617, 592, 755, 664, 598]


def test_part_numbers_with_right_edge_number():
    input = Input.from_lines(SCHEMATIC + ["......+321"])
    assert part_numbers(input) == [467, 35, 633, 617, 592, 755, 664, 598, 321]


def test_part_numbers_ignores_trailing_newlines():
    input = Input.from_str("\n".join(SCHEMATIC) + "\n\n")
    assert part_numbers(input) == [467, 35, 633, 617, 592, 755, 664, 598]


def test_number_touching_two_symbols_counted_once():
    assert part_numbers(Input.from_lines(["#5#"])) == [5]


def test_part1():
    assert part1(Input.from_lines(SCHEMATIC)) == 4361


def test_gear_ratios():
    assert gear_ratios(Input.from_lines(SCHEMATIC)) == [16345, 451490]


def test_part2():
    assert part2(Input.from_lines(SCHEMATIC)) == 467835


def test_gear_with_three_numbers_contributes_nothing():
    input = Input.from_lines([
        "1.2",
        ".*.",
        "..3",
    ])
    assert gear_ratios(input) == []
    assert part2(input) == 0


def test_only_star_symbols_are_gears():
    assert gear_ratios(Input.from_lines(["2#3"])) == []
    assert gear_ratios(Input.from_lines(["2*3"])) == [6]


def test_number_shared_by_two_gears():
    input = Input.from_lines([
        "2.....",
        ".*10*.",
        ".....5",
    ])
    assert gear_ratios(input) == [20, 50]


def test_empty_input():
    assert part1(Input.from_str("")) == 0
    assert part2(Input.from_str("")) == 0


def test_long_digit_run_next_to_symbol():
    input = Input.from_lines(["9" * 5000 + "*"])
    [number] = extract_numbers(input)
    assert number.width == 5000
    assert (number.start, number.end) == (0, 4999)
    assert number.value == 10 ** 5000 - 1
    assert part_numbers(input) == [10 ** 5000 - 1]
    assert part1(input) == 10 ** 5000 - 1


def test_width_matches_span():
    numbers = parse_row_numbers(0, "1.234.56")
    assert [n.width for n in numbers] == [1, 3, 2]
