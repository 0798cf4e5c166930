"""schematic.py - Number/symbol extraction and adjacency queries.

Implements the engine-schematic scan over a line-oriented character grid:
- extract_numbers / extract_symbols: one left-to-right pass per line
- is_adjacent: 8-directional adjacency across a number's whole span
- part_numbers: numbers adjacent to at least one symbol
- gear_ratios: products of exactly two numbers adjacent to the same '*'

The scanner never fails on malformed grids: unknown characters are symbols,
lines without digits contribute no numbers.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
from .config import GEAR_ARITY, GEAR_SYMBOL, is_ascii_digit, is_symbol
from .puzzle_input import Input
from .types import NumberToken, SymbolToken


@dataclass
class _RunState:
    """Digit run being accumulated while scanning one line (value folded per digit)."""

    start: Optional[int] = None
    end: int = -1
    value: int = 0

    def push(self, col: int, ch: str) -> None:
        if self.start is None:
            self.start = col
        self.end = col
        self.value = self.value * 10 + (ord(ch) - ord("0"))

    def flush(self, row: int) -> Optional[NumberToken]:
        """Close the current run, returning its token (None if no run is open)."""
        if self.start is None:
            return None
        token = NumberToken(value=self.value, row=row, start=self.start, end=self.end)
        self.start = None
        self.end = -1
        self.value = 0
        return token


def parse_row_numbers(row: int, line: str) -> List[NumberToken]:
    """Return every maximal run of ASCII digits in line, left to right."""
    numbers: List[NumberToken] = []
    run = _RunState()
    for col, ch in enumerate(line):
        if is_ascii_digit(ch):
            run.push(col, ch)
            continue
        token = run.flush(row)
        if token is not None:
            numbers.append(token)
    token = run.flush(row)
    if token is not None:
        numbers.append(token)
    return numbers


def parse_row_symbols(row: int, line: str) -> List[SymbolToken]:
    """Return a SymbolToken for every non-digit, non-'.' character in line."""
    return [
        SymbolToken(char=ch, row=row, col=col)
        for col, ch in enumerate(line)
        if is_symbol(ch)
    ]


def extract_numbers(input: Input) -> List[NumberToken]:
    """All NumberTokens of the grid in raster order (row index = line index)."""
    numbers: List[NumberToken] = []
    for row, line in enumerate(input.lines()):
        numbers.extend(parse_row_numbers(row, line))
    return numbers


def extract_symbols(input: Input) -> List[SymbolToken]:
    """All SymbolTokens of the grid in raster order."""
    symbols: List[SymbolToken] = []
    for row, line in enumerate(input.lines()):
        symbols.extend(parse_row_symbols(row, line))
    return symbols


def is_adjacent(number: NumberToken, symbol: SymbolToken) -> bool:
    return number.is_adjacent(symbol)


def part_numbers(input: Input) -> List[int]:
    """Values of all numbers adjacent to at least one symbol, in scan order.

    Notes:
        - Trailing newlines are trimmed first
        - A number touching several symbols is listed once
    """
    input = input.trim_trailing_newlines()
    symbols = extract_symbols(input)
    return [
        number.value
        for number in extract_numbers(input)
        if any(number.is_adjacent(symbol) for symbol in symbols)
    ]


def gear_ratios(input: Input) -> List[int]:
    """Gear ratio of every '*' adjacent to exactly two numbers, in scan order.

    Notes:
        - '*' symbols touching fewer or more numbers contribute nothing
        - The same number may belong to several gears
    """
    input = input.trim_trailing_newlines()
    numbers = extract_numbers(input)
    ratios: List[int] = []
    for symbol in extract_symbols(input):
        if symbol.char != GEAR_SYMBOL:
            continue
        adjacent = [number for number in numbers if number.is_adjacent(symbol)]
        if len(adjacent) != GEAR_ARITY:
            continue
        ratios.append(adjacent[0].value * adjacent[1].value)
    return ratios


def part1(input: Input) -> int:
    """Sum of all part numbers."""
    return sum(part_numbers(input))


def part2(input: Input) -> int:
    """Sum of all gear ratios."""
    return sum(gear_ratios(input))
