"""gearscan - Line-oriented puzzle input and engine-schematic scanner.

Architecture:
- Input is immutable; every derived view (trim, lines) is a new value
- Scanning is a single left-to-right pass per line, no backtracking
- Adjacency is recomputed on demand, never stored
- Every answer is cross-checked against a numpy/scipy formulation

Modules:
- config: Grid alphabet, dtypes, structuring elements, version guards
- puzzle_input: Input (load, from_lines, trim_trailing_newlines, lines, as_text)
- types: NumberToken, SymbolToken
- schematic: Token extraction, adjacency, part numbers, gear ratios
- grid / mask: Code-point grids and vectorized cross-check
- receipts: JSON receipts per puzzle/stage
- harness: CLI runner
- utils: Hash utilities (byte-stable SHA256)
"""
from __future__ import annotations

__version__ = "0.1.0"

from .puzzle_input import Input
from .types import NumberToken, SymbolToken
from .schematic import (
    extract_numbers,
    extract_symbols,
    gear_ratios,
    is_adjacent,
    part1,
    part2,
    part_numbers,
)
from . import config

__all__ = [
    "Input",
    "NumberToken",
    "SymbolToken",
    "extract_numbers",
    "extract_symbols",
    "is_adjacent",
    "part_numbers",
    "gear_ratios",
    "part1",
    "part2",
    "config",
]
