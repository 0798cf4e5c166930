"""grid.py - Code-point grids and cell-class masks.

Converts line-oriented input into a rectangular numpy grid:
- to_grid: one int32 code point per cell, ragged lines padded with '.'
- digit_mask / symbol_mask: same classification as the scalar scanner

Padding uses EMPTY_CELL so it can never introduce a token.
"""
from __future__ import annotations
import numpy as np
from .config import DIGIT_HI, DIGIT_LO, GRID_DTYPE, PAD_CODE
from .puzzle_input import Input


def to_grid(input: Input) -> np.ndarray:
    """Build the (H, W) code-point grid for input.

    Args:
        input: Puzzle input (trailing newlines are NOT trimmed here)

    Returns:
        Grid array (H, W) with int32 dtype; H = number of lines,
        W = length of the longest line

    Notes:
        - Short lines are padded on the right with PAD_CODE ('.')
        - The empty text gives shape (1, 0)
    """
    lines = input.lines()
    H = len(lines)
    W = max(len(line) for line in lines)

    grid = np.full((H, W), PAD_CODE, dtype=GRID_DTYPE)
    for r, line in enumerate(lines):
        if line:
            grid[r, : len(line)] = [ord(ch) for ch in line]
    return grid


def _check_grid(grid: np.ndarray) -> None:
    if grid.ndim != 2:
        raise ValueError(f"Grid must be 2D, got shape {grid.shape}")
    if grid.dtype != GRID_DTYPE:
        raise ValueError(f"Grid must have dtype {GRID_DTYPE}, got {grid.dtype}")


def digit_mask(grid: np.ndarray) -> np.ndarray:
    """Bool mask of ASCII digit cells."""
    _check_grid(grid)
    return (grid >= DIGIT_LO) & (grid <= DIGIT_HI)


def symbol_mask(grid: np.ndarray) -> np.ndarray:
    """Bool mask of symbol cells (neither ASCII digit nor '.')."""
    _check_grid(grid)
    return ~digit_mask(grid) & (grid != PAD_CODE)


def run_value(grid: np.ndarray, r: int, c0: int, c1: int) -> int:
    """Base-10 value of the digit cells grid[r, c0:c1], folded left to right."""
    value = 0
    for code in grid[r, c0:c1].tolist():
        value = value * 10 + (code - DIGIT_LO)
    return value
