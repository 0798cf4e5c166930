"""mask.py - Vectorized part-number and gear detection.

Array formulation of the schematic queries, used to cross-check the scalar
scanner:
- label_numbers: connected digit runs (row-only structure, so no run spans two rows)
- neighbourhood_mask: Moore dilation of the symbol mask
- part_numbers_vectorized: runs intersecting the dilated symbol mask
- gear_ratios_vectorized: '*' cells whose clipped 3x3 window sees exactly two runs

Label ids follow raster order of each run's first cell, which is the order the
scalar scanner emits NumberTokens in, so results are directly comparable.
"""
from __future__ import annotations
from typing import List, Tuple
import numpy as np
from scipy import ndimage
from .config import (
    ADJACENCY_RADIUS,
    GEAR_ARITY,
    GEAR_SYMBOL,
    INT_DTYPE,
    MOORE_STRUCTURE,
    ROW_STRUCTURE,
)
from .grid import digit_mask, run_value, symbol_mask


def label_numbers(grid: np.ndarray) -> Tuple[np.ndarray, List[int]]:
    """Label maximal digit runs and decode their values.

    Args:
        grid: Code-point grid (H, W) int32

    Returns:
        labels: int64 array (H, W); 0 = not a digit, k = k-th run in raster order
        values: values[k - 1] is the integer value of run k
    """
    digits = digit_mask(grid)
    if digits.size == 0 or not digits.any():
        return np.zeros(grid.shape, dtype=INT_DTYPE), []

    labels, n_runs = ndimage.label(digits, structure=ROW_STRUCTURE)
    labels = labels.astype(INT_DTYPE, copy=False)

    values: List[int] = []
    for sl in ndimage.find_objects(labels, max_label=n_runs):
        rows, cols = sl
        if rows.stop - rows.start != 1:
            raise RuntimeError(f"Digit run spans {rows.stop - rows.start} rows")
        values.append(run_value(grid, rows.start, cols.start, cols.stop))
    return labels, values


def neighbourhood_mask(mask: np.ndarray) -> np.ndarray:
    """Cells within ADJACENCY_RADIUS (8 directions) of any True cell."""
    if mask.size == 0:
        return mask.copy()
    return ndimage.binary_dilation(mask, structure=MOORE_STRUCTURE)


def part_numbers_vectorized(grid: np.ndarray) -> List[int]:
    """Values of runs that touch the neighbourhood of any symbol, in raster order."""
    labels, values = label_numbers(grid)
    if not values:
        return []

    near_symbol = neighbourhood_mask(symbol_mask(grid))
    touched = np.unique(labels[near_symbol & (labels > 0)])
    return [values[k - 1] for k in touched.tolist()]


def gear_ratios_vectorized(grid: np.ndarray) -> List[int]:
    """Gear ratio of every '*' whose window holds exactly two distinct runs.

    Notes:
        - Window is clipped at the top/left border (no negative indices)
        - '*' cells are visited in raster order
    """
    labels, values = label_numbers(grid)
    if not values:
        return []

    stars = np.argwhere(grid == ord(GEAR_SYMBOL))
    ratios: List[int] = []
    for r, c in stars.tolist():
        r0 = max(r - ADJACENCY_RADIUS, 0)
        c0 = max(c - ADJACENCY_RADIUS, 0)
        window = labels[r0 : r + ADJACENCY_RADIUS + 1, c0 : c + ADJACENCY_RADIUS + 1]
        runs = np.unique(window[window > 0]).tolist()
        if len(runs) != GEAR_ARITY:
            continue
        ratios.append(values[runs[0] - 1] * values[runs[1] - 1])
    return ratios
