"""types.py - Canonical token dataclasses.

Defines immutable dataclasses produced by one grid scan:
- NumberToken: maximal run of ASCII digits with a row and inclusive column span
- SymbolToken: single non-digit, non-'.' character with a row and column

Tokens carry no identity across scans; adjacency is recomputed on demand.
"""
from __future__ import annotations
from dataclasses import dataclass
from .config import ADJACENCY_RADIUS, is_symbol


@dataclass(frozen=True)
class SymbolToken:
    """Single symbol cell.

    Attributes:
        char: The symbol character (never an ASCII digit, never '.')
        row: Row index (0-based)
        col: Column index (0-based)
    """

    char: str
    row: int
    col: int

    def __post_init__(self):
        if len(self.char) != 1:
            raise ValueError(f"Symbol must be a single character, got {self.char!r}")
        if not is_symbol(self.char):
            raise ValueError(f"Not a symbol character: {self.char!r}")
        if self.row < 0 or self.col < 0:
            raise ValueError(
                f"Symbol position must be non-negative, got row={self.row}, col={self.col}"
            )


@dataclass(frozen=True)
class NumberToken:
    """Decimal number occupying columns start..end (inclusive) of one row.

    Attributes:
        value: Base-10 value of the digit run
        row: Row index (0-based)
        start: Column of the first digit
        end: Column of the last digit
    """

    value: int
    row: int
    start: int
    end: int

    def __post_init__(self):
        if self.row < 0 or self.start < 0:
            raise ValueError(
                f"Number position must be non-negative, got row={self.row}, start={self.start}"
            )
        if self.start > self.end:
            raise ValueError(f"Number span is empty: start={self.start} > end={self.end}")
        if self.value < 0:
            raise ValueError(f"Number value must be non-negative, got {self.value}")

    @property
    def width(self) -> int:
        """Number of cells covered by the run."""
        return self.end - self.start + 1

    def is_adjacent(self, symbol: SymbolToken) -> bool:
        """Return True if symbol lies in the 8-neighbourhood of any cell of the span.

        Notes:
            - Left bound clamps at column 0 (start - 1 never goes negative)
            - Right bound is not clamped
        """
        left = max(self.start - ADJACENCY_RADIUS, 0)
        right = self.end + ADJACENCY_RADIUS
        return (
            abs(self.row - symbol.row) <= ADJACENCY_RADIUS
            and left <= symbol.col <= right
        )
