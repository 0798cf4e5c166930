"""config.py - Grid alphabet, dtypes, structuring elements and version guards.

Enforces:
- Minimum library versions (Python 3.9+, numpy 1.22+, scipy 1.8+)
- Fixed grid dtype and cell classification shared by the scalar scanner
  and the vectorized masks
"""
from __future__ import annotations
import sys
import numpy as np


# ============================================================================
# Version requirements
# ============================================================================
REQUIRED_VERSIONS = {
    "python_major_minor": (3, 9),
    "numpy": (1, 22),
    "scipy": (1, 8),
}


def _version_tuple(version: str) -> tuple[int, int]:
    parts = []
    for piece in version.split(".")[:2]:
        digits = "".join(ch for ch in piece if ch.isdigit())
        parts.append(int(digits or 0))
    while len(parts) < 2:
        parts.append(0)
    return (parts[0], parts[1])


def _assert_versions() -> None:
    """Assert installed versions meet the minimum requirements."""
    import scipy

    py_ver = sys.version_info
    req_py = REQUIRED_VERSIONS["python_major_minor"]
    if (py_ver.major, py_ver.minor) < req_py:
        raise RuntimeError(
            f"Python must be >= {req_py[0]}.{req_py[1]}, "
            f"got {py_ver.major}.{py_ver.minor}.{py_ver.micro}"
        )

    req_np = REQUIRED_VERSIONS["numpy"]
    if _version_tuple(np.__version__) < req_np:
        raise RuntimeError(
            f"numpy must be >= {req_np[0]}.{req_np[1]}, got {np.__version__}"
        )

    req_sp = REQUIRED_VERSIONS["scipy"]
    if _version_tuple(scipy.__version__) < req_sp:
        raise RuntimeError(
            f"scipy must be >= {req_sp[0]}.{req_sp[1]}, got {scipy.__version__}"
        )


_assert_versions()


# ============================================================================
# Grid alphabet
# ============================================================================
LINE_SEPARATOR = "\n"
EMPTY_CELL = "."  # Never a token
GEAR_SYMBOL = "*"
ASCII_DIGITS = frozenset("0123456789")

# Adjacency radius in both row and column directions (Moore neighbourhood)
ADJACENCY_RADIUS = 1
GEAR_ARITY = 2  # A gear touches exactly this many numbers


# ============================================================================
# Dtypes and structuring elements
# ============================================================================
GRID_DTYPE = np.int32  # Code points, one per cell
INT_DTYPE = np.int64  # Labels, counts

PAD_CODE = GRID_DTYPE(ord(EMPTY_CELL))  # Right-padding for ragged lines
DIGIT_LO = ord("0")
DIGIT_HI = ord("9")

# Number runs connect horizontally only, so labels never span two rows
ROW_STRUCTURE = np.array(
    [[0, 0, 0],
     [1, 1, 1],
     [0, 0, 0]],
    dtype=bool,
)

# 8-directional neighbourhood of radius ADJACENCY_RADIUS
MOORE_STRUCTURE = np.ones(
    (2 * ADJACENCY_RADIUS + 1, 2 * ADJACENCY_RADIUS + 1), dtype=bool
)


# ============================================================================
# Output locations
# ============================================================================
RECEIPTS_DIR = "receipts"
PROGRESS_DIR = "progress"
SCAN_STAGE = "scan"


def is_ascii_digit(ch: str) -> bool:
    """True for '0'..'9' only (str.isdigit also accepts superscripts etc.)."""
    return ch in ASCII_DIGITS


def is_symbol(ch: str) -> bool:
    """True for any character that is neither an ASCII digit nor EMPTY_CELL."""
    return ch != EMPTY_CELL and ch not in ASCII_DIGITS
