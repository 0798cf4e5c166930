"""hash_utils.py - Byte-stable fingerprints of scan inputs and results.

Receipts carry one fingerprint per scan artifact:
- hash_input: the raw puzzle text
- hash_grid: the padded code-point grid (shape and dtype included)
- hash_tokens: the extracted NumberTokens and SymbolTokens
- hash_payload: the receipt itself, for rerun determinism checks

All fingerprints are SHA256 hex digests, stable across runs and platforms.
"""
from __future__ import annotations
import hashlib
import json
from typing import Any, Dict, Sequence
import numpy as np
from ..config import GRID_DTYPE
from ..puzzle_input import Input
from ..types import NumberToken, SymbolToken


def _digest(*chunks: bytes) -> str:
    h = hashlib.sha256()
    for chunk in chunks:
        h.update(chunk)
    return h.hexdigest()


def _canonical(obj: Any) -> bytes:
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def hash_input(input: Input) -> str:
    """Fingerprint of the puzzle text (UTF-8, no normalisation)."""
    return _digest(input.as_text().encode("utf-8"))


def hash_grid(grid: np.ndarray) -> str:
    """Fingerprint of a code-point grid.

    Raises:
        ValueError: If grid is not a 2D GRID_DTYPE array

    Notes:
        - Shape and dtype are hashed with the cells, so (1, 6) and (2, 3)
          grids with the same bytes never collide
        - C-order bytes
    """
    if grid.ndim != 2 or grid.dtype != GRID_DTYPE:
        raise ValueError(
            f"hash_grid requires a 2D {np.dtype(GRID_DTYPE)} grid, "
            f"got shape {grid.shape} dtype {grid.dtype}"
        )
    header = f"{grid.dtype.str}:{grid.shape[0]}x{grid.shape[1]}".encode("ascii")
    return _digest(header, b"\0", grid.tobytes(order="C"))


def hash_tokens(
    numbers: Sequence[NumberToken], symbols: Sequence[SymbolToken]
) -> str:
    """Fingerprint of one scan's tokens, in scan order.

    Notes:
        - Values are hashed as hex strings, so runs of any length hash
          without decimal conversion
    """
    return _digest(_canonical({
        "numbers": [[format(n.value, "x"), n.row, n.start, n.width] for n in numbers],
        "symbols": [[s.char, s.row, s.col] for s in symbols],
    }))


def hash_payload(payload: Dict[str, Any]) -> str:
    """Fingerprint of a receipt payload (sorted keys, no whitespace)."""
    return _digest(_canonical(payload))
