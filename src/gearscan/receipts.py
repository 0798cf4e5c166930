"""receipts.py - Always-on receipts per puzzle/stage.

Receipts are JSON files written to receipts/<puzzle_id>/<stage>.json.
Each stage emits a receipt recording its answers and self-checks; the
run-level progress file aggregates those checks across puzzles.
"""
from __future__ import annotations
import json
import sys
from pathlib import Path
from typing import Dict, Any
from . import config


def _dump_json(payload: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8", newline="\n") as f:
        json.dump(
            payload,
            f,
            sort_keys=True,
            ensure_ascii=False,
            indent=2,
        )
        f.write("\n")  # Trailing newline for Unix convention


def check_puzzle_id(puzzle_id: str) -> None:
    """Ensure puzzle_id names a single directory inside the receipts root.

    Raises:
        ValueError: If puzzle_id is empty, '.'/'..', or contains a path separator
    """
    if (
        not puzzle_id
        or puzzle_id in (".", "..")
        or "/" in puzzle_id
        or "\\" in puzzle_id
        or Path(puzzle_id).name != puzzle_id
    ):
        raise ValueError(f"Invalid puzzle id: {puzzle_id!r}")


def write_stage_receipt(
    puzzle_id: str,
    stage: str,
    payload: Dict[str, Any],
    out_dir: str = config.RECEIPTS_DIR,
) -> Path:
    """Write stage receipt for a puzzle.

    Args:
        puzzle_id: Puzzle identifier (e.g. 'day03')
        stage: Stage name (e.g. 'scan')
        payload: JSON-serializable receipt data
        out_dir: Output directory (default: 'receipts')

    Returns:
        Path to written receipt file

    Notes:
        - Rejects ids that would escape out_dir (see check_puzzle_id)
        - Creates puzzle directory if needed
        - Writes with sorted keys, Unix newlines
        - Overwrites existing receipt for same puzzle/stage
    """
    check_puzzle_id(puzzle_id)
    puzzle_dir = Path(out_dir) / puzzle_id
    puzzle_dir.mkdir(parents=True, exist_ok=True)

    receipt_path = puzzle_dir / f"{stage}.json"
    _dump_json(payload, receipt_path)
    return receipt_path


def make_env_payload() -> Dict[str, Any]:
    """Runtime versions and grid constants the answers were computed under."""
    import numpy
    import scipy

    return {
        "runtime": {
            "python": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            "numpy": numpy.__version__,
            "scipy": scipy.__version__,
        },
        "constants": {
            "EMPTY_CELL": config.EMPTY_CELL,
            "GEAR_SYMBOL": config.GEAR_SYMBOL,
            "ADJACENCY_RADIUS": config.ADJACENCY_RADIUS,
            "GEAR_ARITY": config.GEAR_ARITY,
            "GRID_DTYPE": str(numpy.dtype(config.GRID_DTYPE)),
        },
    }


def write_run_progress(
    progress: Dict[str, Any], out_dir: str = config.PROGRESS_DIR
) -> Path:
    """Write run-level progress JSON for a stage.

    Notes:
        - Filename: progress_<stage>.json
        - Overwrites existing progress for the same stage
    """
    progress_dir = Path(out_dir)
    progress_dir.mkdir(parents=True, exist_ok=True)

    progress_path = progress_dir / f"progress_{progress['stage']}.json"
    _dump_json(progress, progress_path)
    return progress_path
